"""Core orchestration, validation and shared components of the images binding."""

from .config import BindingSettings, load_settings
from .exceptions import (
    ConfigurationError,
    ImageEngineError,
    ImagesBindingError,
    InternalInconsistencyError,
    InvalidImageError,
    InvalidTransformsError,
    UnsupportedInputError,
    UnsupportedOutputError,
)
from .formats import negotiate_output_format
from .logging_config import setup_logger
from .models import (
    BindingRequest,
    EncoderDirective,
    EngineMetadata,
    FitPolicy,
    ImageInfo,
    OutputCodec,
    RequestState,
    Resize,
    Rotate,
)
from .responses import BindingResponse, error_response
from .services import MetadataInspector, PipelineOrchestrator
from .transforms import operations_from_record, parse_transform_spec

__all__ = [
    "BindingSettings",
    "load_settings",
    "ImagesBindingError",
    "InvalidImageError",
    "InvalidTransformsError",
    "UnsupportedInputError",
    "UnsupportedOutputError",
    "InternalInconsistencyError",
    "ImageEngineError",
    "ConfigurationError",
    "negotiate_output_format",
    "setup_logger",
    "BindingRequest",
    "EncoderDirective",
    "EngineMetadata",
    "FitPolicy",
    "ImageInfo",
    "OutputCodec",
    "RequestState",
    "Resize",
    "Rotate",
    "BindingResponse",
    "error_response",
    "MetadataInspector",
    "PipelineOrchestrator",
    "operations_from_record",
    "parse_transform_spec",
]
