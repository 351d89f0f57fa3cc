"""Shared data models for the images binding."""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PositiveInt


class FitPolicy(str, Enum):
    """How a resize fits the image into the requested box."""

    CONTAIN = "contain"


class OutputCodec(str, Enum):
    """Codecs the local engine can encode to."""

    AVIF = "avif"
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"


class Resize(BaseModel):
    """Resize the primary image; a missing dimension is inferred by the engine."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["resize"] = "resize"
    width: Optional[PositiveInt] = None
    height: Optional[PositiveInt] = None
    fit: FitPolicy = FitPolicy.CONTAIN


class Rotate(BaseModel):
    """Rotate the primary image clockwise by ``degrees``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["rotate"] = "rotate"
    degrees: float


TransformOperation = Annotated[Union[Resize, Rotate], Field(discriminator="kind")]


class EncoderDirective(BaseModel):
    """Codec the engine must encode to and the content type to answer with."""

    model_config = ConfigDict(frozen=True)

    codec: OutputCodec
    content_type: str


class EngineMetadata(BaseModel):
    """Read-only snapshot of what the engine knows about a decoded image."""

    format: Optional[str] = None
    size: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None


class ImageInfo(BaseModel):
    """Body of a successful ``/info`` response."""

    model_config = ConfigDict(populate_by_name=True)

    format: str
    file_size: Optional[int] = Field(default=None, alias="fileSize")
    width: Optional[int] = None
    height: Optional[int] = None


class BindingRequest(BaseModel):
    """An inbound request after form decomposition."""

    path: str = "/"
    image: Optional[bytes] = None
    transforms: Optional[str] = None
    output_format: Optional[str] = None


class RequestState(str, Enum):
    """Lifecycle states a single request moves through."""

    RECEIVED = "received"
    INFO_REQUESTED = "info_requested"
    INSPECTED = "inspected"
    TRANSFORM_REQUESTED = "transform_requested"
    PIPELINE_BUILT = "pipeline_built"
    FORMAT_RESOLVED = "format_resolved"
    ENCODED = "encoded"
    REJECTED = "rejected"
    RESPONDED = "responded"
