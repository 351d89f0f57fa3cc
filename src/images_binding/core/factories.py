"""Factory classes for creating configured service instances."""

from typing import Optional

from ..engines.pillow_engine import PillowImageEngine
from .config import BindingSettings, load_settings
from .observability import StructuredLogger
from .protocols import ImageEngineProtocol, LoggerProtocol
from .services import MetadataInspector, PipelineOrchestrator


class LoggerFactory:
    """Factory for creating logger instances."""

    @staticmethod
    def create_logger(
        name: str = "images-binding", level: Optional[str] = None
    ) -> LoggerProtocol:
        """Create a structured logger."""
        return StructuredLogger(name, level=level)


class EngineFactory:
    """Factory for creating image engines."""

    @staticmethod
    def create_engine(settings: Optional[BindingSettings] = None) -> ImageEngineProtocol:
        """Create the default Pillow-backed engine."""
        return PillowImageEngine(settings)


class OrchestratorFactory:
    """Factory for creating the request orchestrator."""

    @staticmethod
    def create_orchestrator(
        engine: Optional[ImageEngineProtocol] = None,
        logger: Optional[LoggerProtocol] = None,
        settings: Optional[BindingSettings] = None,
    ) -> PipelineOrchestrator:
        """Create a fully configured orchestrator."""
        if settings is None:
            settings = load_settings()

        if engine is None:
            engine = EngineFactory.create_engine(settings)

        if logger is None:
            logger = LoggerFactory.create_logger(level=settings.log_level)

        return PipelineOrchestrator(
            engine=engine,
            logger=logger,
            inspector=MetadataInspector(),
            info_path=settings.info_path,
        )
