"""Protocol definitions for the image engine and its collaborators."""

from typing import Any, List, Optional, Protocol

from .models import EngineMetadata, FitPolicy, OutputCodec, TransformOperation


class ImageHandleProtocol(Protocol):
    """One decoded image plus the operations queued against it.

    ``rotate`` and ``resize`` only queue work. ``metadata`` and ``encode``
    consume the handle; each handle is consumed exactly once.
    """

    @property
    def pending_operations(self) -> List[TransformOperation]:
        """Operations queued so far, in application order."""
        ...

    def rotate(self, degrees: float) -> None:
        """Queue a clockwise rotation."""
        ...

    def resize(
        self,
        width: Optional[int],
        height: Optional[int],
        fit: FitPolicy = FitPolicy.CONTAIN,
    ) -> None:
        """Queue a resize of the current result."""
        ...

    async def metadata(self) -> EngineMetadata:
        """Decode enough of the image to describe it."""
        ...

    async def encode(self, codec: OutputCodec) -> bytes:
        """Apply the queued operations and encode the result."""
        ...


class ImageEngineProtocol(Protocol):
    """Capability interface implemented once per codec library."""

    name: str

    def open(self, data: bytes) -> ImageHandleProtocol:
        """Create a handle over raw uploaded bytes."""
        ...


class LoggerProtocol(Protocol):
    """Protocol for logging operations."""

    def debug(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log debug message."""
        ...

    def info(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log info message."""
        ...

    def warning(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log warning message."""
        ...

    def error(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log error message."""
        ...
