"""Image engine backed by Pillow."""

import asyncio
import io
from typing import Dict, List, Optional

from PIL import Image

from ..core.config import BindingSettings
from ..core.error_handling import decoding_errors, with_error_handling
from ..core.exceptions import ImageEngineError, UnsupportedInputError
from ..core.image_utils import (
    apply_operation,
    format_tag,
    looks_like_svg,
    prepare_for_codec,
)
from ..core.models import (
    EngineMetadata,
    FitPolicy,
    OutputCodec,
    Resize,
    Rotate,
    TransformOperation,
)

PILLOW_FORMATS: Dict[OutputCodec, str] = {
    OutputCodec.AVIF: "AVIF",
    OutputCodec.JPEG: "JPEG",
    OutputCodec.PNG: "PNG",
    OutputCodec.WEBP: "WEBP",
}


class PillowImageHandle:
    """Raw upload plus queued operations.

    Nothing is decoded until the handle is consumed by ``metadata`` or
    ``encode``; decoding and encoding run in a worker thread.
    """

    def __init__(self, data: bytes, settings: BindingSettings):
        self._data = data
        self._settings = settings
        self._pending: List[TransformOperation] = []
        self._consumed = False

    @property
    def pending_operations(self) -> List[TransformOperation]:
        return list(self._pending)

    def rotate(self, degrees: float) -> None:
        self._pending.append(Rotate(degrees=degrees))

    def resize(
        self,
        width: Optional[int],
        height: Optional[int],
        fit: FitPolicy = FitPolicy.CONTAIN,
    ) -> None:
        self._pending.append(Resize(width=width, height=height, fit=fit))

    async def metadata(self) -> EngineMetadata:
        self._consume()
        return await asyncio.to_thread(self._read_metadata)

    async def encode(self, codec: OutputCodec) -> bytes:
        self._consume()
        return await asyncio.to_thread(self._render, codec)

    def _consume(self) -> None:
        if self._consumed:
            raise ImageEngineError("ERROR: Image handle already consumed")
        self._consumed = True

    @with_error_handling
    def _read_metadata(self) -> EngineMetadata:
        size = len(self._data)
        if looks_like_svg(self._data):
            return EngineMetadata(format="svg", size=size)

        with decoding_errors(), Image.open(io.BytesIO(self._data)) as img:
            width, height = img.size
            return EngineMetadata(
                format=format_tag(img.format), size=size, width=width, height=height
            )

    @with_error_handling
    def _render(self, codec: OutputCodec) -> bytes:
        if looks_like_svg(self._data):
            # Pillow has no vector rasterizer.
            raise UnsupportedInputError()

        with decoding_errors(), Image.open(io.BytesIO(self._data)) as source:
            source.load()
            img = source.copy()

        with decoding_errors():
            for operation in self._pending:
                img = apply_operation(img, operation)

        pillow_format = PILLOW_FORMATS[codec]
        img = prepare_for_codec(img, pillow_format)

        output = io.BytesIO()
        img.save(output, format=pillow_format, **self._save_options(codec))
        return output.getvalue()

    def _save_options(self, codec: OutputCodec) -> Dict[str, int]:
        if codec is OutputCodec.JPEG:
            return {"quality": self._settings.jpeg_quality}
        if codec is OutputCodec.WEBP:
            return {"quality": self._settings.webp_quality}
        if codec is OutputCodec.AVIF:
            return {"quality": self._settings.avif_quality}
        return {}


class PillowImageEngine:
    """Engine producing ``PillowImageHandle`` instances."""

    name = "pillow"

    def __init__(self, settings: Optional[BindingSettings] = None):
        self._settings = settings or BindingSettings()

    def open(self, data: bytes) -> PillowImageHandle:
        return PillowImageHandle(data, self._settings)
