"""Output format negotiation."""

from typing import Dict, Optional

from .exceptions import UnsupportedOutputError
from .models import EncoderDirective, OutputCodec

DEFAULT_CONTENT_TYPE = "image/jpeg"

ENCODABLE_FORMATS: Dict[str, OutputCodec] = {
    "image/avif": OutputCodec.AVIF,
    "image/jpeg": OutputCodec.JPEG,
    "image/png": OutputCodec.PNG,
    "image/webp": OutputCodec.WEBP,
}

REJECTED_FORMATS: Dict[str, str] = {
    "image/gif": "ERROR: GIF output is not supported in local mode",
    "rgb": "ERROR: RGB/RGBA output is not supported in local mode",
    "rgba": "ERROR: RGB/RGBA output is not supported in local mode",
}


def negotiate_output_format(selector: Optional[str]) -> EncoderDirective:
    """Map an ``output_format`` value to an encoder directive.

    Unknown or missing selectors fall back to JPEG rather than failing, so
    older callers that send arbitrary strings keep working.

    Raises:
        UnsupportedOutputError: For GIF and raw RGB/RGBA output.
    """
    if selector in REJECTED_FORMATS:
        raise UnsupportedOutputError(REJECTED_FORMATS[selector])

    content_type = selector if selector in ENCODABLE_FORMATS else DEFAULT_CONTENT_TYPE
    return EncoderDirective(
        codec=ENCODABLE_FORMATS[content_type], content_type=content_type
    )
