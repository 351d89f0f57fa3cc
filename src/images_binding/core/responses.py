"""Construction of binding responses.

The header name and body shape of error responses are a compatibility
contract with the calling transport and must not change.
"""

from dataclasses import dataclass, field
from typing import Dict

from .exceptions import ImagesBindingError
from .models import ImageInfo

ERROR_HEADER = "cf-images-binding"


@dataclass(frozen=True)
class BindingResponse:
    """Transport-neutral response produced by the orchestrator."""

    status_code: int
    body: bytes
    media_type: str
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return ERROR_HEADER in self.headers


def error_response(status_code: int, error_code: int, message: str) -> BindingResponse:
    """Render an error as ``ERROR <code>: <message>`` with the signaling header."""
    return BindingResponse(
        status_code=status_code,
        body=f"ERROR {error_code}: {message}".encode("utf-8"),
        media_type="text/plain",
        headers={ERROR_HEADER: f"err={error_code}"},
    )


def response_for_error(exc: ImagesBindingError) -> BindingResponse:
    return error_response(exc.status_code, exc.error_code, exc.message)


def image_response(data: bytes, content_type: str) -> BindingResponse:
    return BindingResponse(status_code=200, body=data, media_type=content_type)


def json_response(info: ImageInfo) -> BindingResponse:
    body = info.model_dump_json(by_alias=True, exclude_none=True)
    return BindingResponse(
        status_code=200, body=body.encode("utf-8"), media_type="application/json"
    )
