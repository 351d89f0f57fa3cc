"""HTTP front end for the images binding.

A single catch-all route accepts a form body with the fields

- ``image``: the uploaded file (required)
- ``transforms``: JSON array of transform records (required unless the path
  is ``/info``)
- ``output_format``: optional MIME type of the result

and answers either with image metadata, with the re-encoded image, or with a
plain-text error carrying the ``cf-images-binding`` header.

Run it with::

    uvicorn images_binding.server:app
"""

from typing import Any, Optional

from fastapi import FastAPI, Request, Response
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from . import __version__
from .core.config import BindingSettings, load_settings
from .core.factories import OrchestratorFactory
from .core.models import BindingRequest
from .core.protocols import ImageEngineProtocol, LoggerProtocol
from .core.responses import BindingResponse


def _text_field(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


async def decompose_request(request: Request) -> BindingRequest:
    """Pull the binding fields out of the request's form body.

    A body that cannot be parsed as a form carries no image, so it yields a
    request without one and is rejected by the orchestrator.
    """
    try:
        form = await request.form()
    except (MultiPartException, HTTPException):
        return BindingRequest(path=request.url.path)

    upload = form.get("image")
    image = await upload.read() if isinstance(upload, UploadFile) else None

    return BindingRequest(
        path=request.url.path,
        image=image,
        transforms=_text_field(form.get("transforms")),
        output_format=_text_field(form.get("output_format")),
    )


def to_starlette(response: BindingResponse) -> Response:
    return Response(
        content=response.body,
        status_code=response.status_code,
        media_type=response.media_type,
        headers=response.headers,
    )


def create_app(
    engine: Optional[ImageEngineProtocol] = None,
    settings: Optional[BindingSettings] = None,
    logger: Optional[LoggerProtocol] = None,
) -> FastAPI:
    """Build the FastAPI application around one orchestrator.

    Args:
        engine: Image engine to use; defaults to the Pillow engine.
        settings: Settings; defaults to values from the environment.
        logger: Logger; defaults to a structured ``images-binding`` logger.
    """
    settings = settings or load_settings()
    app = FastAPI(
        title="Images Binding",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.orchestrator = OrchestratorFactory.create_orchestrator(
        engine=engine, logger=logger, settings=settings
    )

    @app.api_route("/{path:path}", methods=["POST", "PUT"])
    async def images_binding(request: Request) -> Response:
        binding_request = await decompose_request(request)
        response = await request.app.state.orchestrator.handle_request(binding_request)
        return to_starlette(response)

    return app


app = create_app()
