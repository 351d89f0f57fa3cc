"""Request orchestration for the images binding."""

from typing import Any, Dict, FrozenSet, List, Optional

from .exceptions import (
    ImagesBindingError,
    InternalInconsistencyError,
    InvalidImageError,
    UnsupportedInputError,
)
from .formats import negotiate_output_format
from .models import (
    BindingRequest,
    FitPolicy,
    ImageInfo,
    Resize,
    RequestState,
    Rotate,
)
from .observability import LogContext
from .protocols import ImageEngineProtocol, ImageHandleProtocol, LoggerProtocol
from .responses import (
    BindingResponse,
    image_response,
    json_response,
    response_for_error,
)
from .transforms import operations_from_record, parse_transform_spec

VECTOR_FORMAT = "svg"

CONTENT_TYPES: Dict[str, str] = {
    "jpeg": "image/jpeg",
    "svg": "image/svg+xml",
    "png": "image/png",
    "webp": "image/webp",
    "gif": "image/gif",
    "avif": "image/avif",
}

_TERMINAL = frozenset({RequestState.RESPONDED})
_ERROR_EXIT = frozenset({RequestState.REJECTED})

TRANSITIONS: Dict[RequestState, FrozenSet[RequestState]] = {
    RequestState.RECEIVED: frozenset(
        {RequestState.INFO_REQUESTED, RequestState.TRANSFORM_REQUESTED}
    )
    | _ERROR_EXIT,
    RequestState.INFO_REQUESTED: frozenset({RequestState.INSPECTED}) | _ERROR_EXIT,
    RequestState.INSPECTED: _TERMINAL,
    RequestState.TRANSFORM_REQUESTED: frozenset({RequestState.PIPELINE_BUILT})
    | _ERROR_EXIT,
    RequestState.PIPELINE_BUILT: frozenset({RequestState.FORMAT_RESOLVED})
    | _ERROR_EXIT,
    RequestState.FORMAT_RESOLVED: frozenset({RequestState.ENCODED}) | _ERROR_EXIT,
    RequestState.ENCODED: _TERMINAL,
    RequestState.REJECTED: _TERMINAL,
    RequestState.RESPONDED: frozenset(),
}


def content_type_for(format_tag: Optional[str]) -> Optional[str]:
    """Map an engine format tag to a MIME type, or None if unsupported."""
    if format_tag is None:
        return None
    return CONTENT_TYPES.get(format_tag)


class RequestLifecycle:
    """Tracks the states one request passes through.

    Each request moves forward only; re-entering a state or skipping ahead
    is a programming error.
    """

    def __init__(self) -> None:
        self.history: List[RequestState] = [RequestState.RECEIVED]

    @property
    def state(self) -> RequestState:
        return self.history[-1]

    def advance(self, state: RequestState) -> None:
        if state not in TRANSITIONS[self.state] or state in self.history:
            raise RuntimeError(
                f"Illegal request transition {self.state.value} -> {state.value}"
            )
        self.history.append(state)


class MetadataInspector:
    """Turns engine metadata into an ``/info`` document."""

    async def inspect(self, handle: ImageHandleProtocol) -> ImageInfo:
        metadata = await handle.metadata()

        mime = content_type_for(metadata.format)
        if mime is None:
            raise UnsupportedInputError()

        if metadata.format == VECTOR_FORMAT:
            return ImageInfo(format=mime)

        if not metadata.size or not metadata.width or not metadata.height:
            raise InternalInconsistencyError()

        return ImageInfo(
            format=mime,
            file_size=metadata.size,
            width=metadata.width,
            height=metadata.height,
        )


class PipelineOrchestrator:
    """Drives one request from form fields to a response."""

    def __init__(
        self,
        engine: ImageEngineProtocol,
        logger: LoggerProtocol,
        inspector: Optional[MetadataInspector] = None,
        info_path: str = "/info",
    ):
        self._engine = engine
        self._logger = logger
        self._inspector = inspector or MetadataInspector()
        self._info_path = info_path

    async def handle_request(self, request: BindingRequest) -> BindingResponse:
        """Validate, dispatch and answer a single request.

        Binding errors become error responses; anything else propagates.
        """
        lifecycle = RequestLifecycle()
        log_context = LogContext(
            operation="handle_request", component="pipeline_orchestrator"
        ).with_metadata(path=request.path, engine=self._engine.name)

        try:
            if not request.image:
                raise InvalidImageError()

            handle = self._engine.open(request.image)

            if request.path == self._info_path:
                lifecycle.advance(RequestState.INFO_REQUESTED)
                response = await self._info(handle, lifecycle, log_context)
            else:
                lifecycle.advance(RequestState.TRANSFORM_REQUESTED)
                response = await self._transform(
                    handle, request, lifecycle, log_context
                )
        except ImagesBindingError as exc:
            lifecycle.advance(RequestState.REJECTED)
            self._log_rejection(exc, log_context)
            response = response_for_error(exc)

        lifecycle.advance(RequestState.RESPONDED)
        return response

    def fold_pipeline(self, handle: ImageHandleProtocol, transforms: List[Any]) -> int:
        """Queue every applicable operation on ``handle`` in list order.

        Returns:
            Number of engine calls issued
        """
        issued = 0
        for record in transforms:
            for operation in operations_from_record(record):
                if isinstance(operation, Rotate):
                    handle.rotate(operation.degrees)
                elif isinstance(operation, Resize):
                    handle.resize(operation.width, operation.height, FitPolicy.CONTAIN)
                issued += 1
        return issued

    async def _info(
        self,
        handle: ImageHandleProtocol,
        lifecycle: RequestLifecycle,
        log_context: LogContext,
    ) -> BindingResponse:
        info = await self._inspector.inspect(handle)
        lifecycle.advance(RequestState.INSPECTED)
        self._logger.debug(
            "Inspected image", log_context.with_operation("inspect"), format=info.format
        )
        return json_response(info)

    async def _transform(
        self,
        handle: ImageHandleProtocol,
        request: BindingRequest,
        lifecycle: RequestLifecycle,
        log_context: LogContext,
    ) -> BindingResponse:
        transforms = parse_transform_spec(request.transforms)

        issued = self.fold_pipeline(handle, transforms)
        lifecycle.advance(RequestState.PIPELINE_BUILT)

        directive = negotiate_output_format(request.output_format)
        lifecycle.advance(RequestState.FORMAT_RESOLVED)

        self._logger.debug(
            "Encoding image",
            log_context.with_operation("encode"),
            records=len(transforms),
            operations=issued,
            content_type=directive.content_type,
        )
        data = await handle.encode(directive.codec)
        lifecycle.advance(RequestState.ENCODED)
        return image_response(data, directive.content_type)

    def _log_rejection(self, exc: ImagesBindingError, log_context: LogContext) -> None:
        error_context = log_context.with_metadata(
            status=exc.status_code, code=exc.error_code, error=exc.message
        )
        if exc.status_code >= 500:
            self._logger.error("Engine contract violation", error_context, exc_info=True)
        else:
            self._logger.warning("Rejected request", error_context)
