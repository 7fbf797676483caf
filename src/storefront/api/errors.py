"""Exception → HTTP response mapping.

Every error body is `{"message": "<text>"}`. Unexpected failures return a
bare 500.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.errors import first_message
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _message(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


def _describe_request_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    error = errors[0]
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{location}: {error.get('msg')}" if location else str(error.get("msg"))


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return _message(400, first_message(exc.messages))

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
        payload = getattr(exc, "messages", None) or (exc.args[0] if exc.args else "Not found")
        return _message(404, first_message(payload))

    @app.exception_handler(ExpectedVersionError)
    async def stale_write_handler(request: Request, exc: ExpectedVersionError) -> JSONResponse:
        logger.warning("stale_write_rejected", path=request.url.path, error=str(exc))
        return _message(409, "The resource was modified concurrently, please retry")

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _message(400, _describe_request_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _message(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> Response:
        logger.exception("unhandled_error", path=request.url.path)
        return Response(status_code=500)
