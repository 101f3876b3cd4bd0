from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.platform.logger import get_logger
from app.platform.response import api_response

logger = get_logger("exceptions")

# starlette renamed HTTP_422_UNPROCESSABLE_ENTITY to ..._CONTENT
UNPROCESSABLE_CONTENT = 422


def add_exception_handlers(app: FastAPI) -> None:
    """Render every error with the same flat ``{"message": ...}`` body as the routes."""

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return api_response(message=str(exc.detail) or "Error", status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_invalid_payload(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.info(f"Rejected payload on {request.url.path}: {len(errors)} error(s)")
        return api_response(
            message="Validation failed",
            status_code=UNPROCESSABLE_CONTENT,
            data={"errors": errors},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return api_response(
            message="Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
