import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.utils.response import error_response

logger = logging.getLogger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


class AppException(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code


class ValidationFailed(AppException):
    """Form input rejected before reaching the database."""

    def __init__(self, errors: dict[str, list[str]], message: str = "Validation failed"):
        super().__init__(message, status_code=422)
        self.errors = errors


def field_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Flatten a pydantic ValidationError into a field -> messages map."""
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "form"
        if err["type"] == "missing":
            message = f"{field.replace('_', ' ').capitalize()} is required"
        else:
            message = err["msg"]
            if message.startswith(_VALUE_ERROR_PREFIX):
                message = message[len(_VALUE_ERROR_PREFIX):]
        messages = errors.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationFailed)
    async def validation_failed_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.message, data={"errors": exc.errors}),
        )

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.message),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=error_response("Internal server error"),
        )
