"""Error types and exception handlers rendering the registry's error envelope."""
import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import Settings
from .model import ErrorBody, ErrorResponse

logger = logging.getLogger(__name__)

SERVER_NOT_FOUND = "SERVER_NOT_FOUND"
UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
NOT_FOUND = "NOT_FOUND"


class RegistryHTTPException(HTTPException):
    """HTTPException carrying a machine readable error code."""

    def __init__(self, status_code: int, message: str, code: str) -> None:
        super().__init__(status_code=status_code, detail=message)
        self.code = code


class ServerNotFoundError(RegistryHTTPException):
    def __init__(self, server_id: str) -> None:
        super().__init__(status_code=404, message="MCP server not found", code=SERVER_NOT_FOUND)
        self.server_id = server_id


class UnsupportedFormatError(RegistryHTTPException):
    def __init__(self, requested_format: str) -> None:
        super().__init__(status_code=400, message="Unsupported format. Only json is currently supported.",
                         code=UNSUPPORTED_FORMAT)
        self.requested_format = requested_format


def error_response(status_code: int, message: str, code: Optional[str] = None,
                   details: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(message=message, code=code, details=details))
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc, RegistryHTTPException):
        return error_response(exc.status_code, str(exc.detail), exc.code)
    if exc.status_code in (404, 405):
        # no route matched the path or method
        return error_response(404, "Endpoint not found", NOT_FOUND)
    return error_response(exc.status_code, str(exc.detail))


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Installs the handlers that turn every failure into the error envelope."""

    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error while serving {request.method} {request.url.path}")
        details = str(exc) if settings.expose_error_details else None
        return error_response(500, "Internal server error", details=details)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
