"""Error kinds raised by the storage/catalog services and their HTTP mapping.

Services return plain values for expected absence (``None``, ``False``) and
raise one of the errors below for everything else. The handlers registered by
``register_exception_handlers`` are the only place a kind becomes a status
code and a response body.
"""
import enum
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORAGE = "storage"
    DEPENDENCY = "dependency"
    CONFLICT = "conflict"


_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORAGE: 500,
    ErrorKind.DEPENDENCY: 500,
    ErrorKind.CONFLICT: 500,
}


class FileServiceError(Exception):
    """Base for all errors raised by the file services."""
    kind: ErrorKind = ErrorKind.STORAGE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self.kind]

    @property
    def public_message(self) -> str:
        """Message safe to show to clients. Server-side failures stay generic."""
        if self.status_code >= 500:
            return INTERNAL_ERROR_MESSAGE
        return self.message


class ValidationError(FileServiceError):
    """Bad MIME type, oversized file, malformed custom names, empty batch."""
    kind = ErrorKind.VALIDATION


class NotFoundError(FileServiceError):
    kind = ErrorKind.NOT_FOUND


class StorageError(FileServiceError):
    """Blob write/delete failed, or a physical blob is unreadable."""
    kind = ErrorKind.STORAGE


class DependencyError(FileServiceError):
    """The catalog database could not be reached or failed a statement."""
    kind = ErrorKind.DEPENDENCY


class CatalogConflictError(FileServiceError):
    """Insert violated a uniqueness constraint (id or storage name)."""
    kind = ErrorKind.CONFLICT


def error_body(message: str) -> dict:
    return ErrorResponse(error=message).model_dump()


async def file_service_error_handler(request: Request, exc: FileServiceError):
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed ({exc.kind.value}): {exc.message}",
            exc_info=exc,
        )
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.public_message))


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part not in ("query", "path", "body"))
        details.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    message = "Invalid request: " + "; ".join(details) if details else "Invalid request"
    return JSONResponse(status_code=400, content=error_body(message))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=error_body(INTERNAL_ERROR_MESSAGE))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FileServiceError, file_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
