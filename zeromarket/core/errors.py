# zeromarket/core/errors.py
from fastapi import Request
from fastapi.responses import JSONResponse


class ApiError(Exception):
    """Base for errors rendered to clients as {"error": message}."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidReference(ApiError):
    status_code = 400


class ValidationFailed(ApiError):
    status_code = 400


class Unauthorized(ApiError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class Forbidden(ApiError):
    status_code = 403


class PackageNotFound(ApiError):
    status_code = 404


class StoreUnavailable(ApiError):
    status_code = 503

    def __init__(self, message: str = "registry store unavailable"):
        super().__init__(message)


def has_traversal(value: str) -> bool:
    """True when a path segment could escape its storage-key prefix."""
    return "/" in value or ".." in value


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)
