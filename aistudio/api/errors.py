"""API error taxonomy and exception handlers"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..services.log_service import log_service

ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: "invalid_input",
    status.HTTP_401_UNAUTHORIZED: "unauthorized",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_503_SERVICE_UNAVAILABLE: "database_unavailable",
}


class ApiError(Exception):
    """Error rendered as {"error": code, "message": message}"""

    def __init__(self, status_code: int, error: str, message: str = None, headers=None):
        super().__init__(message or error)
        self.status_code = status_code
        self.error = error
        self.message = message
        self.headers = headers

    @classmethod
    def invalid_input(cls, message: str = None) -> "ApiError":
        return cls(status.HTTP_400_BAD_REQUEST, "invalid_input", message)

    @classmethod
    def invalid_value(cls, message: str = None) -> "ApiError":
        return cls(status.HTTP_400_BAD_REQUEST, "invalid_value", message)

    @classmethod
    def unauthorized(cls, message: str = None) -> "ApiError":
        return cls(
            status.HTTP_401_UNAUTHORIZED,
            "unauthorized",
            message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @classmethod
    def forbidden(cls, message: str = None) -> "ApiError":
        return cls(status.HTTP_403_FORBIDDEN, "forbidden", message)

    @classmethod
    def not_found(cls, message: str = None) -> "ApiError":
        return cls(status.HTTP_404_NOT_FOUND, "not_found", message)

    @classmethod
    def feature_disabled(cls, message: str = None) -> "ApiError":
        return cls(status.HTTP_403_FORBIDDEN, "feature_disabled", message)

    @classmethod
    def database_unavailable(cls, message: str = "Database is not available"):
        return cls(status.HTTP_503_SERVICE_UNAVAILABLE, "database_unavailable", message)

    @classmethod
    def internal(cls, message: str = None) -> "ApiError":
        return cls(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_server_error", message
        )


def _error_response(status_code: int, error: str, message: str = None, headers=None):
    body = {"error": error}
    if message:
        body["message"] = message
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def api_error_handler(request: Request, exc: ApiError):
    return _error_response(exc.status_code, exc.error, exc.message, exc.headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    error = ERROR_CODES.get(exc.status_code, "internal_server_error")
    message = exc.detail if isinstance(exc.detail, str) else None
    return _error_response(
        exc.status_code, error, message, getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    return _error_response(status.HTTP_400_BAD_REQUEST, "invalid_input", message)


async def unhandled_exception_handler(request: Request, exc: Exception):
    log_service.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_server_error", str(exc)
    )


def register_error_handlers(app: FastAPI):
    """Map every failure onto the API error taxonomy"""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
