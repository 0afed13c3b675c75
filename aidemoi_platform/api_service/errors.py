"""
Error taxonomy and exception handlers.

Every error leaves the API in the same envelope:

    {"error": {"message": "...", "statusCode": 401}}
"""
import logging
import traceback
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map to a fixed status and a low-detail message."""

    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": {"message": self.message, "statusCode": self.status_code}}


class InvalidCredentials(ApiError):
    status_code = 401
    message = "Invalid email or password"


class InvalidToken(ApiError):
    status_code = 401
    message = "Invalid refresh token"


class AuthenticationRequired(ApiError):
    status_code = 401
    message = "Access token required"


class UserNotFound(ApiError):
    status_code = 404
    message = "User not found"


class CompanyNotFound(ApiError):
    status_code = 404
    message = "Company not found"


class DuplicateEmail(ApiError):
    status_code = 400
    message = "User with this email already exists"


class InternalFailure(ApiError):
    status_code = 500
    message = "Internal Server Error"


def error_body(message: str, status_code: int, **extra: Any) -> Dict[str, Any]:
    return {"error": {"message": message, "statusCode": status_code, **extra}}


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=error_body("Validation failed", 400, details=details),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        content = error_body("Route not found", 404, path=request.url.path)
    else:
        content = error_body(str(exc.detail), exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    client = request.client.host if request.client else "unknown"
    logger.warning("Rate limit exceeded: ip=%s path=%s limit=%s", client, request.url.path, exc.detail)
    return JSONResponse(
        status_code=429,
        content=error_body("Rate limit exceeded, retry in 1 minute", 429, retryAfter=60),
        headers={"Retry-After": "60"},
    )


def setup_exception_handlers(app: FastAPI, debug: bool = False) -> None:
    """Register the envelope handlers on an application."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unexpected error on %s %s: %s", request.method, request.url.path, exc)
        extra = {"stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))} if debug else {}
        return JSONResponse(status_code=500, content=error_body("Internal Server Error", 500, **extra))
