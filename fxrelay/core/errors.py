from typing import Any, Dict

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette import status
import logging

logger = logging.getLogger("fxrelay.errors")


class ProxyError(Exception):
    """Failure the proxy reports to its caller as a JSON error body."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def body(self) -> Dict[str, Any]:
        return {"error": self.message}


class MissingCredentialError(ProxyError):
    def __init__(self):
        super().__init__("Missing EXCHANGERATE_API_KEY on the backend")


class UpstreamResponseError(ProxyError):
    """Upstream answered, but not with a success payload."""

    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, details: Any):
        super().__init__("Upstream error")
        self.details = details

    def body(self) -> Dict[str, Any]:
        return {"error": self.message, "details": self.details}


class UpstreamTransportError(ProxyError):
    """The outbound call itself failed (network, timeout, non-JSON body)."""

    def __init__(self, what: str):
        super().__init__(f"Failed to fetch {what}")


def proxy_error_handler(request: Request, exc: ProxyError):  # type: ignore
    return JSONResponse(status_code=exc.status_code, content=exc.body())


def http_error_handler(request: Request, exc):  # type: ignore
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "not_found",
                "detail": f"No route for {request.method} {request.url.path}",
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "http_error", "detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )
