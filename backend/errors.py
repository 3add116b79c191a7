"""Gateway exceptions and centralized FastAPI error handlers."""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code

    def to_dict(self) -> dict:
        return {"error": str(self)}


class MissingParameterError(GatewayError):
    def __init__(self, name: str, hint: str = ""):
        detail = f" ({hint})" if hint else ""
        super().__init__(f"Missing required query parameter '{name}'{detail}", status_code=400)


class InvalidParameterFormatError(GatewayError):
    def __init__(self, name: str, value: str, expected: str):
        super().__init__(
            f"Invalid value for '{name}': {value!r}. Expected {expected}",
            status_code=400,
        )


class UpstreamError(GatewayError):
    """Failure talking to the APOD upstream.

    ``upstream_status`` is the HTTP status the upstream answered with, or
    None when no response was received. ``payload`` is the upstream error
    body (parsed JSON when possible).
    """

    def __init__(
        self,
        message: str,
        upstream_status: int | None = None,
        payload: Any = None,
        status_code: int = 502,
    ):
        super().__init__(message, status_code=status_code)
        self.upstream_status = upstream_status
        self.payload = payload

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.upstream_status is not None:
            body["upstream_status"] = self.upstream_status
        if self.payload is not None:
            body["upstream_error"] = self.payload
        return body


class UpstreamRejectedError(UpstreamError):
    """Upstream answered with a non-2xx status.

    A 400 from upstream means the request itself was bad (e.g. a date out of
    range) and is reported as 400; anything else is a gateway failure.
    """

    def __init__(self, message: str, upstream_status: int, payload: Any = None):
        super().__init__(
            message,
            upstream_status=upstream_status,
            payload=payload,
            status_code=400 if upstream_status == 400 else 502,
        )


class UpstreamUnavailableError(UpstreamError):
    pass


class UpstreamParseError(UpstreamError):
    pass


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(GatewayError)
    async def handle_gateway_error(_request: Request, exc: GatewayError):
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
