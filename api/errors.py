"""
Exception handlers: every error leaves the API as {"error": message}
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from core.exceptions import BackendError, BackendUnavailableError, GatewayException
import logging

logger = logging.getLogger(__name__)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "-")


def register_exception_handlers(app: FastAPI):
    """Attach the gateway exception handlers to `app`"""

    @app.exception_handler(GatewayException)
    async def gateway_exception_handler(request: Request, exc: GatewayException):
        request_id = _request_id(request)

        if isinstance(exc, BackendError):
            logger.error(f"[{request_id}] {request.method} {request.url.path} - {exc.to_dict()}")
            if isinstance(exc, BackendUnavailableError):
                message = "Service unavailable"
            else:
                message = "Internal server error"
        else:
            logger.info(f"[{request_id}] {request.method} {request.url.path} - {exc.status_code} {exc.message}")
            message = exc.message

        return JSONResponse(status_code=exc.status_code, content={"error": message})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Unknown routes and wrong methods
        logger.info(f"[{_request_id(request)}] {request.method} {request.url.path} - {exc.status_code}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"[{_request_id(request)}] Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
