"""Error rendering: every failure reaches the client as ``{"error": message}``."""

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from app.errors import CarBlockError
from app.middleware.logging import redact_pii

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = first.get("msg", "invalid value")
    return f"{field}: {message}" if field else message


async def carblock_error_handler(request: Request, exc: CarBlockError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, redact_pii(exc.message))
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": _validation_message(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CarBlockError, carblock_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Catch unhandled exceptions and return safe error responses."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            error_msg = redact_pii(str(exc))
            tb = traceback.format_exc()

            logger.error(
                "Unhandled exception: %s\n%s",
                error_msg,
                redact_pii(tb),
            )

            return JSONResponse(
                status_code=500,
                content={
                    "error": "An internal error occurred. Please try again later.",
                    "error_type": type(exc).__name__,
                },
            )
