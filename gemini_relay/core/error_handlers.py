from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from gemini_relay.core.exceptions import (
    ExternalServiceError,
    InternalError,
    RelayError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _error_payload(*, code: int, msg: str) -> Dict[str, Any]:
    return {"code": code, "msg": msg, "data": None}


def _error_response(exc: RelayError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_payload(code=exc.status_code, msg=exc.msg),
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
        if isinstance(exc, ExternalServiceError):
            # cause is logged here and never sent to the client
            logger.error(
                "External service failure: %s %s",
                request.method,
                request.url.path,
                exc_info=exc,
            )
        elif exc.status_code >= 500:
            logger.error("Request failed: %s %s", request.method, request.url.path, exc_info=exc)
        else:
            logger.info("Rejected %s %s → %s: %s", request.method, request.url.path, exc.status_code, exc.msg)
        return _error_response(exc)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(_: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_payload(code=exc.status_code, msg=str(exc.detail)),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Request validation failed: %s %s: %s", request.method, request.url.path, exc.errors())
        return _error_response(ValidationError("Request validation failed"))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error: %s %s", request.method, request.url.path)
        return _error_response(InternalError())
