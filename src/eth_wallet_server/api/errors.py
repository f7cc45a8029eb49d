# File: src/eth_wallet_server/api/errors.py
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..exceptions import (
    InternalError,
    NotFoundError,
    RpcError,
    RpcErrorKind,
    ValidationError,
    WalletServerError,
)
from ..wallet.models import ErrorResponse

logger = logging.getLogger(__name__)


def status_for(error: WalletServerError) -> int:
    """HTTP status for each error kind"""
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, RpcError):
        if error.rpc_kind is RpcErrorKind.CONNECTION:
            return 503
        return 502
    return 500


def error_response(error: WalletServerError, status_code: Optional[int] = None) -> JSONResponse:
    status_code = status_code or status_for(error)
    body = ErrorResponse(kind=error.kind, message=error.message, code=status_code)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def wallet_error_handler(request: Request, exc: WalletServerError) -> JSONResponse:
    response = error_response(exc)
    if response.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.kind}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return response


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    return error_response(ValidationError(f"Invalid request: {problems}"))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code in (404, 405):
        error = NotFoundError(f"No route for {request.method} {request.url.path}")
        return error_response(error)
    if exc.status_code < 500:
        return error_response(ValidationError(str(exc.detail)), exc.status_code)
    return error_response(InternalError(str(exc.detail)), exc.status_code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(InternalError("Internal server error"))


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(WalletServerError, wallet_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
