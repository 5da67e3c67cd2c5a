"""API error envelope and exception handler registration."""

from __future__ import annotations

from http import HTTPStatus
import logging

from fastapi import FastAPI
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

from api_common.core.error_codes import CommonErrorCode
from api_common.core.translator import CLASSIFIED_EXCEPTION_TYPES
from api_common.core.translator import translate_exception
from api_common.schemas.error import ErrorResponse
from api_common.schemas.response import ApiResponse

logger = logging.getLogger(__name__)


def build_error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    """Wrap ``body`` in the failure envelope with a matching status line."""
    return JSONResponse(status_code=status_code, content=ApiResponse.error(body).to_content())


def _http_error_body(exc: StarletteHTTPException) -> ErrorResponse:
    error_code = CommonErrorCode.for_status(exc.status_code)
    if error_code is not None:
        return ErrorResponse.of(error_code)

    try:
        http_status = HTTPStatus(exc.status_code)
        code, phrase = http_status.name, http_status.phrase
    except ValueError:
        code, phrase = f"HTTP_{exc.status_code}", "HTTP error"
    message = exc.detail if isinstance(exc.detail, str) and exc.detail else phrase
    return ErrorResponse(status_code=exc.status_code, code=code, message=message)


async def translated_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    """Translate any failure escaping a request handler into the shared envelope."""
    status_code, body = translate_exception(exc)
    return build_error_response(status_code, body)


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Normalize framework HTTP exceptions (routing 404/405, explicit raises)."""
    body = _http_error_body(exc)
    logger.info("HTTP error status=%s code=%s", exc.status_code, body.code)
    response = build_error_response(exc.status_code, body)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


class UnhandledExceptionMiddleware(BaseHTTPMiddleware):
    """Translate failures no exception handler claimed.

    Runs inside the server error middleware, so the translated response is the
    final one and the exception does not propagate out of the app.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return build_error_response(*translate_exception(exc))


def register_error_handlers(app: FastAPI) -> None:
    """Attach all shared error handlers to a FastAPI app instance."""

    for exc_class in CLASSIFIED_EXCEPTION_TYPES:
        app.add_exception_handler(exc_class, translated_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_middleware(UnhandledExceptionMiddleware)
