"""
Request-ID tracking for the Biashara API.
"""
import re
import uuid
import time
from typing import Callable, Dict, Optional
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from contextvars import ContextVar

from app.core.logging import logger

REQUEST_ID_HEADER = "X-Request-Id"

# Client IDs outside this shape are replaced with a generated one
_CLIENT_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def _resolve_request_id(request: Request) -> str:
    incoming = request.headers.get(REQUEST_ID_HEADER)
    if incoming and _CLIENT_REQUEST_ID.match(incoming):
        return incoming
    return str(uuid.uuid4())


def _request_fields(request: Request, request_id: str) -> Dict[str, Optional[str]]:
    return {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
    }


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an ID taken from the app's X-Request-Id header or
    generated here. Handlers read it through get_request_id() and return it as
    requestId; the response echoes it in X-Request-Id.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = _resolve_request_id(request)
        request_id_var.set(request_id)
        request.state.request_id = request_id
        fields = _request_fields(request, request_id)

        logger.info(
            "Request received",
            extra={**fields, "client": request.client.host if request.client else None},
        )
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"Unhandled error in {request.url.path}: {e}", extra=fields, exc_info=True)
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "Request finished",
            extra={
                **fields,
                "status_code": response.status_code,
                "latency_seconds": round(time.perf_counter() - started, 4),
            },
        )
        return response


def get_request_id() -> str:
    """Current request's ID, or a fresh UUID outside a request (e.g. the moderation worker)."""
    return request_id_var.get() or str(uuid.uuid4())
