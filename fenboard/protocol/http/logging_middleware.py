from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Callable, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ...engine.errors import FenError


logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"


def request_id_of(request: Request) -> str:
    return getattr(request.state, "request_id", "")


def note_fen_outcome(
    request: Request, *, fen: Optional[str] = None, error: Optional[FenError] = None
) -> None:
    """Record what happened to the FEN in this request for the response log.

    Exactly one of ``fen`` (the normalized FEN that was produced) or
    ``error`` (the rejection) is expected.
    """
    outcome: Dict[str, Any]
    if error is not None:
        outcome = {"fen_status": "rejected", "fen_field": error.field, "fen_code": error.code}
    else:
        outcome = {"fen_status": "ok", "fen": fen}
    request.state.fen_outcome = outcome


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with an ID, plus the FEN outcome when there is one.

    A client-supplied ``x-request-id`` is reused; otherwise a UUID is issued.
    Handlers report FEN results through :func:`note_fen_outcome` and the
    response record carries them. Server errors are logged at WARNING.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()
        request.state.request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request_id = request_id_of(request)

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id

        extra: Dict[str, Any] = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": int((time.perf_counter() - start) * 1000),
        }
        extra.update(getattr(request.state, "fen_outcome", None) or {})
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(level, "%s %s -> %d", request.method, request.url.path, response.status_code, extra=extra)
        return response
