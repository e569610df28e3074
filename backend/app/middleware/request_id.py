"""
Writing Submissions Backend — Request ID Middleware
====================================================

What:  Assigns a correlation id to each request and returns it in X-Request-ID.
How:   Reuses a client-supplied X-Request-ID (truncated) or generates a short
       uuid4 prefix, stores it in a ContextVar and on request.state.
Who:   Applied to every request via Starlette middleware.

Error bodies only carry {"error": ...}; the header is how a user report is
matched to the server log line written by the exception handlers.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local storage for the current request id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Upper bound on client-supplied ids written into our logs
MAX_REQUEST_ID_LENGTH = 64


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a unique id to each request for tracing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        rid = rid[:MAX_REQUEST_ID_LENGTH]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
