"""
WoofPoint Backend — Request ID Middleware
===========================================

What:  Tags every request with a short correlation id.
Why:   Error bodies carry `request_id`, so a client report can be matched to
       the server log lines for the same request.
How:   Reuses a sane client-supplied `X-Request-ID`, otherwise generates one;
       stores it in a ContextVar (visible to exception handlers and the
       access log) and echoes it back in the response header.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Client ids end up in log lines, so only short token-like values are accepted
_CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        supplied = request.headers.get("X-Request-ID", "")
        rid = supplied if _CLIENT_ID_PATTERN.match(supplied) else new_request_id()

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
