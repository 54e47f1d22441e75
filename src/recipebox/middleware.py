"""HTTP middleware."""

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from recipebox.logging_config import clear_context, set_context


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Propagate or generate a request ID for each request.

    The ID is bound to the logging context, stored on ``request.state`` and
    echoed back in the response headers.
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID") -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        clear_context()

        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id
        set_context(request_id=request_id)

        response = await call_next(request)
        response.headers[self.header_name] = request_id
        return response
