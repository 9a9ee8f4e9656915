from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


class OpenCorsMiddleware(BaseHTTPMiddleware):
    """Declare permissive CORS on every response, errors included.

    Unlike Starlette's ``CORSMiddleware`` the headers are sent whether or not the
    request carries an ``Origin``, and any ``OPTIONS`` preflight is answered with
    an empty ``200`` without reaching a route.
    """

    def __init__(  # type: ignore[override]
        self,
        app,
        allow_origin: str = "*",
        allow_methods: str = "GET, OPTIONS",
        allow_headers: str = "Content-Type",
    ) -> None:
        super().__init__(app)
        self.cors_headers = {
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Methods": allow_methods,
            "Access-Control-Allow-Headers": allow_headers,
        }

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            response = await call_next(request)
        for name, value in self.cors_headers.items():
            response.headers[name] = value
        return response
