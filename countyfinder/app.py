"""Application factory and top-level wiring for County Finder.

This module brings together configuration, middleware, routers and error
handling. ``create_app`` is called once by ``countyfinder.main`` for the real
server and once per test module so dependency overrides stay isolated.
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from .core.config import AppSettings, get_settings
from .core.errors import register_exception_handlers
from .middlewares import OpenCorsMiddleware, RequestIdMiddleware
from .routers import proxy as proxy_router
from .routers import ui as ui_router


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title=settings.APP_NAME)

    # Middleware added last runs first: request ids wrap CORS, so even
    # preflight answers are logged and tagged.
    app.add_middleware(
        OpenCorsMiddleware,
        allow_origin=settings.CORS_ALLOW_ORIGIN,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )
    app.add_middleware(RequestIdMiddleware)

    app.include_router(proxy_router.router)
    app.include_router(ui_router.router)

    register_exception_handlers(app)
    return app


__all__ = ["create_app"]
