from __future__ import annotations

from .cors import OpenCorsMiddleware
from .request_id import RequestIdMiddleware, request_id_ctx_var

__all__ = [
    "OpenCorsMiddleware",
    "RequestIdMiddleware",
    "request_id_ctx_var",
]
