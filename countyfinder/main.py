from __future__ import annotations

import uvicorn
from prometheus_fastapi_instrumentator import Instrumentator

from .app import create_app
from .core.config import get_settings
from .core.logging import configure_logging

settings = get_settings()
configure_logging(settings)
app = create_app(settings)
instrumentator = Instrumentator()
instrumentator.instrument(app).expose(app)


@app.get("/health")
async def health() -> dict[str, bool]:
    return {"ok": True}


def serve() -> None:
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)
