from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Iterable, Mapping

from ..middlewares import request_id_ctx_var
from .config import AppSettings

REDACTED = "***"


class JsonLogFormatter(logging.Formatter):
    """Render log records as JSON for easier ingestion.

    Any configured secret is scrubbed from the rendered line, including
    formatted tracebacks, so upstream URLs carrying ``key=`` never reach a log.
    """

    def __init__(self, secrets: Iterable[str] = ()) -> None:
        super().__init__()
        self.secrets = [secret for secret in secrets if secret]

    def redact(self, text: str) -> str:
        for secret in self.secrets:
            text = text.replace(secret, REDACTED)
        return text

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = request_id_ctx_var.get()
        if request_id:
            payload["request_id"] = request_id
        extra = getattr(record, "extra_data", None)
        if isinstance(extra, Mapping):
            payload.update(extra)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return self.redact(json.dumps(payload, separators=(",", ":"), default=str))


def configure_logging(settings: AppSettings) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(JsonLogFormatter(secrets=[settings.GOOGLE_API_KEY]))
    logging.root.handlers = [handler]
    logging.root.setLevel(settings.LOG_LEVEL.upper())
    # httpx logs every request URL at INFO, and ours carry the API key.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
