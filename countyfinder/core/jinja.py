"""Helper utilities for teaching Jinja2 how to format lookup results.

Templates are the presentation layer. This module builds the one environment
shared by the web page and the presenter, and registers the ``dash`` filter so
any absent value renders as the placeholder instead of ``None``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
PLACEHOLDER = "—"


def dash(value: Any) -> str:
    """Render ``None``/empty values as an em dash placeholder."""

    if value is None or value == "":
        return PLACEHOLDER
    return str(value)


_TEMPLATES = Jinja2Templates(directory=str(TEMPLATES_DIR))
_TEMPLATES.env.filters["dash"] = dash


def get_templates() -> Jinja2Templates:
    """Return the shared templates object with filters registered."""

    return _TEMPLATES
