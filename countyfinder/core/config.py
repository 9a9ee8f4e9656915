"""Human-friendly configuration loader.

The ``AppSettings`` class centralises every environment variable we rely on:

*What:* Which settings exist and what do they control?
*When:* They are read once, the first time ``get_settings`` is called.
*Why:* The Google credential must only ever live on the server, so it is read
from the environment and nowhere else.
*How:* pydantic-settings reads ``.env``/``.env.local`` and the process
environment, falling back to defaults that boot a local development proxy.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Environment-driven application configuration."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "County Finder"
    LOG_LEVEL: str = "INFO"

    # App binding for ``countyfinder-serve``
    HOST: str = "0.0.0.0"
    PORT: int = 8089

    # ---- Google Maps Platform (server-side only)
    GOOGLE_API_KEY: str = Field(
        default="",
        validation_alias=AliasChoices("GOOGLE_API_KEY", "GOOGLE_MAPS_API_KEY"),
    )
    GOOGLE_GEOCODE_URL: str = "https://maps.googleapis.com/maps/api/geocode/json"
    GOOGLE_PLACES_DETAILS_URL: str = "https://maps.googleapis.com/maps/api/place/details/json"
    GOOGLE_PLACES_AUTOCOMPLETE_URL: str = "https://maps.googleapis.com/maps/api/place/autocomplete/json"
    GOOGLE_REGION_CODE: str = "us"
    PROVIDER_TIMEOUT_SECONDS: float = 6.0

    # ---- CORS for the browser front end
    CORS_ALLOW_ORIGIN: str = "*"
    CORS_ALLOW_METHODS: str = "GET, OPTIONS"
    CORS_ALLOW_HEADERS: str = "Content-Type"

    # ---- Lookup client
    # "proxy" calls the HTTP endpoints below, "direct" calls Google in-process.
    CLIENT_TRANSPORT: str = "proxy"
    PROXY_BASE_URL: str = "http://localhost:8089/api"
    PROXY_TIMEOUT_SECONDS: float = 10.0
    AUTOCOMPLETE_DEBOUNCE_MS: int = 300
    AUTOCOMPLETE_MIN_CHARS: int = 3
    BLUR_GRACE_MS: int = 200

    @field_validator("GOOGLE_API_KEY", mode="before")
    @classmethod
    def strip_api_key(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("CLIENT_TRANSPORT")
    @classmethod
    def check_transport(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"proxy", "direct"}:
            raise ValueError("CLIENT_TRANSPORT must be 'proxy' or 'direct'")
        return normalized

    @property
    def api_key_configured(self) -> bool:
        return bool(self.GOOGLE_API_KEY)

    @property
    def debounce_seconds(self) -> float:
        return self.AUTOCOMPLETE_DEBOUNCE_MS / 1000

    @property
    def blur_grace_seconds(self) -> float:
        return self.BLUR_GRACE_MS / 1000


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()
