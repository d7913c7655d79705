"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache), single instance per process
    - Base URLs never end with "/" (URL templates add their own separators)
    - request_timeout_seconds > 0

Design Decisions:
    - Defaults point at the public services, so the app runs with no .env at all
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from asyncflow.core.domain_types import AdapterStyle
from asyncflow.core.pipeline import LookupEndpoints


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Outbound services
    geo_base_url: str = "http://freegeoip.net"
    weather_base_url: str = "http://api.openweathermap.org"
    weather_api_key: str | None = None
    request_timeout_seconds: float = Field(5.0, gt=0)

    # Which control-flow style serves GET /temperature
    temperature_adapter: AdapterStyle = AdapterStyle.ASYNC_AWAIT

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("geo_base_url", "weather_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def lookup_endpoints(self) -> LookupEndpoints:
        return LookupEndpoints(
            geo_base_url=self.geo_base_url,
            weather_base_url=self.weather_base_url,
            weather_api_key=self.weather_api_key,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
