"""Domain Types: immutable values that flow through the temperature pipeline.

Invariants:
    - LocationInfo, WeatherInfo, TemperatureResult are frozen (created once per request)
    - Adapter styles encoded as an Enum, no raw string matching

Design Decisions:
    - Frozen dataclasses over pydantic models: core/ stays free of validation
      frameworks; pydantic lives at the API boundary (schemas/)
    - str Enum for AdapterStyle: usable directly as a settings value and a path parameter
"""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class LocationInfo:
    """Subset of the geolocation response the pipeline consumes."""
    region_code: str
    city: str


@dataclass(frozen=True)
class WeatherInfo:
    """Subset of the weather response the pipeline consumes."""
    main_temp_kelvin: float


@dataclass(frozen=True)
class TemperatureResult:
    temperature_fahrenheit: float


class AdapterStyle(str, Enum):
    """The five control-flow styles the pipeline is exposed under."""
    CALLBACK_CHAIN = "callback_chain"
    CALLBACK_ARGUMENT = "callback_argument"
    PROMISE = "promise"
    COROUTINE = "coroutine"
    ASYNC_AWAIT = "async_await"
