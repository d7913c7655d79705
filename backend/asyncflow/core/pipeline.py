"""Pipeline Core: the paradigm-independent steps of the IP -> temperature lookup.

Invariants:
    - Every function here is pure: no IO, no event loop, no HTTP types
    - parse_* either return a frozen domain value or raise MalformedResponse
    - kelvin_to_fahrenheit is total for finite input and has no failure mode

Design Decisions:
    - Each adapter in services/ sequences these same functions, so the five
      control-flow styles share one definition of URL shape, parsing and arithmetic
    - LookupEndpoints carries plain strings so adapters never read Settings directly
"""

import math
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, urlencode

from asyncflow.core.domain_types import LocationInfo, TemperatureResult, WeatherInfo
from asyncflow.core.errors import ErrorContext, MalformedResponse

GEO_STAGE = "geolocation"
WEATHER_STAGE = "weather"


@dataclass(frozen=True)
class LookupEndpoints:
    """Base URLs (and optional API key) of the two outbound services."""
    geo_base_url: str
    weather_base_url: str
    weather_api_key: str | None = None

    def geo_url(self, ip: str) -> str:
        return f"{self.geo_base_url}/json/{quote(ip, safe='')}"

    def weather_url(self, location: LocationInfo) -> str:
        params = {"q": f"{location.region_code},{location.city}"}
        if self.weather_api_key:
            params["appid"] = self.weather_api_key
        return f"{self.weather_base_url}/data/2.5/weather?{urlencode(params, safe=',')}"


def parse_location(body: Any) -> LocationInfo:
    """Extract region_code and city from a geolocation response body."""
    region_code = _require_str(body, "region_code")
    city = _require_str(body, "city")
    return LocationInfo(region_code=region_code, city=city)


def parse_weather(body: Any) -> WeatherInfo:
    """Extract main.temp (Kelvin) from a weather response body."""
    main = body.get("main") if isinstance(body, dict) else None
    temp = main.get("temp") if isinstance(main, dict) else None
    # bool is an int subclass; JSON true is not a temperature
    if isinstance(temp, bool) or not isinstance(temp, (int, float)):
        raise MalformedResponse(
            "Weather response lacks numeric main.temp", "main.temp",
            ErrorContext(stage=WEATHER_STAGE),
        )
    try:
        kelvin = float(temp)
    except OverflowError:
        # JSON integers are unbounded; floats are not
        kelvin = math.inf
    if not math.isfinite(kelvin):
        raise MalformedResponse(
            "Weather response main.temp is not a finite float", "main.temp",
            ErrorContext(stage=WEATHER_STAGE),
        )
    return WeatherInfo(main_temp_kelvin=kelvin)


def kelvin_to_fahrenheit(kelvin: float) -> float:
    return (kelvin - 273.15) * 9 / 5 + 32


def build_result(weather: WeatherInfo) -> TemperatureResult:
    return TemperatureResult(
        temperature_fahrenheit=kelvin_to_fahrenheit(weather.main_temp_kelvin),
    )


def _require_str(body: Any, key: str) -> str:
    value = body.get(key) if isinstance(body, dict) else None
    if not isinstance(value, str):
        raise MalformedResponse(
            f"Geolocation response lacks string field {key!r}", key,
            ErrorContext(stage=GEO_STAGE),
        )
    return value
