"""Callback Arguments: each stage is a named function that takes its continuation.

Invariants:
    - get_location / get_weather deliver (error, value) exactly once, whatever
      the parser raises
    - Only domain values cross these functions (ip, LocationInfo, WeatherInfo)
    - temperature() has the same signature as CallbackChainPipeline.temperature()

Design Decisions:
    - Stages are methods, continuations are bound with functools.partial, so no
      function literal nests inside another
"""

from collections.abc import Callable
from functools import partial
from typing import Any

from asyncflow.core.domain_types import AdapterStyle, LocationInfo, WeatherInfo
from asyncflow.core.pipeline import (
    GEO_STAGE, WEATHER_STAGE, build_result, parse_location, parse_weather,
)
from asyncflow.infrastructure.http_client import JsonCallback
from asyncflow.services.pipeline_base import CallbackPipeline, OnError, OnSuccess

StageCallback = Callable[[BaseException | None, Any], None]


def parsing(parse: Callable[[Any], Any], callback: StageCallback) -> JsonCallback:
    """Wrap callback so it receives parse(body) instead of the raw JSON body."""
    def _deliver(error, body):
        if error is not None:
            callback(error, None)
            return
        try:
            value = parse(body)
        except Exception as e:
            callback(e, None)
            return
        callback(None, value)
    return _deliver


class CallbackArgumentPipeline(CallbackPipeline):
    style = AdapterStyle.CALLBACK_ARGUMENT

    def get_location(self, ip: str, callback: StageCallback) -> None:
        self._client.fetch_json_callback(
            self._endpoints.geo_url(ip), parsing(parse_location, callback),
            stage=GEO_STAGE,
        )

    def get_weather(self, location: LocationInfo, callback: StageCallback) -> None:
        self._client.fetch_json_callback(
            self._endpoints.weather_url(location),
            parsing(parse_weather, callback),
            stage=WEATHER_STAGE,
        )

    def temperature(
        self, ip: str, on_success: OnSuccess, on_error: OnError,
    ) -> None:
        self.get_location(ip, partial(self._location_ready, on_success, on_error))

    def _location_ready(
        self,
        on_success: OnSuccess,
        on_error: OnError,
        error: BaseException | None,
        location: LocationInfo | None,
    ) -> None:
        if error is not None:
            on_error(error)
            return
        try:
            self.get_weather(
                location, partial(self._weather_ready, on_success, on_error),
            )
        except Exception as e:
            on_error(e)

    def _weather_ready(
        self,
        on_success: OnSuccess,
        on_error: OnError,
        error: BaseException | None,
        weather: WeatherInfo | None,
    ) -> None:
        if error is not None:
            on_error(error)
            return
        try:
            result = build_result(weather)
        except Exception as e:
            on_error(e)
            return
        on_success(result)
