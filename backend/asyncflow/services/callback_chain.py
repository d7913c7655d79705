"""Callback Chain: the pipeline as nested continuations, one level per stage.

Invariants:
    - Each nesting level checks its own error argument before doing anything else
    - Any exception raised while parsing or building the next request goes to on_error
    - on_success is called outside any try block, so a failing success handler
      can never also trigger on_error
    - The weather request is only issued from inside the geolocation continuation
"""

from asyncflow.core.domain_types import AdapterStyle
from asyncflow.core.pipeline import (
    GEO_STAGE, WEATHER_STAGE, build_result, parse_location, parse_weather,
)
from asyncflow.services.pipeline_base import CallbackPipeline, OnError, OnSuccess


class CallbackChainPipeline(CallbackPipeline):
    style = AdapterStyle.CALLBACK_CHAIN

    def temperature(
        self, ip: str, on_success: OnSuccess, on_error: OnError,
    ) -> None:
        def on_location(error, body):
            if error is not None:
                on_error(error)
                return

            def on_weather(error, body):
                if error is not None:
                    on_error(error)
                    return
                try:
                    result = build_result(parse_weather(body))
                except Exception as e:
                    on_error(e)
                    return
                on_success(result)

            try:
                location = parse_location(body)
                self._client.fetch_json_callback(
                    self._endpoints.weather_url(location), on_weather,
                    stage=WEATHER_STAGE,
                )
            except Exception as e:
                on_error(e)

        self._client.fetch_json_callback(
            self._endpoints.geo_url(ip), on_location, stage=GEO_STAGE,
        )
