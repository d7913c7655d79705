"""Promise Pipeline: stages composed as asyncio futures with a `then` combinator.

Invariants:
    - then(f, fn) runs fn only after f resolved successfully
    - A rejected future propagates to every future chained after it; fn is skipped
    - Every intermediate future has its exception retrieved, so the event loop
      never reports "Future exception was never retrieved"
    - Cancelling a chained future cancels the future it waits on
"""

import asyncio
from collections.abc import Callable
from functools import partial
from typing import Any

from asyncflow.core.domain_types import AdapterStyle, TemperatureResult
from asyncflow.core.pipeline import (
    GEO_STAGE, WEATHER_STAGE, build_result, parse_location, parse_weather,
)
from asyncflow.services.pipeline_base import TemperaturePipeline


def then(
    future: asyncio.Future, on_fulfilled: Callable[[Any], Any],
) -> asyncio.Future:
    """Return a future for on_fulfilled(result of future).

    If on_fulfilled returns a future, the chained future adopts its outcome.
    """
    chained = future.get_loop().create_future()

    def _settle(source: asyncio.Future) -> None:
        if source.cancelled():
            if not chained.done():
                chained.cancel()
            return
        error = source.exception()
        if chained.done():
            return
        if error is not None:
            chained.set_exception(error)
            return
        try:
            value = on_fulfilled(source.result())
        except Exception as e:
            chained.set_exception(e)
            return
        if asyncio.isfuture(value):
            value.add_done_callback(partial(_adopt, chained))
            chained.add_done_callback(partial(_cancel_if_cancelled, value))
        else:
            chained.set_result(value)

    future.add_done_callback(_settle)
    chained.add_done_callback(partial(_cancel_if_cancelled, future))
    return chained


def _adopt(target: asyncio.Future, source: asyncio.Future) -> None:
    if source.cancelled():
        if not target.done():
            target.cancel()
        return
    error = source.exception()
    if target.done():
        return
    if error is not None:
        target.set_exception(error)
    else:
        target.set_result(source.result())


def _cancel_if_cancelled(upstream: asyncio.Future, chained: asyncio.Future) -> None:
    if chained.cancelled():
        upstream.cancel()


class PromisePipeline(TemperaturePipeline):
    style = AdapterStyle.PROMISE

    def temperature(self, ip: str) -> asyncio.Future:
        """Future resolving to a TemperatureResult, or rejected with PipelineError."""
        location = then(
            self._fetch(self._endpoints.geo_url(ip), GEO_STAGE), parse_location,
        )
        weather_body = then(
            location,
            lambda loc: self._fetch(self._endpoints.weather_url(loc), WEATHER_STAGE),
        )
        return then(then(weather_body, parse_weather), build_result)

    async def resolve(self, ip: str) -> TemperatureResult:
        return await self.temperature(ip)

    def _fetch(self, url: str, stage: str) -> asyncio.Future:
        return asyncio.ensure_future(self._client.fetch_json(url, stage=stage))
