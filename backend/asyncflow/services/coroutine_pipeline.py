"""Coroutine Pipeline: a generator yields each network call; a driver resumes it.

Invariants:
    - The generator suspends exactly at its `yield` expressions (one per network call)
    - The driver resumes with send(result) on success, throw(error) on failure,
      so the error surfaces at the exact suspension point
    - Only one generator step runs at a time, always on the event loop thread
    - The outcome future settles exactly once; cancelling it closes the generator

Design Decisions:
    - drive() is a plain function over any generator of awaitables, the same
      send()/throw() protocol asyncio itself uses to step native coroutines
"""

import asyncio
from collections.abc import Awaitable, Generator
from typing import Any

from asyncflow.core.domain_types import AdapterStyle, TemperatureResult
from asyncflow.core.pipeline import (
    GEO_STAGE, WEATHER_STAGE, build_result, parse_location, parse_weather,
)
from asyncflow.services.pipeline_base import TemperaturePipeline

Steps = Generator[Awaitable[Any], Any, Any]


def drive(steps: Steps) -> asyncio.Future:
    """Run a generator-based coroutine to completion on the running loop."""
    outcome = asyncio.get_running_loop().create_future()
    in_flight: asyncio.Future | None = None

    def _advance(value: Any = None, error: BaseException | None = None) -> None:
        nonlocal in_flight
        try:
            if error is None:
                awaited = steps.send(value)
            else:
                awaited = steps.throw(error)
        except StopIteration as stop:
            outcome.set_result(stop.value)
            return
        except Exception as e:
            outcome.set_exception(e)
            return
        try:
            in_flight = asyncio.ensure_future(awaited)
        except Exception as e:
            # yielded something that is not awaitable
            steps.close()
            outcome.set_exception(e)
            return
        in_flight.add_done_callback(_resume)

    def _resume(pending: asyncio.Future) -> None:
        cancelled = pending.cancelled()
        error = None if cancelled else pending.exception()
        if outcome.done():
            steps.close()
            return
        if cancelled:
            outcome.cancel()
            steps.close()
            return
        if error is not None:
            _advance(error=error)
        else:
            _advance(pending.result())

    def _on_outcome(done: asyncio.Future) -> None:
        if done.cancelled() and in_flight is not None:
            in_flight.cancel()

    outcome.add_done_callback(_on_outcome)
    _advance()
    return outcome


class CoroutinePipeline(TemperaturePipeline):
    style = AdapterStyle.COROUTINE

    def steps(self, ip: str) -> Steps:
        """The pipeline as straight-line code; each `yield` is a suspension point."""
        body = yield self._client.fetch_json(
            self._endpoints.geo_url(ip), stage=GEO_STAGE,
        )
        location = parse_location(body)
        body = yield self._client.fetch_json(
            self._endpoints.weather_url(location), stage=WEATHER_STAGE,
        )
        return build_result(parse_weather(body))

    def temperature(self, ip: str) -> asyncio.Future:
        return drive(self.steps(ip))

    async def resolve(self, ip: str) -> TemperatureResult:
        return await self.temperature(ip)
