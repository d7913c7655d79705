"""Pipeline Base: the uniform result interface shared by all five adapters.

Invariants:
    - resolve(ip) returns a TemperatureResult or raises, never both, never neither
    - callbacks_to_future settles its future exactly once; later completions are
      logged and dropped

Design Decisions:
    - Callback adapters implement temperature(ip, on_success, on_error) and inherit
      resolve() from CallbackPipeline, so the endpoint awaits every style the same way
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from asyncflow.core.domain_types import AdapterStyle, TemperatureResult
from asyncflow.core.pipeline import LookupEndpoints
from asyncflow.infrastructure.http_client import JsonHttpClient

logger = logging.getLogger(__name__)

OnSuccess = Callable[[TemperatureResult], None]
OnError = Callable[[BaseException], None]
CallbackEntryPoint = Callable[[str, OnSuccess, OnError], None]


class TemperaturePipeline(ABC):
    """IP -> temperature lookup bound to one client and one set of endpoints."""

    style: AdapterStyle

    def __init__(self, client: JsonHttpClient, endpoints: LookupEndpoints):
        self._client = client
        self._endpoints = endpoints

    @abstractmethod
    async def resolve(self, ip: str) -> TemperatureResult:
        """Run the pipeline; raise PipelineError on failure."""


class CallbackPipeline(TemperaturePipeline):
    """Base for the two callback styles."""

    @abstractmethod
    def temperature(
        self, ip: str, on_success: OnSuccess, on_error: OnError,
    ) -> None:
        """Start the pipeline; exactly one of the continuations fires later."""

    async def resolve(self, ip: str) -> TemperatureResult:
        return await callbacks_to_future(self.temperature, ip, self.style)


def callbacks_to_future(
    start: CallbackEntryPoint, ip: str, style: AdapterStyle | None = None,
) -> asyncio.Future:
    """Bridge a (ip, on_success, on_error) entry point onto an asyncio future."""
    outcome = asyncio.get_running_loop().create_future()

    def _late(kind: str) -> None:
        logger.error(
            f"Ignoring {kind} after pipeline already completed",
            extra={"ip": ip, "adapter": style.value if style else None},
        )

    def on_success(result: TemperatureResult) -> None:
        if outcome.done():
            _late("success")
            return
        outcome.set_result(result)

    def on_error(error: BaseException) -> None:
        if outcome.done():
            _late("error")
            return
        outcome.set_exception(error)

    try:
        start(ip, on_success, on_error)
    except Exception as e:
        on_error(e)
    return outcome
