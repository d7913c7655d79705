"""Adapter Registry: AdapterStyle -> pipeline class.

Invariants:
    - Every AdapterStyle member has exactly one registered pipeline
"""

from asyncflow.core.domain_types import AdapterStyle
from asyncflow.core.pipeline import LookupEndpoints
from asyncflow.infrastructure.http_client import JsonHttpClient
from asyncflow.services.async_pipeline import AsyncAwaitPipeline
from asyncflow.services.callback_argument import CallbackArgumentPipeline
from asyncflow.services.callback_chain import CallbackChainPipeline
from asyncflow.services.coroutine_pipeline import CoroutinePipeline
from asyncflow.services.pipeline_base import TemperaturePipeline
from asyncflow.services.promise_pipeline import PromisePipeline

ADAPTERS: dict[AdapterStyle, type[TemperaturePipeline]] = {
    AdapterStyle.CALLBACK_CHAIN: CallbackChainPipeline,
    AdapterStyle.CALLBACK_ARGUMENT: CallbackArgumentPipeline,
    AdapterStyle.PROMISE: PromisePipeline,
    AdapterStyle.COROUTINE: CoroutinePipeline,
    AdapterStyle.ASYNC_AWAIT: AsyncAwaitPipeline,
}


def build_pipeline(
    style: AdapterStyle, client: JsonHttpClient, endpoints: LookupEndpoints,
) -> TemperaturePipeline:
    return ADAPTERS[AdapterStyle(style)](client, endpoints)
