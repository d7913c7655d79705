"""Async/Await Pipeline: two sequential awaits and ordinary exception propagation."""

import logging

from asyncflow.core.domain_types import AdapterStyle, TemperatureResult
from asyncflow.core.pipeline import (
    GEO_STAGE, WEATHER_STAGE, build_result, parse_location, parse_weather,
)
from asyncflow.services.pipeline_base import TemperaturePipeline

logger = logging.getLogger(__name__)


class AsyncAwaitPipeline(TemperaturePipeline):
    style = AdapterStyle.ASYNC_AWAIT

    async def temperature(self, ip: str) -> TemperatureResult:
        body = await self._client.fetch_json(
            self._endpoints.geo_url(ip), stage=GEO_STAGE,
        )
        location = parse_location(body)
        logger.debug(
            f"Resolved {ip} to {location.city}, {location.region_code}",
            extra={"ip": ip, "stage": GEO_STAGE},
        )
        body = await self._client.fetch_json(
            self._endpoints.weather_url(location), stage=WEATHER_STAGE,
        )
        return build_result(parse_weather(body))

    async def resolve(self, ip: str) -> TemperatureResult:
        return await self.temperature(ip)
