"""Root conftest: shared test configuration and fake outbound services.

Invariants:
    - Tests never reach the real geolocation or weather services
    - FakeServices records every outbound request in arrival order

Design Decisions:
    - httpx.MockTransport over patching JsonHttpClient: the real client's error
      mapping runs in every test
"""

import os

import httpx
import pytest

from asyncflow.core.pipeline import LookupEndpoints
from asyncflow.infrastructure.http_client import JsonHttpClient

# Ensure tests don't accidentally hit the public services
os.environ.setdefault("GEO_BASE_URL", "http://geo.test")
os.environ.setdefault("WEATHER_BASE_URL", "http://weather.test")

GEO_BASE = "http://geo.test"
WEATHER_BASE = "http://weather.test"

CA_MTV = {"region_code": "CA", "city": "MTV"}
WARM = {"main": {"temp": 300}}


class FakeServices:
    """Stand-in for both outbound services behind one MockTransport.

    geo / weather may be a JSON-able value (served with 200), an
    httpx.Response, a callable taking the request and returning a response,
    or an exception instance (raised as a transport error).
    """

    def __init__(self, geo=None, weather=None):
        self.geo = CA_MTV if geo is None else geo
        self.weather = WARM if weather is None else weather
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "geo.test":
            return self._reply(self.geo, request)
        if request.url.host == "weather.test":
            return self._reply(self.weather, request)
        return httpx.Response(404)

    @property
    def geo_calls(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "geo.test"]

    @property
    def weather_calls(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "weather.test"]

    @staticmethod
    def _reply(reply, request) -> httpx.Response:
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, httpx.Response):
            return reply
        if callable(reply):
            return reply(request)
        return httpx.Response(200, json=reply)


@pytest.fixture
def services():
    return FakeServices()


@pytest.fixture
def endpoints():
    return LookupEndpoints(geo_base_url=GEO_BASE, weather_base_url=WEATHER_BASE)


@pytest.fixture
async def raw_http(services):
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(services.handler),
    ) as client:
        yield client


@pytest.fixture
def json_client(raw_http):
    return JsonHttpClient(raw_http, timeout_seconds=1.0)
