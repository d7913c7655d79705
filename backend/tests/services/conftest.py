"""Service test fixtures: pipelines over fake services + FastAPI test client.

Invariants:
    - get_http_client overridden to the MockTransport-backed JsonHttpClient
    - get_settings overridden so the adapter can be switched per test

Design Decisions:
    - ASGITransport does not run the lifespan, so app.state is never touched here
"""

import pytest
from httpx import ASGITransport, AsyncClient

from asyncflow.api.routes.temperature import get_http_client
from asyncflow.config import Settings, get_settings
from asyncflow.core.domain_types import AdapterStyle
from asyncflow.main import app
from asyncflow.services.adapter_registry import build_pipeline


@pytest.fixture(params=list(AdapterStyle), ids=lambda s: s.value)
def style(request):
    return request.param


@pytest.fixture
def pipeline(style, json_client, endpoints):
    return build_pipeline(style, json_client, endpoints)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        geo_base_url="http://geo.test",
        weather_base_url="http://weather.test",
    )


@pytest.fixture
async def client(json_client, settings):
    """FastAPI test client with outbound HTTP and settings overridden."""
    app.dependency_overrides[get_http_client] = lambda: json_client
    app.dependency_overrides[get_settings] = lambda: settings

    async with AsyncClient(
        transport=ASGITransport(app=app, client=("1.2.3.4", 5555)),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
