"""Temperature Route: GET /temperature binds one pipeline adapter to HTTP.

Invariants:
    - Client IP comes from the connection metadata (request.client)
    - TemperatureResult -> 200 {"temperature": <fahrenheit>}
    - Any failure, typed or not -> 500 {"message": "It broke!"}
    - No exception escapes the handler

Design Decisions:
    - Adapter chosen by Settings.temperature_adapter through get_pipeline, so tests
      and deployments swap styles via dependency overrides or env, not code
    - GET /temperature/{style} serves every adapter side by side under the same contract
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from asyncflow.config import Settings, get_settings
from asyncflow.core.domain_types import AdapterStyle
from asyncflow.core.errors import PipelineError, USER_FACING_MESSAGE
from asyncflow.infrastructure.http_client import JsonHttpClient
from asyncflow.schemas.temperature import ErrorResponse, TemperatureResponse
from asyncflow.services.adapter_registry import build_pipeline
from asyncflow.services.pipeline_base import TemperaturePipeline

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/temperature", tags=["temperature"])

_RESPONSES = {
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def get_http_client(request: Request) -> JsonHttpClient:
    """Shared client created by the app lifespan."""
    return request.app.state.http_client


def get_pipeline(
    client: JsonHttpClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> TemperaturePipeline:
    return build_pipeline(
        settings.temperature_adapter, client, settings.lookup_endpoints(),
    )


@router.get("", response_model=TemperatureResponse, responses=_RESPONSES)
async def get_temperature(
    request: Request, pipeline: TemperaturePipeline = Depends(get_pipeline),
):
    """Temperature at the caller's location, via the configured adapter."""
    return await _respond(pipeline, client_ip(request))


@router.get("/{style}", response_model=TemperatureResponse, responses=_RESPONSES)
async def get_temperature_with_style(
    style: AdapterStyle,
    request: Request,
    client: JsonHttpClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    """Same as GET /temperature, with the adapter named in the path."""
    pipeline = build_pipeline(style, client, settings.lookup_endpoints())
    return await _respond(pipeline, client_ip(request))


def client_ip(request: Request) -> str:
    # Empty IP asks the geolocation service to locate the caller itself
    return request.client.host if request.client else ""


async def _respond(pipeline: TemperaturePipeline, ip: str):
    adapter = pipeline.style.value
    try:
        result = await pipeline.resolve(ip)
    except PipelineError as e:
        logger.error(
            f"Temperature lookup failed ({e.kind.value}): {e.message}",
            extra={**e.log_extra(), "ip": ip, "adapter": adapter},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=e.to_response(),
        )
    except Exception as e:
        logger.error(
            f"Unexpected failure in temperature lookup: {e}",
            extra={"ip": ip, "adapter": adapter},
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": USER_FACING_MESSAGE},
        )
    logger.info(
        "Temperature lookup succeeded", extra={"ip": ip, "adapter": adapter},
    )
    return TemperatureResponse.from_result(result)
