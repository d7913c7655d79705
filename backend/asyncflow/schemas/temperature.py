"""Temperature Schemas: the two JSON bodies GET /temperature can return."""

from pydantic import BaseModel

from asyncflow.core.domain_types import TemperatureResult


class TemperatureResponse(BaseModel):
    """200 body: temperature in degrees Fahrenheit."""
    temperature: float

    @classmethod
    def from_result(cls, result: TemperatureResult) -> "TemperatureResponse":
        return cls(temperature=result.temperature_fahrenheit)


class ErrorResponse(BaseModel):
    """500 body: fixed user-facing message."""
    message: str
