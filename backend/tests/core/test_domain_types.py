"""Domain Types: immutability and enum values."""

import dataclasses

import pytest

from asyncflow.core.domain_types import (
    AdapterStyle, LocationInfo, TemperatureResult, WeatherInfo,
)


def test_domain_values_are_frozen():
    for value in (
        LocationInfo("CA", "MTV"), WeatherInfo(300.0), TemperatureResult(80.33),
    ):
        field = dataclasses.fields(value)[0].name
        with pytest.raises(dataclasses.FrozenInstanceError):
            setattr(value, field, None)


def test_adapter_style_has_five_members():
    assert {s.value for s in AdapterStyle} == {
        "callback_chain", "callback_argument", "promise", "coroutine", "async_await",
    }


def test_adapter_style_parses_from_string():
    assert AdapterStyle("promise") is AdapterStyle.PROMISE
