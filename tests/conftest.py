"""
Shared pytest fixtures for the irrigation advisor test suite.

Provides:
  - ``make_day``: factory for ``WeatherDayRecord`` with dry, calm defaults.
  - ``sample_day``: one well-formed forecast day.
  - ``week_forecast``: seven consecutive days starting 2026-10-19, mixing
    dry, wet and windy conditions.
  - ``forecast_payload``: the provider JSON shape for ``week_forecast``.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Callable

import pytest

from irrigation_advisor.models.weather import WeatherDayRecord

START_DATE = date(2026, 10, 19)


def build_day(**overrides: Any) -> WeatherDayRecord:
    """Build a ``WeatherDayRecord``; unspecified fields take dry, calm values."""
    fields: dict[str, Any] = {
        "date": START_DATE,
        "temperature": 20.0,
        "humidity": 55.0,
        "wind_speed": 5.0,
        "precipitation": 0.0,
        "precipitation_probability": 5.0,
        "soil_moisture": 0.15,
        "soil_temperature": 18.0,
        "evapotranspiration": 4.0,
        "conditions": "Clear",
    }
    fields.update(overrides)
    return WeatherDayRecord(**fields)


@pytest.fixture
def make_day() -> Callable[..., WeatherDayRecord]:
    return build_day


@pytest.fixture
def sample_day() -> WeatherDayRecord:
    """Reference day: dry soil, low rain chance, light wind, mild air."""
    return build_day()


@pytest.fixture
def week_forecast() -> list[WeatherDayRecord]:
    """Seven date-ascending days with varied conditions."""
    rows = [
        dict(soil_moisture=0.10, precipitation_probability=0.0, wind_speed=2.0),
        dict(soil_moisture=0.25, precipitation_probability=10.0, wind_speed=8.0),
        dict(soil_moisture=0.40, precipitation=12.0, precipitation_probability=90.0),
        dict(soil_moisture=0.55, precipitation_probability=40.0, wind_speed=20.0),
        dict(soil_moisture=None, precipitation_probability=15.0, evapotranspiration=None),
        dict(soil_moisture=0.30, precipitation_probability=5.0, wind_speed=30.0),
        dict(soil_moisture=0.20, precipitation_probability=0.0, temperature=35.0),
    ]
    return [
        build_day(date=START_DATE + timedelta(days=i), **row)
        for i, row in enumerate(rows)
    ]


@pytest.fixture
def forecast_payload(week_forecast: list[WeatherDayRecord]) -> dict[str, Any]:
    """Provider-style JSON payload for ``week_forecast``."""
    return {
        "resolvedAddress": "Test Farm",
        "days": [
            {
                "datetime": d.date.isoformat(),
                "temp": d.temperature,
                "humidity": d.humidity,
                "windspeed": d.wind_speed,
                "precip": d.precipitation,
                "precipprob": d.precipitation_probability,
                "soilmoisture": d.soil_moisture,
                "soiltemp": d.soil_temperature,
                "evapotranspiration": d.evapotranspiration,
                "conditions": d.conditions,
            }
            for d in week_forecast
        ],
    }
