"""
Daily weather forecast record: the engine's only input row.

``WeatherDayRecord`` carries one forecast day as already-parsed values.
Agronomic fields the provider may omit (soil moisture, soil temperature,
evapotranspiration, humidity) are ``Optional``; the scorer and classifier
substitute their own defaults.

Physically implausible values (negative wind, humidity above 100 %) are
accepted as-is. Upstream data quality cannot be guaranteed, so clamping
happens in the scoring layer rather than at construction.

``date`` may be ``None`` when the upstream entry's date could not be parsed;
the ranker reports such days as skipped instead of failing the window.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict


class WeatherDayRecord(BaseModel):
    """One forecast day.

    Attributes:
        date: Calendar date of the forecast day, or ``None`` if unparseable.
        temperature: Mean air temperature in °C.
        humidity: Relative humidity in %, or ``None`` if not reported.
        wind_speed: Wind speed in km/h.
        precipitation: Forecast precipitation in mm.
        precipitation_probability: Chance of measurable rain in % (0–100).
        soil_moisture: Volumetric soil moisture fraction (0 = dry, 1 = saturated).
        soil_temperature: Soil temperature in °C.
        evapotranspiration: Reference evapotranspiration in mm/day.
        conditions: Provider's free-text summary, echoed into recommendations.
    """

    model_config = ConfigDict(frozen=True)

    date: Optional[dt.date] = None
    temperature: float
    humidity: Optional[float] = None
    wind_speed: float = 0.0
    precipitation: float = 0.0
    precipitation_probability: float = 0.0
    soil_moisture: Optional[float] = None
    soil_temperature: Optional[float] = None
    evapotranspiration: Optional[float] = None
    conditions: str = ""
