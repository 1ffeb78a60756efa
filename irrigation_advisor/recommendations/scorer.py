"""
Irrigation day scoring: converts one forecast day + IrrigationParameters into
score components and a templated reasoning string.

Score formula (weighted sum, range 0–1)
---------------------------------------
    total = (
        soil_moisture_score        * 0.4   # irrigation need
        + precip_probability_score * 0.3   # rain would make watering moot
        + wind_score               * 0.2   # drift / evaporation losses
        + temperature_score        * 0.1   # plant uptake window
    )

Component explanations
----------------------
soil_moisture_score (0–1):
    1.0 at or below ``min_soil_moisture``; decays linearly to 0.0 at
    saturation: ``1 - (m - min) / (1 - min)``. Unknown moisture: 0.5.

precip_probability_score (0–1):
    1.0 at 0 %, 0.0 at or above ``max_precip_probability``:
    ``1 - p / maxP``.

wind_score (0–1):
    1.0 at calm, 0.0 at or above ``max_wind_speed``: ``1 - w / maxW``.

temperature_score (0–1):
    1.0 inside the optimal band. Below it: ``0.5 + t / (2 * low)``.
    Above it: ``1 - ((t - high) / high) * 0.5``. The below-band formula is an
    empirical heuristic kept as-is; at t = 0 °C it still scores 0.5.

Every component and the total are clamped to [0, 1]. A zero threshold in any
denominator yields 0.0 instead of dividing; so does a negative moisture, rain
or wind threshold. Negative temperature bounds are ordinary values and go
through the formulas (then the clamp).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from irrigation_advisor.taxonomy.irrigation_taxonomy import ScoreTier

# Weights of the overall score
SOIL_MOISTURE_WEIGHT = 0.4
PRECIP_PROBABILITY_WEIGHT = 0.3
WIND_WEIGHT = 0.2
TEMPERATURE_WEIGHT = 0.1

DEFAULT_SOIL_MOISTURE_SCORE = 0.5


@dataclass(frozen=True)
class ScoreComponents:
    """All components of an irrigation day score.

    Attributes:
        soil_moisture_score:      0–1, irrigation need from soil moisture.
        precip_probability_score: 0–1, lower rain chance scores higher.
        wind_score:               0–1, calmer days score higher.
        temperature_score:        0–1, 1.0 inside the optimal band.
    """

    soil_moisture_score:      float
    precip_probability_score: float
    wind_score:               float
    temperature_score:        float

    @property
    def total(self) -> float:
        """Weighted total score, clamped to [0, 1]."""
        return _clamp01(
            self.soil_moisture_score        * SOIL_MOISTURE_WEIGHT
            + self.precip_probability_score * PRECIP_PROBABILITY_WEIGHT
            + self.wind_score               * WIND_WEIGHT
            + self.temperature_score        * TEMPERATURE_WEIGHT
        )


def soil_moisture_score(soil_moisture: Optional[float], min_soil_moisture: float) -> float:
    if soil_moisture is None:
        return DEFAULT_SOIL_MOISTURE_SCORE
    if soil_moisture <= min_soil_moisture:
        return 1.0
    span = 1.0 - min_soil_moisture
    if span <= 0:
        return 0.0
    return _clamp01(1.0 - (soil_moisture - min_soil_moisture) / span)


def precip_probability_score(precip_probability: float, max_precip_probability: float) -> float:
    if max_precip_probability <= 0 or precip_probability >= max_precip_probability:
        return 0.0
    return _clamp01(1.0 - precip_probability / max_precip_probability)


def wind_score(wind_speed: float, max_wind_speed: float) -> float:
    if max_wind_speed <= 0 or wind_speed >= max_wind_speed:
        return 0.0
    return _clamp01(1.0 - wind_speed / max_wind_speed)


def temperature_score(temperature: float, min_optimal: float, max_optimal: float) -> float:
    if min_optimal <= temperature <= max_optimal:
        return 1.0
    if temperature < min_optimal:
        if min_optimal == 0:
            return 0.0
        return _clamp01(0.5 + temperature / (2.0 * min_optimal))
    if max_optimal == 0:
        return 0.0
    return _clamp01(1.0 - ((temperature - max_optimal) / max_optimal) * 0.5)


def compute_score(
    soil_moisture:             Optional[float],
    precip_probability:        float,
    wind_speed:                float,
    temperature:               float,
    min_soil_moisture:         float,
    max_precip_probability:    float,
    max_wind_speed:            float,
    optimal_temperature_range: tuple[float, float],
) -> ScoreComponents:
    """Compute all score components for one forecast day.

    Args:
        soil_moisture:             Moisture fraction, or ``None`` if unknown.
        precip_probability:        Rain chance in %.
        wind_speed:                Wind speed in km/h.
        temperature:               Air temperature in °C.
        min_soil_moisture:         Moisture at or below which need is maximal.
        max_precip_probability:    Rain chance where the rain score reaches 0.
        max_wind_speed:            Wind speed where the wind score reaches 0.
        optimal_temperature_range: Inclusive (low, high) band in °C.

    Returns:
        ScoreComponents with all fields in [0, 1].
    """
    low, high = optimal_temperature_range
    return ScoreComponents(
        soil_moisture_score=soil_moisture_score(soil_moisture, min_soil_moisture),
        precip_probability_score=precip_probability_score(
            precip_probability, max_precip_probability
        ),
        wind_score=wind_score(wind_speed, max_wind_speed),
        temperature_score=temperature_score(temperature, low, high),
    )


def build_reasoning(components: ScoreComponents) -> str:
    """Assemble the human-readable reason for a scored day.

    Returns a space-separated sentence list such as:
        "Highly recommended for irrigation. Soil moisture is low.
        Low chance of rain."

    Args:
        components: ScoreComponents from compute_score().

    Returns:
        Non-empty reasoning string.
    """
    reasons: list[str] = [ScoreTier.from_score(components.total).headline]

    if components.soil_moisture_score > 0.7:
        reasons.append("Soil moisture is low.")

    if components.precip_probability_score < 0.3:
        reasons.append("High chance of rain.")
    else:
        reasons.append("Low chance of rain.")

    if components.wind_score < 0.5:
        reasons.append("Wind conditions may affect irrigation effectiveness.")

    if components.temperature_score < 0.5:
        reasons.append("Temperature conditions are not optimal.")

    return " ".join(reasons)


# ── Helper ────────────────────────────────────────────────────────────────────

def _clamp01(value: float) -> float:
    # NaN fails every comparison; treat it as no signal
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))
