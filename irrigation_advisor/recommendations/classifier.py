"""
Single-day irrigation suitability classifier.

Decision predicate
------------------
    irrigate = (low_moisture AND no_rain AND high_et)
               OR very_low_moisture
               OR (very_high_et AND no_rain)

    low_moisture      : soil moisture < 40 %
    very_low_moisture : soil moisture < 25 %
    no_rain           : rain chance < 30 %  AND  upcoming rain < 2 mm
    high_et           : evapotranspiration > 3 mm/day
    very_high_et      : evapotranspiration > 6 mm/day

Priority ladder (first match wins)
----------------------------------
    1. URGENT      : very_low_moisture
    2. HIGH        : very_high_et AND no_rain
    3. RECOMMENDED : predicate true
    4. SKIP        : everything else

Informational score
-------------------
A diagnostic score starts at 10 and is lowered by each skip reason, a cold
or frozen soil and strong wind, but only when the predicate is false. It
never changes the decision; it only decides whether timing and watering
method advice is appended (predicate true OR score >= 5).
"""

from __future__ import annotations

import math

from irrigation_advisor.models.recommendation import SuitabilityVerdict
from irrigation_advisor.models.weather import WeatherDayRecord
from irrigation_advisor.taxonomy.irrigation_taxonomy import (
    CropType,
    IrrigationPriority,
    SoilType,
)

# Defaults for fields the provider may omit
DEFAULT_SOIL_MOISTURE = 0.35
DEFAULT_EVAPOTRANSPIRATION = 3.5
DEFAULT_HUMIDITY = 60.0
SOIL_TEMPERATURE_OFFSET = 2.0

# Predicate thresholds
LOW_SOIL_MOISTURE_PCT = 40.0
VERY_LOW_SOIL_MOISTURE_PCT = 25.0
RAIN_PROBABILITY_PCT = 30.0
UPCOMING_RAIN_MM = 2.0
HIGH_ET_MM = 3.0
VERY_HIGH_ET_MM = 6.0

# Advisory thresholds
FROZEN_SOIL_TEMPERATURE = 0.0
WINDY_KMH = 25.0
VERY_WINDY_KMH = 35.0

INFORMATIONAL_SCORE_START = 10.0
ADVICE_SCORE_THRESHOLD = 5.0


def classify_day(
    day: WeatherDayRecord,
    crop_type: CropType = CropType.WARM_SEASON,
    soil_type: SoilType = SoilType.LOAMY,
    upcoming_rain_mm: float = 0.0,
) -> SuitabilityVerdict:
    """Decide whether one forecast day needs irrigation.

    Args:
        day:              The forecast day to classify.
        crop_type:        Warm- or cool-season crop (sets the soil temperature floor).
        soil_type:        Soil texture class (sets the watering method advice).
        upcoming_rain_mm: Rain forecast beyond this day, in mm.

    Returns:
        SuitabilityVerdict with decision, priority and rationale lines.
    """
    soil_moisture = (
        day.soil_moisture if day.soil_moisture is not None else DEFAULT_SOIL_MOISTURE
    )
    soil_temperature = (
        day.soil_temperature
        if day.soil_temperature is not None
        else day.temperature - SOIL_TEMPERATURE_OFFSET
    )
    evapotranspiration = (
        day.evapotranspiration
        if day.evapotranspiration is not None
        else DEFAULT_EVAPOTRANSPIRATION
    )
    precip_probability = day.precipitation_probability
    wind_speed = day.wind_speed

    moisture_pct = soil_moisture * 100.0
    is_low_moisture = moisture_pct < LOW_SOIL_MOISTURE_PCT
    is_very_low_moisture = moisture_pct < VERY_LOW_SOIL_MOISTURE_PCT
    is_no_rain = (
        precip_probability < RAIN_PROBABILITY_PCT and upcoming_rain_mm < UPCOMING_RAIN_MM
    )
    is_high_et = evapotranspiration > HIGH_ET_MM
    is_very_high_et = evapotranspiration > VERY_HIGH_ET_MM

    should_irrigate = (
        (is_low_moisture and is_no_rain and is_high_et)
        or is_very_low_moisture
        or (is_very_high_et and is_no_rain)
    )

    lines: list[str] = []
    score = INFORMATIONAL_SCORE_START

    # ── Decision and its rationale ───────────────────────────────────────────
    if is_very_low_moisture:
        priority = IrrigationPriority.URGENT
        lines.append("🚨 URGENT IRRIGATION NEEDED - Critical soil moisture:")
        lines.append(
            f"💧 Very low soil moisture ({_num(moisture_pct)}% < 25%)"
        )
    elif is_very_high_et and is_no_rain:
        priority = IrrigationPriority.HIGH
        lines.append("🌱 IRRIGATION RECOMMENDED - High water demand:")
        lines.append(
            f"🌱 Very high evapotranspiration ({_num(evapotranspiration)} mm/day > 6mm)"
        )
        lines.append(
            f"☀️ No significant rain expected ({_num(precip_probability)}% chance)"
        )
    elif should_irrigate:
        priority = IrrigationPriority.RECOMMENDED
        lines.append("💧 IRRIGATION RECOMMENDED based on conditions:")
        lines.append(f"💧 Soil moisture: {_num(moisture_pct)}% (< 40%)")
        lines.append(f"☀️ Rain probability: {_num(precip_probability)}% (< 30%)")
        lines.append(
            f"🌱 Evapotranspiration: {_num(evapotranspiration)} mm/day (> 3mm)"
        )
    else:
        priority = IrrigationPriority.SKIP
        lines.append("✅ SKIP IRRIGATION - Conditions don't require watering:")
        if moisture_pct >= LOW_SOIL_MOISTURE_PCT:
            lines.append(f"💧 Good soil moisture ({_num(moisture_pct)}% >= 40%)")
            score -= 2.0
        if not is_no_rain:
            lines.append(
                f"🌧️ Rain expected ({_num(precip_probability)}% chance, "
                f"{_num(upcoming_rain_mm)}mm)"
            )
            score -= 2.0
        if evapotranspiration <= HIGH_ET_MM:
            lines.append(
                f"🌱 Low water demand (ET: {_num(evapotranspiration)} mm/day <= 3mm)"
            )
            score -= 2.0

    # ── Soil temperature advisory ────────────────────────────────────────────
    if soil_temperature <= FROZEN_SOIL_TEMPERATURE:
        lines.append(
            f"❄️ Soil frozen ({_num(soil_temperature)}°C) - "
            "Avoid irrigation to prevent waterlogging"
        )
        if not should_irrigate:
            score -= 5.0
    elif soil_temperature < crop_type.min_soil_temperature:
        lines.append(
            f"🌡️ Soil cold ({_num(soil_temperature)}°C) for {crop_type.label} crops - "
            "Limited root activity"
        )
        if not should_irrigate:
            score -= 2.0
    else:
        lines.append(f"✅ Soil temperature suitable ({_num(soil_temperature)}°C)")

    # ── Wind advisory ────────────────────────────────────────────────────────
    if wind_speed > VERY_WINDY_KMH:
        lines.append(
            f"💨 Very windy ({_num(wind_speed)} km/h) - Use drip irrigation if irrigating"
        )
        if not should_irrigate:
            score -= 2.0
    elif wind_speed > WINDY_KMH:
        lines.append(
            f"💨 Windy ({_num(wind_speed)} km/h) - Reduce sprinkler pressure if irrigating"
        )
        if not should_irrigate:
            score -= 1.0

    # ── Timing and method advice ─────────────────────────────────────────────
    if should_irrigate or score >= ADVICE_SCORE_THRESHOLD:
        lines.append("⏰ Best time: Early morning (6-8 AM) or evening (6-8 PM)")
        lines.append(f"💧 Method: {soil_type.watering_advice}")

    return SuitabilityVerdict(
        is_suitable=should_irrigate,
        priority=priority,
        recommendations=lines,
        soil_moisture=soil_moisture,
        precipitation_probability=precip_probability,
        wind_speed=wind_speed,
        temperature=day.temperature,
        informational_score=score,
    )


def effective_humidity(day: WeatherDayRecord) -> float:
    """Humidity used for display when the provider omits it."""
    return day.humidity if day.humidity is not None else DEFAULT_HUMIDITY


# ── Helpers ───────────────────────────────────────────────────────────────────

def _num(value: float) -> int:
    """Round half up (ties toward +inf), the way the rationale figures are printed."""
    if math.isnan(value) or math.isinf(value):
        return 0
    return int(math.floor(value + 0.5))
