"""
Irrigation day ranker: scores the leading forecast days and sorts them
best-first.

Usage flow
----------
1. rank_irrigation_days(days, parameters)
   -> RankingResult  (recommendations best-first + skipped days)

2. score_day(day, parameters)
   -> RankedRecommendation  (one day, no filtering)

Filtering rules
---------------
- Only the first ``parameters.days_to_consider`` days are examined.
- A slot the parser rejected (``None``) is skipped (``invalid_entry``) and
  still counts towards the window, so later days never slide into it.
- A day without a date is skipped (``missing_date``); the rest of the window
  is still ranked.
- A day with more than 5 mm of precipitation is skipped (``wet_day``).

Sorting is stable: equal scores keep their original (date-ascending) order.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from irrigation_advisor.models.recommendation import (
    IrrigationParameters,
    RankedRecommendation,
    RankingResult,
    SkippedDay,
)
from irrigation_advisor.models.weather import WeatherDayRecord
from irrigation_advisor.recommendations.scorer import build_reasoning, compute_score
from irrigation_advisor.taxonomy.irrigation_taxonomy import SkipReason

logger = logging.getLogger(__name__)

WET_DAY_PRECIPITATION_MM = 5.0


def score_day(
    day: WeatherDayRecord,
    parameters: IrrigationParameters,
) -> RankedRecommendation:
    """Score a single dated forecast day.

    Raises:
        ValueError: If ``day.date`` is ``None``.
    """
    if day.date is None:
        raise ValueError("Cannot score a forecast day without a date.")

    components = compute_score(
        soil_moisture=day.soil_moisture,
        precip_probability=day.precipitation_probability,
        wind_speed=day.wind_speed,
        temperature=day.temperature,
        min_soil_moisture=parameters.min_soil_moisture,
        max_precip_probability=parameters.max_precip_probability,
        max_wind_speed=parameters.max_wind_speed,
        optimal_temperature_range=parameters.optimal_temperature_range,
    )

    return RankedRecommendation(
        date=day.date,
        score=components.total,
        soil_moisture_score=components.soil_moisture_score,
        precip_probability_score=components.precip_probability_score,
        wind_score=components.wind_score,
        temperature_score=components.temperature_score,
        soil_moisture=day.soil_moisture,
        soil_temperature=day.soil_temperature,
        precipitation=day.precipitation,
        precipitation_probability=day.precipitation_probability,
        evapotranspiration=day.evapotranspiration,
        temperature=day.temperature,
        humidity=day.humidity,
        wind_speed=day.wind_speed,
        conditions=day.conditions,
        reason=build_reasoning(components),
    )


def rank_irrigation_days(
    days: Sequence[Optional[WeatherDayRecord]],
    parameters: Optional[IrrigationParameters] = None,
) -> RankingResult:
    """Rank the leading forecast days by irrigation suitability.

    Args:
        days:       Date-ascending forecast window; ``None`` marks an entry
                    the parser rejected.
        parameters: Scoring thresholds. Defaults to ``IrrigationParameters()``.

    Returns:
        RankingResult with recommendations sorted by score descending and
        every excluded day listed in ``skipped``.
    """
    if parameters is None:
        parameters = IrrigationParameters()

    window = list(days)[: parameters.days_to_consider]
    scored: list[RankedRecommendation] = []
    skipped: list[SkippedDay] = []

    for index, day in enumerate(window):
        if day is None:
            skipped.append(
                SkippedDay(
                    index=index,
                    reason=SkipReason.INVALID_ENTRY,
                    detail="Forecast entry could not be parsed.",
                )
            )
            continue

        if day.date is None:
            logger.warning("Forecast day #%d has no usable date; skipped.", index)
            skipped.append(
                SkippedDay(
                    index=index,
                    reason=SkipReason.MISSING_DATE,
                    detail="Forecast entry has a missing or unparseable date.",
                )
            )
            continue

        if day.precipitation > WET_DAY_PRECIPITATION_MM:
            logger.debug(
                "Forecast day %s skipped: %.1f mm precipitation.",
                day.date, day.precipitation,
            )
            skipped.append(
                SkippedDay(
                    index=index,
                    date=day.date,
                    reason=SkipReason.WET_DAY,
                    detail=(
                        f"{day.precipitation:.1f} mm precipitation forecast "
                        f"(> {WET_DAY_PRECIPITATION_MM:.0f} mm)."
                    ),
                )
            )
            continue

        scored.append(score_day(day, parameters))

    # sorted() is stable, so ties keep date-ascending order
    ranked = sorted(scored, key=lambda rec: rec.score, reverse=True)

    logger.info(
        "Ranked %d of %d forecast day(s) | skipped=%d",
        len(ranked), len(window), len(skipped),
    )
    return RankingResult(recommendations=ranked, skipped=skipped)
