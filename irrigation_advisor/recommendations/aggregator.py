"""
Recommendation aggregator: partitions a ranked list into the three subsets
handed to the notification dispatcher.

Partitions
----------
    urgent          : score >= 0.9  OR  soil moisture < 0.15
    good            : score >= 0.7
    today_excellent : date == today AND score >= 0.8

Partitions overlap by design (an urgent day is usually also good). Input
order is preserved inside each partition, so a best-first ranking stays
best-first. Delivery, throttling and message formatting belong to the
dispatcher, not here.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict

from irrigation_advisor.models.recommendation import AlertPartitions, RankedRecommendation

SUMMARY_MAX_DAYS = 3


class AlertThresholds(BaseModel):
    """Cut-offs for each alert partition."""

    model_config = ConfigDict(frozen=True)

    urgent_score: float = 0.9
    urgent_soil_moisture: float = 0.15
    good_score: float = 0.7
    today_excellent_score: float = 0.8


def is_urgent(rec: RankedRecommendation, thresholds: AlertThresholds) -> bool:
    if rec.score >= thresholds.urgent_score:
        return True
    return rec.soil_moisture is not None and rec.soil_moisture < thresholds.urgent_soil_moisture


def partition_recommendations(
    recommendations: Sequence[RankedRecommendation],
    today: dt.date,
    thresholds: Optional[AlertThresholds] = None,
) -> AlertPartitions:
    """Split ranked recommendations into urgent / good / today's-excellent.

    Args:
        recommendations: Output of the ranker (any order; order is preserved).
        today:           The calendar date considered "today".
        thresholds:      Partition cut-offs. Defaults to ``AlertThresholds()``.

    Returns:
        AlertPartitions with the three (possibly overlapping) subsets.
    """
    if thresholds is None:
        thresholds = AlertThresholds()

    return AlertPartitions(
        urgent=[r for r in recommendations if is_urgent(r, thresholds)],
        good=[r for r in recommendations if r.score >= thresholds.good_score],
        today_excellent=[
            r for r in recommendations
            if r.date == today and r.score >= thresholds.today_excellent_score
        ],
    )


def summarize_best_days(
    partitions: AlertPartitions,
    max_days: int = SUMMARY_MAX_DAYS,
) -> list[RankedRecommendation]:
    """Top entries of the ``good`` partition for a daily summary."""
    return partitions.good[:max_days]


def condition_summary(rec: RankedRecommendation) -> str:
    """Short condition phrase describing why a day is favourable."""
    soil_moisture = rec.soil_moisture if rec.soil_moisture is not None else 0.5
    precip_chance = rec.precipitation_probability

    if soil_moisture < 0.2 and precip_chance < 10:
        return "Dry soil, no rain expected"
    if soil_moisture < 0.3 and precip_chance < 20:
        return "Low soil moisture, minimal rain"
    if precip_chance < 15:
        return "Good conditions, low rain chance"
    if rec.wind_speed < 10:
        return "Calm winds, ideal for irrigation"
    return "Favorable irrigation conditions"
