"""
Irrigation parameters and recommendation output models.

``IrrigationParameters`` is the caller-supplied tuning surface for ranking.

``RankedRecommendation`` is one scored forecast day produced by the ranker;
``RankingResult`` bundles the sorted list with the days that were skipped.

``SuitabilityVerdict`` is the classifier's yes/no answer for a single day,
with a priority tier and ordered rationale lines.

``AlertPartitions`` is the aggregator's contract with the notification
dispatcher, and ``Advisory`` is the full pipeline result.

All models are frozen: a recommendation is produced fresh per call and is
never mutated afterwards.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from irrigation_advisor.taxonomy.irrigation_taxonomy import (
    IrrigationPriority,
    ScoreTier,
    SkipReason,
)


class IrrigationParameters(BaseModel):
    """Thresholds used by the ranking scorer.

    Attributes:
        min_soil_moisture: Moisture fraction at or below which need is maximal.
        max_precip_probability: Rain chance (%) at which the rain score hits 0.
        max_wind_speed: Wind speed (km/h) at which the wind score hits 0.
        optimal_temperature_range: Inclusive (low, high) band in °C scoring 1.0.
        days_to_consider: Leading forecast days examined.
    """

    model_config = ConfigDict(frozen=True)

    min_soil_moisture: float = 0.2
    max_precip_probability: float = 20.0
    max_wind_speed: float = 15.0
    optimal_temperature_range: tuple[float, float] = (10.0, 30.0)
    days_to_consider: int = Field(default=7, ge=0)

    @model_validator(mode="after")
    def validate_temperature_range(self) -> "IrrigationParameters":
        low, high = self.optimal_temperature_range
        if low > high:
            raise ValueError(
                f"optimal_temperature_range low ({low}) must be <= high ({high})."
            )
        return self


class RankedRecommendation(BaseModel):
    """A forecast day scored for irrigation suitability.

    Attributes:
        date: Forecast day.
        score: Weighted overall score in [0, 1].
        soil_moisture_score: Sub-score in [0, 1] (weight 0.4).
        precip_probability_score: Sub-score in [0, 1] (weight 0.3).
        wind_score: Sub-score in [0, 1] (weight 0.2).
        temperature_score: Sub-score in [0, 1] (weight 0.1).
        reason: Templated human-readable explanation.
    """

    model_config = ConfigDict(frozen=True)

    date: dt.date
    score: float = Field(ge=0.0, le=1.0)
    soil_moisture_score: float = Field(ge=0.0, le=1.0)
    precip_probability_score: float = Field(ge=0.0, le=1.0)
    wind_score: float = Field(ge=0.0, le=1.0)
    temperature_score: float = Field(ge=0.0, le=1.0)

    # Raw metrics echoed from the forecast day
    soil_moisture: Optional[float] = None
    soil_temperature: Optional[float] = None
    precipitation: float
    precipitation_probability: float
    evapotranspiration: Optional[float] = None
    temperature: float
    humidity: Optional[float] = None
    wind_speed: float
    conditions: str = ""

    reason: str

    @property
    def tier(self) -> ScoreTier:
        return ScoreTier.from_score(self.score)


class SkippedDay(BaseModel):
    """A forecast day excluded from ranking, with the reason."""

    model_config = ConfigDict(frozen=True)

    index: int
    date: Optional[dt.date] = None
    reason: SkipReason
    detail: str = ""


class RankingResult(BaseModel):
    """Ranker output: best-first recommendations plus skipped days."""

    model_config = ConfigDict(frozen=True)

    recommendations: list[RankedRecommendation] = []
    skipped: list[SkippedDay] = []

    @property
    def best(self) -> Optional[RankedRecommendation]:
        return self.recommendations[0] if self.recommendations else None


class SuitabilityVerdict(BaseModel):
    """Single-day irrigation decision.

    ``priority`` comes only from the classifier's boolean ladder.
    ``informational_score`` is diagnostic: it gates the advisory text but
    never the decision.

    Attributes:
        is_suitable: Whether irrigation is needed now.
        priority: Urgency tier.
        recommendations: Ordered rationale lines (lead line first).
        soil_moisture: Effective moisture fraction used (after defaults).
        precipitation_probability: Rain chance in %.
        wind_speed: Wind speed in km/h.
        temperature: Air temperature in °C.
        informational_score: Diagnostic score starting at 10.
    """

    model_config = ConfigDict(frozen=True)

    is_suitable: bool
    priority: IrrigationPriority
    recommendations: list[str]
    soil_moisture: float
    precipitation_probability: float
    wind_speed: float
    temperature: float
    informational_score: float = 10.0

    @model_validator(mode="after")
    def validate_priority_matches_decision(self) -> "SuitabilityVerdict":
        if self.is_suitable and self.priority < IrrigationPriority.RECOMMENDED:
            raise ValueError(
                f"A suitable verdict cannot carry priority '{self.priority}'."
            )
        if not self.is_suitable and self.priority >= IrrigationPriority.RECOMMENDED:
            raise ValueError(
                f"An unsuitable verdict cannot carry priority '{self.priority}'."
            )
        return self


class DailyVerdict(BaseModel):
    """A classifier verdict tagged with its forecast day."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    upcoming_rain_mm: float = 0.0
    verdict: SuitabilityVerdict


class AlertPartitions(BaseModel):
    """Subsets of a ranking handed to the notification dispatcher.

    Attributes:
        urgent: Very high score or critically dry soil.
        good: Score high enough for the daily summary.
        today_excellent: Today's date with an excellent score.
    """

    model_config = ConfigDict(frozen=True)

    urgent: list[RankedRecommendation] = []
    good: list[RankedRecommendation] = []
    today_excellent: list[RankedRecommendation] = []

    @property
    def is_empty(self) -> bool:
        return not (self.urgent or self.good or self.today_excellent)


class Advisory(BaseModel):
    """Full pipeline output for one forecast window."""

    model_config = ConfigDict(frozen=True)

    generated_for: dt.date
    ranking: RankingResult
    verdicts: list[DailyVerdict] = []
    partitions: AlertPartitions = AlertPartitions()
