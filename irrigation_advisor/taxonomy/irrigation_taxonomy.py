"""
Irrigation taxonomy: the closed vocabularies used by the advisory engine.

Four dimensions appear throughout the engine:
  - ``IrrigationPriority`` - how urgently a single day needs water.
  - ``SoilType``           - drives the watering-method advice.
  - ``CropType``           - sets the minimum useful soil temperature.
  - ``ScoreTier``          - the wording band of a continuous ranking score.

``SkipReason`` explains why a forecast day never reached the ranked list.

Usage example::

    from irrigation_advisor.taxonomy.irrigation_taxonomy import IrrigationPriority

    if verdict.priority >= IrrigationPriority.HIGH:
        ...

This module has NO imports from any other ``irrigation_advisor`` package.
"""

from enum import StrEnum


class IrrigationPriority(StrEnum):
    """Urgency tier attached to a single-day verdict.

    Total order: SKIP < MONITOR < RECOMMENDED < HIGH < URGENT.
    """

    SKIP = "skip"
    """Conditions do not call for watering."""

    MONITOR = "monitor"
    """Watch conditions; no action yet. Not emitted by the classifier ladder."""

    RECOMMENDED = "recommended"
    """Low moisture, no rain and real water demand."""

    HIGH = "high"
    """Very high evapotranspiration with no rain in sight."""

    URGENT = "urgent"
    """Critically dry soil; water regardless of rain or ET."""

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, IrrigationPriority):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, IrrigationPriority):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, IrrigationPriority):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, IrrigationPriority):
            return NotImplemented
        return self.rank >= other.rank


_PRIORITY_RANK: dict[IrrigationPriority, int] = {
    IrrigationPriority.SKIP:        0,
    IrrigationPriority.MONITOR:     1,
    IrrigationPriority.RECOMMENDED: 2,
    IrrigationPriority.HIGH:        3,
    IrrigationPriority.URGENT:      4,
}


class SoilType(StrEnum):
    """Soil texture class; controls watering frequency and depth advice."""

    SANDY = "sandy"
    """Drains fast; light, frequent watering."""

    LOAMY = "loamy"
    """Balanced retention; moderate watering."""

    CLAY = "clay"
    """Holds water; deep, infrequent watering."""

    @property
    def watering_advice(self) -> str:
        return _SOIL_WATERING_ADVICE[self]


_SOIL_WATERING_ADVICE: dict[SoilType, str] = {
    SoilType.SANDY: "Light, frequent watering (every 2-3 days)",
    SoilType.LOAMY: "Moderate watering (every 3-4 days), 1-1.5 inches deep",
    SoilType.CLAY:  "Deep, infrequent watering (every 5-6 days)",
}


class CropType(StrEnum):
    """Crop season class; sets the soil temperature below which roots stall."""

    WARM_SEASON = "warm_season"
    """Maize, tomato, pepper, squash; roots need >= 15 °C soil (60 °F)."""

    COOL_SEASON = "cool_season"
    """Wheat, lettuce, brassicas; roots active from 4 °C soil (40 °F)."""

    @property
    def min_soil_temperature(self) -> float:
        return 15.0 if self is CropType.WARM_SEASON else 4.0

    @property
    def label(self) -> str:
        return "warm-season" if self is CropType.WARM_SEASON else "cool-season"


class ScoreTier(StrEnum):
    """Wording band of a continuous ranking score in [0, 1]."""

    HIGHLY_RECOMMENDED = "highly_recommended"
    GOOD = "good"
    MODERATE = "moderate"
    NOT_RECOMMENDED = "not_recommended"

    @classmethod
    def from_score(cls, score: float) -> "ScoreTier":
        if score >= 0.8:
            return cls.HIGHLY_RECOMMENDED
        if score >= 0.6:
            return cls.GOOD
        if score >= 0.4:
            return cls.MODERATE
        return cls.NOT_RECOMMENDED

    @property
    def headline(self) -> str:
        return _TIER_HEADLINES[self]


_TIER_HEADLINES: dict[ScoreTier, str] = {
    ScoreTier.HIGHLY_RECOMMENDED: "Highly recommended for irrigation.",
    ScoreTier.GOOD:               "Good conditions for irrigation.",
    ScoreTier.MODERATE:           "Moderate conditions for irrigation.",
    ScoreTier.NOT_RECOMMENDED:    "Not recommended for irrigation.",
}


class SkipReason(StrEnum):
    """Why a forecast day was excluded from the ranked list."""

    MISSING_DATE = "missing_date"
    """Upstream entry had no usable calendar date."""

    WET_DAY = "wet_day"
    """More than 5 mm of rain already forecast; irrigation is moot."""

    INVALID_ENTRY = "invalid_entry"
    """Upstream entry could not be parsed into a forecast day at all."""
