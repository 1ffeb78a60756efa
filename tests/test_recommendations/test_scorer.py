"""
Tests for irrigation_advisor/recommendations/scorer.py.

What we test
------------
compute_score():
  - Reference day: dry soil, 5 % rain, 5 km/h wind, 20 °C → ≈ 0.858.
  - All components and the total stay within [0, 1].
  - Deterministic for identical inputs.

soil_moisture_score():
  - 1.0 at or below the minimum; linear decay to 0.0 at saturation.
  - Missing moisture defaults to 0.5.
  - Degenerate minimum (>= 1.0) never divides by zero.

precip_probability_score() / wind_score():
  - Linear decay; 0.0 at or above the threshold.
  - Zero threshold → 0.0, never NaN/Inf.
  - Negative wind clamps to 1.0.

temperature_score():
  - 1.0 inside the inclusive band.
  - Below-band heuristic 0.5 + t / (2 * low), clamped.
  - Above-band 1 - ((t - high) / high) * 0.5, clamped.
  - Only an exactly-zero bound short-circuits to 0.0; a negative lower
    bound goes through the formula.

build_reasoning():
  - Tier headline per total score.
  - Clauses for low soil moisture, rain chance, wind and temperature.
"""

from __future__ import annotations

import math

import pytest

from irrigation_advisor.recommendations.scorer import (
    ScoreComponents,
    build_reasoning,
    compute_score,
    precip_probability_score,
    soil_moisture_score,
    temperature_score,
    wind_score,
)


# ── Helpers ────────────────────────────────────────────────────────────────────

def _score(
    soil_moisture: float | None = 0.15,
    precip_probability: float = 5.0,
    wind_speed: float = 5.0,
    temperature: float = 20.0,
    min_soil_moisture: float = 0.2,
    max_precip_probability: float = 20.0,
    max_wind_speed: float = 15.0,
    optimal_temperature_range: tuple[float, float] = (10.0, 30.0),
) -> ScoreComponents:
    return compute_score(
        soil_moisture=soil_moisture,
        precip_probability=precip_probability,
        wind_speed=wind_speed,
        temperature=temperature,
        min_soil_moisture=min_soil_moisture,
        max_precip_probability=max_precip_probability,
        max_wind_speed=max_wind_speed,
        optimal_temperature_range=optimal_temperature_range,
    )


def _in_unit_interval(value: float) -> bool:
    return math.isfinite(value) and 0.0 <= value <= 1.0


# ── compute_score ─────────────────────────────────────────────────────────────

class TestComputeScore:
    def test_reference_day_components(self):
        c = _score()
        assert c.soil_moisture_score == pytest.approx(1.0)
        assert c.precip_probability_score == pytest.approx(0.75)
        assert c.wind_score == pytest.approx(2.0 / 3.0)
        assert c.temperature_score == pytest.approx(1.0)

    def test_reference_day_total(self):
        assert _score().total == pytest.approx(0.8583, abs=1e-3)

    def test_total_follows_weights(self):
        c = ScoreComponents(
            soil_moisture_score=0.5,
            precip_probability_score=0.5,
            wind_score=0.5,
            temperature_score=0.5,
        )
        assert c.total == pytest.approx(0.5)

    def test_perfect_day_scores_one(self):
        c = _score(soil_moisture=0.0, precip_probability=0.0, wind_speed=0.0)
        assert c.total == pytest.approx(1.0)

    def test_deterministic(self):
        assert _score() == _score()

    @pytest.mark.parametrize(
        "kwargs",
        [
            dict(soil_moisture=-0.5),
            dict(soil_moisture=1.7),
            dict(precip_probability=-10.0),
            dict(precip_probability=250.0),
            dict(wind_speed=-20.0),
            dict(wind_speed=500.0),
            dict(temperature=-40.0),
            dict(temperature=60.0),
            dict(max_wind_speed=0.0, wind_speed=0.0),
            dict(max_precip_probability=0.0),
            dict(min_soil_moisture=1.0, soil_moisture=1.2),
            dict(optimal_temperature_range=(0.0, 0.0), temperature=-5.0),
            dict(optimal_temperature_range=(0.0, 0.0), temperature=5.0),
        ],
    )
    def test_all_scores_in_unit_interval(self, kwargs):
        c = _score(**kwargs)
        assert _in_unit_interval(c.soil_moisture_score)
        assert _in_unit_interval(c.precip_probability_score)
        assert _in_unit_interval(c.wind_score)
        assert _in_unit_interval(c.temperature_score)
        assert _in_unit_interval(c.total)

    def test_nan_input_collapses_to_zero(self):
        c = _score(temperature=float("nan"))
        assert c.temperature_score == 0.0
        assert _in_unit_interval(c.total)


# ── soil_moisture_score ───────────────────────────────────────────────────────

class TestSoilMoistureScore:
    def test_at_minimum_is_one(self):
        assert soil_moisture_score(0.2, 0.2) == pytest.approx(1.0)

    def test_below_minimum_is_one(self):
        assert soil_moisture_score(0.05, 0.2) == pytest.approx(1.0)

    def test_linear_decay(self):
        # 1 - (0.6 - 0.2) / (1 - 0.2) = 0.5
        assert soil_moisture_score(0.6, 0.2) == pytest.approx(0.5)

    def test_saturated_is_zero(self):
        assert soil_moisture_score(1.0, 0.2) == pytest.approx(0.0)

    def test_missing_defaults_to_half(self):
        assert soil_moisture_score(None, 0.2) == pytest.approx(0.5)

    def test_minimum_of_one_does_not_divide(self):
        assert soil_moisture_score(1.1, 1.0) == 0.0


# ── precip_probability_score / wind_score ─────────────────────────────────────

class TestPrecipProbabilityScore:
    def test_zero_chance_is_one(self):
        assert precip_probability_score(0.0, 20.0) == pytest.approx(1.0)

    def test_half_of_threshold(self):
        assert precip_probability_score(10.0, 20.0) == pytest.approx(0.5)

    def test_at_threshold_is_zero(self):
        assert precip_probability_score(20.0, 20.0) == 0.0

    def test_above_threshold_is_zero(self):
        assert precip_probability_score(80.0, 20.0) == 0.0

    def test_zero_threshold_guard(self):
        assert precip_probability_score(0.0, 0.0) == 0.0


class TestWindScore:
    def test_calm_is_one(self):
        assert wind_score(0.0, 15.0) == pytest.approx(1.0)

    def test_linear_decay(self):
        assert wind_score(5.0, 15.0) == pytest.approx(2.0 / 3.0)

    def test_at_threshold_is_zero(self):
        assert wind_score(15.0, 15.0) == 0.0

    def test_zero_threshold_with_calm_wind_is_zero(self):
        result = wind_score(0.0, 0.0)
        assert result == 0.0
        assert math.isfinite(result)

    def test_negative_wind_clamps_to_one(self):
        assert wind_score(-5.0, 15.0) == pytest.approx(1.0)


# ── temperature_score ─────────────────────────────────────────────────────────

class TestTemperatureScore:
    @pytest.mark.parametrize("t", [10.0, 20.0, 30.0])
    def test_inside_band_is_one(self, t):
        assert temperature_score(t, 10.0, 30.0) == pytest.approx(1.0)

    def test_below_band_heuristic(self):
        # 0.5 + 5 / (2 * 10) = 0.75
        assert temperature_score(5.0, 10.0, 30.0) == pytest.approx(0.75)

    def test_freezing_still_scores_half(self):
        assert temperature_score(0.0, 10.0, 30.0) == pytest.approx(0.5)

    def test_far_below_band_clamps_to_zero(self):
        assert temperature_score(-20.0, 10.0, 30.0) == 0.0

    def test_above_band(self):
        # 1 - ((45 - 30) / 30) * 0.5 = 0.75
        assert temperature_score(45.0, 10.0, 30.0) == pytest.approx(0.75)

    def test_far_above_band_clamps_to_zero(self):
        assert temperature_score(95.0, 10.0, 30.0) == 0.0

    def test_zero_lower_bound_guard(self):
        assert temperature_score(-5.0, 0.0, 30.0) == 0.0

    def test_negative_lower_bound_uses_formula(self):
        # 0.5 + (-20) / (2 * -10) = 1.5, clamped to 1.0
        assert temperature_score(-20.0, -10.0, 10.0) == pytest.approx(1.0)

    def test_zero_upper_bound_guard(self):
        assert temperature_score(5.0, 0.0, 0.0) == 0.0


# ── build_reasoning ───────────────────────────────────────────────────────────

def _components(
    soil: float = 1.0,
    precip: float = 1.0,
    wind: float = 1.0,
    temp: float = 1.0,
) -> ScoreComponents:
    return ScoreComponents(
        soil_moisture_score=soil,
        precip_probability_score=precip,
        wind_score=wind,
        temperature_score=temp,
    )


class TestBuildReasoning:
    def test_reference_day_is_highly_recommended(self):
        assert build_reasoning(_score()).startswith("Highly recommended for irrigation.")

    def test_good_tier(self):
        # 0.4 + 0.3 = 0.7
        assert build_reasoning(_components(wind=0.0, temp=0.0)).startswith(
            "Good conditions for irrigation."
        )

    def test_moderate_tier(self):
        # 0.2 + 0.3 = 0.5
        assert build_reasoning(_components(soil=0.5, wind=0.0, temp=0.0)).startswith(
            "Moderate conditions for irrigation."
        )

    def test_not_recommended_tier(self):
        reason = build_reasoning(_components(0.0, 0.0, 0.0, 0.0))
        assert reason.startswith("Not recommended for irrigation.")

    def test_low_soil_moisture_clause(self):
        assert "Soil moisture is low." in build_reasoning(_components(soil=0.71))
        assert "Soil moisture is low." not in build_reasoning(_components(soil=0.7))

    def test_rain_clauses(self):
        assert "High chance of rain." in build_reasoning(_components(precip=0.2))
        assert "Low chance of rain." in build_reasoning(_components(precip=0.3))

    def test_wind_clause(self):
        assert "Wind conditions may affect" in build_reasoning(_components(wind=0.4))
        assert "Wind conditions" not in build_reasoning(_components(wind=0.5))

    def test_temperature_clause(self):
        assert "Temperature conditions are not optimal." in build_reasoning(
            _components(temp=0.4)
        )

    def test_no_trailing_whitespace(self):
        reason = build_reasoning(_components(0.0, 0.0, 0.0, 0.0))
        assert reason == reason.strip()
