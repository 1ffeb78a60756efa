"""
Advisory report writer: CSV and JSON output for ranked irrigation days,
single-day verdicts and alert partitions.

All functions are pure I/O: they consume in-memory models and write
human-readable + machine-readable files.

Output files (written by AdviseStage)
-------------------------------------
  data/outputs/
    irrigation_ranking_{date}.csv    -- ranked days, best first
    irrigation_advisory_{date}.json  -- ranking, skipped days, verdicts, alerts
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date
from pathlib import Path

from irrigation_advisor.models.recommendation import (
    Advisory,
    RankedRecommendation,
    RankingResult,
)
from irrigation_advisor.recommendations.aggregator import (
    condition_summary,
    summarize_best_days,
)

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "v1.0.0"


def write_ranking_csv(
    ranking: RankingResult,
    output_dir: Path,
    run_date: date | None = None,
) -> Path:
    """Write the ranked forecast days to a CSV file.

    Columns: rank, date, score, tier, soil_moisture, precipitation,
             precipitation_probability, wind_speed, temperature,
             evapotranspiration, reason.

    Args:
        ranking:    RankingResult from rank_irrigation_days().
        output_dir: Directory to write the file (created if missing).
        run_date:   Date label for the filename. Defaults to today.

    Returns:
        Path to the written CSV file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"irrigation_ranking_{run_date}.csv"

    fieldnames = [
        "rank", "date", "score", "tier", "soil_moisture", "precipitation",
        "precipitation_probability", "wind_speed", "temperature",
        "evapotranspiration", "reason",
    ]

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for rank, rec in enumerate(ranking.recommendations, start=1):
            writer.writerow(
                {
                    "rank":                      rank,
                    "date":                      rec.date.isoformat(),
                    "score":                     round(rec.score, 4),
                    "tier":                      rec.tier.value,
                    "soil_moisture":             rec.soil_moisture,
                    "precipitation":             rec.precipitation,
                    "precipitation_probability": rec.precipitation_probability,
                    "wind_speed":                rec.wind_speed,
                    "temperature":               rec.temperature,
                    "evapotranspiration":        rec.evapotranspiration,
                    "reason":                    rec.reason,
                }
            )

    logger.info(
        "Ranking CSV written: %s (%d rows)", csv_path, len(ranking.recommendations)
    )
    return csv_path


def write_advisory_json(
    advisory: Advisory,
    output_dir: Path,
    run_slug: str = "",
) -> Path:
    """Write a full advisory to a structured JSON file.

    Args:
        advisory:   Advisory from build_advisory().
        output_dir: Target directory.
        run_slug:   Pipeline run UUID for provenance.

    Returns:
        Path to the written JSON file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"irrigation_advisory_{advisory.generated_for}.json"

    partitions = advisory.partitions
    payload: dict = {
        "schema_version": SCHEMA_VERSION,
        "generated_for":  advisory.generated_for.isoformat(),
        "run_slug":       run_slug,
        "ranking": [
            _recommendation_payload(rank, rec)
            for rank, rec in enumerate(advisory.ranking.recommendations, start=1)
        ],
        "skipped": [
            {
                "index":  s.index,
                "date":   s.date.isoformat() if s.date else None,
                "reason": s.reason.value,
                "detail": s.detail,
            }
            for s in advisory.ranking.skipped
        ],
        "verdicts": [
            {
                "date":             dv.date.isoformat(),
                "upcoming_rain_mm": dv.upcoming_rain_mm,
                "is_suitable":      dv.verdict.is_suitable,
                "priority":         dv.verdict.priority.value,
                "recommendations":  dv.verdict.recommendations,
            }
            for dv in advisory.verdicts
        ],
        "alerts": {
            "urgent":          [r.date.isoformat() for r in partitions.urgent],
            "good":            [r.date.isoformat() for r in partitions.good],
            "today_excellent": [r.date.isoformat() for r in partitions.today_excellent],
            "summary": [
                {"date": r.date.isoformat(), "summary": condition_summary(r)}
                for r in summarize_best_days(partitions)
            ],
        },
    }

    json_path.write_text(
        json.dumps(payload, indent=2, default=str, ensure_ascii=False),
        encoding="utf-8",
    )
    logger.info("Advisory JSON written: %s", json_path)
    return json_path


def _recommendation_payload(rank: int, rec: RankedRecommendation) -> dict:
    return {
        "rank":   rank,
        "date":   rec.date.isoformat(),
        "score":  round(rec.score, 4),
        "tier":   rec.tier.value,
        "reason": rec.reason,
        "score_components": {
            "soil_moisture":      rec.soil_moisture_score,
            "precip_probability": rec.precip_probability_score,
            "wind":               rec.wind_score,
            "temperature":        rec.temperature_score,
        },
        "metrics": {
            "soil_moisture":             rec.soil_moisture,
            "soil_temperature":          rec.soil_temperature,
            "precipitation":             rec.precipitation,
            "precipitation_probability": rec.precipitation_probability,
            "evapotranspiration":        rec.evapotranspiration,
            "temperature":               rec.temperature,
            "humidity":                  rec.humidity,
            "wind_speed":                rec.wind_speed,
            "conditions":                rec.conditions,
        },
    }
