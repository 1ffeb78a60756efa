"""
Advisory pipeline: rank, classify and partition one forecast window.

``build_advisory()`` is the pure composition
``forecast × parameters → (ranking, verdicts, partitions)``; it keeps no
state between calls and does no I/O.

``AdviseStage`` wraps it for the CLI:
  1. Load the forecast JSON file.
  2. build_advisory() with parameters from AppConfig.
  3. Write the ranking CSV and advisory JSON reports.

Returns the number of forecast days examined.
"""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Optional, Sequence

from irrigation_advisor.ingestion.forecast_file import load_forecast_json, upcoming_rain_mm
from irrigation_advisor.models.meta import RunSummary
from irrigation_advisor.models.recommendation import (
    Advisory,
    DailyVerdict,
    IrrigationParameters,
)
from irrigation_advisor.models.weather import WeatherDayRecord
from irrigation_advisor.pipeline.base import PipelineStage
from irrigation_advisor.recommendations.aggregator import (
    AlertThresholds,
    partition_recommendations,
)
from irrigation_advisor.recommendations.classifier import classify_day
from irrigation_advisor.recommendations.ranker import rank_irrigation_days
from irrigation_advisor.taxonomy.irrigation_taxonomy import CropType, SoilType

logger = logging.getLogger(__name__)


def classify_window(
    days: Sequence[Optional[WeatherDayRecord]],
    parameters: IrrigationParameters,
    crop_type: CropType = CropType.WARM_SEASON,
    soil_type: SoilType = SoilType.LOAMY,
    upcoming_rain_window_days: int = 1,
) -> list[DailyVerdict]:
    """Classify every dated day in the leading ``days_to_consider`` window.

    Each day's ``upcoming_rain_mm`` is the precipitation forecast for the
    following ``upcoming_rain_window_days`` entries of the full forecast.
    """
    verdicts: list[DailyVerdict] = []
    for index, day in enumerate(days[: parameters.days_to_consider]):
        if day is None or day.date is None:
            continue
        rain_ahead = upcoming_rain_mm(days, index, upcoming_rain_window_days)
        verdicts.append(
            DailyVerdict(
                date=day.date,
                upcoming_rain_mm=rain_ahead,
                verdict=classify_day(
                    day,
                    crop_type=crop_type,
                    soil_type=soil_type,
                    upcoming_rain_mm=rain_ahead,
                ),
            )
        )
    return verdicts


def build_advisory(
    days: Sequence[Optional[WeatherDayRecord]],
    today: dt.date,
    parameters: Optional[IrrigationParameters] = None,
    crop_type: CropType = CropType.WARM_SEASON,
    soil_type: SoilType = SoilType.LOAMY,
    upcoming_rain_window_days: int = 1,
    thresholds: Optional[AlertThresholds] = None,
) -> Advisory:
    """Run the full advisory pipeline over one forecast window.

    Args:
        days:                      Date-ascending forecast window; ``None``
                                   marks an entry the parser rejected.
        today:                     Date used for the today's-excellent partition.
        parameters:                Ranking thresholds.
        crop_type:                 Crop class for the classifier.
        soil_type:                 Soil class for the classifier.
        upcoming_rain_window_days: Days of look-ahead rain fed to the classifier.
        thresholds:                Alert partition cut-offs.

    Returns:
        Advisory with ranking, per-day verdicts and alert partitions.
    """
    if parameters is None:
        parameters = IrrigationParameters()
    days = list(days)

    ranking = rank_irrigation_days(days, parameters)
    verdicts = classify_window(
        days,
        parameters,
        crop_type=crop_type,
        soil_type=soil_type,
        upcoming_rain_window_days=upcoming_rain_window_days,
    )
    partitions = partition_recommendations(ranking.recommendations, today, thresholds)

    logger.info(
        "Advisory for %s | ranked=%d verdicts=%d urgent=%d good=%d today_excellent=%d",
        today, len(ranking.recommendations), len(verdicts),
        len(partitions.urgent), len(partitions.good), len(partitions.today_excellent),
    )
    return Advisory(
        generated_for=today,
        ranking=ranking,
        verdicts=verdicts,
        partitions=partitions,
    )


class AdviseStage(PipelineStage):
    """Load a forecast file, build the advisory and write report files."""

    stage_name = "advise"
    advisory: Optional[Advisory] = None

    def _execute(
        self,
        run: RunSummary,
        forecast_path: Path | str | None = None,
        today: dt.date | None = None,
        output_dir: Path | str | None = None,
        write_reports: bool = True,
        **kwargs,
    ) -> int:
        """Generate the advisory for one forecast file.

        Args:
            run:           In-progress RunSummary (mutable).
            forecast_path: Forecast JSON file to read (required).
            today:         Reference date. Defaults to the local calendar date.
            output_dir:    Report directory. Defaults to config.data.output_dir.
            write_reports: When False, only builds the advisory.

        Returns:
            Number of forecast days in the examined window.
        """
        from irrigation_advisor.recommendations.reporter import (
            write_advisory_json,
            write_ranking_csv,
        )

        if forecast_path is None:
            raise ValueError("AdviseStage requires forecast_path.")

        parsed = load_forecast_json(Path(forecast_path))
        today = today or dt.date.today()
        parameters = self.config.irrigation.to_parameters()
        classifier = self.config.classifier

        advisory = build_advisory(
            parsed.entries,
            today=today,
            parameters=parameters,
            crop_type=classifier.crop_type,
            soil_type=classifier.soil_type,
            upcoming_rain_window_days=classifier.upcoming_rain_window_days,
            thresholds=self.config.alerts.to_thresholds(),
        )
        self.advisory = advisory

        if write_reports:
            out_dir = Path(output_dir or self.config.data.output_dir)
            csv_path = write_ranking_csv(advisory.ranking, out_dir, run_date=today)
            json_path = write_advisory_json(advisory, out_dir, run_slug=run.run_slug)
            run.outputs = [str(csv_path), str(json_path)]

        return min(len(parsed.entries), parameters.days_to_consider)
