"""
Tests for irrigation_advisor/recommendations/reporter.py.

What we test
------------
write_ranking_csv():
  - File name carries the run date; one row per ranked day, best first.
  - Empty ranking still writes the header.

write_advisory_json():
  - Top-level keys, schema version and run slug.
  - Skipped days, verdict lines and alert date lists are serialized.
  - Non-ASCII rationale text survives unescaped.
"""

from __future__ import annotations

import csv
import json
from datetime import date

from irrigation_advisor.models.recommendation import RankingResult
from irrigation_advisor.pipeline.advise import build_advisory
from irrigation_advisor.recommendations.reporter import (
    SCHEMA_VERSION,
    write_advisory_json,
    write_ranking_csv,
)

TODAY = date(2026, 10, 19)


class TestWriteRankingCsv:
    def test_rows_best_first(self, tmp_path, week_forecast):
        advisory = build_advisory(week_forecast, today=TODAY)
        path = write_ranking_csv(advisory.ranking, tmp_path, run_date=TODAY)

        assert path.name == "irrigation_ranking_2026-10-19.csv"
        with path.open(encoding="utf-8", newline="") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 6
        assert rows[0]["rank"] == "1"
        assert rows[0]["date"] == "2026-10-19"
        assert rows[0]["tier"] == "highly_recommended"
        assert [float(r["score"]) for r in rows] == sorted(
            (float(r["score"]) for r in rows), reverse=True
        )

    def test_empty_ranking_writes_header(self, tmp_path):
        path = write_ranking_csv(RankingResult(), tmp_path / "nested", run_date=TODAY)
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines == [
            "rank,date,score,tier,soil_moisture,precipitation,precipitation_probability,"
            "wind_speed,temperature,evapotranspiration,reason"
        ]


class TestWriteAdvisoryJson:
    def test_structure(self, tmp_path, week_forecast):
        advisory = build_advisory(week_forecast, today=TODAY)
        path = write_advisory_json(advisory, tmp_path, run_slug="run-123")

        assert path.name == "irrigation_advisory_2026-10-19.json"
        payload = json.loads(path.read_text(encoding="utf-8"))
        assert payload["schema_version"] == SCHEMA_VERSION
        assert payload["generated_for"] == "2026-10-19"
        assert payload["run_slug"] == "run-123"
        assert len(payload["ranking"]) == 6
        assert set(payload["ranking"][0]["score_components"]) == {
            "soil_moisture", "precip_probability", "wind", "temperature",
        }

    def test_skipped_and_alerts(self, tmp_path, week_forecast):
        advisory = build_advisory(week_forecast, today=TODAY)
        payload = json.loads(write_advisory_json(advisory, tmp_path).read_text(encoding="utf-8"))

        assert payload["skipped"] == [
            {"index": 2, "date": "2026-10-21", "reason": "wet_day",
             "detail": payload["skipped"][0]["detail"]}
        ]
        assert payload["alerts"]["urgent"] == ["2026-10-19", "2026-10-25"]
        assert payload["alerts"]["today_excellent"] == ["2026-10-19"]
        assert [s["date"] for s in payload["alerts"]["summary"]] == [
            "2026-10-19", "2026-10-25", "2026-10-20",
        ]
        assert payload["alerts"]["summary"][0]["summary"] == "Dry soil, no rain expected"

    def test_verdict_lines_keep_emoji(self, tmp_path, week_forecast):
        advisory = build_advisory(week_forecast, today=TODAY)
        path = write_advisory_json(advisory, tmp_path)
        text = path.read_text(encoding="utf-8")
        assert "🚨 URGENT IRRIGATION NEEDED" in text
        payload = json.loads(text)
        assert payload["verdicts"][0]["priority"] == "urgent"
        assert payload["verdicts"][0]["is_suitable"] is True
