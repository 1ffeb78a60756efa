"""
Forecast file parser: turns a weather provider's daily forecast JSON into
:class:`WeatherDayRecord` objects.

Accepted shapes
---------------
  {"days": [ {...}, {...} ]}     -- provider response envelope
  [ {...}, {...} ]               -- bare list of days

Day keys (provider naming)
--------------------------
Required:
  temp                 → temperature (°C)
Optional (missing / empty / null → default):
  datetime             → date, YYYY-MM-DD   (unparseable → date=None)
  humidity             → humidity (%)
  windspeed            → wind_speed (km/h, default 0)
  precip               → precipitation (mm, default 0)
  precipprob           → precipitation_probability (%, default 0)
  soilmoisture         → soil_moisture (fraction)
  soiltemp             → soil_temperature (°C)
  evapotranspiration   → evapotranspiration (mm/day)
  conditions           → conditions (free text)

A day with a bad date is kept with ``date=None`` so the ranker can report it
as skipped. A day whose required temperature is missing or non-numeric, or
an entry that is not an object, cannot be scored at all: it is rejected and
its slot is held by ``None`` so later days keep their payload positions.
Rejections are collected, not raised, so one bad entry never discards the
rest of the window.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from irrigation_advisor.models.weather import WeatherDayRecord

logger = logging.getLogger(__name__)


@dataclass
class ParsedForecast:
    """Result of parsing a forecast payload.

    Attributes:
        entries:  One slot per payload entry, in input order. Rejected
                  entries are ``None``; parsed dates may also be ``None``.
        rejected: ``(index, message)`` for entries that could not be parsed.
    """

    entries: list[Optional[WeatherDayRecord]] = field(default_factory=list)
    rejected: list[tuple[int, str]] = field(default_factory=list)

    @property
    def days(self) -> list[WeatherDayRecord]:
        """Successfully parsed records only (positions not preserved)."""
        return [entry for entry in self.entries if entry is not None]


def load_forecast_json(path: Path) -> ParsedForecast:
    """Read and parse a forecast JSON file.

    Args:
        path: Path to the JSON file (must exist).

    Returns:
        ParsedForecast with every usable day.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not valid JSON or has the wrong shape.
    """
    if not path.exists():
        raise FileNotFoundError(f"Forecast file not found: {path}")

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Forecast file is not valid JSON: {path}: {exc}") from exc

    parsed = parse_forecast_payload(payload)
    logger.info(
        "Parsed %d forecast day(s) from %s | rejected=%d",
        len(parsed.days), path.name, len(parsed.rejected),
    )
    return parsed


def parse_forecast_payload(payload: Any) -> ParsedForecast:
    """Parse a decoded provider payload into forecast records.

    Raises:
        ValueError: If the payload is neither a list nor a dict with ``days``.
    """
    if isinstance(payload, dict):
        entries = payload.get("days")
        if not isinstance(entries, list):
            raise ValueError("Forecast payload must contain a 'days' array.")
    elif isinstance(payload, list):
        entries = payload
    else:
        raise ValueError(
            f"Forecast payload must be an object or array, got {type(payload).__name__}."
        )

    result = ParsedForecast()
    for index, entry in enumerate(entries):
        try:
            result.entries.append(_entry_to_record(index, entry))
        except (ValueError, ValidationError) as exc:
            logger.warning("Forecast entry #%d rejected: %s", index, exc)
            result.entries.append(None)
            result.rejected.append((index, str(exc)))
    return result


def upcoming_rain_mm(
    days: Sequence[Optional[WeatherDayRecord]],
    index: int,
    window_days: int = 1,
) -> float:
    """Total precipitation forecast in the ``window_days`` after ``days[index]``.

    Rejected (``None``) slots count as dry.
    """
    following = days[index + 1 : index + 1 + max(window_days, 0)]
    return sum(max(d.precipitation, 0.0) for d in following if d is not None)


# ── Private helpers ────────────────────────────────────────────────────────────

def _entry_to_record(index: int, entry: Any) -> WeatherDayRecord:
    if not isinstance(entry, dict):
        raise ValueError(f"Expected an object, got {type(entry).__name__}.")

    temperature = _num(entry, "temp")
    if temperature is None:
        raise ValueError("Required field 'temp' is missing or not numeric.")

    return WeatherDayRecord(
        date=_parse_date(index, entry.get("datetime")),
        temperature=temperature,
        humidity=_num(entry, "humidity"),
        wind_speed=_num(entry, "windspeed") or 0.0,
        precipitation=_num(entry, "precip") or 0.0,
        precipitation_probability=_num(entry, "precipprob") or 0.0,
        soil_moisture=_num(entry, "soilmoisture"),
        soil_temperature=_num(entry, "soiltemp"),
        evapotranspiration=_num(entry, "evapotranspiration"),
        conditions=str(entry.get("conditions") or ""),
    )


def _parse_date(index: int, raw: Any) -> Optional[date]:
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        logger.warning("Forecast entry #%d has no date.", index)
        return None
    try:
        return date.fromisoformat(raw.strip()[:10])
    except ValueError:
        logger.warning(
            "Forecast entry #%d has invalid date '%s'. Expected YYYY-MM-DD.", index, raw
        )
        return None


def _num(entry: dict[str, Any], key: str) -> Optional[float]:
    """Return a finite float for ``key``, or None if absent / blank / non-numeric."""
    raw = entry.get(key)
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.debug("Ignoring non-numeric %s=%r", key, raw)
        return None
    return value if math.isfinite(value) else None
