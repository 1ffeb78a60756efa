"""
Irrigation Advisor: CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Run the advisory engine over a forecast file.
  5. Report result to stdout.

Install and run::

    pip install -e .
    irrigation-advisor --help
    irrigation-advisor validate-config
    irrigation-advisor rank forecast.json
    irrigation-advisor classify forecast.json --soil-type sandy
    irrigation-advisor advise forecast.json --today 2026-10-19
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="irrigation-advisor",
    help="Irrigation Advisor: rank forecast days and flag irrigation needs.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from irrigation_advisor.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from irrigation_advisor.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_forecast_or_exit(forecast_file: str):
    """Parse the forecast file, exiting with code 1 on unreadable input."""
    from irrigation_advisor.ingestion.forecast_file import load_forecast_json

    try:
        parsed = load_forecast_json(Path(forecast_file))
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    for index, msg in parsed.rejected[:5]:
        typer.echo(f"  [WARN] Entry #{index} rejected: {msg}", err=True)
    if len(parsed.rejected) > 5:
        typer.echo(f"  ... and {len(parsed.rejected) - 5} more.", err=True)
    return parsed


def _parse_today_or_exit(today: Optional[str]):
    from datetime import date

    from irrigation_advisor.utils.time_utils import parse_iso_date

    try:
        return parse_iso_date(today) or date.today()
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


def _parse_enum_or_exit(enum_cls, option: str, raw: Optional[str], default):
    if raw is None:
        return default
    try:
        return enum_cls(raw.strip().lower().replace("-", "_"))
    except ValueError:
        valid = ", ".join(e.value for e in enum_cls)
        typer.echo(f"[ERROR] Invalid {option} '{raw}'. Valid values: {valid}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)
    irrigation = config.irrigation
    low, high = irrigation.optimal_temperature_range

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Min soil moisture:   {irrigation.min_soil_moisture}")
    typer.echo(f"  Max rain chance:     {irrigation.max_precip_probability}%")
    typer.echo(f"  Max wind speed:      {irrigation.max_wind_speed} km/h")
    typer.echo(f"  Optimal temperature: {low}–{high} °C")
    typer.echo(f"  Days considered:     {irrigation.days_to_consider}")
    typer.echo(f"  Crop / soil:         {config.classifier.crop_type} / {config.classifier.soil_type}")
    typer.echo(f"  Output dir:          {config.data.output_dir}")
    typer.echo(f"  Log level:           {config.logging.level}")
    typer.echo(f"  Debug mode:          {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(mode="json"), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("rank")
def rank(
    forecast_file: str = typer.Argument(..., help="Forecast JSON file."),
    top: int = typer.Option(
        0,
        "--top",
        "-n",
        help="Show only the N best days (0 = all).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Rank the upcoming forecast days by irrigation suitability.

    Days with more than 5 mm of rain, days without a usable date and entries
    that could not be parsed are listed as skipped.
    """
    from irrigation_advisor.recommendations.ranker import rank_irrigation_days

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    parsed = _load_forecast_or_exit(forecast_file)
    ranking = rank_irrigation_days(parsed.entries, config.irrigation.to_parameters())

    shown = ranking.recommendations[:top] if top > 0 else ranking.recommendations
    if not shown:
        typer.echo("No forecast days qualify for irrigation ranking.")
    for position, rec in enumerate(shown, start=1):
        typer.echo(f"  {position}. {rec.date} | score={rec.score:.2f} | {rec.reason}")

    for skipped in ranking.skipped:
        label = skipped.date.isoformat() if skipped.date else f"entry #{skipped.index}"
        typer.echo(f"  [SKIP] {label} | {skipped.reason.value} | {skipped.detail}")


@app.command("classify")
def classify(
    forecast_file: str = typer.Argument(..., help="Forecast JSON file."),
    crop_type: Optional[str] = typer.Option(
        None,
        "--crop-type",
        help="warm_season or cool_season (default from config).",
    ),
    soil_type: Optional[str] = typer.Option(
        None,
        "--soil-type",
        help="sandy, loamy or clay (default from config).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Decide, day by day, whether irrigation is needed now."""
    from irrigation_advisor.pipeline.advise import classify_window
    from irrigation_advisor.recommendations.classifier import effective_humidity
    from irrigation_advisor.taxonomy.irrigation_taxonomy import CropType, SoilType

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    crop = _parse_enum_or_exit(CropType, "crop type", crop_type, config.classifier.crop_type)
    soil = _parse_enum_or_exit(SoilType, "soil type", soil_type, config.classifier.soil_type)

    parsed = _load_forecast_or_exit(forecast_file)
    verdicts = classify_window(
        parsed.entries,
        config.irrigation.to_parameters(),
        crop_type=crop,
        soil_type=soil,
        upcoming_rain_window_days=config.classifier.upcoming_rain_window_days,
    )
    humidity_by_date = {d.date: effective_humidity(d) for d in parsed.days if d.date}

    for dv in verdicts:
        v = dv.verdict
        decision = "IRRIGATE" if v.is_suitable else "SKIP"
        typer.echo(
            f"{dv.date} | {decision} | priority={v.priority.value} | "
            f"humidity={humidity_by_date.get(dv.date, 0):.0f}%"
        )
        for line in v.recommendations:
            typer.echo(f"    {line}")


@app.command("advise")
def advise(
    forecast_file: str = typer.Argument(..., help="Forecast JSON file."),
    today: Optional[str] = typer.Option(
        None,
        "--today",
        help="Reference date YYYY-MM-DD for today's alerts (default: local date).",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Override report directory from config.",
    ),
    no_write: bool = typer.Option(
        False,
        "--no-write",
        help="Print the advisory without writing report files.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Run the full advisory: ranking, per-day verdicts and alert partitions.

    \b
    Writes (unless --no-write):
      irrigation_ranking_{date}.csv
      irrigation_advisory_{date}.json
    """
    from irrigation_advisor.pipeline.advise import AdviseStage
    from irrigation_advisor.recommendations.aggregator import (
        condition_summary,
        summarize_best_days,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    reference_date = _parse_today_or_exit(today)

    if not Path(forecast_file).exists():
        typer.echo(f"[ERROR] Forecast file not found: {forecast_file}", err=True)
        raise typer.Exit(code=1)

    stage = AdviseStage(config=config)
    try:
        run = stage.run(
            forecast_path=forecast_file,
            today=reference_date,
            output_dir=output_dir,
            write_reports=not no_write,
        )
    except Exception as exc:
        typer.echo(f"[ERROR] Advisory failed: {exc}", err=True)
        raise typer.Exit(code=1)

    advisory = stage.advisory
    partitions = advisory.partitions
    best = advisory.ranking.best

    typer.echo(f"Advisory for {advisory.generated_for} | days examined={run.rows_processed}")
    if best is not None:
        typer.echo(f"  Best day:        {best.date} (score {best.score:.2f})")
    if partitions.is_empty:
        typer.echo("  No alert-worthy days in this window.")
    else:
        typer.echo(f"  Urgent:          {', '.join(str(r.date) for r in partitions.urgent) or '-'}")
        typer.echo(f"  Good:            {', '.join(str(r.date) for r in partitions.good) or '-'}")
        typer.echo(
            f"  Today excellent: {', '.join(str(r.date) for r in partitions.today_excellent) or '-'}"
        )
        for rec in summarize_best_days(partitions):
            typer.echo(f"    {rec.date}: {condition_summary(rec)}")
    for path in run.outputs:
        typer.echo(f"  Wrote: {path}")
    typer.echo("[OK] Advisory complete.")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
