"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      - committed static defaults
  2. ``config/local.toml``        - optional local overrides (gitignored)
  3. ``.env``                     - local env overrides (gitignored)
  4. Environment variables        - ``IRRIGATION_ADVISOR_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The CLI and the AdviseStage receive an ``AppConfig`` instance; the pure
engine functions receive only the parameter models derived from it.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from irrigation_advisor.models.recommendation import IrrigationParameters
from irrigation_advisor.recommendations.aggregator import AlertThresholds
from irrigation_advisor.taxonomy.irrigation_taxonomy import CropType, SoilType

# ── Sub-config models ─────────────────────────────────────────────────────────


class IrrigationConfig(BaseModel):
    """Ranking thresholds; mirrors ``IrrigationParameters``."""

    model_config = ConfigDict(frozen=True)

    min_soil_moisture: float = 0.2
    max_precip_probability: float = 20.0
    max_wind_speed: float = 15.0
    optimal_temperature_range: tuple[float, float] = (10.0, 30.0)
    days_to_consider: int = 7

    def to_parameters(self) -> IrrigationParameters:
        return IrrigationParameters(**self.model_dump())


class ClassifierConfig(BaseModel):
    """Per-field options for the single-day classifier."""

    model_config = ConfigDict(frozen=True)

    crop_type: CropType = CropType.WARM_SEASON
    soil_type: SoilType = SoilType.LOAMY
    upcoming_rain_window_days: int = 1

    @field_validator("upcoming_rain_window_days")
    @classmethod
    def validate_window(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"upcoming_rain_window_days must be >= 0, got {v}.")
        return v


class AlertsConfig(BaseModel):
    """Alert partition cut-offs; mirrors ``AlertThresholds``."""

    model_config = ConfigDict(frozen=True)

    urgent_score: float = 0.9
    urgent_soil_moisture: float = 0.15
    good_score: float = 0.7
    today_excellent_score: float = 0.8

    def to_thresholds(self) -> AlertThresholds:
        return AlertThresholds(**self.model_dump())


class DataConfig(BaseModel):
    """Filesystem paths for report output."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/outputs"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: Optional[str] = None
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration: the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    irrigation: IrrigationConfig = IrrigationConfig()
    classifier: ClassifierConfig = ClassifierConfig()
    alerts: AlertsConfig = AlertsConfig()
    data: DataConfig = DataConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_DEFAULT_CONFIG_RELPATH = Path("config") / "default.toml"
_LOCAL_CONFIG_NAME = "local.toml"


def _truthy(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


# env var → (section or None for top level, key, converter)
_ENV_OVERRIDES: dict[str, tuple[Optional[str], str, Callable[[str], Any]]] = {
    "IRRIGATION_ADVISOR_OUTPUT_DIR": ("data", "output_dir", str),
    "IRRIGATION_ADVISOR_LOG_LEVEL": ("logging", "level", str),
    "IRRIGATION_ADVISOR_DEBUG": (None, "debug", _truthy),
}


def _project_root() -> Path:
    """Nearest ancestor of this package holding ``pyproject.toml``."""
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents):
        if (candidate / "pyproject.toml").exists():
            return candidate
    return here.parent


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Build the ``AppConfig`` for this process.

    Args:
        config_path: TOML file to start from. When omitted,
            ``<project_root>/config/default.toml`` is used if it exists,
            otherwise the model defaults.

    Raises:
        FileNotFoundError: ``config_path`` was given but does not exist.
        pydantic.ValidationError: A merged value is out of range or unknown.
    """
    root = _project_root()
    load_dotenv(dotenv_path=root / ".env", override=False)

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                "Pass --config with an existing TOML file or omit it to use defaults."
            )
    elif (root / _DEFAULT_CONFIG_RELPATH).exists():
        config_path = root / _DEFAULT_CONFIG_RELPATH

    raw = _read_toml_layers(config_path) if config_path is not None else {}
    raw = _apply_env_overrides(raw)
    return AppConfig.model_validate(raw)


def _read_toml_layers(config_path: Path) -> dict[str, Any]:
    """Read ``config_path`` and deep-merge a sibling ``local.toml`` over it."""
    with config_path.open("rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_path = config_path.with_name(_LOCAL_CONFIG_NAME)
    if local_path.exists() and local_path != config_path:
        with local_path.open("rb") as f:
            raw = _deep_merge(raw, tomllib.load(f))
    return raw


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` merged in; nested tables merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Overlay the ``IRRIGATION_ADVISOR_*`` variables listed in ``_ENV_OVERRIDES``."""
    for env_name, (section, key, convert) in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if not value:
            continue
        target = raw if section is None else raw.setdefault(section, {})
        target[key] = convert(value)
    return raw
