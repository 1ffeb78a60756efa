"""
Run metadata: the audit record of one pipeline stage execution.

``RunSummary`` records the stage name, a snapshot of the ``AppConfig`` used,
how many forecast days were processed, and the final status. It is the
**only** model in the system that is NOT frozen: ``status``,
``rows_processed``, ``error_message``, ``finished_at`` and ``outputs`` are
updated as the stage executes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

VALID_PIPELINE_STAGES = frozenset({"advise"})
VALID_RUN_STATUSES = frozenset({"started", "success", "failed"})


class RunSummary(BaseModel):
    """Pipeline execution record.

    Attributes:
        run_slug: UUID4 string uniquely identifying this run.
        pipeline_stage: Which stage produced this record.
        status: Current execution status.
        config_snapshot: Full ``AppConfig.model_dump()`` at run start.
        rows_processed: Forecast days processed.
        error_message: Error description if ``status == "failed"``.
        started_at: UTC datetime when the run began.
        finished_at: UTC datetime when the run completed or failed.
        outputs: Paths of report files written by the stage.
    """

    model_config = ConfigDict(frozen=False)

    run_slug: str
    pipeline_stage: str
    status: str = "started"
    config_snapshot: dict[str, Any]
    rows_processed: int = 0
    error_message: Optional[str] = None
    started_at: datetime
    finished_at: Optional[datetime] = None
    outputs: list[str] = []

    @field_validator("pipeline_stage")
    @classmethod
    def validate_pipeline_stage(cls, v: str) -> str:
        if v not in VALID_PIPELINE_STAGES:
            raise ValueError(
                f"Unknown pipeline_stage '{v}'. "
                f"Must be one of {sorted(VALID_PIPELINE_STAGES)}."
            )
        return v

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        if v not in VALID_RUN_STATUSES:
            raise ValueError(
                f"Unknown status '{v}'. Must be one of {sorted(VALID_RUN_STATUSES)}."
            )
        return v
