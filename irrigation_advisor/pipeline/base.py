"""
Pipeline stage contract.

A stage is built with an ``AppConfig`` and exposes a single ``run(**kwargs)``.
``run()`` opens a ``RunSummary``, delegates to ``_execute()`` and closes the
summary as ``success`` or ``failed``. Failures are re-raised after being
recorded, so callers (the CLI, a cron wrapper) decide how to react.

Every lifecycle log line carries ``run_slug`` and ``stage`` as ``extra=``
fields, which the JSON log format exposes as top-level keys.

Usage::

    class EchoStage(PipelineStage):
        stage_name = "advise"

        def _execute(self, run: RunSummary, **kwargs) -> int:
            return 7

    summary = EchoStage(config=app_config).run(forecast_path="forecast.json")
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from uuid import uuid4

from irrigation_advisor.config import AppConfig
from irrigation_advisor.models.meta import RunSummary
from irrigation_advisor.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


class PipelineStage(ABC):
    """Base class for stages.

    Attributes:
        stage_name: One of ``RunSummary``'s valid pipeline stages.
        config: Application configuration used for the run.
    """

    stage_name: str

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run(self, **kwargs) -> RunSummary:
        """Execute the stage and return its closed ``RunSummary``.

        Raises:
            Exception: Whatever ``_execute()`` raised, after the summary has
                been marked ``failed``.
        """
        run = self._open_run()
        log_extra = {"run_slug": run.run_slug, "stage": self.stage_name}
        logger.info("Stage [%s] starting", self.stage_name, extra=log_extra)

        try:
            rows = self._execute(run=run, **kwargs)
        except Exception as exc:
            self._close_run(run, status="failed", error_message=str(exc))
            logger.error(
                "Stage [%s] FAILED: %s", self.stage_name, exc, extra=log_extra
            )
            raise

        self._close_run(run, status="success", rows_processed=rows)
        logger.info(
            "Stage [%s] completed | rows=%d | outputs=%d",
            self.stage_name, rows, len(run.outputs), extra=log_extra,
        )
        return run

    def _open_run(self) -> RunSummary:
        return RunSummary(
            run_slug=str(uuid4()),
            pipeline_stage=self.stage_name,
            config_snapshot=self.config.model_dump(mode="json"),
            started_at=utcnow(),
        )

    @staticmethod
    def _close_run(run: RunSummary, status: str, **fields) -> None:
        run.status = status
        for name, value in fields.items():
            setattr(run, name, value)
        run.finished_at = utcnow()

    @abstractmethod
    def _execute(self, run: RunSummary, **kwargs) -> int:
        """Do the stage's work; may append to ``run.outputs``.

        Returns:
            Number of forecast days processed.
        """
        ...
