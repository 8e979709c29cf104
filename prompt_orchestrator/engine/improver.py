"""
Prompt Improver — periodic advisory on prompt budget tuning.

Builds a short advisory text from the improver config and logs it on an
APScheduler interval job. The same text backs the /prompt-improver command.
The service never touches session state.
"""

from __future__ import annotations

import asyncio
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from prompt_orchestrator.config import OrchestratorConfig

logger = logging.getLogger(__name__)

JOB_ID = "prompt-orchestrator-improver"
COMMAND_NAME = "prompt-improver"

RECOMMENDATION = (
    "capture overflow incidents and tighten per-block prompt caps "
    "before broadening memory injection"
)


def build_advisory(config: OrchestratorConfig) -> str:
    improver = config.improver
    return "\n".join(
        [
            "Prompt improver advisory",
            f"mode: {improver.mode}",
            f"cadence_hours: {improver.run_every_hours}",
            f"allowed_paths: {', '.join(improver.allowed_write_paths)}",
            f"recommendation: {RECOMMENDATION}",
        ]
    )


def run_improver_command(args: str | None, config: OrchestratorConfig) -> str:
    """Handle /prompt-improver. Only "run" produces the advisory."""
    if (args or "").strip().lower() == "run":
        return build_advisory(config)
    return "\n".join(
        [
            f"Usage: /{COMMAND_NAME} run",
            "Runs the advisory recommendation generator for prompt-orchestrator.",
        ]
    )


class ImproverService:
    """APScheduler-based interval job that logs the advisory."""

    def __init__(
        self,
        config: OrchestratorConfig,
        scheduler: AsyncIOScheduler | None = None,
    ) -> None:
        self.config = config
        self.scheduler = scheduler or AsyncIOScheduler()

    @property
    def interval_hours(self) -> int:
        return max(1, self.config.improver.run_every_hours)

    def start(self) -> None:
        """Register the interval job and start the scheduler.

        Must be called from a running event loop.
        """
        self.scheduler.add_job(
            self._log_advisory,
            trigger=IntervalTrigger(hours=self.interval_hours),
            id=JOB_ID,
            name=JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        if not self.scheduler.running:
            self.scheduler.start()
        logger.info(
            "prompt-orchestrator improver scheduled every %sh",
            self.config.improver.run_every_hours,
        )

    def stop(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
        logger.info("prompt-orchestrator improver stopped")

    async def serve(self) -> None:
        """Run until cancelled."""
        self.start()
        try:
            while True:
                await asyncio.sleep(60)
        finally:
            self.stop()

    def _log_advisory(self) -> None:
        logger.info(build_advisory(self.config))
