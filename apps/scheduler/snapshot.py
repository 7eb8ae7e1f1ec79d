"""
Snapshot Scheduler - Cron and On-Demand Report Snapshots

Manages scheduled and manual report snapshots using APScheduler.

Features:
- Cron-based scheduling (configurable via REPORT_SCHEDULE_CRON)
- RUN_ONCE mode for immediate execution
- Blocking pipeline executed off the event loop
- Graceful shutdown handling

Usage:
    # Scheduled mode (default)
    python -m apps.scheduler

    # Run once and exit
    RUN_ONCE=true python -m apps.scheduler
"""

import asyncio
import logging
import os
import signal
import sys

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from apps.domains import ReportingDomain, build_domains, close_domains
from utils.config import settings
from utils.errors import ReportError, SchemaInitFatal
from utils.logging import setup_logging

logger = logging.getLogger(__name__)


class SnapshotScheduler:
    """
    Scheduler for periodic or on-demand report snapshots.

    Handles:
    - APScheduler setup and management
    - Cron-based scheduling
    - RUN_ONCE immediate execution
    - Signal handling for graceful shutdown
    """

    def __init__(self, domains: dict[str, ReportingDomain], run_once: bool = False) -> None:
        """
        Initialize scheduler.

        Args:
            domains: Reporting domains to snapshot, keyed by name
            run_once: If True, take one snapshot and exit
        """
        self.domains = domains
        self.run_once = run_once
        self.scheduler: AsyncIOScheduler | None = None
        self.shutdown_event = asyncio.Event()
        self.last_report_ids: dict[str, int] = {}

        logger.info(
            "SnapshotScheduler initialized (run_once=%s, cron=%s, domains=%s)",
            run_once, settings.REPORT_SCHEDULE_CRON, list(domains),
        )

    async def execute_snapshot(self) -> None:
        """
        Generate and store one report per domain.

        A failing domain is logged and skipped; the others still run.
        """
        logger.info("Starting snapshot execution")

        try:
            for name, domain in self.domains.items():
                try:
                    report_id = await asyncio.to_thread(domain.snapshot)
                except ReportError as e:
                    logger.error("Snapshot failed: domain=%s, error=%s", name, str(e))
                    continue
                except Exception as e:
                    logger.error("Snapshot crashed: domain=%s, error=%s", name, str(e), exc_info=True)
                    continue

                self.last_report_ids[name] = report_id
                logger.info("Snapshot stored: domain=%s, report_id=%d", name, report_id)

        finally:
            # Signal shutdown if run_once mode
            if self.run_once:
                logger.info("RUN_ONCE mode: signaling shutdown")
                self.shutdown_event.set()

    def setup_signal_handlers(self) -> None:
        """Setup handlers for graceful shutdown on SIGINT/SIGTERM."""

        def signal_handler(signum: int, frame: object) -> None:
            logger.info("Received signal %d, initiating graceful shutdown", signum)
            self.shutdown_event.set()

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    async def start(self) -> None:
        """
        Start scheduler or execute once.

        In scheduled mode, runs continuously until shutdown signal.
        In RUN_ONCE mode, executes immediately and exits.
        """
        self.setup_signal_handlers()

        if self.run_once:
            logger.info("Running in RUN_ONCE mode")
            await self.execute_snapshot()
            return

        logger.info("Running in scheduled mode")

        self.scheduler = AsyncIOScheduler()

        trigger = CronTrigger.from_crontab(settings.REPORT_SCHEDULE_CRON)
        self.scheduler.add_job(
            self.execute_snapshot,
            trigger=trigger,
            id="snapshot_job",
            name="Periodic Report Snapshot",
            replace_existing=True,
        )

        # Start scheduler first to get next_run_time
        self.scheduler.start()

        job = self.scheduler.get_job("snapshot_job")
        next_run = getattr(job, "next_run_time", None)
        logger.info(
            "Scheduled snapshot job (schedule=%s, next_run=%s)",
            settings.REPORT_SCHEDULE_CRON, next_run,
        )

        await self.shutdown_event.wait()

        logger.info("Shutting down scheduler")
        self.scheduler.shutdown(wait=True)
        logger.info("Scheduler shutdown complete")


async def main() -> None:
    """Main entry point for the snapshot scheduler."""
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    run_once = os.getenv("RUN_ONCE", "false").lower() in ("true", "1", "yes")

    try:
        domains = build_domains()
    except SchemaInitFatal as e:
        logger.error("Could not initialize report stores: %s", str(e))
        sys.exit(1)

    scheduler = SnapshotScheduler(domains, run_once=run_once)

    try:
        await scheduler.start()
    except Exception as e:
        logger.error("Scheduler failed: %s", str(e), exc_info=True)
        sys.exit(1)
    finally:
        close_domains(domains)


if __name__ == "__main__":
    asyncio.run(main())
