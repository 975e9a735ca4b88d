"""Scrape orchestrator: jstat sampling, parsing and registry updates."""

import logging
import threading
import time
from typing import List, Optional

from ..config.models import ExporterConfig
from ..exceptions import ExecutionError
from ..services.metric_registry import MetricRegistry
from ..services.retry_handler import RetryHandler
from ..utils.status import ReportStatus
from ..utils.metrics import ReportOutcome, ScrapeResult
from .base import BaseCollector, safe_report
from .parser import parse_report
from .reports import ReportSpec, select_reports
from .sampler import JstatSampler


class JstatCollector(BaseCollector):
    """Collector for JVM memory pool metrics via jstat."""

    def __init__(
        self,
        config: ExporterConfig,
        logger: logging.Logger,
        sampler: Optional[JstatSampler] = None,
        registry: Optional[MetricRegistry] = None
    ):
        """
        Initialize jstat collector and declare every selected metric.

        Args:
            config: Exporter configuration
            logger: Logger instance
            sampler: Sampler to use; built from config.jstat when omitted
            registry: Registry to update; a fresh one when omitted

        Raises:
            DuplicateMetricError: If the report catalog declares a metric twice
                with different definitions
        """
        super().__init__(config, logger)
        self.reports: List[ReportSpec] = select_reports(config.jstat.reports)
        self.pid = config.target.pid
        self.sampler = sampler or JstatSampler(
            path=config.jstat.path,
            timeout=config.jstat.timeout_seconds,
            logger=self.logger
        )
        self.registry = registry or MetricRegistry(logger=self.logger)

        # One scrape at a time so a snapshot never mixes two sampling rounds
        self._scrape_lock = threading.Lock()

        for report in self.reports:
            for extraction in report.extractions:
                self.registry.declare(extraction.metric, extraction.documentation)

        self.logger.info(
            f"Collecting {', '.join(r.name for r in self.reports)} "
            f"for pid {self.pid} using {self.sampler.path}"
        )

    def scrape(self) -> ScrapeResult:
        """
        Run every selected report once and return the current metric set.

        Returns:
            ScrapeResult: Registry snapshot with per-report outcomes and duration
        """
        with self._scrape_lock:
            start_time = time.monotonic()

            outcomes = tuple(self._collect_report(report) for report in self.reports)

            snapshot = self.registry.snapshot()
            duration = time.monotonic() - start_time

        failed = [o.report for o in outcomes if not o.status.is_up]
        if failed:
            self.logger.warning(
                f"Scrape completed with {len(failed)}/{len(outcomes)} failed report(s): "
                f"{', '.join(failed)}"
            )
        else:
            self.logger.debug(f"Scrape completed in {duration:.3f}s")

        return ScrapeResult(
            metrics=snapshot.metrics,
            outcomes=outcomes,
            duration_seconds=duration
        )

    @safe_report
    def _collect_report(self, report: ReportSpec) -> ReportOutcome:
        """
        Sample, parse and publish one report.

        Args:
            report: Report mode to run

        Returns:
            ReportOutcome: OK outcome (failures are handled by @safe_report)
        """
        sample = RetryHandler.with_retry(
            lambda: self.sampler.sample(report, self.pid),
            max_attempts=self.config.jstat.sample_attempts,
            base_delay=self.config.jstat.retry_delay_seconds,
            exceptions=(ExecutionError,),
            logger=self.logger
        )

        # Parse fully before touching the registry
        values = parse_report(sample.text, report)

        for name, value in values.items():
            self.registry.update(name, value, sample.captured_at)

        return ReportOutcome(report=report.name, status=ReportStatus.OK)
