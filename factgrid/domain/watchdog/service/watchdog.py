"""WatchdogService - concurrent new-publication probing."""

import asyncio
import logging
from collections.abc import Mapping
from datetime import UTC, datetime

import logfire

from factgrid.domain.dataset.model.value import WATCHED_RATES, RefreshRate
from factgrid.domain.dataset.port.repository import DatasetRepository
from factgrid.domain.refresh.model.value import RefreshOutcome
from factgrid.domain.refresh.service.refresh import RefreshService
from factgrid.domain.shared.error import NotFoundError
from factgrid.domain.shared.port import UnitOfWork
from factgrid.domain.shared.service import Service
from factgrid.domain.source.model.registry import ProbeRegistry
from factgrid.domain.watchdog.model.report import ProbeCheck, WatchdogReport
from factgrid.domain.watchdog.model.value import WatchdogResult

logger = logging.getLogger(__name__)


class WatchdogService(Service):
    """Runs watchdog probes and refreshes datasets whose upstream has moved on.

    All probes run concurrently and every outcome is collected: a probe that
    raises or hangs becomes an error result for its own slug and never
    cancels the others.
    """

    datasets: DatasetRepository
    probes: ProbeRegistry
    refresh: RefreshService
    uow: UnitOfWork
    probe_timeout: float = 20.0
    watched_rates: tuple[RefreshRate, ...] = WATCHED_RATES

    async def run_all_probes(self, known_years: Mapping[str, int | None]) -> list[WatchdogResult]:
        """Run every registered probe against the years we currently hold."""
        slugs = list(self.probes)
        outcomes = await asyncio.gather(
            *(self._check(slug, known_years.get(slug)) for slug in slugs),
            return_exceptions=True,
        )

        results: list[WatchdogResult] = []
        for slug, outcome in zip(slugs, outcomes):
            if isinstance(outcome, WatchdogResult):
                results.append(outcome)
            elif isinstance(outcome, Exception):
                logger.error("Probe %s raised %s: %s", slug, type(outcome).__name__, outcome)
                results.append(self._failure(slug, known_years.get(slug), str(outcome) or type(outcome).__name__))
            else:
                raise outcome
        return results

    async def run(self, *, refresh_changed: bool = True) -> WatchdogReport:
        """Probe all watched datasets and record the check.

        Args:
            refresh_changed: Immediately refresh datasets whose probe reports
                new data, bypassing the rate gate.
        """
        with logfire.span("watchdog run", refresh_changed=refresh_changed):
            datasets = await self.datasets.list(rates=self.watched_rates)
            known_years = {d.slug: d.latest_source_year for d in datasets}

            results = await self.run_all_probes(known_years)
            checked_at = datetime.now(UTC)
            await self.datasets.mark_watchdog_checked([r.slug for r in results], checked_at)
            await self.uow.commit()

            refreshes: list[RefreshOutcome] = []
            if refresh_changed:
                for result in results:
                    if result.actionable:
                        refreshes.append(await self._refresh_changed(result))

        report = WatchdogReport.build(results, refreshes, checked_at)
        logger.info(
            "Watchdog run: %d probes, %d changed, %d errors",
            report.summary.total,
            report.summary.changed,
            report.summary.errors,
        )
        return report

    async def run_probe(self, slug: str, *, refresh_changed: bool = False) -> ProbeCheck:
        """Probe a single dataset.

        Raises:
            NotFoundError: No dataset with this slug.
        """
        dataset = await self.datasets.get(slug)
        if dataset is None:
            raise NotFoundError(f"Dataset not found: {slug}")

        if slug in self.probes:
            try:
                result = await self._check(slug, dataset.latest_source_year)
            except Exception as e:
                logger.error("Probe %s raised %s: %s", slug, type(e).__name__, e)
                result = self._failure(slug, dataset.latest_source_year, str(e) or type(e).__name__)
        else:
            result = WatchdogResult(
                slug=slug,
                changed=False,
                previous_year=dataset.latest_source_year,
                method="no probe available",
                checked_at=datetime.now(UTC),
            )

        await self.datasets.mark_watchdog_checked([slug], result.checked_at)
        await self.uow.commit()

        refresh = None
        if refresh_changed and result.actionable:
            refresh = await self._refresh_changed(result)

        return ProbeCheck(probe=result, dataset=dataset, refresh=refresh)

    async def _check(self, slug: str, previous_year: int | None) -> WatchdogResult:
        probe = self.probes[slug]
        try:
            return await asyncio.wait_for(probe.check(previous_year), timeout=self.probe_timeout)
        except TimeoutError:
            logger.warning("Probe %s timed out after %gs", slug, self.probe_timeout)
            return self._failure(slug, previous_year, f"timed out after {self.probe_timeout:g}s")

    async def _refresh_changed(self, result: WatchdogResult) -> RefreshOutcome:
        logfire.info(
            "New publication detected",
            dataset=result.slug,
            previous_year=result.previous_year,
            detected_year=result.detected_year,
        )
        try:
            return await self.refresh.refresh_dataset(result.slug, detected_year=result.detected_year)
        except NotFoundError as e:
            logger.warning("Probe %s reported new data but no dataset is tracked", result.slug)
            return RefreshOutcome.failed(result.slug, e)

    @staticmethod
    def _failure(slug: str, previous_year: int | None, error: str) -> WatchdogResult:
        return WatchdogResult(
            slug=slug,
            changed=False,
            previous_year=previous_year,
            detected_year=None,
            method="probe failed",
            checked_at=datetime.now(UTC),
            error=error,
        )
