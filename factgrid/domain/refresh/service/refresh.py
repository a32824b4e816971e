"""RefreshService - rate-gated refresh of datasets through their adapters."""

import logging
from datetime import UTC, datetime

import logfire

from factgrid.domain.dataset.model.aggregate import Dataset
from factgrid.domain.dataset.model.value import AUTOMATED_RATES
from factgrid.domain.dataset.port.repository import DatasetRepository
from factgrid.domain.refresh.gate import RateGate
from factgrid.domain.refresh.model.value import RefreshOutcome, RefreshReport, RefreshStatus
from factgrid.domain.shared.error import NotFoundError, StorageUnavailableError
from factgrid.domain.shared.port import UnitOfWork
from factgrid.domain.shared.result import Err, attempt
from factgrid.domain.shared.service import Service
from factgrid.domain.snapshot.service.snapshot import AcceptOutcome, SnapshotService
from factgrid.domain.source.model.registry import SourceRegistry

logger = logging.getLogger(__name__)


class RefreshService(Service):
    """Runs source adapters and routes their payloads into the snapshot store.

    Datasets are processed one at a time and committed individually. Any
    adapter or storage failure becomes an ``error`` outcome for that dataset
    only; the batch always completes.
    """

    datasets: DatasetRepository
    sources: SourceRegistry
    snapshots: SnapshotService
    uow: UnitOfWork
    gate: RateGate
    fetch_timeout: float = 60.0

    async def refresh_all(self, *, force: bool = False) -> RefreshReport:
        """Refresh every dataset with an automated refresh rate.

        Args:
            force: Ignore the rate gate.
        """
        with logfire.span("refresh run", force=force):
            datasets = await self.datasets.list(rates=AUTOMATED_RATES)
            outcomes = [await self._refresh(d, gated=not force) for d in datasets]
            report = RefreshReport.from_outcomes(outcomes, timestamp=datetime.now(UTC))

        s = report.summary
        logger.info(
            "Refresh run: %d datasets, %d refreshed, %d unchanged, %d errors, %d skipped",
            s.total,
            s.refreshed,
            s.unchanged,
            s.errors,
            s.skipped,
        )
        return report

    async def refresh_dataset(self, slug: str, *, detected_year: int | None = None) -> RefreshOutcome:
        """Refresh one dataset now, bypassing the rate gate.

        Args:
            slug: Dataset slug.
            detected_year: Year reported by a watchdog probe. It is recorded
                even when the fetched content turns out unchanged.

        Raises:
            NotFoundError: No dataset with this slug.
        """
        dataset = await self.datasets.get(slug)
        if dataset is None:
            raise NotFoundError(f"Dataset not found: {slug}")
        return await self._refresh(dataset, gated=False, detected_year=detected_year)

    async def _refresh(
        self,
        dataset: Dataset,
        *,
        gated: bool,
        detected_year: int | None = None,
    ) -> RefreshOutcome:
        now = datetime.now(UTC)

        adapter = self.sources.get(dataset.slug)
        if adapter is None:
            return RefreshOutcome(slug=dataset.slug, status=RefreshStatus.NO_FETCHER)

        if gated and self.gate.is_too_recent(dataset, now):
            return RefreshOutcome(
                slug=dataset.slug,
                status=RefreshStatus.SKIPPED_TOO_RECENT,
                hours_since_refresh=round(dataset.hours_since_refresh(now) or 0.0, 2),
            )

        result = await attempt(
            adapter.fetch,
            timeout=adapter.timeout or self.fetch_timeout,
            label=dataset.slug,
        )
        if isinstance(result, Err):
            logger.warning(
                "Refresh of %s failed [%s]: %s", dataset.slug, result.error.code, result.error.message
            )
            return RefreshOutcome.failed(dataset.slug, result.error)

        try:
            acceptance = await self.snapshots.accept(
                dataset, result.value, now=now, detected_year=detected_year
            )
            await self.uow.commit()
        except Exception as e:
            await self.uow.rollback()
            logger.exception("Storing refresh of %s failed", dataset.slug)
            return RefreshOutcome.failed(
                dataset.slug, StorageUnavailableError(f"Storing snapshot failed: {e}")
            )

        status = (
            RefreshStatus.REFRESHED
            if acceptance.outcome == AcceptOutcome.CREATED
            else RefreshStatus.UNCHANGED
        )
        return RefreshOutcome(
            slug=dataset.slug,
            status=status,
            snapshot_id=acceptance.snapshot_id,
            source_year=acceptance.source_year,
        )
