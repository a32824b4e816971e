"""Inspect tracked datasets."""

import sys
from datetime import UTC, datetime

import cyclopts
from dishka import AsyncContainer

from factgrid.cli.console import get_console, relative_time
from factgrid.cli.util.runtime import run_in_uow
from factgrid.domain.dataset.freshness import assess_freshness
from factgrid.domain.dataset.model.aggregate import Dataset
from factgrid.domain.dataset.port.repository import DatasetRepository
from factgrid.domain.shared.port import UnitOfWork
from factgrid.domain.source.model.registry import SourceRegistry

app = cyclopts.App(name="datasets", help="Inspect tracked datasets")


@app.default
def list_datasets() -> None:
    """List every dataset with its freshness and latest source year."""
    console = get_console()

    async def _work(scope: AsyncContainer) -> tuple[list[Dataset], SourceRegistry]:
        repo = await scope.get(DatasetRepository)
        return await repo.list(), await scope.get(SourceRegistry)

    datasets, sources = run_in_uow(_work)
    now = datetime.now(UTC)

    rows = []
    for d in datasets:
        adapter = sources.get(d.slug)
        kind = adapter.kind if adapter is not None else None
        rows.append(
            {
                "slug": d.slug,
                "rate": d.refresh_rate.value,
                "freshness": assess_freshness(kind, d.last_refreshed_at, now).value,
                "refreshed": relative_time(d.last_refreshed_at),
                "year": str(d.latest_source_year or ""),
            }
        )
    console.table(
        rows,
        [
            ("slug", "Dataset"),
            ("rate", "Rate"),
            ("freshness", "Freshness"),
            ("refreshed", "Refreshed"),
            ("year", "Source year"),
        ],
    )


def set_year(slug: str, year: int) -> None:
    """Overwrite a dataset's latest source year.

    The watchdog compares against this value, so lowering it makes the
    next probe report the current publication as new.

    Args:
        slug: Dataset to correct.
        year: Publication year to record.
    """
    console = get_console()

    async def _work(scope: AsyncContainer) -> bool:
        repo = await scope.get(DatasetRepository)
        dataset = await repo.get(slug)
        if dataset is None:
            return False
        await repo.set_source_year(dataset.id, year)
        await (await scope.get(UnitOfWork)).commit()
        return True

    if not run_in_uow(_work):
        console.error(f"Dataset not found: {slug}")
        sys.exit(1)
    console.success(f"{slug} source year set to {year}")
