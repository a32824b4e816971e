"""Trigger refreshes from the command line."""

import sys

import cyclopts
from dishka import AsyncContainer

from factgrid.cli.console import get_console
from factgrid.cli.util.runtime import run_in_uow
from factgrid.domain.refresh.model.value import RefreshOutcome, RefreshStatus
from factgrid.domain.refresh.service.refresh import RefreshService
from factgrid.domain.shared.error import NotFoundError

app = cyclopts.App(name="refresh", help="Fetch fresh data from upstream sources")

_STATUS_STYLE = {
    RefreshStatus.REFRESHED: "green",
    RefreshStatus.UNCHANGED: "dim",
    RefreshStatus.ERROR: "red",
    RefreshStatus.SKIPPED_TOO_RECENT: "yellow",
    RefreshStatus.NO_FETCHER: "yellow",
}


def _row(outcome: RefreshOutcome) -> dict[str, str]:
    style = _STATUS_STYLE[outcome.status]
    return {
        "slug": outcome.slug,
        "status": f"[{style}]{outcome.status.value}[/{style}]",
        "year": str(outcome.source_year or ""),
        "detail": outcome.error or "",
    }


@app.default
def refresh(slug: str | None = None, *, force: bool = False) -> None:
    """Refresh one dataset, or every scheduled dataset that is due.

    Args:
        slug: Dataset to refresh. Omit to refresh all.
        force: Ignore the minimum interval between refreshes.
    """
    console = get_console()

    async def _work(scope: AsyncContainer) -> list[RefreshOutcome]:
        service = await scope.get(RefreshService)
        if slug is not None:
            return [await service.refresh_dataset(slug)]
        report = await service.refresh_all(force=force)
        return list(report.results)

    try:
        outcomes = run_in_uow(_work)
    except NotFoundError as e:
        console.error(e.message, hint="Run 'factgrid datasets' to list known slugs")
        sys.exit(1)

    console.table(
        [_row(o) for o in outcomes],
        [("slug", "Dataset"), ("status", "Status"), ("year", "Year"), ("detail", "Detail")],
    )
    if any(o.status == RefreshStatus.ERROR for o in outcomes):
        sys.exit(1)
