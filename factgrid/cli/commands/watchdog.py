"""Run watchdog probes from the command line."""

import sys

import cyclopts
from dishka import AsyncContainer

from factgrid.cli.console import get_console
from factgrid.cli.util.runtime import run_in_uow
from factgrid.domain.refresh.model.value import RefreshOutcome
from factgrid.domain.shared.error import NotFoundError
from factgrid.domain.watchdog.model.value import WatchdogResult
from factgrid.domain.watchdog.service.watchdog import WatchdogService

app = cyclopts.App(name="watchdog", help="Check upstream publications for new data")


def _row(result: WatchdogResult) -> dict[str, str]:
    if result.error:
        verdict = "[red]error[/red]"
    elif result.changed:
        verdict = "[green]new data[/green]"
    else:
        verdict = "[dim]no change[/dim]"
    return {
        "slug": result.slug,
        "verdict": verdict,
        "years": f"{result.previous_year or '?'} -> {result.detected_year or '?'}",
        "method": result.error or result.method,
    }


@app.default
def watchdog(slug: str | None = None, *, refresh: bool = False) -> None:
    """Probe one dataset, or every watched dataset.

    Args:
        slug: Dataset to probe. Omit to probe all watched datasets.
        refresh: Refresh datasets whose probe reports new data.
    """
    console = get_console()

    async def _work(scope: AsyncContainer) -> tuple[list[WatchdogResult], list[RefreshOutcome]]:
        service = await scope.get(WatchdogService)
        if slug is not None:
            check = await service.run_probe(slug, refresh_changed=refresh)
            return [check.probe], [check.refresh] if check.refresh else []
        report = await service.run(refresh_changed=refresh)
        return list(report.probes), list(report.refreshes)

    try:
        results, refreshes = run_in_uow(_work)
    except NotFoundError as e:
        console.error(e.message, hint="Run 'factgrid datasets' to list known slugs")
        sys.exit(1)

    console.table(
        [_row(r) for r in results],
        [("slug", "Dataset"), ("verdict", "Verdict"), ("years", "Year"), ("method", "Method")],
    )
    for outcome in refreshes:
        console.info(f"refresh {outcome.slug}: {outcome.status.value}")
