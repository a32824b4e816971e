"""On-demand watchdog triggers."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from factgrid.application.api.v1.guard import TriggerGuard
from factgrid.application.api.v1.schemas import ProbeCheckResponse, WatchdogReportResponse
from factgrid.domain.watchdog.service.watchdog import WatchdogService

router = APIRouter(prefix="/watchdog", tags=["Watchdog"], route_class=DishkaRoute)


@router.api_route("", methods=["GET", "POST"], response_model=WatchdogReportResponse)
async def run_watchdog(
    guard: FromDishka[TriggerGuard],
    service: FromDishka[WatchdogService],
    refresh: bool = False,
) -> JSONResponse:
    """Run every probe. With ``refresh`` set, datasets with new data are refreshed too."""
    guard.check()
    report = await service.run(refresh_changed=refresh)
    body = WatchdogReportResponse.from_domain(report).model_dump(mode="json", by_alias=True)
    if body["newDataAvailable"] is None:
        del body["newDataAvailable"]
    return JSONResponse(content=body)


@router.api_route("/{slug}", methods=["GET", "POST"], response_model=ProbeCheckResponse)
async def run_probe(
    slug: str,
    guard: FromDishka[TriggerGuard],
    service: FromDishka[WatchdogService],
    refresh: bool = False,
) -> ProbeCheckResponse:
    guard.check()
    check = await service.run_probe(slug, refresh_changed=refresh)
    return ProbeCheckResponse.from_domain(check)
