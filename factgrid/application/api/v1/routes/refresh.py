"""On-demand refresh triggers."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from factgrid.application.api.v1.guard import TriggerGuard
from factgrid.application.api.v1.schemas import RefreshOutcomeResponse, RefreshReportResponse
from factgrid.domain.refresh.service.refresh import RefreshService

router = APIRouter(prefix="/refresh", tags=["Refresh"], route_class=DishkaRoute)


@router.api_route("", methods=["GET", "POST"], response_model=RefreshReportResponse)
async def refresh_all(
    guard: FromDishka[TriggerGuard],
    service: FromDishka[RefreshService],
    force: bool = False,
) -> RefreshReportResponse:
    """Refresh every eligible dataset. ``force`` ignores the rate gate."""
    guard.check()
    report = await service.refresh_all(force=force)
    return RefreshReportResponse.from_domain(report)


@router.api_route("/{slug}", methods=["GET", "POST"], response_model=RefreshOutcomeResponse)
async def refresh_one(
    slug: str,
    guard: FromDishka[TriggerGuard],
    service: FromDishka[RefreshService],
) -> RefreshOutcomeResponse:
    """Refresh a single dataset now, regardless of when it last ran."""
    guard.check()
    outcome = await service.refresh_dataset(slug)
    return RefreshOutcomeResponse.from_domain(outcome)
