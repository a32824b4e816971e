from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from factgrid.application.api.v1.schemas import HealthResponse
from factgrid.config import Config

router = APIRouter(tags=["Health"], route_class=DishkaRoute)


@router.get("/health", response_model=HealthResponse)
async def health(config: FromDishka[Config]) -> HealthResponse:
    return HealthResponse(status="ok", version=config.server.version)
