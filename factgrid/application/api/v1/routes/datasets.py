"""Read-only views of dataset tracking state."""

from datetime import UTC, datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from factgrid.application.api.v1.schemas import (
    DatasetDetailResponse,
    DatasetListResponse,
    DatasetResponse,
    SnapshotResponse,
)
from factgrid.domain.dataset.freshness import assess_freshness
from factgrid.domain.dataset.model.aggregate import Dataset
from factgrid.domain.dataset.port.repository import DatasetRepository
from factgrid.domain.shared.error import NotFoundError
from factgrid.domain.snapshot.port.repository import SnapshotRepository
from factgrid.domain.source.model.registry import ProbeRegistry, SourceRegistry

router = APIRouter(prefix="/datasets", tags=["Datasets"], route_class=DishkaRoute)


def _to_response(
    dataset: Dataset, sources: SourceRegistry, probes: ProbeRegistry, now: datetime
) -> DatasetResponse:
    adapter = sources.get(dataset.slug)
    kind = adapter.kind if adapter is not None else None
    return DatasetResponse.from_domain(
        dataset,
        kind=kind,
        freshness=assess_freshness(kind, dataset.last_refreshed_at, now),
        has_probe=dataset.slug in probes,
    )


@router.get("", response_model=DatasetListResponse)
async def list_datasets(
    datasets: FromDishka[DatasetRepository],
    sources: FromDishka[SourceRegistry],
    probes: FromDishka[ProbeRegistry],
) -> DatasetListResponse:
    now = datetime.now(UTC)
    return DatasetListResponse(
        datasets=[_to_response(d, sources, probes, now) for d in await datasets.list()]
    )


@router.get("/{slug}", response_model=DatasetDetailResponse)
async def get_dataset(
    slug: str,
    datasets: FromDishka[DatasetRepository],
    snapshots: FromDishka[SnapshotRepository],
    sources: FromDishka[SourceRegistry],
    probes: FromDishka[ProbeRegistry],
) -> DatasetDetailResponse:
    dataset = await datasets.get(slug)
    if dataset is None:
        raise NotFoundError(f"Dataset not found: {slug}")

    latest = None
    if dataset.latest_snapshot_id is not None:
        latest = await snapshots.get(dataset.latest_snapshot_id)

    return DatasetDetailResponse(
        dataset=_to_response(dataset, sources, probes, datetime.now(UTC)),
        latest_snapshot=SnapshotResponse.from_domain(latest) if latest else None,
        snapshot_count=await snapshots.count_for_dataset(dataset.id),
    )
