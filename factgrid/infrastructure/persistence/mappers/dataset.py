from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from factgrid.domain.dataset.model.aggregate import Dataset
from factgrid.domain.dataset.model.value import RefreshRate


def as_utc(value: datetime | None) -> datetime | None:
    """SQLite returns naive datetimes; everything we store is UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def row_to_dataset(row: dict[str, Any]) -> Dataset:
    snapshot_id = row.get("latest_snapshot_id")
    return Dataset(
        id=UUID(row["id"]),
        slug=row["slug"],
        name=row["name"],
        refresh_rate=RefreshRate(row["refresh_rate"]),
        last_refreshed_at=as_utc(row.get("last_refreshed_at")),
        last_watchdog_at=as_utc(row.get("last_watchdog_at")),
        latest_source_year=row.get("latest_source_year"),
        latest_snapshot_id=UUID(snapshot_id) if snapshot_id else None,
    )


def dataset_to_dict(dataset: Dataset) -> dict[str, Any]:
    return {
        "id": str(dataset.id),
        "slug": dataset.slug,
        "name": dataset.name,
        "refresh_rate": dataset.refresh_rate.value,
        "last_refreshed_at": dataset.last_refreshed_at,
        "last_watchdog_at": dataset.last_watchdog_at,
        "latest_source_year": dataset.latest_source_year,
        "latest_snapshot_id": str(dataset.latest_snapshot_id) if dataset.latest_snapshot_id else None,
    }
