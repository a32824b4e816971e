"""Response schemas for the v1 API (camelCase on the wire)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from factgrid.domain.dataset.freshness import FreshnessLevel
from factgrid.domain.dataset.model.aggregate import Dataset
from factgrid.domain.dataset.model.value import RefreshRate, SourceKind
from factgrid.domain.refresh.model.value import RefreshOutcome, RefreshReport, RefreshStatus
from factgrid.domain.snapshot.model.payload import SnapshotPayload
from factgrid.domain.snapshot.model.snapshot import Snapshot
from factgrid.domain.watchdog.model.report import ProbeCheck, WatchdogReport
from factgrid.domain.watchdog.model.value import WatchdogResult


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(ApiModel):
    status: str
    version: str


# =============================================================================
# Refresh
# =============================================================================


class RefreshOutcomeResponse(ApiModel):
    slug: str
    status: RefreshStatus
    snapshot_id: str | None = None
    source_year: int | None = None
    hours_since_refresh: float | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def from_domain(cls, outcome: RefreshOutcome) -> "RefreshOutcomeResponse":
        return cls(
            slug=outcome.slug,
            status=outcome.status,
            snapshot_id=str(outcome.snapshot_id) if outcome.snapshot_id else None,
            source_year=outcome.source_year,
            hours_since_refresh=outcome.hours_since_refresh,
            error=outcome.error,
            error_code=outcome.error_code,
        )


class RefreshSummaryResponse(ApiModel):
    total: int
    refreshed: int
    unchanged: int
    errors: int
    skipped: int


class RefreshReportResponse(ApiModel):
    summary: RefreshSummaryResponse
    results: list[RefreshOutcomeResponse]
    timestamp: datetime

    @classmethod
    def from_domain(cls, report: RefreshReport) -> "RefreshReportResponse":
        return cls(
            summary=RefreshSummaryResponse(**report.summary.model_dump()),
            results=[RefreshOutcomeResponse.from_domain(o) for o in report.results],
            timestamp=report.timestamp,
        )


# =============================================================================
# Watchdog
# =============================================================================


class WatchdogResultResponse(ApiModel):
    slug: str
    changed: bool
    previous_year: int | None
    detected_year: int | None
    method: str
    checked_at: datetime
    error: str | None = None

    @classmethod
    def from_domain(cls, result: WatchdogResult) -> "WatchdogResultResponse":
        return cls(**result.model_dump())


class NewDataResponse(ApiModel):
    slug: str
    previous_year: int | None
    detected_year: int | None
    method: str


class WatchdogSummaryResponse(ApiModel):
    total: int
    changed: int
    errors: int
    checked_at: datetime


class WatchdogReportResponse(ApiModel):
    summary: WatchdogSummaryResponse
    probes: list[WatchdogResultResponse]
    # Omitted from the body when nothing changed
    new_data_available: list[NewDataResponse] | None = None
    refreshes: list[RefreshOutcomeResponse] = []

    @classmethod
    def from_domain(cls, report: WatchdogReport) -> "WatchdogReportResponse":
        return cls(
            summary=WatchdogSummaryResponse(**report.summary.model_dump()),
            probes=[WatchdogResultResponse.from_domain(r) for r in report.probes],
            new_data_available=[NewDataResponse(**n.model_dump()) for n in report.new_data_available]
            or None,
            refreshes=[RefreshOutcomeResponse.from_domain(o) for o in report.refreshes],
        )


# =============================================================================
# Datasets
# =============================================================================


class DatasetResponse(ApiModel):
    slug: str
    name: str
    refresh_rate: RefreshRate
    source_kind: SourceKind | None
    freshness: FreshnessLevel
    has_fetcher: bool
    has_probe: bool
    last_refreshed_at: datetime | None
    last_watchdog_at: datetime | None
    latest_source_year: int | None
    latest_snapshot_id: str | None

    @classmethod
    def from_domain(
        cls,
        dataset: Dataset,
        *,
        kind: SourceKind | None,
        freshness: FreshnessLevel,
        has_probe: bool,
    ) -> "DatasetResponse":
        return cls(
            slug=dataset.slug,
            name=dataset.name,
            refresh_rate=dataset.refresh_rate,
            source_kind=kind,
            freshness=freshness,
            has_fetcher=kind is not None,
            has_probe=has_probe,
            last_refreshed_at=dataset.last_refreshed_at,
            last_watchdog_at=dataset.last_watchdog_at,
            latest_source_year=dataset.latest_source_year,
            latest_snapshot_id=str(dataset.latest_snapshot_id) if dataset.latest_snapshot_id else None,
        )


class DatasetSummaryResponse(ApiModel):
    """Dataset fields shown alongside a single probe result."""

    slug: str
    name: str
    refresh_rate: RefreshRate
    last_refreshed_at: datetime | None
    latest_source_year: int | None


class ProbeCheckResponse(ApiModel):
    probe: WatchdogResultResponse
    dataset: DatasetSummaryResponse
    refresh: RefreshOutcomeResponse | None = None

    @classmethod
    def from_domain(cls, check: ProbeCheck) -> "ProbeCheckResponse":
        ds = check.dataset
        return cls(
            probe=WatchdogResultResponse.from_domain(check.probe),
            dataset=DatasetSummaryResponse(
                slug=ds.slug,
                name=ds.name,
                refresh_rate=ds.refresh_rate,
                last_refreshed_at=ds.last_refreshed_at,
                latest_source_year=ds.latest_source_year,
            ),
            refresh=RefreshOutcomeResponse.from_domain(check.refresh) if check.refresh else None,
        )


class SnapshotResponse(ApiModel):
    id: str
    source_hash: str
    collected_at: datetime
    payload: SnapshotPayload

    @classmethod
    def from_domain(cls, snapshot: Snapshot) -> "SnapshotResponse":
        return cls(
            id=str(snapshot.id),
            source_hash=snapshot.source_hash,
            collected_at=snapshot.collected_at,
            payload=snapshot.payload,
        )


class DatasetDetailResponse(ApiModel):
    dataset: DatasetResponse
    latest_snapshot: SnapshotResponse | None
    snapshot_count: int


class DatasetListResponse(ApiModel):
    datasets: list[DatasetResponse]
