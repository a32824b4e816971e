"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, MetaData, String, Table
from sqlalchemy.types import JSON

metadata = MetaData()

# ============================================================================
# DATASETS TABLE
# ============================================================================
datasets_table = Table(
    "datasets",
    metadata,
    Column("id", String, primary_key=True),
    Column("slug", String, nullable=False, unique=True),
    Column("name", String, nullable=False),
    Column("refresh_rate", String(16), nullable=False),  # RefreshRate as string
    Column("last_refreshed_at", DateTime(timezone=True), nullable=True),
    Column("last_watchdog_at", DateTime(timezone=True), nullable=True),
    Column("latest_source_year", Integer, nullable=True),
    # No FK: the pointer is moved only after the snapshot row exists
    Column("latest_snapshot_id", String, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

Index("idx_datasets_refresh_rate", datasets_table.c.refresh_rate)


# ============================================================================
# SNAPSHOTS TABLE (append-only)
# ============================================================================
snapshots_table = Table(
    "snapshots",
    metadata,
    Column("id", String, primary_key=True),
    Column("dataset_id", String, ForeignKey("datasets.id"), nullable=False),
    Column("payload", JSON, nullable=False),
    Column("source_hash", String(64), nullable=False),
    Column("collected_at", DateTime(timezone=True), nullable=False),
)

Index("idx_snapshots_dataset_collected", snapshots_table.c.dataset_id, snapshots_table.c.collected_at)


# ============================================================================
# CARDS TABLE (downstream consumers of a dataset's latest snapshot)
# ============================================================================
cards_table = Table(
    "cards",
    metadata,
    Column("id", String, primary_key=True),
    Column("slug", String, nullable=False, unique=True),
    Column("title", String, nullable=False),
    Column("dataset_id", String, ForeignKey("datasets.id"), nullable=False),
    Column("snapshot_id", String, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

Index("idx_cards_dataset_id", cards_table.c.dataset_id)
