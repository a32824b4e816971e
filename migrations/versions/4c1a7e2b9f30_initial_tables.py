"""initial_tables

Revision ID: 4c1a7e2b9f30
Revises:
Create Date: 2026-10-18 09:12:04.331870

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4c1a7e2b9f30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # DATASETS
    op.create_table(
        "datasets",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("refresh_rate", sa.String(16), nullable=False),
        sa.Column("last_refreshed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_watchdog_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("latest_source_year", sa.Integer(), nullable=True),
        sa.Column("latest_snapshot_id", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )
    op.create_index("idx_datasets_refresh_rate", "datasets", ["refresh_rate"])

    # SNAPSHOTS
    op.create_table(
        "snapshots",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("dataset_id", sa.String(), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("source_hash", sa.String(64), nullable=False),
        sa.Column("collected_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["dataset_id"], ["datasets.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_snapshots_dataset_collected", "snapshots", ["dataset_id", "collected_at"]
    )

    # CARDS
    op.create_table(
        "cards",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("dataset_id", sa.String(), nullable=False),
        sa.Column("snapshot_id", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["dataset_id"], ["datasets.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )
    op.create_index("idx_cards_dataset_id", "cards", ["dataset_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_cards_dataset_id", table_name="cards")
    op.drop_table("cards")
    op.drop_index("idx_snapshots_dataset_collected", table_name="snapshots")
    op.drop_table("snapshots")
    op.drop_index("idx_datasets_refresh_rate", table_name="datasets")
    op.drop_table("datasets")
