"""create users and rides

Revision ID: 3c1e5b7a9d20
Revises:
Create Date: 2026-10-16

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3c1e5b7a9d20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "identity_user",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("ingestion_email", sa.String(length=320), nullable=False),
    )
    op.create_index("ix_identity_user_email", "identity_user", ["email"], unique=True)
    op.create_index(
        "ix_identity_user_ingestion_email", "identity_user", ["ingestion_email"], unique=True
    )

    op.create_table(
        "rides_ride",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("identity_user.id"),
            nullable=False,
        ),
        sa.Column("platform", sa.String(length=4), nullable=False),
        sa.Column("value", sa.Numeric(12, 2), nullable=False),
        sa.Column("origin", sa.Text(), nullable=True),
        sa.Column("destination", sa.Text(), nullable=True),
        sa.Column("occurred_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("raw_email", sa.Text(), nullable=True),
        sa.CheckConstraint("value >= 0", name="ck_ride_value_non_negative"),
    )
    op.create_index("ix_rides_ride_user_id", "rides_ride", ["user_id"])
    op.create_index("ix_rides_ride_platform", "rides_ride", ["platform"])
    op.create_index("ix_rides_ride_occurred_at", "rides_ride", ["occurred_at"])


def downgrade() -> None:
    op.drop_index("ix_rides_ride_occurred_at", table_name="rides_ride")
    op.drop_index("ix_rides_ride_platform", table_name="rides_ride")
    op.drop_index("ix_rides_ride_user_id", table_name="rides_ride")
    op.drop_table("rides_ride")
    op.drop_index("ix_identity_user_ingestion_email", table_name="identity_user")
    op.drop_index("ix_identity_user_email", table_name="identity_user")
    op.drop_table("identity_user")
