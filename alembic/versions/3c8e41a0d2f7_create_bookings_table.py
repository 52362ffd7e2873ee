"""create_bookings_table

Revision ID: 3c8e41a0d2f7
Revises:
Create Date: 2026-10-19 11:42:10.518304

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c8e41a0d2f7'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema.

    Idempotent: init_db() may already have created the table on startup.
    """
    bind = op.get_bind()
    insp = sa.inspect(bind)

    if "bookings" in insp.get_table_names():
        return

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("guest_name", sa.String(), nullable=False),
        sa.Column("unit_id", sa.String(), nullable=False),
        sa.Column("check_in_date", sa.Date(), nullable=False),
        sa.Column("number_of_nights", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("guest_name", "unit_id", name="uq_bookings_guest_unit"),
    )
    op.create_index("ix_bookings_guest_name", "bookings", ["guest_name"])
    op.create_index("ix_bookings_unit_id", "bookings", ["unit_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_bookings_unit_id", table_name="bookings")
    op.drop_index("ix_bookings_guest_name", table_name="bookings")
    op.drop_table("bookings")
