"""Create reservas table

Revision ID: 001
Revises: None
Create Date: 2025-01-10 00:00:00.000000+00:00

What:  Creates the `reservas` table read and written by both record stores.
Why:   The Supabase REST endpoint exposes this table as /rest/v1/reservas;
       DatabaseRecordStore maps it through reserbot.models.reserva.

Rollback: downgrade() drops the table (all bookings are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "reservas",
        sa.Column("id", sa.BigInteger(), sa.Identity(always=False), nullable=False),
        sa.Column("nombre", sa.Text(), nullable=False),
        sa.Column("fecha", sa.Date(), nullable=False),
        sa.Column("hora", sa.Time(), nullable=False),
        sa.Column("servicio", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Every listing is ORDER BY fecha
    op.create_index("idx_reservas_fecha", "reservas", ["fecha"])


def downgrade() -> None:
    op.drop_index("idx_reservas_fecha", table_name="reservas")
    op.drop_table("reservas")
