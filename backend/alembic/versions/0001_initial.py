"""services, availability, bookings

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

ACTIVE_ONLY = sa.text("status IN ('pending', 'confirmed')")


def upgrade():
    op.create_table(
        "services",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("photographer_id", sa.Integer, nullable=False),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("duration_min", sa.Integer, nullable=False),
        sa.Column("price", sa.Float, nullable=False),
        sa.Column("deposit_amount", sa.Float, nullable=False, server_default=sa.text("0")),
        sa.Column("is_active", sa.Integer, nullable=False, server_default=sa.text("1")),
    )
    op.create_index(
        "ix_services_photographer_active", "services", ["photographer_id", "is_active"]
    )

    op.create_table(
        "availability",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("photographer_id", sa.Integer, nullable=False, unique=True),
        sa.Column("timezone", sa.Text, nullable=False, server_default=sa.text("'UTC'")),
        sa.Column("days", sa.Text, nullable=False, server_default=sa.text("'[]'")),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("photographer_id", sa.Integer, nullable=False),
        sa.Column("service_id", sa.Integer, sa.ForeignKey("services.id"), nullable=False),
        sa.Column("client_name", sa.Text, nullable=False),
        sa.Column("client_email", sa.Text, nullable=False),
        sa.Column("client_phone", sa.Text),
        sa.Column("date", sa.DateTime, nullable=False),
        sa.Column("time_slot", sa.Text, nullable=False),
        sa.Column("end_time", sa.Text, nullable=False),
        sa.Column("status", sa.Text, nullable=False, server_default=sa.text("'pending'")),
        sa.Column("payment_status", sa.Text, nullable=False, server_default=sa.text("'unpaid'")),
        sa.Column("notes", sa.Text),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "uq_bookings_active_slot",
        "bookings",
        ["photographer_id", "date", "time_slot"],
        unique=True,
        sqlite_where=ACTIVE_ONLY,
        postgresql_where=ACTIVE_ONLY,
    )
    op.create_index(
        "ix_bookings_photographer_status", "bookings", ["photographer_id", "status"]
    )


def downgrade():
    op.drop_index("ix_bookings_photographer_status", table_name="bookings")
    op.drop_index("uq_bookings_active_slot", table_name="bookings")
    op.drop_table("bookings")
    op.drop_table("availability")
    op.drop_index("ix_services_photographer_active", table_name="services")
    op.drop_table("services")
