"""Initial schema: users and alerts.

Revision ID: 001_initial
Revises:
Create Date: 2026-01-15 00:00:00.000000
"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(320), nullable=True, unique=True),
        sa.Column("phone", sa.String(32), nullable=True, unique=True),
        sa.Column("car_plate", sa.String(16), nullable=True, unique=True),
        sa.Column("push_subscription", postgresql.JSONB, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"])
    op.create_index("ix_users_phone", "users", ["phone"])
    op.create_index("ix_users_car_plate", "users", ["car_plate"])
    op.create_index("ix_users_created_at", "users", ["created_at"])

    # --- alerts ---
    alert_status = postgresql.ENUM(
        "active", "leaving_soon", "leaving_now", "resolved", name="alert_status", create_type=False
    )
    alert_status.create(op.get_bind())

    op.create_table(
        "alerts",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        # Lookup-only references into users; deleting a user keeps its alerts
        sa.Column("sender_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("receiver_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("detected_plate", sa.String(16), nullable=False),
        sa.Column("manual_correction", sa.Boolean, server_default=sa.false(), nullable=False),
        sa.Column("ocr_confidence", sa.Float, nullable=True),
        sa.Column("status", alert_status, server_default="active", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_alerts_sender_id", "alerts", ["sender_id"])
    op.create_index("ix_alerts_receiver_id", "alerts", ["receiver_id"])
    op.create_index("ix_alerts_detected_plate", "alerts", ["detected_plate"])
    op.create_index("ix_alerts_created_at", "alerts", ["created_at"])
    op.create_index(
        "uq_alerts_open_plate",
        "alerts",
        ["detected_plate"],
        unique=True,
        postgresql_where=sa.text("status != 'resolved'"),
    )


def downgrade() -> None:
    op.drop_table("alerts")
    op.execute("DROP TYPE IF EXISTS alert_status")
    op.drop_table("users")
