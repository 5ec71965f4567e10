"""create users and tickets tables

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 10:00:00
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "20261018_0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="user"),
        *_timestamps(),
        sa.CheckConstraint("role IN ('user', 'agent', 'admin')", name="ck_users_role_valid"),
    )

    op.create_table(
        "tickets",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("title", sa.String(length=80), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="open"),
        sa.Column("priority", sa.SmallInteger(), nullable=False, server_default="2"),
        sa.Column("assignee", sa.String(length=200), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('open', 'inprogress', 'resolved')",
            name="ck_tickets_status_valid",
        ),
        sa.CheckConstraint("priority BETWEEN 1 AND 5", name="ck_tickets_priority_range"),
        sa.CheckConstraint("char_length(title) BETWEEN 5 AND 80", name="ck_tickets_title_length"),
        sa.CheckConstraint(
            "char_length(description) >= 20",
            name="ck_tickets_description_length",
        ),
    )

    op.execute("CREATE UNIQUE INDEX uk_users_email_ci ON users (LOWER(email))")
    op.execute(
        "CREATE INDEX idx_tickets_active_created_at ON tickets (created_at DESC) "
        "WHERE is_deleted = FALSE"
    )
    op.execute(
        "CREATE INDEX idx_tickets_active_status ON tickets (status) WHERE is_deleted = FALSE"
    )


def downgrade() -> None:
    op.execute("DROP INDEX IF EXISTS idx_tickets_active_status")
    op.execute("DROP INDEX IF EXISTS idx_tickets_active_created_at")
    op.execute("DROP INDEX IF EXISTS uk_users_email_ci")

    op.drop_table("tickets")
    op.drop_table("users")
