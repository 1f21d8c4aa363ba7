"""Add users, purchases and downloads tables

Revision ID: 3f9a7c21b8d4
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f9a7c21b8d4"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("user_token", sa.String(512), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("users_pkey")),
        sa.UniqueConstraint("user_id", name=op.f("uq_users_user_id")),
    )

    op.create_table(
        "purchases",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("currency_code", sa.String(10), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("price_formatted", sa.String(64), nullable=True),
        sa.Column("kind", sa.String(255), nullable=False),
        sa.Column("is_sandbox", sa.Boolean(), nullable=False),
        sa.Column("app_name", sa.String(255), nullable=False),
        sa.Column("store_front", sa.String(64), nullable=True),
        sa.Column("is_trial", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("trial_period", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("purchases_pkey")),
    )
    op.create_index(op.f("ix_purchases_app_name"), "purchases", ["app_name"], unique=False)
    op.create_index(op.f("ix_purchases_created_at"), "purchases", ["created_at"], unique=False)

    op.create_table(
        "downloads",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("app_name", sa.String(255), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("downloads_pkey")),
        sa.UniqueConstraint("user_id", "app_name", name="uq_downloads_user_id_app_name"),
    )
    op.create_index(op.f("ix_downloads_app_name"), "downloads", ["app_name"], unique=False)
    op.create_index(op.f("ix_downloads_timestamp"), "downloads", ["timestamp"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_downloads_timestamp"), table_name="downloads")
    op.drop_index(op.f("ix_downloads_app_name"), table_name="downloads")
    op.drop_table("downloads")
    op.drop_index(op.f("ix_purchases_created_at"), table_name="purchases")
    op.drop_index(op.f("ix_purchases_app_name"), table_name="purchases")
    op.drop_table("purchases")
    op.drop_table("users")
