"""initial_schema

Create the schema for Outpost:
- Identities (one player, linked to a Steam and/or Discord account)
- Server statuses (written by the external status poller)

Revision ID: 3c1d9e2f7a40
Revises:
Create Date: 2026-10-19 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1d9e2f7a40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid() is built in from PostgreSQL 13
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # ========================================================================
    # IDENTITIES table
    # ========================================================================
    op.create_table(
        "identities",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("steam_id", sa.String(32), nullable=True),  # SteamID64
        sa.Column("steam_name", sa.String(255), nullable=True),
        sa.Column("steam_avatar", sa.Text(), nullable=True),
        sa.Column("steam_profile_url", sa.Text(), nullable=True),
        sa.Column("discord_id", sa.String(32), nullable=True),  # Snowflake
        sa.Column("discord_name", sa.String(255), nullable=True),
        sa.Column("discord_avatar", sa.String(255), nullable=True),
        sa.Column("discord_email", sa.String(255), nullable=True),
        sa.Column(
            "is_fully_authenticated",
            sa.Boolean(),
            nullable=False,
            server_default="false",
        ),
        sa.Column(
            "last_login",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        # Unique constraints ignore NULLs, which gives nullable-unique keys
        sa.UniqueConstraint("steam_id", name="uq_identities_steam_id"),
        sa.UniqueConstraint("discord_id", name="uq_identities_discord_id"),
        sa.CheckConstraint(
            "steam_id IS NOT NULL OR discord_id IS NOT NULL",
            name="ck_identities_has_provider",
        ),
        sa.CheckConstraint(
            "is_fully_authenticated = "
            "(steam_id IS NOT NULL AND discord_id IS NOT NULL)",
            name="ck_identities_fully_authenticated",
        ),
    )
    op.execute("""
        CREATE INDEX idx_identities_merge_candidate
        ON identities (created_at DESC)
        WHERE steam_id IS NOT NULL AND discord_id IS NULL
    """)

    # ========================================================================
    # SERVER_STATUSES table
    # ========================================================================
    op.create_table(
        "server_statuses",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("port", sa.Integer(), nullable=False),
        sa.Column("map_name", sa.String(255), nullable=True),
        sa.Column("player_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("max_players", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_online", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("last_checked", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("port BETWEEN 1 AND 65535", name="ck_server_port"),
    )
    op.create_index(
        "idx_server_statuses_is_active", "server_statuses", ["is_active"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_server_statuses_is_active", table_name="server_statuses")
    op.drop_table("server_statuses")

    op.execute("DROP INDEX IF EXISTS idx_identities_merge_candidate")
    op.drop_table("identities")
