"""SQLAlchemy table definitions for Outpost.

These match the schema created by the Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

# Unique constraint names, used to report which provider key collided
STEAM_ID_CONSTRAINT = "uq_identities_steam_id"
DISCORD_ID_CONSTRAINT = "uq_identities_discord_id"

# ============================================================================
# IDENTITIES TABLE (Steam and/or Discord account per player)
# ============================================================================
identities_table = Table(
    "identities",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    # Nullable-unique: many NULLs allowed, non-null values unique
    Column("steam_id", String(32), nullable=True),
    Column("steam_name", String(255), nullable=True),
    Column("steam_avatar", Text, nullable=True),
    Column("steam_profile_url", Text, nullable=True),
    Column("discord_id", String(32), nullable=True),
    Column("discord_name", String(255), nullable=True),  # username#discriminator
    Column("discord_avatar", String(255), nullable=True),
    Column("discord_email", String(255), nullable=True),
    Column(
        "is_fully_authenticated", Boolean, nullable=False, server_default="false"
    ),
    Column(
        "last_login",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column(
        "updated_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    UniqueConstraint("steam_id", name=STEAM_ID_CONSTRAINT),
    UniqueConstraint("discord_id", name=DISCORD_ID_CONSTRAINT),
)

# Merge candidate lookup: newest Steam-only identity
Index(
    "idx_identities_merge_candidate",
    identities_table.c.created_at.desc(),
    postgresql_where=identities_table.c.discord_id.is_(None)
    & identities_table.c.steam_id.isnot(None),
)

# ============================================================================
# SERVER STATUSES TABLE (written by the status poller)
# ============================================================================
server_statuses_table = Table(
    "server_statuses",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("name", String(255), nullable=False),
    Column("address", String(255), nullable=False),
    Column("port", Integer, nullable=False),
    Column("map_name", String(255), nullable=True),
    Column("player_count", Integer, nullable=False, server_default="0"),
    Column("max_players", Integer, nullable=False, server_default="0"),
    Column("is_online", Boolean, nullable=False, server_default="false"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("last_checked", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_server_statuses_is_active", server_statuses_table.c.is_active)
