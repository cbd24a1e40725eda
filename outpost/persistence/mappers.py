"""Mappers for converting between database rows and domain models.

Domain models are frozen pydantic models, so rows are mapped by hand
rather than through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from outpost.domain.model import Identity, ServerStatus
from outpost.domain.value import DiscordId, IdentityId, ServerStatusId, SteamId


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_identity(row: Dict[str, Any]) -> Identity:
    """Convert database row to Identity domain model.

    The stored is_fully_authenticated column is ignored; the model derives
    it from the two keys.

    Args:
        row: Database row as dict

    Returns:
        Identity domain model
    """
    return Identity(
        id=IdentityId(_uuid(row["id"])),
        steam_id=SteamId(row["steam_id"]) if row.get("steam_id") else None,
        steam_name=row.get("steam_name"),
        steam_avatar=row.get("steam_avatar"),
        steam_profile_url=row.get("steam_profile_url"),
        discord_id=DiscordId(row["discord_id"]) if row.get("discord_id") else None,
        discord_name=row.get("discord_name"),
        discord_avatar=row.get("discord_avatar"),
        discord_email=row.get("discord_email"),
        last_login=row["last_login"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def identity_to_dict(identity: Identity) -> Dict[str, Any]:
    """Convert Identity domain model to database dict.

    Includes the derived is_fully_authenticated value so the column stays
    in step with the keys.
    """
    return identity.model_dump()


def _columns(identity: Identity, *keys: str) -> Dict[str, Any]:
    values = identity_to_dict(identity)
    return {key: values[key] for key in keys}


def discord_link_values(identity: Identity) -> Dict[str, Any]:
    """Columns written when a Discord account is attached to an identity."""
    return _columns(
        identity,
        "discord_id",
        "discord_name",
        "discord_avatar",
        "discord_email",
        "is_fully_authenticated",
        "last_login",
        "updated_at",
    )


def steam_refresh_values(identity: Identity) -> Dict[str, Any]:
    """Columns written by a repeat Steam login.

    Keys and the Discord side are left alone so a concurrent merge survives.
    """
    return _columns(
        identity,
        "steam_name",
        "steam_avatar",
        "steam_profile_url",
        "last_login",
        "updated_at",
    )


def discord_refresh_values(identity: Identity) -> Dict[str, Any]:
    """Columns written by a repeat Discord login."""
    return _columns(
        identity,
        "discord_name",
        "discord_avatar",
        "discord_email",
        "last_login",
        "updated_at",
    )


def row_to_server_status(row: Dict[str, Any]) -> ServerStatus:
    """Convert database row to ServerStatus domain model."""
    return ServerStatus(
        id=ServerStatusId(_uuid(row["id"])),
        name=row["name"],
        address=row["address"],
        port=row["port"],
        map_name=row.get("map_name"),
        player_count=row.get("player_count", 0),
        max_players=row.get("max_players", 0),
        is_online=row.get("is_online", False),
        is_active=row.get("is_active", True),
        last_checked=row.get("last_checked"),
    )
