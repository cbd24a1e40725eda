"""Database connection and session management.

Provides the async engine, session factory, a connectivity probe for the
health endpoint, and translation of SQLAlchemy errors into domain errors.
"""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from outpost.config import Settings
from outpost.domain.error import DuplicateKeyError, PersistenceError
from outpost.persistence.tables import DISCORD_ID_CONSTRAINT, STEAM_ID_CONSTRAINT


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


_UNIQUE_CONSTRAINTS = {
    STEAM_ID_CONSTRAINT: "steam_id",
    DISCORD_ID_CONSTRAINT: "discord_id",
}


@asynccontextmanager
async def translate_errors(operation: str) -> AsyncIterator[None]:
    """Re-raise SQLAlchemy errors as domain persistence errors.

    Unique violations on the provider keys become DuplicateKeyError;
    every other database failure becomes PersistenceError.

    Args:
        operation: Short description used in the error message
    """
    try:
        yield
    except IntegrityError as e:
        message = str(e.orig)
        for constraint, field in _UNIQUE_CONSTRAINTS.items():
            if constraint in message:
                raise DuplicateKeyError(field) from e
        raise PersistenceError(f"{operation} failed: {message}") from e
    except SQLAlchemyError as e:
        raise PersistenceError(f"{operation} failed: {e}") from e


class DatabaseProbe(ABC):
    """Reports database connectivity for the health endpoint."""

    @abstractmethod
    async def status(self) -> str:
        """Return 'connected' or 'disconnected'."""
        pass


class EngineDatabaseProbe(DatabaseProbe):
    """Probe that runs ``SELECT 1`` through the engine."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine

    async def status(self) -> str:
        try:
            async with self.engine.connect() as connection:
                await connection.execute(text("SELECT 1"))
            return "connected"
        except (SQLAlchemyError, OSError):
            return "disconnected"
