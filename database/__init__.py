"""
Database module for the Projecost quoting API.

Provides async database connections, session management,
and base model classes.
"""

from database.base import (
    Base,
    engine,
    async_session_factory,
    get_db_session,
    get_session,
    init_db,
    close_db,
    new_id,
)

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "get_session",
    "init_db",
    "close_db",
    "new_id",
]
