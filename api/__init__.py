"""API module for the Projecost quoting service."""

from api.dependencies import (
    get_clock,
    get_current_caller,
    get_db,
    get_optional_caller,
)

__all__ = [
    "get_clock",
    "get_current_caller",
    "get_db",
    "get_optional_caller",
]
