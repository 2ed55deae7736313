"""
Data models for the Projecost quoting API.

This module provides SQLAlchemy ORM models for:
- User accounts and roles
- Country reference data
- Service catalog (services and tiers)
- Quotes
"""

from models.user import (
    User,
    UserRole,
    PROVIDER_ROLES,
)

from models.country import Country

from models.catalog import (
    Service,
    ServiceTier,
    TierName,
)

from models.quote import (
    Quote,
    QuoteStatus,
    Complexity,
)

__all__ = [
    # User
    "User",
    "UserRole",
    "PROVIDER_ROLES",
    # Country
    "Country",
    # Catalog
    "Service",
    "ServiceTier",
    "TierName",
    # Quote
    "Quote",
    "QuoteStatus",
    "Complexity",
]
