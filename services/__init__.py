"""
Services module for the Projecost quoting API.

Contains the business logic:
- Authentication
- Country registry
- Service catalog
- Quote pricing, lifecycle and access policy
"""

from services.auth_service import AuthService
from services.catalog_service import CatalogService
from services.country_service import CountryService
from services.quote_service import QuoteService

__all__ = ["AuthService", "CatalogService", "CountryService", "QuoteService"]
