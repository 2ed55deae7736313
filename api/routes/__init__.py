"""API Routes for the Projecost quoting service."""

from api.routes import auth, countries, quotes, services

__all__ = ["auth", "countries", "quotes", "services"]
