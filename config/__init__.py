"""Configuration module for the Projecost quoting API."""

from .settings import AuthSettings, DatabaseSettings, QuoteSettings, Settings, get_settings, settings

__all__ = ["AuthSettings", "DatabaseSettings", "QuoteSettings", "Settings", "get_settings", "settings"]
