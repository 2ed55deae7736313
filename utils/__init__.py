"""
Utility modules for the Projecost quoting API.

Provides shared functionality across all services:
- Security utilities for password hashing and tokens
- Logging utilities for structured logging
- Clock helpers for naive UTC timestamps
"""

from utils.clock import Clock, utcnow
from utils.security import (
    verify_password,
    get_password_hash,
    create_access_token,
    decode_access_token,
    validate_password_strength,
)
from utils.logging import (
    setup_logging,
    get_logger,
    RequestLogger,
    AuditLogger,
    ServiceLogger,
    request_logger,
    audit_logger,
)

__all__ = [
    # Clock
    "Clock",
    "utcnow",
    # Security
    "verify_password",
    "get_password_hash",
    "create_access_token",
    "decode_access_token",
    "validate_password_strength",
    # Logging
    "setup_logging",
    "get_logger",
    "RequestLogger",
    "AuditLogger",
    "ServiceLogger",
    "request_logger",
    "audit_logger",
]
