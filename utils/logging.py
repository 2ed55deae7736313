"""
Structured logging configuration for the Projecost quoting API.

Uses structlog for consistent, machine-parseable log output. Request
context (request id, method, path) is bound through contextvars by the
HTTP middleware and merged into every event logged while serving it.
"""

import logging
import sys
import time
from contextlib import contextmanager
from typing import Any, Iterator

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from config.settings import settings

SENSITIVE_KEYS = frozenset({"password", "hashed_password", "token", "secret_key"})


def _mask_sensitive(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def setup_logging() -> None:
    """
    Configure structured logging for the application.

    JSON lines in production, coloured console output elsewhere.
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _mask_sensitive,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == "json":
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper()),
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Named structlog logger; the name shows up as ``logger`` in events."""
    return structlog.get_logger(name)


class RequestLogger:
    """
    Request logging for the HTTP middleware.

    ``start`` binds the request context for the rest of the request;
    ``finish`` logs the outcome with its timing.
    """

    def __init__(self):
        self.logger = get_logger("request")

    def start(self, request_id: str, method: str, path: str) -> None:
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=method,
            path=path,
        )
        self.logger.info("request_received")

    def finish(self, status_code: int, duration_ms: float) -> None:
        log_method = self.logger.info if status_code < 400 else self.logger.warning
        log_method(
            "request_completed",
            status_code=status_code,
            duration_ms=round(duration_ms, 2),
        )
        structlog.contextvars.clear_contextvars()


class AuditLogger:
    """
    Audit logging for security-sensitive operations.

    Covers logins, permission denials and country registry changes.
    """

    def __init__(self):
        self.logger = get_logger("audit")

    def log_action(
        self,
        action: str,
        user_id: str | None,
        resource_type: str,
        resource_id: str | None = None,
        new_values: dict | None = None,
    ) -> None:
        """Record a create, update or delete on a registry resource."""
        self.logger.info(
            "audit_event",
            action=action,
            user_id=user_id,
            resource_type=resource_type,
            resource_id=resource_id,
            new_values=new_values,
        )

    def log_login(
        self,
        subject: str,
        success: bool,
        ip_address: str | None = None,
        reason: str | None = None,
    ) -> None:
        """Log authentication attempt; subject is the user id, or the email when unknown."""
        level = self.logger.info if success else self.logger.warning
        level(
            "authentication_attempt",
            subject=subject,
            success=success,
            ip_address=ip_address,
            reason=reason,
        )

    def log_permission_denied(
        self,
        user_id: str | None,
        role: str | None,
        reason: str,
    ) -> None:
        self.logger.warning(
            "permission_denied",
            user_id=user_id,
            role=role,
            reason=reason,
        )


class ServiceLogger:
    """
    Operation logging for the service classes.

    Usage:
        with self.logger.operation("create_quote", service_id=service_id) as details:
            ...
            details["quote_id"] = quote.id
    """

    def __init__(self, service_name: str):
        self.logger = get_logger(f"service.{service_name}")
        self.service_name = service_name

    @contextmanager
    def operation(self, name: str, **context: Any) -> Iterator[dict[str, Any]]:
        """
        Log the start, completion or failure of a business operation.

        Fields added to the yielded dict are attached to the completion event.
        Exceptions are logged and re-raised unchanged.
        """
        started = time.perf_counter()
        details: dict[str, Any] = {}
        self.logger.debug(f"{name}_started", service=self.service_name, **context)

        try:
            yield details
        except Exception as exc:
            self.logger.warning(
                f"{name}_failed",
                service=self.service_name,
                error_type=type(exc).__name__,
                error_message=str(exc),
                duration_ms=_elapsed_ms(started),
                **context,
            )
            raise

        self.logger.info(
            f"{name}_completed",
            service=self.service_name,
            duration_ms=_elapsed_ms(started),
            **{**context, **details},
        )


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


# Global logger instances
request_logger = RequestLogger()
audit_logger = AuditLogger()
