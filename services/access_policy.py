"""
Role-based access policy for quotes, services and countries.

Every rule takes the caller explicitly; ``None`` means an anonymous request.
The functions are pure: they read ids and roles and either return or raise.
"""

from dataclasses import dataclass
from typing import Protocol

from models.user import PROVIDER_ROLES, UserRole
from services.exceptions import ForbiddenError, UnauthenticatedError


@dataclass(frozen=True)
class Caller:
    """Authenticated identity attached to a request."""
    id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_provider(self) -> bool:
        return self.role in PROVIDER_ROLES


@dataclass(frozen=True)
class QuoteScope:
    """
    Filter limiting which quotes a caller may list.

    ``field`` is None for unrestricted access, otherwise the quote column
    that must equal ``value``.
    """
    field: str | None = None
    value: str | None = None


class QuoteParties(Protocol):
    client_id: str | None
    provider_id: str | None


class OwnedService(Protocol):
    owner_id: str


def require_caller(caller: Caller | None) -> Caller:
    if caller is None:
        raise UnauthenticatedError("Authentication invalid")
    return caller


def quote_list_scope(caller: Caller | None) -> QuoteScope:
    """Admins see everything, providers their received quotes, others their own requests."""
    caller = require_caller(caller)
    if caller.is_admin:
        return QuoteScope()
    if caller.is_provider:
        return QuoteScope(field="provider_id", value=caller.id)
    return QuoteScope(field="client_id", value=caller.id)


def quote_client_id(caller: Caller | None) -> str | None:
    """Quote creation is open; an authenticated caller becomes the client."""
    return caller.id if caller else None


def can_view_quote(caller: Caller | None, quote: QuoteParties) -> bool:
    if caller is None:
        return False
    return (
        caller.is_admin
        or (quote.client_id is not None and quote.client_id == caller.id)
        or (quote.provider_id is not None and quote.provider_id == caller.id)
    )


def can_manage_quote(caller: Caller | None, quote: QuoteParties) -> bool:
    """Status changes and deletion."""
    if caller is None:
        return False
    return caller.is_admin or (
        quote.provider_id is not None and quote.provider_id == caller.id
    )


def ensure_can_view_quote(caller: Caller | None, quote: QuoteParties) -> None:
    require_caller(caller)
    if not can_view_quote(caller, quote):
        raise ForbiddenError("Not authorized to view this quote")


def ensure_can_update_quote(caller: Caller | None, quote: QuoteParties) -> None:
    require_caller(caller)
    if not can_manage_quote(caller, quote):
        raise ForbiddenError("Not authorized to update this quote")


def ensure_can_delete_quote(caller: Caller | None, quote: QuoteParties) -> None:
    require_caller(caller)
    if not can_manage_quote(caller, quote):
        raise ForbiddenError("Not authorized to delete this quote")


def ensure_can_create_service(caller: Caller | None) -> Caller:
    caller = require_caller(caller)
    if not caller.is_provider:
        raise ForbiddenError("Access denied. Provider privileges required.")
    return caller


def can_modify_service(caller: Caller | None, service: OwnedService) -> bool:
    if caller is None:
        return False
    return caller.is_admin or service.owner_id == caller.id


def ensure_can_modify_service(caller: Caller | None, service: OwnedService, action: str = "update") -> None:
    require_caller(caller)
    if not can_modify_service(caller, service):
        raise ForbiddenError(f"Not authorized to {action} this service")


def ensure_admin(caller: Caller | None) -> Caller:
    """Country registry mutations."""
    caller = require_caller(caller)
    if not caller.is_admin:
        raise ForbiddenError("Access denied. Admin privileges required.")
    return caller
