"""
FastAPI dependencies for database sessions, authentication, and the clock.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from database.base import get_session
from services.access_policy import Caller
from services.auth_service import AuthService
from services.exceptions import UnauthenticatedError
from utils.clock import Clock, utcnow

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.api_prefix}/auth/login",
    auto_error=False,
)


async def get_db() -> AsyncSession:
    """Get database session dependency."""
    async for session in get_session():
        yield session


DatabaseDep = Annotated[AsyncSession, Depends(get_db)]
TokenDep = Annotated[str | None, Depends(oauth2_scheme)]


async def get_optional_caller(
    request: Request,
    token: TokenDep,
    db: DatabaseDep,
) -> Caller | None:
    """
    Resolve the caller for endpoints open to anonymous requests.

    No token means anonymous; a token that fails validation is rejected.
    """
    if not token:
        return None
    caller = await AuthService(db).get_caller(token)
    request.state.caller = caller
    return caller


async def get_current_caller(
    request: Request,
    token: TokenDep,
    db: DatabaseDep,
) -> Caller:
    """
    Resolve the authenticated caller.

    Raises:
        UnauthenticatedError: If the token is missing or invalid
    """
    if not token:
        raise UnauthenticatedError("Authentication invalid")
    caller = await AuthService(db).get_caller(token)
    request.state.caller = caller
    return caller


OptionalCallerDep = Annotated[Caller | None, Depends(get_optional_caller)]
CurrentCallerDep = Annotated[Caller, Depends(get_current_caller)]


def get_clock() -> Clock:
    """Time source for quote timestamps; overridden in tests."""
    return utcnow


ClockDep = Annotated[Clock, Depends(get_clock)]
