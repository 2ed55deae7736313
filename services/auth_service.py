"""
Authentication service.

Handles registration, login, and resolving bearer tokens into callers.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from models.user import User, UserRole
from services.access_policy import Caller
from services.exceptions import ForbiddenError, UnauthenticatedError, ValidationError
from utils.security import (
    verify_password, get_password_hash, create_access_token,
    decode_access_token, validate_password_strength,
)
from utils.logging import ServiceLogger, audit_logger


class AuthService:
    """
    Service for authentication.

    Provides:
    - User registration
    - Credential checks and token issuance
    - Token validation into an explicit Caller
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.logger = ServiceLogger("auth")

    async def register_user(
        self,
        name: str,
        email: str,
        password: str,
        country: str,
        role: UserRole = UserRole.CLIENT,
        company: str | None = None,
    ) -> User:
        """
        Register a new user.

        Args:
            name: Display name
            email: Login email, stored lower-cased
            password: Plain password
            country: Home country name
            role: Account role
            company: Optional company name

        Returns:
            Created User

        Raises:
            ValidationError: Weak password or email already registered
            ForbiddenError: Self-registration as admin while it is disabled
        """
        with self.logger.operation("register_user", email=email, role=role.value) as details:
            if role == UserRole.ADMIN and not settings.auth.allow_admin_registration:
                raise ForbiddenError("Admin accounts cannot be self-registered")

            is_valid, issues = validate_password_strength(password)
            if not is_valid:
                raise ValidationError(f"Invalid password: {', '.join(issues)}")

            existing = await self._get_user_by_email(email)
            if existing:
                raise ValidationError("User already exists")

            user = User(
                name=name.strip(),
                email=email.strip().lower(),
                hashed_password=get_password_hash(password),
                role=role,
                country=country.strip(),
                company=company.strip() if company else None,
            )

            self.session.add(user)
            await self.session.flush()
            details["user_id"] = user.id

        return user

    async def authenticate(
        self,
        email: str,
        password: str,
        ip_address: str | None = None,
    ) -> User:
        """
        Check credentials.

        Args:
            email: User email
            password: User password
            ip_address: Client IP

        Returns:
            The authenticated User

        Raises:
            UnauthenticatedError: Unknown email, wrong password or inactive account
        """
        user = await self._get_user_by_email(email)
        if not user:
            audit_logger.log_login(email, success=False, ip_address=ip_address, reason="user_not_found")
            raise UnauthenticatedError("Invalid credentials")

        if not verify_password(password, user.hashed_password):
            audit_logger.log_login(user.id, success=False, ip_address=ip_address, reason="invalid_password")
            raise UnauthenticatedError("Invalid credentials")

        if not user.is_active:
            audit_logger.log_login(user.id, success=False, ip_address=ip_address, reason="account_inactive")
            raise UnauthenticatedError("Invalid credentials")

        audit_logger.log_login(user.id, success=True, ip_address=ip_address)
        return user

    def issue_token(self, user: User) -> str:
        """Create an access token for a user."""
        return create_access_token(user.id, user.role.value)

    async def validate_token(self, token: str) -> User:
        """
        Validate an access token and load its user.

        Args:
            token: Access token

        Returns:
            The active User the token was issued to

        Raises:
            UnauthenticatedError: Bad signature, expiry, wrong type, or missing user
        """
        claims = decode_access_token(token)
        if not claims:
            raise UnauthenticatedError("Authentication invalid")

        # Verify user still exists and is active
        user = await self.get_user(claims["sub"])
        if not user or not user.is_active:
            raise UnauthenticatedError("Authentication invalid")

        return user

    async def get_caller(self, token: str) -> Caller:
        """Resolve a token into the caller used by the access policy."""
        user = await self.validate_token(token)
        return Caller(id=user.id, role=user.role)

    async def get_user(self, user_id: str) -> User | None:
        """Get user by ID."""
        result = await self.session.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def _get_user_by_email(self, email: str) -> User | None:
        """Get user by email."""
        result = await self.session.execute(
            select(User).where(User.email == email.strip().lower())
        )
        return result.scalar_one_or_none()
