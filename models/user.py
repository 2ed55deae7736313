"""
User and authentication models.

Roles drive every authorization decision in the access policy.
"""

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum as SQLEnum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from database.base import Base

if TYPE_CHECKING:
    from models.catalog import Service


class UserRole(str, Enum):
    """Account roles."""
    CLIENT = "client"  # Requests quotes
    FREELANCER = "freelancer"  # Individual provider
    AGENCY = "agency"  # Provider company
    ADMIN = "admin"  # Reference data and full quote access


PROVIDER_ROLES = frozenset({UserRole.FREELANCER, UserRole.AGENCY})


class User(Base):
    """
    Registered account.

    Providers own services and receive quotes; clients request them.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole, values_callable=lambda roles: [r.value for r in roles]),
        default=UserRole.CLIENT,
        nullable=False,
    )
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    company: Mapped[str | None] = mapped_column(String(200))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    services: Mapped[list["Service"]] = relationship(
        "Service",
        back_populates="owner",
        cascade="all, delete-orphan",
    )

    @property
    def is_provider(self) -> bool:
        return self.role in PROVIDER_ROLES
