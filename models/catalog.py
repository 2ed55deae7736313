"""
Service catalog models.

A provider publishes services; each service offers one or more priced tiers.
"""

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean, Enum as SQLEnum, Float, ForeignKey,
    Integer, JSON, String, Text, UniqueConstraint
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from database.base import Base

if TYPE_CHECKING:
    from models.user import User


class TierName(str, Enum):
    """Service level offered within a service."""
    BASIC = "Basic"
    STANDARD = "Standard"
    PREMIUM = "Premium"


class Service(Base):
    """
    Provider-owned service listing.

    Must always carry at least one tier.
    """

    __tablename__ = "services"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    owner_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    owner: Mapped["User"] = relationship("User", back_populates="services", lazy="selectin")
    tiers: Mapped[list["ServiceTier"]] = relationship(
        "ServiceTier",
        back_populates="service",
        cascade="all, delete-orphan",
        order_by="ServiceTier.position",
        lazy="selectin",
    )

    def find_tier(self, name: str) -> "ServiceTier | None":
        """Exact, case-sensitive tier lookup."""
        for tier in self.tiers:
            if tier.name.value == name:
                return tier
        return None


class ServiceTier(Base):
    """Priced option within a service."""

    __tablename__ = "service_tiers"
    __table_args__ = (
        UniqueConstraint("service_id", "name", name="uq_service_tiers_service_id_name"),
    )

    service_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("services.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, default=0)
    name: Mapped[TierName] = mapped_column(
        SQLEnum(TierName, values_callable=lambda tiers: [t.value for t in tiers]),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    base_price: Mapped[float] = mapped_column(Float, nullable=False)
    delivery_time_days: Mapped[int] = mapped_column(Integer, nullable=False)
    revisions: Mapped[int] = mapped_column(Integer, default=0)
    features: Mapped[list[str]] = mapped_column(JSON, default=list)

    service: Mapped["Service"] = relationship("Service", back_populates="tiers")
