"""
Quote models.

A quote freezes every pricing input and output at creation so later edits
to the service or the country never alter historical quotes.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SQLEnum, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from database.base import Base
from models.catalog import TierName


class Complexity(str, Enum):
    """Client-declared project difficulty."""
    BASIC = "Basic"
    STANDARD = "Standard"
    ADVANCED = "Advanced"


class QuoteStatus(str, Enum):
    """Quote lifecycle status."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"


def _values(enum_cls):
    return [member.value for member in enum_cls]


class Quote(Base):
    """
    Price quote for one tier of one service.

    Service and country fields are snapshots, not references.
    """

    __tablename__ = "quotes"

    # Parties
    client_id: Mapped[str | None] = mapped_column(String(36), index=True)
    provider_id: Mapped[str | None] = mapped_column(String(36), index=True)
    service_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)

    # Client details
    client_name: Mapped[str] = mapped_column(String(200), nullable=False)
    client_email: Mapped[str] = mapped_column(String(255), nullable=False)
    client_country: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    # Service snapshot
    service_name: Mapped[str] = mapped_column(String(100), nullable=False)
    service_category: Mapped[str] = mapped_column(String(100), nullable=False)
    selected_tier: Mapped[TierName] = mapped_column(
        SQLEnum(TierName, values_callable=_values),
        nullable=False,
    )
    complexity: Mapped[Complexity] = mapped_column(
        SQLEnum(Complexity, values_callable=_values),
        nullable=False,
    )

    # Pricing snapshot
    base_price: Mapped[float] = mapped_column(Float, nullable=False)
    adjusted_price: Mapped[float] = mapped_column(Float, nullable=False)
    country_multiplier: Mapped[float] = mapped_column(Float, nullable=False)
    delivery_time_days: Mapped[int] = mapped_column(Integer, nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[QuoteStatus] = mapped_column(
        SQLEnum(QuoteStatus, values_callable=_values),
        default=QuoteStatus.PENDING,
        nullable=False,
        index=True,
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    def has_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
