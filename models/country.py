"""
Country reference data.

Each country carries the static pricing multiplier applied to quotes
requested for it.
"""

from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column

from database.base import Base


class Country(Base):
    """Destination country with its pricing multiplier and currency."""

    __tablename__ = "countries"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    code: Mapped[str] = mapped_column(String(2), unique=True, nullable=False)
    region: Mapped[str] = mapped_column(String(100), nullable=False)
    currency: Mapped[str] = mapped_column(String(100), nullable=False)
    currency_code: Mapped[str] = mapped_column(String(3), nullable=False)
    multiplier: Mapped[float] = mapped_column(Float, default=1.0, nullable=False)
