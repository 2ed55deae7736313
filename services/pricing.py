"""
Quote pricing engine.

Adjusted price = tier base price x country multiplier x complexity multiplier.
Amounts are multiplied as decimals built from their shortest repr, so
``199 * 1.2 * 2.0`` is exactly ``477.6``. Rounding is left to presentation.
"""

import math
from dataclasses import dataclass
from decimal import Decimal

from models.quote import Complexity
from services.exceptions import ValidationError

COMPLEXITY_MULTIPLIERS: dict[Complexity, Decimal] = {
    Complexity.BASIC: Decimal("1.0"),
    Complexity.STANDARD: Decimal("1.5"),
    Complexity.ADVANCED: Decimal("2.0"),
}


@dataclass(frozen=True)
class PriceBreakdown:
    """Inputs and result of one price computation."""
    base_price: float
    country_multiplier: float
    complexity_multiplier: float
    adjusted_price: float


def _as_decimal(value: float, field: str) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValidationError(f"{field} must be a number")
    if not math.isfinite(value):
        raise ValidationError(f"{field} must be a finite number")
    if value < 0:
        raise ValidationError(f"{field} cannot be negative")
    return Decimal(str(value))


def complexity_multiplier(complexity: Complexity | str) -> Decimal:
    try:
        return COMPLEXITY_MULTIPLIERS[Complexity(complexity)]
    except ValueError:
        raise ValidationError(f"Unknown complexity: {complexity}") from None


def compute_adjusted_price(
    base_price: float,
    country_multiplier: float,
    complexity: Complexity | str,
) -> Decimal:
    """
    Compute the adjusted price for a quote.

    Args:
        base_price: Tier base price, >= 0
        country_multiplier: Destination country multiplier, >= 0
        complexity: Basic, Standard or Advanced

    Returns:
        Unrounded adjusted price

    Raises:
        ValidationError: On negative, non-finite or non-numeric input
    """
    base = _as_decimal(base_price, "Base price")
    multiplier = _as_decimal(country_multiplier, "Country multiplier")
    return base * multiplier * complexity_multiplier(complexity)


def price_breakdown(
    base_price: float,
    country_multiplier: float,
    complexity: Complexity | str,
) -> PriceBreakdown:
    """Price computation with every factor exposed, for estimates."""
    adjusted = compute_adjusted_price(base_price, country_multiplier, complexity)
    return PriceBreakdown(
        base_price=float(base_price),
        country_multiplier=float(country_multiplier),
        complexity_multiplier=float(complexity_multiplier(complexity)),
        adjusted_price=float(adjusted),
    )
