"""
Business invariants for the service catalog and country registry.

Structural checks (types, required fields, lengths, enumerations) live in
the request schemas; the rules here hold regardless of how data arrives.
"""

import math
from collections import Counter
from typing import Any, Iterable, Mapping

from services.exceptions import ValidationError


def validate_tiers(tiers: Iterable[Mapping[str, Any]]) -> None:
    """
    Check the tier set of a service.

    Args:
        tiers: Tier dictionaries with name, base_price, delivery_time_days, revisions

    Raises:
        ValidationError: If a rule is broken
    """
    tiers = list(tiers)
    if not tiers:
        raise ValidationError("Please provide at least one tier")

    duplicates = [
        name for name, count in Counter(_tier_name(t) for t in tiers).items()
        if count > 1
    ]
    if duplicates:
        raise ValidationError(f"Duplicate tier names: {', '.join(sorted(duplicates))}")

    for tier in tiers:
        name = _tier_name(tier)
        if not math.isfinite(tier["base_price"]):
            raise ValidationError(f"{name}: base price must be a finite number")
        if tier["base_price"] < 0:
            raise ValidationError(f"{name}: base price cannot be negative")
        if tier["delivery_time_days"] < 1:
            raise ValidationError(f"{name}: delivery time must be at least 1 day")
        if tier.get("revisions", 0) < 0:
            raise ValidationError(f"{name}: revisions cannot be negative")


def validate_multiplier(multiplier: float) -> None:
    if not math.isfinite(multiplier):
        raise ValidationError("Country multiplier must be a finite number")
    if multiplier < 0:
        raise ValidationError("Country multiplier cannot be negative")


def _tier_name(tier: Mapping[str, Any]) -> str:
    name = tier["name"]
    return getattr(name, "value", name)
