"""
Shared helpers for API tests: a controllable clock and request payloads.
"""

from datetime import datetime, timedelta

FIXED_NOW = datetime(2025, 3, 1, 9, 30, 0)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def tier_payload(name="Basic", base_price=199, delivery_time_days=5, revisions=1):
    return {
        "name": name,
        "description": f"{name} package",
        "basePrice": base_price,
        "deliveryTimeDays": delivery_time_days,
        "revisions": revisions,
        "features": ["Responsive layout", "Source files"],
    }


def service_payload(**overrides):
    payload = {
        "name": "Landing Page Design",
        "category": "Web Design",
        "description": "A conversion-focused landing page.",
        "tiers": [
            tier_payload("Basic", 199, 5, 1),
            tier_payload("Standard", 399, 7, 3),
        ],
    }
    payload.update(overrides)
    return payload
