"""
Country registry service.

Reference data mapping a country to its pricing multiplier and currency.
Reads are public; every mutation is admin-only.
"""

from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.country import Country
from models.quote import Quote
from services.access_policy import Caller, ensure_admin
from services.catalog_rules import validate_multiplier
from services.exceptions import NotFoundError, ValidationError
from utils.clock import utcnow
from utils.logging import ServiceLogger, audit_logger

DEFAULT_COUNTRIES: list[dict[str, Any]] = [
    {"name": "United States", "code": "US", "region": "North America", "currency": "US Dollar", "currency_code": "USD", "multiplier": 1.0},
    {"name": "Canada", "code": "CA", "region": "North America", "currency": "Canadian Dollar", "currency_code": "CAD", "multiplier": 0.9},
    {"name": "United Kingdom", "code": "GB", "region": "Europe", "currency": "Pound Sterling", "currency_code": "GBP", "multiplier": 1.1},
    {"name": "Germany", "code": "DE", "region": "Europe", "currency": "Euro", "currency_code": "EUR", "multiplier": 1.05},
    {"name": "France", "code": "FR", "region": "Europe", "currency": "Euro", "currency_code": "EUR", "multiplier": 1.0},
    {"name": "Switzerland", "code": "CH", "region": "Europe", "currency": "Swiss Franc", "currency_code": "CHF", "multiplier": 1.3},
    {"name": "Australia", "code": "AU", "region": "Oceania", "currency": "Australian Dollar", "currency_code": "AUD", "multiplier": 0.95},
    {"name": "Japan", "code": "JP", "region": "Asia", "currency": "Japanese Yen", "currency_code": "JPY", "multiplier": 0.9},
    {"name": "India", "code": "IN", "region": "Asia", "currency": "Indian Rupee", "currency_code": "INR", "multiplier": 0.4},
    {"name": "Brazil", "code": "BR", "region": "South America", "currency": "Brazilian Real", "currency_code": "BRL", "multiplier": 0.5},
    {"name": "Nigeria", "code": "NG", "region": "Africa", "currency": "Naira", "currency_code": "NGN", "multiplier": 0.35},
    {"name": "Mexico", "code": "MX", "region": "North America", "currency": "Mexican Peso", "currency_code": "MXN", "multiplier": 0.55},
]

_FIELDS = ("name", "code", "region", "currency", "currency_code", "multiplier")


class CountryService:
    """
    Service for the country registry.

    Provides:
    - Public listing and lookup (by id or by name)
    - Admin-only create, update and delete
    - Seeding of a default registry
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.logger = ServiceLogger("country")

    async def list_countries(self) -> list[Country]:
        """All countries ordered by name."""
        result = await self.session.execute(select(Country).order_by(Country.name))
        return list(result.scalars().all())

    async def get_country(self, country_id: str) -> Country:
        country = await self.session.get(Country, country_id)
        if not country:
            raise NotFoundError("Country not found")
        return country

    async def get_by_name(self, name: str) -> Country:
        """Exact lookup by country name, as stored on quotes."""
        result = await self.session.execute(
            select(Country).where(Country.name == name.strip())
        )
        country = result.scalar_one_or_none()
        if not country:
            raise NotFoundError("Country not found")
        return country

    async def create_country(self, caller: Caller | None, data: dict[str, Any]) -> Country:
        """
        Create a country.

        Args:
            caller: Acting user, must be admin
            data: name, code, region, currency, currency_code, multiplier

        Returns:
            Created Country
        """
        caller = ensure_admin(caller)
        values = self._normalize(data)
        validate_multiplier(values.get("multiplier", 1.0))
        await self._ensure_unique(values["name"], values["code"])

        country = Country(**values)
        self.session.add(country)
        await self.session.flush()

        audit_logger.log_action("create", caller.id, "country", country.id, new_values=values)
        return country

    async def update_country(
        self,
        caller: Caller | None,
        country_id: str,
        updates: dict[str, Any],
    ) -> Country:
        """Apply partial updates to a country."""
        caller = ensure_admin(caller)
        country = await self.get_country(country_id)
        values = self._normalize(updates)

        if "multiplier" in values:
            validate_multiplier(values["multiplier"])
        if values.get("name", country.name) != country.name and await self._is_referenced(country):
            raise ValidationError("Country is referenced by existing quotes")
        if "name" in values or "code" in values:
            await self._ensure_unique(
                values.get("name", country.name),
                values.get("code", country.code),
                exclude_id=country.id,
            )

        for key, value in values.items():
            setattr(country, key, value)
        country.updated_at = utcnow()

        await self.session.flush()

        audit_logger.log_action("update", caller.id, "country", country.id, new_values=values)
        return country

    async def delete_country(self, caller: Caller | None, country_id: str) -> None:
        """Delete a country no quote refers to."""
        caller = ensure_admin(caller)
        country = await self.get_country(country_id)

        if await self._is_referenced(country):
            raise ValidationError("Country is referenced by existing quotes")

        await self.session.delete(country)
        await self.session.flush()

        audit_logger.log_action("delete", caller.id, "country", country_id)

    async def seed_defaults(self) -> int:
        """
        Insert the default registry entries that are missing.

        Returns:
            Number of countries created
        """
        with self.logger.operation("seed_defaults") as details:
            result = await self.session.execute(select(Country.name, Country.code))
            names, codes = set(), set()
            for name, code in result.all():
                names.add(name)
                codes.add(code)

            # Either unique column already taken means the entry is present
            missing = [
                entry for entry in DEFAULT_COUNTRIES
                if entry["name"] not in names and entry["code"] not in codes
            ]
            self.session.add_all(Country(**entry) for entry in missing)
            await self.session.flush()

            details["created"] = len(missing)

        return len(missing)

    @staticmethod
    def _normalize(data: dict[str, Any]) -> dict[str, Any]:
        values = {key: data[key] for key in _FIELDS if data.get(key) is not None}
        for key in ("name", "region", "currency"):
            if key in values:
                values[key] = values[key].strip()
        for key in ("code", "currency_code"):
            if key in values:
                values[key] = values[key].strip().upper()
        return values

    async def _ensure_unique(self, name: str, code: str, exclude_id: str | None = None) -> None:
        query = select(Country).where(or_(Country.name == name, Country.code == code))
        if exclude_id:
            query = query.where(Country.id != exclude_id)
        result = await self.session.execute(query)
        if result.scalars().first():
            raise ValidationError("Country already exists")

    async def _is_referenced(self, country: Country) -> bool:
        """Quotes store the country by name, so a match blocks renames and deletes."""
        count = await self.session.scalar(
            select(func.count()).select_from(Quote).where(Quote.client_country == country.name)
        )
        return bool(count)
