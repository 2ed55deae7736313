"""
Service catalog management.

Handles provider-owned service listings and their tiers.
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.catalog import Service, ServiceTier, TierName
from services.access_policy import (
    Caller, ensure_can_create_service, ensure_can_modify_service, require_caller,
)
from services.catalog_rules import validate_tiers
from services.exceptions import NotFoundError
from utils.clock import utcnow
from utils.logging import ServiceLogger

_SERVICE_FIELDS = ("name", "category", "description", "is_active")


class CatalogService:
    """
    Service for managing the service catalog.

    Provides:
    - Public listing with an optional category filter
    - Provider-only creation, owner/admin updates and deletion
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.logger = ServiceLogger("catalog")

    async def list_services(self, category: str | None = None) -> list[Service]:
        query = select(Service).order_by(Service.created_at.desc())
        if category:
            query = query.where(Service.category == category)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_owned_services(self, caller: Caller | None) -> list[Service]:
        """Services owned by the caller."""
        caller = require_caller(caller)
        result = await self.session.execute(
            select(Service)
            .where(Service.owner_id == caller.id)
            .order_by(Service.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_service(self, service_id: str) -> Service:
        service = await self.session.get(Service, service_id)
        if not service:
            raise NotFoundError("Service not found")
        return service

    async def create_service(self, caller: Caller | None, data: dict[str, Any]) -> Service:
        """
        Create a service owned by the caller.

        Args:
            caller: Acting user, must be a freelancer or agency
            data: name, category, description, tiers and optional is_active

        Returns:
            Created Service
        """
        caller = ensure_can_create_service(caller)
        tiers = data.get("tiers") or []
        validate_tiers(tiers)

        with self.logger.operation(
            "create_service",
            owner_id=caller.id,
            tier_count=len(tiers),
        ) as details:
            service = Service(
                name=data["name"].strip(),
                category=data["category"].strip(),
                description=data["description"].strip(),
                owner_id=caller.id,
                is_active=data.get("is_active", True),
                tiers=self._build_tiers(tiers),
            )

            self.session.add(service)
            await self.session.flush()
            await self.session.refresh(service, ["owner"])
            details["service_id"] = service.id

        return service

    async def update_service(
        self,
        caller: Caller | None,
        service_id: str,
        updates: dict[str, Any],
    ) -> Service:
        """
        Update a service; a new tier list replaces the old one.

        Args:
            caller: Acting user, must own the service or be admin
            service_id: Service to update
            updates: Fields to change

        Returns:
            Updated Service
        """
        service = await self.get_service(service_id)
        ensure_can_modify_service(caller, service, action="update")

        new_tiers = updates.get("tiers")
        if new_tiers is not None:
            validate_tiers(new_tiers)

        with self.logger.operation(
            "update_service",
            service_id=service.id,
            fields=sorted(key for key, value in updates.items() if value is not None),
        ):
            if new_tiers is not None:
                # Flush the removals first so tier names can be reused
                service.tiers.clear()
                await self.session.flush()
                service.tiers.extend(self._build_tiers(new_tiers))

            for key in _SERVICE_FIELDS:
                value = updates.get(key)
                if value is None:
                    continue
                setattr(service, key, value.strip() if isinstance(value, str) else value)

            service.updated_at = utcnow()
            await self.session.flush()

        return service

    async def delete_service(self, caller: Caller | None, service_id: str) -> None:
        """Delete a service; quotes keep their snapshot of it."""
        service = await self.get_service(service_id)
        ensure_can_modify_service(caller, service, action="delete")

        with self.logger.operation("delete_service", service_id=service_id):
            await self.session.delete(service)
            await self.session.flush()

    @staticmethod
    def _build_tiers(tiers: list[dict[str, Any]]) -> list[ServiceTier]:
        return [
            ServiceTier(
                position=position,
                name=TierName(tier["name"]),
                description=tier["description"].strip(),
                base_price=float(tier["base_price"]),
                delivery_time_days=int(tier["delivery_time_days"]),
                revisions=int(tier.get("revisions", 0)),
                features=list(tier.get("features") or []),
            )
            for position, tier in enumerate(tiers)
        ]


def find_tier(service: Service, tier_name: str) -> ServiceTier:
    """Exact, case-sensitive tier resolution used when quoting."""
    tier = service.find_tier(tier_name)
    if tier is None:
        raise NotFoundError("Tier not found")
    return tier
