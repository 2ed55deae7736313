"""
Quote management service.

Handles quote creation, status changes and scoped lookups.
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from models.catalog import Service, ServiceTier
from models.country import Country
from models.quote import Complexity, Quote, QuoteStatus
from services.access_policy import (
    Caller, QuoteScope, ensure_can_delete_quote, ensure_can_update_quote,
    ensure_can_view_quote, quote_client_id, quote_list_scope,
)
from services.catalog_service import CatalogService, find_tier
from services.country_service import CountryService
from services.exceptions import NotFoundError
from services.pricing import PriceBreakdown, price_breakdown
from services.quote_lifecycle import compute_expiry, ensure_transition
from utils.clock import Clock, utcnow
from utils.logging import ServiceLogger


@dataclass
class QuoteEstimate:
    """Price preview for a tier, destination and complexity."""
    service: Service
    country: Country
    tier: ServiceTier
    complexity: Complexity
    breakdown: PriceBreakdown


@dataclass
class QuoteStats:
    """Per-status counts and completed revenue within a caller's scope."""
    total: int
    by_status: dict[QuoteStatus, int]
    revenue: float


class QuoteService:
    """
    Service for managing quotes.

    Provides:
    - Price estimates and quote creation with frozen pricing snapshots
    - Role-scoped listing and statistics
    - Status transitions and deletion behind the access policy
    """

    def __init__(
        self,
        session: AsyncSession,
        clock: Clock = utcnow,
        validity_days: int | None = None,
        enforce_transitions: bool | None = None,
    ):
        self.session = session
        self.clock = clock
        self.validity_days = (
            validity_days if validity_days is not None else settings.quotes.validity_days
        )
        self.enforce_transitions = (
            enforce_transitions if enforce_transitions is not None
            else settings.quotes.enforce_transitions
        )
        self.logger = ServiceLogger("quote")
        self.catalog = CatalogService(session)
        self.countries = CountryService(session)

    async def estimate(
        self,
        service_id: str,
        client_country: str,
        selected_tier: str,
        complexity: Complexity,
    ) -> QuoteEstimate:
        """
        Resolve service, country and tier, then price them.

        Resolution order is service, country, tier; the first missing
        record raises NotFoundError.
        """
        service = await self.catalog.get_service(service_id)
        country = await self.countries.get_by_name(client_country)
        tier = find_tier(service, selected_tier)

        breakdown = price_breakdown(tier.base_price, country.multiplier, complexity)
        return QuoteEstimate(
            service=service,
            country=country,
            tier=tier,
            complexity=Complexity(complexity),
            breakdown=breakdown,
        )

    async def create_quote(self, caller: Caller | None, data: dict[str, Any]) -> Quote:
        """
        Create a quote.

        Args:
            caller: Requesting user, or None for anonymous requests
            data: service_id, client_name, client_email, client_country,
                selected_tier, complexity, description

        Returns:
            Created Quote in pending status
        """
        client_id = quote_client_id(caller)

        with self.logger.operation(
            "create_quote",
            service_id=data["service_id"],
            client_id=client_id,
        ) as details:
            estimate = await self.estimate(
                service_id=data["service_id"],
                client_country=data["client_country"],
                selected_tier=data["selected_tier"],
                complexity=data["complexity"],
            )
            service, country, tier = estimate.service, estimate.country, estimate.tier

            now = self.clock()
            quote = Quote(
                client_id=client_id,
                provider_id=service.owner_id,
                service_id=service.id,
                client_name=data["client_name"].strip(),
                client_email=data["client_email"].strip().lower(),
                client_country=country.name,
                service_name=service.name,
                service_category=service.category,
                selected_tier=tier.name,
                complexity=estimate.complexity,
                base_price=tier.base_price,
                adjusted_price=estimate.breakdown.adjusted_price,
                country_multiplier=country.multiplier,
                delivery_time_days=tier.delivery_time_days,
                description=data["description"].strip(),
                status=QuoteStatus.PENDING,
                created_at=now,
                updated_at=now,
                expires_at=compute_expiry(now, self.validity_days),
            )

            self.session.add(quote)
            await self.session.flush()

            details.update(quote_id=quote.id, adjusted_price=quote.adjusted_price)

        return quote

    async def list_quotes(
        self,
        caller: Caller | None,
        status: QuoteStatus | None = None,
    ) -> list[Quote]:
        """Quotes visible to the caller, newest first."""
        scope = quote_list_scope(caller)
        query = self._scoped(select(Quote), scope).order_by(Quote.created_at.desc())
        if status:
            query = query.where(Quote.status == status)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def quote_stats(self, caller: Caller | None) -> QuoteStats:
        """Dashboard figures for the caller's quotes."""
        scope = quote_list_scope(caller)

        count_query = self._scoped(
            select(Quote.status, func.count(Quote.id)), scope
        ).group_by(Quote.status)
        rows = (await self.session.execute(count_query)).all()
        by_status = {status: 0 for status in QuoteStatus}
        for status, count in rows:
            by_status[QuoteStatus(status)] = count

        revenue_query = self._scoped(
            select(func.coalesce(func.sum(Quote.adjusted_price), 0.0)), scope
        ).where(Quote.status == QuoteStatus.COMPLETED)
        revenue = await self.session.scalar(revenue_query)

        return QuoteStats(
            total=sum(by_status.values()),
            by_status=by_status,
            revenue=float(revenue or 0.0),
        )

    async def get_quote(self, caller: Caller | None, quote_id: str) -> Quote:
        quote = await self._get(quote_id)
        ensure_can_view_quote(caller, quote)
        return quote

    async def update_status(
        self,
        caller: Caller | None,
        quote_id: str,
        status: QuoteStatus,
    ) -> Quote:
        """
        Move a quote to a new status.

        Args:
            caller: Acting user, must be admin or the quote's provider
            quote_id: Quote to update
            status: Requested status

        Returns:
            Updated Quote
        """
        quote = await self._get(quote_id)
        ensure_can_update_quote(caller, quote)

        with self.logger.operation(
            "update_quote_status",
            quote_id=quote.id,
            from_status=quote.status.value,
            to_status=status.value,
            user_id=caller.id,
        ):
            ensure_transition(quote.status, status, enforce=self.enforce_transitions)
            quote.status = status
            quote.updated_at = self.clock()
            await self.session.flush()

        return quote

    async def delete_quote(self, caller: Caller | None, quote_id: str) -> None:
        quote = await self._get(quote_id)
        ensure_can_delete_quote(caller, quote)

        with self.logger.operation("delete_quote", quote_id=quote_id, user_id=caller.id):
            await self.session.delete(quote)
            await self.session.flush()

    def is_expired(self, quote: Quote) -> bool:
        return quote.has_expired(self.clock())

    async def _get(self, quote_id: str) -> Quote:
        quote = await self.session.get(Quote, quote_id)
        if not quote:
            raise NotFoundError("Quote not found")
        return quote

    @staticmethod
    def _scoped(query, scope: QuoteScope):
        if scope.field is None:
            return query
        return query.where(getattr(Quote, scope.field) == scope.value)
