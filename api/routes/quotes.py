"""
Quote API routes.

Creation and estimates are open to anonymous requests; everything else
requires a token and passes through the access policy.
"""

from fastapi import APIRouter, status

from api.dependencies import ClockDep, CurrentCallerDep, DatabaseDep, OptionalCallerDep
from models.quote import Quote, QuoteStatus
from schemas import (
    EstimateEnvelope, MessageResponse, QuoteCreate, QuoteEnvelope,
    QuoteEstimateRequest, QuoteEstimateResponse, QuoteListResponse,
    QuoteResponse, QuoteStatsResponse, QuoteStatusUpdate, StatsEnvelope,
)
from services.quote_service import QuoteService

router = APIRouter()


def _quote_out(service: QuoteService, quote: Quote) -> QuoteResponse:
    response = QuoteResponse.model_validate(quote)
    response.is_expired = service.is_expired(quote)
    return response


@router.post("", response_model=QuoteEnvelope, status_code=status.HTTP_201_CREATED)
async def create_quote(
    body: QuoteCreate,
    caller: OptionalCallerDep,
    db: DatabaseDep,
    clock: ClockDep,
):
    """
    Request a quote for one tier of a service.

    The price is fixed at creation from the tier base price, the client
    country multiplier and the complexity multiplier.
    """
    service = QuoteService(db, clock=clock)
    quote = await service.create_quote(caller, body.model_dump())
    return QuoteEnvelope(quote=_quote_out(service, quote))


@router.post("/estimate", response_model=EstimateEnvelope)
async def estimate_quote(body: QuoteEstimateRequest, db: DatabaseDep):
    """Price a tier without creating a quote."""
    estimate = await QuoteService(db).estimate(
        service_id=body.service_id,
        client_country=body.client_country,
        selected_tier=body.selected_tier,
        complexity=body.complexity,
    )
    breakdown = estimate.breakdown

    return EstimateEnvelope(
        estimate=QuoteEstimateResponse(
            service_id=estimate.service.id,
            service_name=estimate.service.name,
            selected_tier=estimate.tier.name,
            client_country=estimate.country.name,
            currency=estimate.country.currency,
            currency_code=estimate.country.currency_code,
            complexity=estimate.complexity,
            base_price=breakdown.base_price,
            country_multiplier=breakdown.country_multiplier,
            complexity_multiplier=breakdown.complexity_multiplier,
            adjusted_price=breakdown.adjusted_price,
            delivery_time_days=estimate.tier.delivery_time_days,
        )
    )


@router.get("", response_model=QuoteListResponse)
async def list_quotes(
    caller: CurrentCallerDep,
    db: DatabaseDep,
    clock: ClockDep,
    status: QuoteStatus | None = None,
):
    """
    List quotes visible to the current user.

    Admins see every quote, freelancers and agencies the quotes they
    received, clients the quotes they requested.
    """
    service = QuoteService(db, clock=clock)
    quotes = await service.list_quotes(caller, status=status)
    return QuoteListResponse(
        quotes=[_quote_out(service, q) for q in quotes],
        count=len(quotes),
    )


@router.get("/stats", response_model=StatsEnvelope)
async def quote_stats(caller: CurrentCallerDep, db: DatabaseDep):
    """Counts by status and completed revenue for the current user's quotes."""
    stats = await QuoteService(db).quote_stats(caller)
    return StatsEnvelope(
        stats=QuoteStatsResponse(
            total=stats.total,
            pending=stats.by_status[QuoteStatus.PENDING],
            accepted=stats.by_status[QuoteStatus.ACCEPTED],
            rejected=stats.by_status[QuoteStatus.REJECTED],
            completed=stats.by_status[QuoteStatus.COMPLETED],
            revenue=stats.revenue,
        )
    )


@router.get("/{quote_id}", response_model=QuoteEnvelope)
async def get_quote(
    quote_id: str,
    caller: CurrentCallerDep,
    db: DatabaseDep,
    clock: ClockDep,
):
    service = QuoteService(db, clock=clock)
    quote = await service.get_quote(caller, quote_id)
    return QuoteEnvelope(quote=_quote_out(service, quote))


@router.patch("/{quote_id}/status", response_model=QuoteEnvelope)
async def update_quote_status(
    quote_id: str,
    body: QuoteStatusUpdate,
    caller: CurrentCallerDep,
    db: DatabaseDep,
    clock: ClockDep,
):
    """Move a quote along pending -> accepted/rejected -> completed."""
    service = QuoteService(db, clock=clock)
    quote = await service.update_status(caller, quote_id, body.status)
    return QuoteEnvelope(quote=_quote_out(service, quote))


@router.delete("/{quote_id}", response_model=MessageResponse)
async def delete_quote(quote_id: str, caller: CurrentCallerDep, db: DatabaseDep):
    await QuoteService(db).delete_quote(caller, quote_id)
    return MessageResponse(message="Quote deleted successfully")
