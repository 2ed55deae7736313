"""
Pydantic schemas for API request/response validation.

Structural checks only (types, required fields, lengths, enumerations);
business invariants live in the service layer. Field names travel as
camelCase on the wire and snake_case in Python.
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints
from pydantic.alias_generators import to_camel

from models.catalog import TierName
from models.quote import Complexity, QuoteStatus
from models.user import UserRole

ShortText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
LongText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=1000)]
CountryCode = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=2)]
CurrencyCode = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=3)]


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Plain confirmation or error message."""
    message: str


# Auth schemas
class RegisterRequest(CamelModel):
    """User registration request."""
    name: ShortText
    email: EmailStr
    password: str = Field(min_length=1)
    role: UserRole = UserRole.CLIENT
    country: ShortText
    company: ShortText | None = None


class LoginRequest(CamelModel):
    """Login request."""
    email: EmailStr
    password: str = Field(min_length=1)


class UserResponse(CamelModel):
    """User information response."""
    id: str
    name: str
    email: str
    role: UserRole
    country: str
    company: str | None = None
    is_active: bool
    created_at: datetime


class AuthResponse(CamelModel):
    user: UserResponse
    token: str


class UserEnvelope(CamelModel):
    user: UserResponse


# Country schemas
class CountryCreate(CamelModel):
    """Country registry entry."""
    name: ShortText
    code: CountryCode
    region: ShortText
    currency: ShortText
    currency_code: CurrencyCode
    multiplier: float = 1.0


class CountryUpdate(CamelModel):
    """Partial country update."""
    name: ShortText | None = None
    code: CountryCode | None = None
    region: ShortText | None = None
    currency: ShortText | None = None
    currency_code: CurrencyCode | None = None
    multiplier: float | None = None


class CountryResponse(CamelModel):
    id: str
    name: str
    code: str
    region: str
    currency: str
    currency_code: str
    multiplier: float
    created_at: datetime
    updated_at: datetime


class CountryEnvelope(CamelModel):
    country: CountryResponse


class CountryListResponse(CamelModel):
    countries: list[CountryResponse]
    count: int


# Service catalog schemas
class ServiceTierIn(CamelModel):
    """One priced tier of a service."""
    name: TierName
    description: LongText
    base_price: float
    delivery_time_days: int
    revisions: int = 0
    features: list[str] = Field(default_factory=list)


class ServiceCreate(CamelModel):
    """Service creation request."""
    name: ShortText
    category: ShortText
    description: LongText
    tiers: list[ServiceTierIn]
    is_active: bool = True


class ServiceUpdate(CamelModel):
    """Partial service update; a tier list replaces the existing tiers."""
    name: ShortText | None = None
    category: ShortText | None = None
    description: LongText | None = None
    tiers: list[ServiceTierIn] | None = None
    is_active: bool | None = None


class ServiceTierResponse(CamelModel):
    name: TierName
    description: str
    base_price: float
    delivery_time_days: int
    revisions: int
    features: list[str]


class ServiceOwner(CamelModel):
    """Public profile of the provider behind a service."""
    id: str
    name: str
    email: str
    role: UserRole


class ServiceResponse(CamelModel):
    """Service with its tiers."""
    id: str
    name: str
    category: str
    description: str
    owner_id: str
    owner: ServiceOwner | None = None
    tiers: list[ServiceTierResponse]
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ServiceEnvelope(CamelModel):
    service: ServiceResponse


class ServiceListResponse(CamelModel):
    services: list[ServiceResponse]
    count: int


# Quote schemas
class QuoteEstimateRequest(CamelModel):
    """Inputs needed to price a quote."""
    service_id: str = Field(min_length=1)
    client_country: ShortText
    selected_tier: ShortText
    complexity: Complexity


class QuoteCreate(QuoteEstimateRequest):
    """Quote creation request."""
    client_name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
    client_email: EmailStr
    description: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=5000)]


class QuoteStatusUpdate(CamelModel):
    status: QuoteStatus


class QuoteResponse(CamelModel):
    """Quote with its frozen pricing snapshot."""
    id: str
    client_id: str | None = None
    provider_id: str | None = None
    service_id: str
    client_name: str
    client_email: str
    client_country: str
    service_name: str
    service_category: str
    selected_tier: TierName
    complexity: Complexity
    base_price: float
    adjusted_price: float
    country_multiplier: float
    delivery_time_days: int
    description: str
    status: QuoteStatus
    created_at: datetime
    updated_at: datetime
    expires_at: datetime
    is_expired: bool = False


class QuoteEnvelope(CamelModel):
    quote: QuoteResponse


class QuoteListResponse(CamelModel):
    quotes: list[QuoteResponse]
    count: int


class QuoteEstimateResponse(CamelModel):
    """Price preview; nothing is stored."""
    service_id: str
    service_name: str
    selected_tier: TierName
    client_country: str
    currency: str
    currency_code: str
    complexity: Complexity
    base_price: float
    country_multiplier: float
    complexity_multiplier: float
    adjusted_price: float
    delivery_time_days: int


class EstimateEnvelope(CamelModel):
    estimate: QuoteEstimateResponse


class QuoteStatsResponse(CamelModel):
    """Dashboard counts and completed revenue."""
    total: int
    pending: int
    accepted: int
    rejected: int
    completed: int
    revenue: float


class StatsEnvelope(CamelModel):
    stats: QuoteStatsResponse
