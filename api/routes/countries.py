"""
Country registry API routes.

Reads are public; mutations require an admin token.
"""

from fastapi import APIRouter, status

from api.dependencies import CurrentCallerDep, DatabaseDep
from schemas import (
    CountryCreate, CountryEnvelope, CountryListResponse, CountryResponse,
    CountryUpdate, MessageResponse,
)
from services.country_service import CountryService

router = APIRouter()


@router.get("", response_model=CountryListResponse)
async def list_countries(db: DatabaseDep):
    """List all countries ordered by name."""
    countries = await CountryService(db).list_countries()
    return CountryListResponse(
        countries=[CountryResponse.model_validate(c) for c in countries],
        count=len(countries),
    )


@router.get("/{country_id}", response_model=CountryEnvelope)
async def get_country(country_id: str, db: DatabaseDep):
    country = await CountryService(db).get_country(country_id)
    return CountryEnvelope(country=CountryResponse.model_validate(country))


@router.post("", response_model=CountryEnvelope, status_code=status.HTTP_201_CREATED)
async def create_country(body: CountryCreate, caller: CurrentCallerDep, db: DatabaseDep):
    """Add a country to the registry."""
    country = await CountryService(db).create_country(caller, body.model_dump())
    return CountryEnvelope(country=CountryResponse.model_validate(country))


@router.put("/{country_id}", response_model=CountryEnvelope)
async def update_country(
    country_id: str,
    body: CountryUpdate,
    caller: CurrentCallerDep,
    db: DatabaseDep,
):
    """Update a country; omitted fields are left unchanged."""
    country = await CountryService(db).update_country(
        caller,
        country_id,
        body.model_dump(exclude_unset=True),
    )
    return CountryEnvelope(country=CountryResponse.model_validate(country))


@router.delete("/{country_id}", response_model=MessageResponse)
async def delete_country(country_id: str, caller: CurrentCallerDep, db: DatabaseDep):
    await CountryService(db).delete_country(caller, country_id)
    return MessageResponse(message="Country deleted successfully")
