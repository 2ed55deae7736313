"""
Service catalog API routes.
"""

from fastapi import APIRouter, status

from api.dependencies import CurrentCallerDep, DatabaseDep
from schemas import (
    MessageResponse, ServiceCreate, ServiceEnvelope, ServiceListResponse,
    ServiceResponse, ServiceUpdate,
)
from services.catalog_service import CatalogService

router = APIRouter()


def _listing(services) -> ServiceListResponse:
    return ServiceListResponse(
        services=[ServiceResponse.model_validate(s) for s in services],
        count=len(services),
    )


@router.get("", response_model=ServiceListResponse)
async def list_services(db: DatabaseDep, category: str | None = None):
    """List services, newest first, optionally filtered by category."""
    services = await CatalogService(db).list_services(category=category)
    return _listing(services)


# Declared before /{service_id} so "user" is not read as an id
@router.get("/user/me", response_model=ServiceListResponse)
async def list_my_services(caller: CurrentCallerDep, db: DatabaseDep):
    """List the services owned by the current user."""
    services = await CatalogService(db).list_owned_services(caller)
    return _listing(services)


@router.get("/{service_id}", response_model=ServiceEnvelope)
async def get_service(service_id: str, db: DatabaseDep):
    service = await CatalogService(db).get_service(service_id)
    return ServiceEnvelope(service=ServiceResponse.model_validate(service))


@router.post("", response_model=ServiceEnvelope, status_code=status.HTTP_201_CREATED)
async def create_service(body: ServiceCreate, caller: CurrentCallerDep, db: DatabaseDep):
    """
    Publish a service.

    Only freelancers and agencies may create services. At least one tier
    is required and tier names must be unique.
    """
    service = await CatalogService(db).create_service(caller, body.model_dump())
    return ServiceEnvelope(service=ServiceResponse.model_validate(service))


@router.put("/{service_id}", response_model=ServiceEnvelope)
async def update_service(
    service_id: str,
    body: ServiceUpdate,
    caller: CurrentCallerDep,
    db: DatabaseDep,
):
    """Update a service; a tiers list replaces every existing tier."""
    service = await CatalogService(db).update_service(
        caller,
        service_id,
        body.model_dump(exclude_unset=True),
    )
    return ServiceEnvelope(service=ServiceResponse.model_validate(service))


@router.delete("/{service_id}", response_model=MessageResponse)
async def delete_service(service_id: str, caller: CurrentCallerDep, db: DatabaseDep):
    await CatalogService(db).delete_service(caller, service_id)
    return MessageResponse(message="Service deleted successfully")
