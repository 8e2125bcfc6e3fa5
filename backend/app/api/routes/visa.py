"""Visa requirement lookup endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from backend.app.api.deps import get_services
from backend.app.models.visa import VisaRequirement
from backend.app.services import AppServices

router = APIRouter(prefix="/api/visa", tags=["visa"])


@router.get("", response_model=VisaRequirement)
async def get_visa_requirement(
    services: Annotated[AppServices, Depends(get_services)],
    passport: Annotated[str, Query(min_length=1)],
    destination: Annotated[str, Query(min_length=1)],
) -> VisaRequirement:
    """Resolve the requirement for a passport and a destination city or country.

    Returns:
        The curated corridor, passport index or API answer, whichever is found first

    Raises:
        HTTPException: 404 when no source knows the corridor
    """
    requirement = await services.visa_service.lookup(passport, destination)
    if requirement is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No visa data for {passport} passport to {destination}",
        )
    return requirement
