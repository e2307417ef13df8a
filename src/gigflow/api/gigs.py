"""Gig endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from gigflow.api.dependencies import get_container, require_user
from gigflow.api.schemas import CreateGigRequest, GigResponse
from gigflow.containers import AppContainer
from gigflow.domain.gigs import GigStatus
from gigflow.domain.models import UserRecord

router = APIRouter(prefix="/gigs", tags=["gigs"])


@router.post("", response_model=GigResponse, status_code=status.HTTP_201_CREATED)
async def create_gig(
    payload: CreateGigRequest,
    user: UserRecord = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> GigResponse:
    """Post a new gig owned by the caller."""
    gig = container.gig_service.create_gig(
        owner_id=user.id,
        title=payload.title,
        description=payload.description,
        budget=payload.budget,
    )
    return GigResponse.from_domain(gig)


@router.get("", response_model=list[GigResponse])
async def list_gigs(
    q: str | None = None,
    status_filter: GigStatus | None = Query(default=None, alias="status"),
    container: AppContainer = Depends(get_container),
) -> list[GigResponse]:
    """List gigs, optionally filtered by title and status."""
    gigs = container.gig_service.list_gigs(query=q, status=status_filter)
    return [GigResponse.from_domain(gig) for gig in gigs]


@router.get("/{gig_id}", response_model=GigResponse)
async def get_gig(
    gig_id: UUID, container: AppContainer = Depends(get_container)
) -> GigResponse:
    """Return a single gig."""
    return GigResponse.from_domain(container.gig_service.get_gig(gig_id))
