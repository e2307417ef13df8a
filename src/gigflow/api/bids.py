"""Bid and hiring endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from gigflow.api.dependencies import get_container, require_user
from gigflow.api.schemas import BidResponse, CreateBidRequest
from gigflow.containers import AppContainer
from gigflow.domain.models import UserRecord

router = APIRouter(prefix="/bids", tags=["bids"])


@router.post("", response_model=BidResponse, status_code=status.HTTP_201_CREATED)
async def create_bid(
    payload: CreateBidRequest,
    user: UserRecord = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> BidResponse:
    """Submit a bid on an open gig."""
    bid = container.bid_service.create_bid(
        gig_id=payload.gig_id,
        freelancer_id=user.id,
        message=payload.message,
        price=payload.price,
    )
    return BidResponse.from_domain(bid)


@router.get("/{gig_id}", response_model=list[BidResponse])
async def list_bids(
    gig_id: UUID,
    user: UserRecord = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> list[BidResponse]:
    """Return the bids on a gig to its owner."""
    bids = container.bid_service.list_bids_for_owner(user.id, gig_id)
    return [BidResponse.from_domain(bid) for bid in bids]


@router.patch("/{bid_id}/hire", response_model=BidResponse)
async def hire_bid(
    bid_id: UUID,
    user: UserRecord = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> BidResponse:
    """Hire the freelancer behind a bid."""
    bid = await container.hiring_service.hire(caller_id=user.id, bid_id=bid_id)
    return BidResponse.from_domain(bid)
