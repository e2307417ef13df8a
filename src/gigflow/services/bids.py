"""Bid submission and lookup."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from gigflow.domain.errors import Conflict, Forbidden, NotFound, ValidationError
from gigflow.domain.gigs import Bid, GigStatus
from gigflow.services.gigs import GigRepository, is_positive_amount

logger = logging.getLogger(__name__)

MIN_MESSAGE_LENGTH = 10


class BidRepository(Protocol):
    """Persistence interface for bids."""

    def create_bid(
        self, gig_id: UUID, freelancer_id: UUID, message: str, price: float
    ) -> Bid:
        """Create a pending bid and return it."""

    def get_bid(self, bid_id: UUID) -> Bid | None:
        """Return a bid by id, if present."""

    def list_bids_for_gig(self, gig_id: UUID) -> list[Bid]:
        """Return all bids for a gig, most recent first."""

    def hire_bid(self, gig_id: UUID, bid_id: UUID) -> bool:
        """Atomically assign the gig, hire the bid and reject other pending bids.

        Applies only while the gig is open and the bid pending. Returns false,
        with nothing changed, when either precondition no longer holds.
        """


@dataclass
class BidService:
    """Application service for bids."""

    repository: BidRepository
    gig_repository: GigRepository

    def create_bid(
        self, gig_id: UUID, freelancer_id: UUID, message: str, price: float
    ) -> Bid:
        """Validate and submit a bid on an open gig."""
        cleaned_message = (message or "").strip()
        if not cleaned_message:
            raise ValidationError("message", "Message is required")
        if len(cleaned_message) < MIN_MESSAGE_LENGTH:
            raise ValidationError(
                "message",
                f"Message must be at least {MIN_MESSAGE_LENGTH} characters",
            )
        if not is_positive_amount(price):
            raise ValidationError("price", "Price must be a positive number")

        gig = self.gig_repository.get_gig(gig_id)
        if gig is None:
            raise NotFound("Gig not found")
        if gig.status is not GigStatus.OPEN:
            raise Conflict("Gig is no longer accepting bids")
        if gig.owner_id == freelancer_id:
            raise Conflict("You cannot bid on your own gig")

        bid = self.repository.create_bid(
            gig_id=gig_id,
            freelancer_id=freelancer_id,
            message=cleaned_message,
            price=float(price),
        )
        logger.info(
            "Bid submitted", extra={"bid_id": str(bid.id), "gig_id": str(gig_id)}
        )
        return bid

    def get_bid(self, bid_id: UUID) -> Bid:
        """Return a bid or raise NotFound."""
        bid = self.repository.get_bid(bid_id)
        if bid is None:
            raise NotFound("Bid not found")
        return bid

    def list_bids(self, gig_id: UUID) -> list[Bid]:
        """Return all bids for a gig."""
        return self.repository.list_bids_for_gig(gig_id)

    def list_bids_for_owner(self, caller_id: UUID, gig_id: UUID) -> list[Bid]:
        """Return the bids on a gig, visible only to its owner."""
        gig = self.gig_repository.get_gig(gig_id)
        if gig is None:
            raise NotFound("Gig not found")
        if gig.owner_id != caller_id:
            raise Forbidden("Only the gig owner can view its bids")
        return self.list_bids(gig_id)
