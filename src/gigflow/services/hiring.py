"""Hiring coordinator: the gig/bid state machine."""

import asyncio
import logging
from dataclasses import dataclass, field
from uuid import UUID

from gigflow.domain.errors import (
    Conflict,
    Forbidden,
    InvariantViolation,
    NotFound,
    Unavailable,
)
from gigflow.domain.gigs import (
    Bid,
    BidStatus,
    Gig,
    GigStatus,
    can_transition_bid,
    can_transition_gig,
)
from gigflow.domain.notifications import hired_event
from gigflow.services.bids import BidRepository
from gigflow.services.gigs import GigRepository
from gigflow.services.locks import KeyedLocks
from gigflow.services.notifications import NotificationChannel

logger = logging.getLogger(__name__)


@dataclass
class HiringService:
    """Selects the winning bid for a gig exactly once.

    Hire attempts for the same gig run one at a time under a per-gig lock;
    a caller that cannot get the lock within ``lock_timeout_seconds`` fails
    with Unavailable instead of queueing. The store's ``hire_bid`` is the
    final compare-and-swap, so a writer in another process still cannot
    produce a second hire.
    """

    gig_repository: GigRepository
    bid_repository: BidRepository
    notifications: NotificationChannel
    locks: KeyedLocks = field(default_factory=KeyedLocks)
    lock_timeout_seconds: float = 2.0

    async def hire(self, caller_id: UUID, bid_id: UUID) -> Bid:
        """Hire a bid on behalf of the gig owner and notify the freelancer."""
        gig = await asyncio.to_thread(self._gig_for_bid, bid_id)
        if gig.owner_id != caller_id:
            raise Forbidden("Only the gig owner can hire")

        try:
            async with self.locks.hold(gig.id, timeout=self.lock_timeout_seconds):
                hired, gig = await asyncio.to_thread(
                    self._commit_hire, bid_id, gig.id
                )
        except Unavailable:
            logger.warning(
                "Timed out waiting for hire lock",
                extra={"gig_id": str(gig.id), "bid_id": str(bid_id)},
            )
            raise

        logger.info(
            "Bid hired",
            extra={
                "gig_id": str(gig.id),
                "bid_id": str(hired.id),
                "freelancer_id": str(hired.freelancer_id),
            },
        )
        await self.notifications.publish(hired.freelancer_id, hired_event(gig.title))
        return hired

    def _gig_for_bid(self, bid_id: UUID) -> Gig:
        return self._require_gig_for(self._require_bid(bid_id))

    def _commit_hire(self, bid_id: UUID, gig_id: UUID) -> tuple[Bid, Gig]:
        # Re-read under the lock; an earlier holder may have hired already.
        bid = self._require_bid(bid_id)
        gig = self._require_gig_for(bid)
        if gig.id != gig_id:
            raise InvariantViolation(f"Bid {bid_id} moved between gigs")
        if not can_transition_gig(gig.status, GigStatus.ASSIGNED):
            raise Conflict("Gig is no longer open")
        if not can_transition_bid(bid.status, BidStatus.HIRED):
            raise Conflict("Bid is no longer pending")

        if not self.bid_repository.hire_bid(gig.id, bid.id):
            logger.info(
                "Hire lost to a concurrent writer",
                extra={"gig_id": str(gig.id), "bid_id": str(bid.id)},
            )
            raise Conflict("Gig is no longer open")

        hired = self._require_bid(bid_id)
        if hired.status is not BidStatus.HIRED:
            raise InvariantViolation(f"Bid {bid_id} not hired after commit")
        return hired, gig

    def _require_bid(self, bid_id: UUID) -> Bid:
        bid = self.bid_repository.get_bid(bid_id)
        if bid is None:
            raise NotFound("Bid not found")
        return bid

    def _require_gig_for(self, bid: Bid) -> Gig:
        gig = self.gig_repository.get_gig(bid.gig_id)
        if gig is None:
            logger.error(
                "Bid references a missing gig",
                extra={"bid_id": str(bid.id), "gig_id": str(bid.gig_id)},
            )
            raise InvariantViolation(f"Gig {bid.gig_id} for bid {bid.id} is missing")
        return gig
