"""Supabase-backed bid repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from gigflow.domain.gigs import Bid, BidStatus
from gigflow.services.bids import BidRepository

_BID_COLUMNS = "id, gig_id, freelancer_id, message, price, status, created_at"


@dataclass
class SupabaseBidRepository(BidRepository):
    """Supabase implementation for bids."""

    client: Client

    def create_bid(
        self, gig_id: UUID, freelancer_id: UUID, message: str, price: float
    ) -> Bid:
        """Insert a pending bid and return it."""
        response = (
            self.client.table("bids")
            .insert(
                {
                    "gig_id": str(gig_id),
                    "freelancer_id": str(freelancer_id),
                    "message": message,
                    "price": price,
                    "status": BidStatus.PENDING.value,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create bid")
        return _to_bid(response.data[0])

    def get_bid(self, bid_id: UUID) -> Bid | None:
        """Return a bid by id, if present."""
        response = (
            self.client.table("bids")
            .select(_BID_COLUMNS)
            .eq("id", str(bid_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_bid(response.data[0])

    def list_bids_for_gig(self, gig_id: UUID) -> list[Bid]:
        """Return bids for a gig, most recent first."""
        response = (
            self.client.table("bids")
            .select(_BID_COLUMNS)
            .eq("gig_id", str(gig_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_to_bid(row) for row in response.data or []]

    def hire_bid(self, gig_id: UUID, bid_id: UUID) -> bool:
        """Run the hire transition in one database transaction."""
        response = self.client.rpc(
            "hire_bid", {"p_gig_id": str(gig_id), "p_bid_id": str(bid_id)}
        ).execute()
        return response.data is True


def _to_bid(row: dict[str, object]) -> Bid:
    return Bid(
        id=UUID(str(row["id"])),
        gig_id=UUID(str(row["gig_id"])),
        freelancer_id=UUID(str(row["freelancer_id"])),
        message=str(row["message"]),
        price=float(row["price"]),
        status=BidStatus(row["status"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
