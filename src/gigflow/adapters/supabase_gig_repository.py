"""Supabase-backed gig repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from gigflow.domain.gigs import Gig, GigStatus
from gigflow.services.gigs import GigRepository

_GIG_COLUMNS = "id, title, description, budget, owner_id, status, created_at"


@dataclass
class SupabaseGigRepository(GigRepository):
    """Supabase implementation for gigs."""

    client: Client

    def create_gig(
        self, owner_id: UUID, title: str, description: str, budget: float
    ) -> Gig:
        """Insert an open gig and return it."""
        response = (
            self.client.table("gigs")
            .insert(
                {
                    "owner_id": str(owner_id),
                    "title": title,
                    "description": description,
                    "budget": budget,
                    "status": GigStatus.OPEN.value,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create gig")
        return _to_gig(response.data[0])

    def get_gig(self, gig_id: UUID) -> Gig | None:
        """Return a gig by id, if present."""
        response = (
            self.client.table("gigs")
            .select(_GIG_COLUMNS)
            .eq("id", str(gig_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_gig(response.data[0])

    def list_gigs(self, query: str | None, status: GigStatus | None) -> list[Gig]:
        """Return gigs filtered by title substring and status."""
        request = self.client.table("gigs").select(_GIG_COLUMNS)
        if query:
            request = request.ilike("title", f"%{_escape_like(query)}%")
        if status is not None:
            request = request.eq("status", status.value)
        response = request.order("created_at", desc=True).execute()
        return [_to_gig(row) for row in response.data or []]


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _to_gig(row: dict[str, object]) -> Gig:
    return Gig(
        id=UUID(str(row["id"])),
        title=str(row["title"]),
        description=str(row["description"]),
        budget=float(row["budget"]),
        owner_id=UUID(str(row["owner_id"])),
        status=GigStatus(row["status"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
