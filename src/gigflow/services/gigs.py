"""Gig posting and lookup."""

import logging
import math
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from gigflow.domain.errors import NotFound, ValidationError
from gigflow.domain.gigs import Gig, GigStatus

logger = logging.getLogger(__name__)

MIN_TITLE_LENGTH = 5
MIN_DESCRIPTION_LENGTH = 20


class GigRepository(Protocol):
    """Persistence interface for gigs."""

    def create_gig(
        self, owner_id: UUID, title: str, description: str, budget: float
    ) -> Gig:
        """Create an open gig and return it."""

    def get_gig(self, gig_id: UUID) -> Gig | None:
        """Return a gig by id, if present."""

    def list_gigs(self, query: str | None, status: GigStatus | None) -> list[Gig]:
        """Return gigs matching the filters, most recent first."""


@dataclass
class GigService:
    """Application service for gigs."""

    repository: GigRepository

    def create_gig(
        self, owner_id: UUID, title: str, description: str, budget: float
    ) -> Gig:
        """Validate and post a new gig owned by the caller."""
        cleaned_title = (title or "").strip()
        cleaned_description = (description or "").strip()
        if not cleaned_title:
            raise ValidationError("title", "Title is required")
        if len(cleaned_title) < MIN_TITLE_LENGTH:
            raise ValidationError(
                "title", f"Title must be at least {MIN_TITLE_LENGTH} characters"
            )
        if not cleaned_description:
            raise ValidationError("description", "Description is required")
        if len(cleaned_description) < MIN_DESCRIPTION_LENGTH:
            raise ValidationError(
                "description",
                f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters",
            )
        if not is_positive_amount(budget):
            raise ValidationError("budget", "Budget must be a positive number")

        gig = self.repository.create_gig(
            owner_id=owner_id,
            title=cleaned_title,
            description=cleaned_description,
            budget=float(budget),
        )
        logger.info(
            "Gig posted", extra={"gig_id": str(gig.id), "owner_id": str(owner_id)}
        )
        return gig

    def get_gig(self, gig_id: UUID) -> Gig:
        """Return a gig or raise NotFound."""
        gig = self.repository.get_gig(gig_id)
        if gig is None:
            raise NotFound("Gig not found")
        return gig

    def list_gigs(
        self, query: str | None = None, status: GigStatus | None = None
    ) -> list[Gig]:
        """Return gigs whose title contains the query."""
        cleaned = query.strip() if query else None
        return self.repository.list_gigs(cleaned or None, status)


def is_positive_amount(value: object) -> bool:
    """Return true for a finite number greater than zero."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value) and value > 0
