"""Domain models for gigs, bids and their lifecycle.

Gig lifecycle::

    open --hire--> assigned --complete--> completed

Bid lifecycle::

    pending --hire--> hired
    pending --another bid hired--> rejected

Statuses never move backward. Writes happen only through the hiring
transition, so the tables below are the single place that says which moves
are legal.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class GigStatus(StrEnum):
    """Lifecycle states of a gig."""

    OPEN = "open"
    ASSIGNED = "assigned"
    COMPLETED = "completed"


class BidStatus(StrEnum):
    """Lifecycle states of a bid."""

    PENDING = "pending"
    HIRED = "hired"
    REJECTED = "rejected"


_GIG_TRANSITIONS: dict[GigStatus, frozenset[GigStatus]] = {
    GigStatus.OPEN: frozenset({GigStatus.ASSIGNED}),
    GigStatus.ASSIGNED: frozenset({GigStatus.COMPLETED}),
    GigStatus.COMPLETED: frozenset(),
}

_BID_TRANSITIONS: dict[BidStatus, frozenset[BidStatus]] = {
    BidStatus.PENDING: frozenset({BidStatus.HIRED, BidStatus.REJECTED}),
    BidStatus.HIRED: frozenset(),
    BidStatus.REJECTED: frozenset(),
}


def can_transition_gig(current: GigStatus, target: GigStatus) -> bool:
    """Return true when a gig may move from ``current`` to ``target``."""
    return target in _GIG_TRANSITIONS[current]


def can_transition_bid(current: BidStatus, target: BidStatus) -> bool:
    """Return true when a bid may move from ``current`` to ``target``."""
    return target in _BID_TRANSITIONS[current]


@dataclass(frozen=True)
class Gig:
    """A posted job owned by one user."""

    id: UUID
    title: str
    description: str
    budget: float
    owner_id: UUID
    status: GigStatus
    created_at: datetime


@dataclass(frozen=True)
class Bid:
    """A freelancer's proposal against a gig."""

    id: UUID
    gig_id: UUID
    freelancer_id: UUID
    message: str
    price: float
    status: BidStatus
    created_at: datetime
