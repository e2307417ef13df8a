"""Wire models for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from gigflow.domain.gigs import Bid, BidStatus, Gig, GigStatus
from gigflow.domain.models import UserRecord


class ApiModel(BaseModel):
    """Base model using camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(ApiModel):
    name: str = ""
    email: str = ""
    password: str = ""


class LoginRequest(ApiModel):
    email: str = ""
    password: str = ""


class CreateGigRequest(ApiModel):
    title: str = ""
    description: str = ""
    budget: float | None = None


class CreateBidRequest(ApiModel):
    gig_id: UUID
    message: str = ""
    price: float | None = None


class UserResponse(ApiModel):
    id: UUID
    name: str
    email: str

    @classmethod
    def from_domain(cls, user: UserRecord) -> "UserResponse":
        return cls(id=user.id, name=user.name, email=user.email)


class AuthResponse(ApiModel):
    user: UserResponse
    token: str | None = None


class GigResponse(ApiModel):
    id: UUID
    title: str
    description: str
    budget: float
    owner_id: UUID
    status: GigStatus
    created_at: datetime

    @classmethod
    def from_domain(cls, gig: Gig) -> "GigResponse":
        return cls(
            id=gig.id,
            title=gig.title,
            description=gig.description,
            budget=gig.budget,
            owner_id=gig.owner_id,
            status=gig.status,
            created_at=gig.created_at,
        )


class BidResponse(ApiModel):
    id: UUID
    gig_id: UUID
    freelancer_id: UUID
    message: str
    price: float
    status: BidStatus
    created_at: datetime

    @classmethod
    def from_domain(cls, bid: Bid) -> "BidResponse":
        return cls(
            id=bid.id,
            gig_id=bid.gig_id,
            freelancer_id=bid.freelancer_id,
            message=bid.message,
            price=bid.price,
            status=bid.status,
            created_at=bid.created_at,
        )
