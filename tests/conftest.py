"""Shared test fixtures."""

import threading
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from gigflow.config import Settings
from gigflow.containers import AppContainer
from gigflow.domain.gigs import Bid, BidStatus, Gig, GigStatus
from gigflow.domain.models import UserCredentials, UserRecord
from gigflow.domain.notifications import NotificationEvent
from gigflow.services.bids import BidRepository, BidService
from gigflow.services.gigs import GigRepository, GigService
from gigflow.services.hiring import HiringService
from gigflow.services.locks import KeyedLocks
from gigflow.services.notifications import NotificationChannel
from gigflow.services.sessions import SessionManager
from gigflow.services.users import PasswordHasher, UserRepository, UserService

_EPOCH = datetime(2024, 1, 1, tzinfo=UTC)


@dataclass
class _Clock:
    ticks: int = 0

    def now(self) -> datetime:
        self.ticks += 1
        return _EPOCH + timedelta(seconds=self.ticks)


@dataclass
class PlainPasswordHasher(PasswordHasher):
    """Reversible hasher for fast tests."""

    def hash(self, password: str) -> str:
        return f"plain:{password}"

    def verify(self, password: str, password_hash: str) -> bool:
        return password_hash == f"plain:{password}"


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserCredentials] = field(default_factory=dict)

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        credentials = self.users.get(user_id)
        return credentials.user if credentials else None

    def get_credentials(self, email: str) -> UserCredentials | None:
        for credentials in self.users.values():
            if credentials.user.email == email:
                return credentials
        return None

    def create_user(self, name: str, email: str, password_hash: str) -> UserRecord:
        user = UserRecord(id=uuid4(), name=name, email=email)
        self.users[user.id] = UserCredentials(user=user, password_hash=password_hash)
        return user


@dataclass
class InMemoryGigRepository(GigRepository):
    """In-memory gig repository for tests."""

    gigs: dict[UUID, Gig] = field(default_factory=dict)
    clock: _Clock = field(default_factory=_Clock)

    def create_gig(
        self, owner_id: UUID, title: str, description: str, budget: float
    ) -> Gig:
        gig = Gig(
            id=uuid4(),
            title=title,
            description=description,
            budget=budget,
            owner_id=owner_id,
            status=GigStatus.OPEN,
            created_at=self.clock.now(),
        )
        self.gigs[gig.id] = gig
        return gig

    def get_gig(self, gig_id: UUID) -> Gig | None:
        return self.gigs.get(gig_id)

    def list_gigs(self, query: str | None, status: GigStatus | None) -> list[Gig]:
        results = [
            gig
            for gig in self.gigs.values()
            if (query is None or query.lower() in gig.title.lower())
            and (status is None or gig.status is status)
        ]
        return sorted(results, key=lambda gig: gig.created_at, reverse=True)


@dataclass
class InMemoryBidRepository(BidRepository):
    """In-memory bid repository; hire_bid is atomic like the SQL function."""

    gig_repository: InMemoryGigRepository
    bids: dict[UUID, Bid] = field(default_factory=dict)
    clock: _Clock = field(default_factory=_Clock)
    hire_calls: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def create_bid(
        self, gig_id: UUID, freelancer_id: UUID, message: str, price: float
    ) -> Bid:
        bid = Bid(
            id=uuid4(),
            gig_id=gig_id,
            freelancer_id=freelancer_id,
            message=message,
            price=price,
            status=BidStatus.PENDING,
            created_at=self.clock.now(),
        )
        self.bids[bid.id] = bid
        return bid

    def get_bid(self, bid_id: UUID) -> Bid | None:
        return self.bids.get(bid_id)

    def list_bids_for_gig(self, gig_id: UUID) -> list[Bid]:
        results = [bid for bid in self.bids.values() if bid.gig_id == gig_id]
        return sorted(results, key=lambda bid: bid.created_at, reverse=True)

    def hire_bid(self, gig_id: UUID, bid_id: UUID) -> bool:
        with self._lock:
            self.hire_calls += 1
            gig = self.gig_repository.gigs.get(gig_id)
            bid = self.bids.get(bid_id)
            if gig is None or gig.status is not GigStatus.OPEN:
                return False
            if bid is None or bid.gig_id != gig_id or bid.status is not BidStatus.PENDING:
                return False
            self.gig_repository.gigs[gig_id] = replace(gig, status=GigStatus.ASSIGNED)
            for other in list(self.bids.values()):
                if other.gig_id != gig_id:
                    continue
                if other.id == bid_id:
                    self.bids[other.id] = replace(other, status=BidStatus.HIRED)
                elif other.status is BidStatus.PENDING:
                    self.bids[other.id] = replace(other, status=BidStatus.REJECTED)
            return True


@dataclass(eq=False)
class RecordingEndpoint:
    """Live endpoint that records pushed events."""

    events: list[NotificationEvent] = field(default_factory=list)
    closed: bool = False

    async def send_event(self, event: NotificationEvent) -> None:
        self.events.append(event)

    async def close(self) -> None:
        self.closed = True


@dataclass(eq=False)
class BrokenEndpoint(RecordingEndpoint):
    """Live endpoint whose connection has gone away."""

    async def send_event(self, event: NotificationEvent) -> None:
        raise ConnectionError("socket closed")


@dataclass
class Marketplace:
    """Services wired over in-memory repositories."""

    users: UserService
    gigs: GigService
    bids: BidService
    hiring: HiringService
    channel: NotificationChannel
    gig_repository: InMemoryGigRepository
    bid_repository: InMemoryBidRepository

    def register(self, name: str) -> UserRecord:
        return self.users.register(
            name=name, email=f"{name.lower()}@example.com", password="secret-pass"
        )

    def post_gig(self, owner: UserRecord, title: str = "Logo Design") -> Gig:
        return self.gigs.create_gig(
            owner_id=owner.id,
            title=title,
            description="Need a clean vector logo for a bakery.",
            budget=250.0,
        )

    def bid(self, gig: Gig, freelancer: UserRecord, price: float = 200.0) -> Bid:
        return self.bids.create_bid(
            gig_id=gig.id,
            freelancer_id=freelancer.id,
            message="I have ten years of logo experience.",
            price=price,
        )


def build_marketplace(lock_timeout_seconds: float = 2.0) -> Marketplace:
    gig_repository = InMemoryGigRepository()
    bid_repository = InMemoryBidRepository(gig_repository=gig_repository)
    channel = NotificationChannel()
    return Marketplace(
        users=UserService(InMemoryUserRepository(), PlainPasswordHasher()),
        gigs=GigService(gig_repository),
        bids=BidService(repository=bid_repository, gig_repository=gig_repository),
        hiring=HiringService(
            gig_repository=gig_repository,
            bid_repository=bid_repository,
            notifications=channel,
            locks=KeyedLocks(),
            lock_timeout_seconds=lock_timeout_seconds,
        ),
        channel=channel,
        gig_repository=gig_repository,
        bid_repository=bid_repository,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        session_secret="test-session-secret",
        environment="local",
    )


@pytest.fixture
def marketplace() -> Marketplace:
    return build_marketplace()


@pytest.fixture
def container(settings: Settings, marketplace: Marketplace) -> AppContainer:
    session_manager = SessionManager(
        user_service=marketplace.users,
        secret=settings.session_secret,
        max_age_seconds=settings.session_max_age_seconds,
    )

    async def close_resources() -> None:
        await marketplace.channel.close_all()

    return AppContainer(
        settings=settings,
        user_service=marketplace.users,
        session_manager=session_manager,
        gig_service=marketplace.gigs,
        bid_service=marketplace.bids,
        hiring_service=marketplace.hiring,
        notification_channel=marketplace.channel,
        close_resources=close_resources,
    )


def auth_headers(container: AppContainer, user: UserRecord) -> dict[str, str]:
    token = container.session_manager.issue(user)
    return {"Authorization": f"Bearer {token}"}
