"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from gigflow.adapters.bcrypt_password_hasher import BcryptPasswordHasher
from gigflow.adapters.supabase_bid_repository import SupabaseBidRepository
from gigflow.adapters.supabase_gig_repository import SupabaseGigRepository
from gigflow.adapters.supabase_user_repository import SupabaseUserRepository
from gigflow.config import Settings
from gigflow.services.bids import BidService
from gigflow.services.gigs import GigService
from gigflow.services.hiring import HiringService
from gigflow.services.locks import KeyedLocks
from gigflow.services.notifications import NotificationChannel
from gigflow.services.sessions import SessionManager
from gigflow.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    session_manager: SessionManager
    gig_service: GigService
    bid_service: BidService
    hiring_service: HiringService
    notification_channel: NotificationChannel
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    gig_repository = SupabaseGigRepository(supabase_client)
    bid_repository = SupabaseBidRepository(supabase_client)

    user_service = UserService(
        repository=user_repository,
        hasher=BcryptPasswordHasher(rounds=resolved_settings.bcrypt_rounds),
    )
    session_manager = SessionManager(
        user_service=user_service,
        secret=resolved_settings.session_secret,
        max_age_seconds=resolved_settings.session_max_age_seconds,
    )
    notification_channel = NotificationChannel()
    gig_service = GigService(gig_repository)
    bid_service = BidService(repository=bid_repository, gig_repository=gig_repository)
    hiring_service = HiringService(
        gig_repository=gig_repository,
        bid_repository=bid_repository,
        notifications=notification_channel,
        locks=KeyedLocks(),
        lock_timeout_seconds=resolved_settings.hire_lock_timeout_seconds,
    )

    async def close_resources() -> None:
        await notification_channel.close_all()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        session_manager=session_manager,
        gig_service=gig_service,
        bid_service=bid_service,
        hiring_service=hiring_service,
        notification_channel=notification_channel,
        close_resources=close_resources,
    )
