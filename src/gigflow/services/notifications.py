"""Per-user registry of live endpoints and best-effort event delivery."""

import logging
import threading
from typing import Protocol
from uuid import UUID

from gigflow.domain.notifications import NotificationEvent

logger = logging.getLogger(__name__)


class LiveEndpoint(Protocol):
    """An open real-time connection that can receive pushed events."""

    async def send_event(self, event: NotificationEvent) -> None:
        """Deliver an event over the connection."""

    async def close(self) -> None:
        """Close the connection."""


class NotificationChannel:
    """Routes events to every live endpoint registered for a user.

    Delivery is best effort: events for users without endpoints are dropped
    and nothing is queued. The registry lock only guards dict mutation, so
    sends never happen while it is held.
    """

    def __init__(self) -> None:
        self._endpoints: dict[UUID, set[LiveEndpoint]] = {}
        self._owners: dict[LiveEndpoint, UUID] = {}
        self._lock = threading.Lock()

    def register(self, user_id: UUID, endpoint: LiveEndpoint) -> None:
        """Attach a live endpoint to a user."""
        with self._lock:
            previous = self._owners.get(endpoint)
            if previous is not None and previous != user_id:
                self._discard(previous, endpoint)
            self._owners[endpoint] = user_id
            self._endpoints.setdefault(user_id, set()).add(endpoint)
        logger.info("Live endpoint registered", extra={"user_id": str(user_id)})

    def unregister(self, endpoint: LiveEndpoint) -> None:
        """Detach an endpoint. Unknown endpoints are ignored."""
        with self._lock:
            user_id = self._owners.pop(endpoint, None)
            if user_id is None:
                return
            self._discard(user_id, endpoint)
        logger.info("Live endpoint unregistered", extra={"user_id": str(user_id)})

    def connected(self, user_id: UUID) -> int:
        """Return how many live endpoints a user currently has."""
        with self._lock:
            return len(self._endpoints.get(user_id, ()))

    async def publish(self, user_id: UUID, event: NotificationEvent) -> int:
        """Send the event to all of the user's endpoints; return deliveries."""
        with self._lock:
            targets = list(self._endpoints.get(user_id, ()))
        if not targets:
            logger.info(
                "No live endpoint, notification dropped",
                extra={"user_id": str(user_id), "event": event.name},
            )
            return 0

        delivered = 0
        for endpoint in targets:
            try:
                await endpoint.send_event(event)
            except Exception:
                logger.warning(
                    "Dropping stale live endpoint",
                    exc_info=True,
                    extra={"user_id": str(user_id), "event": event.name},
                )
                self.unregister(endpoint)
            else:
                delivered += 1
        return delivered

    async def close_all(self) -> None:
        """Close and forget every registered endpoint."""
        with self._lock:
            endpoints = list(self._owners)
            self._owners.clear()
            self._endpoints.clear()
        for endpoint in endpoints:
            try:
                await endpoint.close()
            except Exception:
                logger.warning("Failed to close live endpoint", exc_info=True)

    def _discard(self, user_id: UUID, endpoint: LiveEndpoint) -> None:
        bucket = self._endpoints.get(user_id)
        if bucket is None:
            return
        bucket.discard(endpoint)
        if not bucket:
            del self._endpoints[user_id]
