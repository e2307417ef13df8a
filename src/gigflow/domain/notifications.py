"""Real-time notification events."""

from dataclasses import dataclass, field

HIRED_EVENT = "hired"


@dataclass(frozen=True)
class NotificationEvent:
    """Named event pushed to a user's live endpoints."""

    name: str
    data: dict[str, object] = field(default_factory=dict)

    def to_message(self) -> dict[str, object]:
        """Return the wire representation of the event."""
        return {"type": self.name, "data": dict(self.data)}


def hired_event(gig_title: str) -> NotificationEvent:
    """Build the event sent to a freelancer whose bid was hired."""
    return NotificationEvent(name=HIRED_EVENT, data={"gigTitle": gig_title})
