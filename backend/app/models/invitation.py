from pydantic import BaseModel, Field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Dict, FrozenSet, Optional
import uuid

from app.core import ensure_utc


class InvitationStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"


# Allowed transitions. Every status other than PENDING is terminal.
INVITATION_TRANSITIONS: Dict[InvitationStatus, FrozenSet[InvitationStatus]] = {
    InvitationStatus.PENDING: frozenset(
        {
            InvitationStatus.ACCEPTED,
            InvitationStatus.REJECTED,
            InvitationStatus.EXPIRED,
            InvitationStatus.CANCELLED,
        }
    ),
    InvitationStatus.ACCEPTED: frozenset(),
    InvitationStatus.REJECTED: frozenset(),
    InvitationStatus.EXPIRED: frozenset(),
    InvitationStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES: FrozenSet[InvitationStatus] = frozenset(
    status for status, targets in INVITATION_TRANSITIONS.items() if not targets
)


def can_transition(current: InvitationStatus, target: InvitationStatus) -> bool:
    return target in INVITATION_TRANSITIONS.get(InvitationStatus(current), frozenset())


class ProjectInvitation(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_id")
    project_id: str
    user_id: str
    invited_by: str
    invited_by_name: Optional[str] = None
    status: InvitationStatus = InvitationStatus.PENDING
    invited_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    responded_at: Optional[datetime] = None
    expires_at: datetime
    message: Optional[str] = None

    # Snapshot taken at creation, not kept in sync
    project_name: Optional[str] = None
    user_email: Optional[str] = None
    user_name: Optional[str] = None

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
        use_enum_values = True

    @classmethod
    def expiring_after(cls, days: int, **data) -> "ProjectInvitation":
        """Build a PENDING invitation whose deadline is ``days`` after invited_at."""
        invited_at = data.pop("invited_at", None) or datetime.now(timezone.utc)
        return cls(
            invited_at=invited_at,
            expires_at=invited_at + timedelta(days=days),
            **data,
        )

    @property
    def is_terminal(self) -> bool:
        return InvitationStatus(self.status) in TERMINAL_STATUSES

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return now > ensure_utc(self.expires_at)

    def is_stale_pending(self, now: Optional[datetime] = None) -> bool:
        """PENDING in storage but already past its deadline."""
        return self.status == InvitationStatus.PENDING and self.is_expired(now)
