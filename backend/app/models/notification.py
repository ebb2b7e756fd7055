from pydantic import BaseModel, Field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Optional
import uuid

from app.core.constants import PRIORITY_MEDIUM


class NotificationType(str, Enum):
    TASK_ASSIGNED = "TASK_ASSIGNED"
    TASK_COMPLETED = "TASK_COMPLETED"
    RISK_DETECTED = "RISK_DETECTED"
    RISK_UPDATED = "RISK_UPDATED"
    PROJECT_INVITED = "PROJECT_INVITED"
    MITIGATION_ASSIGNED = "MITIGATION_ASSIGNED"
    COMMENT_ADDED = "COMMENT_ADDED"
    DEADLINE_APPROACHING = "DEADLINE_APPROACHING"


class RelatedEntityType(str, Enum):
    PROJECT = "PROJECT"
    TASK = "TASK"
    RISK = "RISK"
    MITIGATION = "MITIGATION"
    INVITATION = "INVITATION"


class Notification(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_id")
    user_id: str = Field(..., min_length=1)
    type: NotificationType
    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    related_entity_type: Optional[RelatedEntityType] = None
    related_entity_id: Optional[str] = None
    action_url: Optional[str] = None
    is_read: bool = False
    priority: str = PRIORITY_MEDIUM
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    read_at: Optional[datetime] = None
    # Backed by a TTL index, documents are removed by MongoDB after this point
    expires_at: datetime

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
        use_enum_values = True

    @classmethod
    def with_retention(cls, retention_days: int, **data) -> "Notification":
        created_at = data.pop("created_at", None) or datetime.now(timezone.utc)
        return cls(
            created_at=created_at,
            expires_at=created_at + timedelta(days=retention_days),
            **data,
        )
