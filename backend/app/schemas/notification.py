from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.notification import NotificationType, RelatedEntityType


class NotificationResponse(BaseModel):
    # Accepts _id from MongoDB documents, responses use "id"
    id: str = Field(validation_alias="_id", serialization_alias="_id")

    model_config = ConfigDict(populate_by_name=True)

    user_id: str
    type: NotificationType
    title: str
    message: str
    related_entity_type: Optional[RelatedEntityType] = None
    related_entity_id: Optional[str] = None
    action_url: Optional[str] = None
    is_read: bool
    priority: str
    metadata: Dict[str, Any] = {}
    created_at: datetime
    read_at: Optional[datetime] = None
    expires_at: datetime


class UnreadCount(BaseModel):
    count: int


class BulkResult(BaseModel):
    affected: int
