from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone
import uuid

from app.core.constants import MITIGATION_STATUS_PLANNED, PRIORITY_MEDIUM


class Mitigation(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_id")
    project_id: str
    title: str
    description: Optional[str] = None
    status: str = MITIGATION_STATUS_PLANNED
    priority: str = PRIORITY_MEDIUM
    assignee: Optional[str] = None  # user id
    due_date: Optional[datetime] = None
    related_risk_id: Optional[str] = None
    progress_percentage: float = 0.0
    created_by: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
