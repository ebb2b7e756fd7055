from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

MitigationStatus = Literal["PLANNED", "ACTIVE", "COMPLETED"]
Priority = Literal["LOW", "MEDIUM", "HIGH"]


class MitigationCreate(BaseModel):
    project_id: str
    title: str = Field(..., min_length=1, max_length=300)
    description: Optional[str] = None
    status: MitigationStatus = "PLANNED"
    priority: Priority = "MEDIUM"
    assignee: Optional[str] = Field(None, description="ID (or username) of the assigned user")
    due_date: Optional[datetime] = None
    related_risk_id: Optional[str] = None


class MitigationUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    description: Optional[str] = None
    status: Optional[MitigationStatus] = None
    priority: Optional[Priority] = None
    assignee: Optional[str] = None
    due_date: Optional[datetime] = None
    progress_percentage: Optional[float] = Field(None, ge=0, le=100)


class MitigationResponse(BaseModel):
    # Accepts _id from MongoDB documents, responses use "id"
    id: str = Field(validation_alias="_id", serialization_alias="_id")

    model_config = ConfigDict(populate_by_name=True)

    project_id: str
    title: str
    description: Optional[str] = None
    status: str
    priority: str
    assignee: Optional[str] = None
    due_date: Optional[datetime] = None
    related_risk_id: Optional[str] = None
    progress_percentage: float
    created_by: str
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None
