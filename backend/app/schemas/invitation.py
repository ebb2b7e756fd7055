from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.invitation import InvitationStatus


class InvitationCreate(BaseModel):
    project_id: str
    user_id: str = Field(..., description="ID (or username) of the user to invite")
    message: Optional[str] = Field(None, max_length=2000)


class InvitationResponse(BaseModel):
    # Accepts _id from MongoDB documents, responses use "id"
    id: str = Field(validation_alias="_id", serialization_alias="_id")

    model_config = ConfigDict(populate_by_name=True)

    project_id: str
    user_id: str
    invited_by: str
    invited_by_name: Optional[str] = None
    status: InvitationStatus
    invited_at: datetime
    responded_at: Optional[datetime] = None
    expires_at: datetime
    message: Optional[str] = None
    project_name: Optional[str] = None
    user_email: Optional[str] = None
    user_name: Optional[str] = None
