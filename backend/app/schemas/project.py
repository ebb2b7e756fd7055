from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None


class ProjectResponse(BaseModel):
    # Accepts _id from MongoDB documents, responses use "id"
    id: str = Field(validation_alias="_id", serialization_alias="_id")

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: Optional[str] = None
    owner_id: Optional[str] = None
    created_by: Optional[str] = None
    member_ids: List[str] = []
    created_at: datetime
    updated_at: datetime


class MemberAdd(BaseModel):
    user_id: str = Field(..., description="ID (or username) of the user to add")
