from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserSummary(BaseModel):
    """Public profile of a project member."""

    # Accepts _id from MongoDB documents, responses use "id"
    id: str = Field(validation_alias="_id", serialization_alias="_id")

    model_config = ConfigDict(populate_by_name=True)

    username: str
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None
