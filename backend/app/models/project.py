from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime, timezone
import uuid


class Project(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_id")
    name: str
    description: Optional[str] = None
    # Stable owner identity. Older records only carry created_by (a username).
    owner_id: Optional[str] = None
    created_by: Optional[str] = None
    member_ids: List[str] = []
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True

    def is_owner(self, user_id: str, username: Optional[str] = None) -> bool:
        """
        Owner check by stable id, falling back to the creator username for
        records created before owner_id was tracked.
        """
        if self.owner_id:
            return self.owner_id == user_id
        return username is not None and self.created_by == username

    def is_member(self, user_id: str) -> bool:
        return user_id in self.member_ids

    def has_access(self, user_id: str, username: Optional[str] = None) -> bool:
        return self.is_owner(user_id, username) or self.is_member(user_id)
