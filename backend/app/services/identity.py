"""
Identity Directory

Resolves the caller identity strings that the API layer threads through every
service call. An identity is either a user's stable id or, for callers that
only carry a token subject, their username.
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.exceptions import ForbiddenError, NotFoundError
from app.models.user import User
from app.repositories.users import UserRepository


class IdentityDirectory:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.users = UserRepository(db)

    async def resolve(self, identity: Optional[str]) -> Optional[User]:
        """Look up a user by id first, then by username."""
        if not identity:
            return None
        user = await self.users.get_by_id(identity)
        if user is None:
            user = await self.users.get_by_username(identity)
        return user

    async def require_caller(self, identity: Optional[str]) -> User:
        """Resolve the acting user. Unknown callers are not authorized for anything."""
        user = await self.resolve(identity)
        if user is None:
            raise ForbiddenError("Caller identity could not be resolved")
        return user

    async def require_user(self, user_id: str) -> User:
        """Resolve a referenced user (an invitee, a new member, an assignee)."""
        user = await self.resolve(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user
