from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from app.core.security import decode_access_token
from app.models.user import User
from app.repositories.users import UserRepository
from app.db.mongodb import get_database
from motor.motor_asyncio import AsyncIOMotorDatabase

# Tokens are issued by the identity provider; this service only verifies them
bearer_scheme = HTTPBearer()

async def get_current_user(
    db: AsyncIOMotorDatabase = Depends(get_database),
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    user = await UserRepository(db).get_by_username(payload["sub"])
    if user is None:
        raise credentials_exception

    # Check if token was issued before last logout
    iat = payload.get("iat")
    if iat and user.last_logout_at and iat < user.last_logout_at.timestamp():
        raise credentials_exception

    return user

async def get_current_active_user(
    current_user: User = Depends(get_current_user),
) -> User:
    if not current_user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user
