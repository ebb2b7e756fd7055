from typing import Any, Dict, Optional
from jose import jwt, JWTError
from app.core.config import settings


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Returns the claims of a valid access token, None otherwise.

    Tokens without a ``type`` claim are treated as access tokens.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if payload.get("sub") is None or payload.get("type", "access") != "access":
        return None
    return payload
