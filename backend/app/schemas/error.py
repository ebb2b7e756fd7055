from pydantic import BaseModel

from app.core.exceptions import ErrorKind


class ErrorResponse(BaseModel):
    """Body returned for every domain failure."""

    detail: str
    code: ErrorKind
