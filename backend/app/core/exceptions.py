"""
Domain Errors

Typed failures raised by the service layer. Each error carries a stable
``kind`` that clients can switch on and the HTTP status it maps to.
The API layer renders them through a single exception handler, so services
never raise bare HTTPExceptions.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    REJECTED_OPERATION = "REJECTED_OPERATION"
    EXPIRED = "EXPIRED"


class ServiceError(Exception):
    """Base exception for business rule failures."""

    kind: ErrorKind
    status_code: int = 400

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.kind.value}


class NotFoundError(ServiceError):
    """A referenced entity does not exist."""

    kind = ErrorKind.NOT_FOUND
    status_code = 404


class ForbiddenError(ServiceError):
    """The caller is the wrong actor for the action."""

    kind = ErrorKind.FORBIDDEN
    status_code = 403


class ConflictError(ServiceError):
    """A uniqueness or membership constraint would be violated."""

    kind = ErrorKind.CONFLICT
    status_code = 409


class RejectedOperationError(ServiceError):
    """The action is not valid for the entity's current state."""

    kind = ErrorKind.REJECTED_OPERATION
    status_code = 400


class InvitationExpiredError(ServiceError):
    """The invitation passed its deadline and was moved to EXPIRED."""

    kind = ErrorKind.EXPIRED
    status_code = 410
