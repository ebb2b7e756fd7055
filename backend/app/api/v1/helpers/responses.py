"""
Shared OpenAPI response definitions for FastAPI route decorators.

Domain failures are rendered as ``{"detail": ..., "code": ...}`` by the
ServiceError handler, so every entry points at ErrorResponse.

Usage:
    from app.api.v1.helpers.responses import RESP_AUTH_404

    @router.get("/items/{item_id}", responses={**RESP_AUTH_404})
    async def get_item(...): ...
"""

from app.schemas.error import ErrorResponse

# Atomic response definitions
RESP_400 = {400: {"model": ErrorResponse, "description": "Operation not valid in the current state"}}
RESP_401 = {401: {"description": "Not authenticated"}}
RESP_403 = {403: {"model": ErrorResponse, "description": "Caller is not allowed to perform this action"}}
RESP_404 = {404: {"model": ErrorResponse, "description": "Resource not found"}}
RESP_409 = {409: {"model": ErrorResponse, "description": "Conflicts with existing membership or invitation"}}
RESP_410 = {410: {"model": ErrorResponse, "description": "Invitation has expired"}}

# Common composites
RESP_AUTH = {**RESP_401, **RESP_403}
RESP_AUTH_404 = {**RESP_AUTH, **RESP_404}
RESP_AUTH_400_404 = {**RESP_AUTH, **RESP_400, **RESP_404}
RESP_INVITE = {**RESP_AUTH_404, **RESP_409}
RESP_ACCEPT = {**RESP_AUTH_400_404, **RESP_410}
