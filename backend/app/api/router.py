"""
APIRouter variant that serializes responses by field name.

Response schemas read MongoDB documents through ``validation_alias="_id"``.
Clients should see ``id``, so every route is forced to
``response_model_by_alias=False``.
"""

from typing import Any

from fastapi import APIRouter
from fastapi.routing import APIRoute


class FieldNameRoute(APIRoute):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["response_model_by_alias"] = False
        super().__init__(*args, **kwargs)


class CustomAPIRouter(APIRouter):
    """Router for all v1 endpoints; routes use FieldNameRoute unless told otherwise."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("route_class", FieldNameRoute)
        super().__init__(*args, **kwargs)
