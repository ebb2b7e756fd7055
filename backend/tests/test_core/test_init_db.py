"""Tests for index creation."""

import asyncio

from tests.mocks.mongodb import FakeDatabase

from app.core.init_db import create_indexes


def test_pending_invitation_index_is_partial_and_unique():
    db = FakeDatabase()
    asyncio.run(create_indexes(db))

    index = next(i for i in db["project_invitations"].indexes if i["name"] == "uniq_pending_invitation")
    assert index["unique"] is True
    assert index["fields"] == ["project_id", "user_id"]
    assert index["partialFilterExpression"] == {"status": "PENDING"}


def test_notifications_ttl_index():
    db = FakeDatabase()
    asyncio.run(create_indexes(db))

    ttl = [i for i in db["notifications"].indexes if "expireAfterSeconds" in i]
    assert len(ttl) == 1
    assert ttl[0]["fields"] == ["expires_at"]
    assert ttl[0]["expireAfterSeconds"] == 0
