"""Tests for NotificationRepository read tracking."""

import asyncio
from datetime import timedelta

from app.core import utc_now
from app.models.notification import Notification, NotificationType
from app.repositories.notifications import NotificationRepository
from tests.mocks.mongodb import create_mock_collection, create_mock_db, seed


def _notification(user_id="user-2", days=30, **kwargs):
    return Notification.with_retention(
        days,
        user_id=user_id,
        type=NotificationType.COMMENT_ADDED,
        title="Comment",
        message="New comment",
        **kwargs,
    )


class TestMarkRead:
    def test_mark_read_is_conditional(self):
        collection = create_mock_collection()
        repo = NotificationRepository(create_mock_db({"notifications": collection}))
        read_at = utc_now()

        asyncio.run(repo.mark_read("n-1", read_at))

        collection.update_one.assert_called_once_with(
            {"_id": "n-1", "is_read": False},
            {"$set": {"is_read": True, "read_at": read_at}},
        )

    def test_mark_read_many_empty_skips_query(self):
        collection = create_mock_collection()
        repo = NotificationRepository(create_mock_db({"notifications": collection}))

        assert asyncio.run(repo.mark_read_many([], utc_now())) == 0
        collection.update_many.assert_not_called()

    def test_mark_read_many_skips_read(self, fake_db):
        repo = NotificationRepository(fake_db)
        first = seed(fake_db, "notifications", _notification())
        second = seed(fake_db, "notifications", _notification())
        asyncio.run(repo.mark_read(first.id, utc_now()))

        assert asyncio.run(repo.mark_read_many([first.id, second.id], utc_now())) == 1
        assert asyncio.run(repo.count_unread("user-2")) == 0


class TestRetention:
    def test_purge_expired(self, fake_db):
        repo = NotificationRepository(fake_db)
        seed(fake_db, "notifications", _notification(days=30, created_at=utc_now() - timedelta(days=31)))
        kept = seed(fake_db, "notifications", _notification(days=30))

        assert asyncio.run(repo.purge_expired()) == 1
        assert [d["_id"] for d in fake_db["notifications"].docs] == [kept.id]

    def test_delete_read_scoped_to_user(self, fake_db):
        repo = NotificationRepository(fake_db)
        mine = seed(fake_db, "notifications", _notification())
        theirs = seed(fake_db, "notifications", _notification(user_id="user-3"))
        asyncio.run(repo.mark_read(mine.id, utc_now()))
        asyncio.run(repo.mark_read(theirs.id, utc_now()))

        assert asyncio.run(repo.delete_read("user-2")) == 1
        assert [d["_id"] for d in fake_db["notifications"].docs] == [theirs.id]
