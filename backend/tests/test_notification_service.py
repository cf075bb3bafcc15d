"""Tests for the notification inbox."""

import pytest

from bookclub.core.exceptions import NotFoundError
from bookclub.models.enums import NotificationType
from bookclub.models.notification import Notification
from bookclub.services import notification_service


class TestNotify:
    """Test creating notifications."""

    def test_created_unread(self, db, bob):
        n = notification_service.notify(db, bob.id, NotificationType.MENTION, "Hello")

        assert n.is_read is False
        assert n.type == "mention"
        assert notification_service.unread_count(db, bob.id) == 1

    def test_other_types_are_stored_verbatim(self, db, bob):
        n = notification_service.notify(db, bob.id, "new_current", "A new book is up")
        assert n.type == "new_current"


class TestInbox:
    """Test listing and marking notifications."""

    def test_list_only_own_newest_first(self, db, alice, bob):
        first = notification_service.notify(db, bob.id, "mention", "one")
        second = notification_service.notify(db, bob.id, "mention", "two")
        notification_service.notify(db, alice.id, "mention", "not yours")

        items = notification_service.list_notifications(db, bob.id)

        assert [n.id for n in items] == [second.id, first.id]

    def test_list_limit(self, db, bob):
        for i in range(5):
            notification_service.notify(db, bob.id, "mention", f"n{i}")

        assert len(notification_service.list_notifications(db, bob.id, limit=3)) == 3

    def test_mark_read(self, db, bob):
        n = notification_service.notify(db, bob.id, "mention", "one")

        read = notification_service.mark_read(db, n.id, bob.id)

        assert read.is_read is True
        assert notification_service.unread_count(db, bob.id) == 0

    def test_cannot_mark_someone_elses(self, db, alice, bob):
        """Another member's notification looks like it does not exist."""
        n = notification_service.notify(db, bob.id, "mention", "one")

        with pytest.raises(NotFoundError):
            notification_service.mark_read(db, n.id, alice.id)

        db.expire_all()
        assert db.get(Notification, n.id).is_read is False

    def test_mark_all_read(self, db, alice, bob):
        for i in range(3):
            notification_service.notify(db, bob.id, "mention", f"n{i}")
        notification_service.notify(db, alice.id, "mention", "alice's")

        assert notification_service.mark_all_read(db, bob.id) == 3
        assert notification_service.unread_count(db, bob.id) == 0
        assert notification_service.unread_count(db, alice.id) == 1
        assert notification_service.mark_all_read(db, bob.id) == 0
