from datetime import datetime

import pytest

import services.notification_service as notification_module
from core.models import Notification
from services.notification_service import NotificationService


@pytest.fixture()
def api(fake_api, monkeypatch):
    monkeypatch.setattr(notification_module, "api_client", fake_api)
    return fake_api


def test_get_notifications_newest_first(api):
    api.respond("GET", "/notifications/", [
        {"id": 1, "title": "Old", "created_at": "2024-06-01T08:00:00Z"},
        {"id": 2, "title": "New", "created_at": "2024-06-09T08:00:00Z"},
    ])
    success, _, items = NotificationService.get_notifications()
    assert success
    assert [n.title for n in items] == ["New", "Old"]


def test_mark_read_and_mark_all(api, api_error):
    assert NotificationService.mark_read("5")[0] is True
    assert api.last_call()[:2] == ("POST", "/notifications/5/mark_read/")

    api.respond("POST", "/notifications/mark_all_read/", api_error())
    assert NotificationService.mark_all_read() == (False, "Failed to mark notifications as read", None)


def test_announce_requires_title_and_message(api):
    assert NotificationService.announce("  ", "Hello")[1] == "Title and message are required."
    assert api.calls == []


def test_announce_posts_trimmed_fields(api):
    assert NotificationService.announce(" Meeting ", " Sunday 10am ")[0] is True
    assert api.last_call()[2]["json"] == {"title": "Meeting", "message": "Sunday 10am"}


def test_delete(api):
    assert NotificationService.delete("9") == (True, "Notification deleted.", "9")
    assert api.last_call()[:2] == ("DELETE", "/notifications/9/")


def test_counts():
    now = datetime(2024, 6, 10, 12, 0)
    notifications = [
        Notification(id="1", title="a", priority="HIGH", is_read=False, created_at="2024-06-09T10:00:00Z"),
        Notification(id="2", title="b", priority="HIGH", is_read=True, created_at="2024-06-01T10:00:00Z"),
        Notification(id="3", title="c", priority="LOW", is_read=False, created_at=""),
    ]
    assert NotificationService.counts(notifications, now) == {
        "unread": 2,
        "total": 3,
        "high_priority": 1,
        "this_week": 1,
    }


def test_icons_and_colors():
    assert NotificationService.type_icon("payment") == "💳"
    assert NotificationService.type_icon("unknown") == "🔔"
    assert NotificationService.priority_color("high") == "red"
    assert NotificationService.priority_color(None) == "gray"
