# services/notification_service.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

from core.api_client import api_client, ApiError
from core.models import Notification
from core.utils import parse_datetime, sort_by_date_desc

logger = logging.getLogger(__name__)

TYPE_ICONS = {
    "SUCCESS": "✅",
    "WARNING": "⚠️",
    "ERROR": "❌",
    "INFO": "ℹ️",
    "PAYMENT": "💳",
    "WEDDING": "💒",
    "ANNOUNCEMENT": "📣",
}
DEFAULT_TYPE_ICON = "🔔"

PRIORITY_COLORS = {
    "HIGH": "red",
    "MEDIUM": "orange",
    "LOW": "green",
}
DEFAULT_PRIORITY_COLOR = "gray"


class NotificationService:

    @staticmethod
    def get_notifications() -> Tuple[bool, str, List[Notification]]:
        try:
            items = [Notification.from_api(n) for n in api_client.get("/notifications/") or []]
            return True, f"Retrieved {len(items)} notifications.", sort_by_date_desc(items, "created_at")
        except ApiError as e:
            logger.error(f"Error retrieving notifications: {e}")
            return False, f"Error retrieving notifications: {e}", []

    @staticmethod
    def mark_read(notification_id: str) -> Tuple[bool, str, Optional[Dict[str, Any]]]:
        try:
            result = api_client.post(f"/notifications/{notification_id}/mark_read/")
            return True, "Notification marked as read.", result
        except ApiError as e:
            logger.error(f"Error marking notification {notification_id} read: {e}")
            return False, "Failed to mark notification as read", None

    @staticmethod
    def mark_all_read() -> Tuple[bool, str, Optional[Dict[str, Any]]]:
        try:
            result = api_client.post("/notifications/mark_all_read/")
            return True, "All notifications marked as read.", result
        except ApiError as e:
            logger.error(f"Error marking all notifications read: {e}")
            return False, "Failed to mark notifications as read", None

    @staticmethod
    def delete(notification_id: str) -> Tuple[bool, str, Optional[str]]:
        try:
            api_client.delete(f"/notifications/{notification_id}/")
            logger.info(f"Notification {notification_id} deleted")
            return True, "Notification deleted.", notification_id
        except ApiError as e:
            logger.error(f"Error deleting notification {notification_id}: {e}")
            return False, "Failed to delete notification", None

    @staticmethod
    def announce(title: str, message: str) -> Tuple[bool, str, Optional[Dict[str, Any]]]:
        """Broadcast an announcement to every member."""
        title = (title or "").strip()
        message = (message or "").strip()
        if not title or not message:
            return False, "Title and message are required.", None
        try:
            result = api_client.post("/notifications/announce/", {"title": title, "message": message})
            logger.info(f"Announcement '{title}' sent")
            return True, "Announcement sent to all members.", result
        except ApiError as e:
            logger.error(f"Error sending announcement: {e}")
            return False, e.detail or "Failed to send announcement", None

    @staticmethod
    def counts(notifications: List[Notification], now: Optional[datetime] = None) -> Dict[str, int]:
        now = now or datetime.now(timezone.utc).replace(tzinfo=None)
        week_ago = now - timedelta(days=7)

        this_week = 0
        for n in notifications:
            created = parse_datetime(n.created_at)
            if created is not None and created >= week_ago:
                this_week += 1

        return {
            "unread": sum(1 for n in notifications if not n.is_read),
            "total": len(notifications),
            "high_priority": sum(1 for n in notifications if n.priority == "HIGH" and not n.is_read),
            "this_week": this_week,
        }

    @staticmethod
    def type_icon(notification_type: str) -> str:
        return TYPE_ICONS.get((notification_type or "").upper(), DEFAULT_TYPE_ICON)

    @staticmethod
    def priority_color(priority: str) -> str:
        return PRIORITY_COLORS.get((priority or "").upper(), DEFAULT_PRIORITY_COLOR)
