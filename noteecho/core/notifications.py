"""Daily Echo notification settings and payload.

Delivery belongs to the platform. This module only validates the
schedule and builds the content shown for today's highlight.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Sequence

from noteecho.core.daily_selection import canonical_order, daily_highlight
from noteecho.providers.content_types import Highlight

logger = logging.getLogger(__name__)

DAILY_NOTIFICATION_IDENTIFIER = "daily-echo-notification"
DEFAULT_NOTIFICATION_HOUR = 9
DEFAULT_NOTIFICATION_MINUTE = 0
MAX_BODY_LENGTH = 200


def _valid_time(hour: int, minute: int) -> bool:
    return 0 <= hour <= 23 and 0 <= minute <= 59


@dataclass
class NotificationSettings:
    """User preferences for the daily notification."""

    is_enabled: bool = True
    notification_hour: int = DEFAULT_NOTIFICATION_HOUR
    notification_minute: int = DEFAULT_NOTIFICATION_MINUTE
    last_updated: datetime = field(default_factory=datetime.now)

    @classmethod
    def create_default(cls) -> NotificationSettings:
        return cls(
            is_enabled=True,
            notification_hour=DEFAULT_NOTIFICATION_HOUR,
            notification_minute=DEFAULT_NOTIFICATION_MINUTE,
        )

    @property
    def formatted_time(self) -> str:
        """Short 12-hour time, e.g. '9:00 AM'."""
        hour = self.notification_hour % 12 or 12
        suffix = "AM" if self.notification_hour < 12 else "PM"
        return f"{hour}:{self.notification_minute:02d} {suffix}"

    def is_valid(self) -> bool:
        return _valid_time(self.notification_hour, self.notification_minute)

    def update_time(self, hour: int, minute: int) -> bool:
        """Set the notification time. Out-of-range values are ignored."""
        if not _valid_time(hour, minute):
            logger.warning(f"Invalid notification time - hour: {hour}, minute: {minute}")
            return False
        self.notification_hour = hour
        self.notification_minute = minute
        self.last_updated = datetime.now()
        return True

    def update_time_from(self, value: datetime | time) -> bool:
        return self.update_time(value.hour, value.minute)

    def toggle_enabled(self) -> None:
        self.is_enabled = not self.is_enabled
        self.last_updated = datetime.now()

    def todays_notification_time(self, today: date) -> datetime:
        return datetime.combine(today, time(self.notification_hour, self.notification_minute))

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_enabled": self.is_enabled,
            "notification_hour": self.notification_hour,
            "notification_minute": self.notification_minute,
            "formatted_time": self.formatted_time,
            "last_updated": self.last_updated.isoformat(),
        }


@dataclass
class DailyEchoNotification:
    """Repeating daily notification featuring one highlight."""

    title: str
    body: str
    subtitle: str | None
    user_info: dict[str, str]
    hour: int
    minute: int
    identifier: str = DAILY_NOTIFICATION_IDENTIFIER
    repeats: bool = True

    @classmethod
    def from_highlight(cls, highlight: Highlight, settings: NotificationSettings) -> DailyEchoNotification:
        book = highlight.book
        title = f"Daily Echo: {book.title}" if book else "Daily Echo"
        subtitle = f"by {book.author}" if book and book.author else None

        body = highlight.content
        if len(body) > MAX_BODY_LENGTH:
            body = body[:MAX_BODY_LENGTH] + "..."

        return cls(
            title=title,
            body=body,
            subtitle=subtitle,
            user_info={"type": "daily-echo", "highlightId": highlight.id},
            hour=settings.notification_hour,
            minute=settings.notification_minute,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "identifier": self.identifier,
            "title": self.title,
            "subtitle": self.subtitle,
            "body": self.body,
            "user_info": self.user_info,
            "hour": self.hour,
            "minute": self.minute,
            "repeats": self.repeats,
        }


def plan_daily_notification(
    highlights: Sequence[Highlight],
    settings: NotificationSettings,
    today: date,
) -> DailyEchoNotification | None:
    """Build today's notification, or None if there is nothing to send."""
    if not settings.is_enabled:
        logger.info("Daily notifications are disabled")
        return None

    highlight = daily_highlight(canonical_order(highlights), today)
    if highlight is None:
        logger.info("No highlights available for notifications")
        return None

    return DailyEchoNotification.from_highlight(highlight, settings)
