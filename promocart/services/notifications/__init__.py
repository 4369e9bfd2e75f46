"""
Notification Service Module

Combines the notification mixins into NotificationService.
"""

from .base import (
    BufferedToastChannel,
    LoggingToastChannel,
    Toast,
    ToastChannel,
    ToastLevel,
)
from .cart import CartNotificationsMixin


class NotificationService(CartNotificationsMixin):
    """Toast notifications for UI callers."""


__all__ = [
    "BufferedToastChannel",
    "LoggingToastChannel",
    "NotificationService",
    "Toast",
    "ToastChannel",
    "ToastLevel",
]
