"""
Notification Base Module

Toast messages and the one-way channels that carry them to the UI.
Sending is fire-and-forget: the cart never awaits or reads a reply.
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional, Protocol

from promocart.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)


class ToastLevel(str, Enum):
    """Toast severity."""
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Toast:
    """Short user-facing message."""
    level: ToastLevel
    title: str
    description: Optional[str] = None


class ToastChannel(Protocol):
    """Sink for toasts."""

    def send(self, toast: Toast) -> None:
        ...


class LoggingToastChannel:
    """Channel that writes toasts to the log (headless runs, workers)."""

    _LEVELS = {
        ToastLevel.INFO: logging.INFO,
        ToastLevel.SUCCESS: logging.INFO,
        ToastLevel.ERROR: logging.ERROR,
    }

    def send(self, toast: Toast) -> None:
        logger.log(
            self._LEVELS[toast.level],
            "[toast:%s] %s - %s",
            toast.level.value,
            toast.title,
            sanitize_string_for_logging(toast.description),
        )


class BufferedToastChannel:
    """Channel that queues toasts for the UI to drain on its next render."""

    def __init__(self, maxlen: int = 50):
        self._toasts: Deque[Toast] = deque(maxlen=maxlen)

    def send(self, toast: Toast) -> None:
        self._toasts.append(toast)

    def peek(self) -> List[Toast]:
        return list(self._toasts)

    def drain(self) -> List[Toast]:
        """Return queued toasts oldest first and empty the queue."""
        toasts = list(self._toasts)
        self._toasts.clear()
        return toasts


class NotificationServiceBase:
    """Base class for notification mixins: owns the channel and the send guard."""

    def __init__(self, channel: Optional[ToastChannel] = None):
        self.channel: ToastChannel = channel if channel is not None else LoggingToastChannel()

    def _emit(self, level: ToastLevel, title: str, description: Optional[str] = None) -> Toast:
        toast = Toast(level=level, title=title, description=description)
        try:
            self.channel.send(toast)
        except Exception as e:
            # Toasts are best-effort; the cart operation already happened
            logger.warning(f"Failed to deliver toast {title!r}: {type(e).__name__}: {e}")
        return toast
