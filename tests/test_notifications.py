"""Tests for toast notifications"""
import logging

from promocart.services.notifications import (
    BufferedToastChannel,
    LoggingToastChannel,
    NotificationService,
    Toast,
    ToastLevel,
)


def test_buffered_channel_drains_in_order():
    """Test toasts are drained oldest first and the buffer empties"""
    channel = BufferedToastChannel()
    service = NotificationService(channel)

    service.notify_added("Playlist Pitching")
    service.notify_cleared()

    assert channel.peek() == [
        Toast(ToastLevel.SUCCESS, "Added to cart", "Playlist Pitching"),
        Toast(ToastLevel.SUCCESS, "Cart cleared"),
    ]
    assert len(channel.drain()) == 2
    assert channel.drain() == []


def test_buffered_channel_is_bounded():
    channel = BufferedToastChannel(maxlen=2)
    service = NotificationService(channel)

    for name in ("a", "b", "c"):
        service.notify_added(name)

    assert [t.description for t in channel.drain()] == ["b", "c"]


def test_logging_channel_levels(caplog):
    """Test error toasts log at ERROR, others at INFO"""
    service = NotificationService(LoggingToastChannel())

    with caplog.at_level(logging.INFO, logger="promocart.services.notifications.base"):
        service.notify_already_in_cart("Blog Feature")
        service.notify_error("Checkout failed", "card\ndeclined")

    levels = [record.levelno for record in caplog.records]
    assert levels == [logging.INFO, logging.ERROR]
    # Newlines in user-facing text are escaped in logs
    assert "card\\ndeclined" in caplog.records[1].getMessage()


def test_default_channel_is_logging():
    assert isinstance(NotificationService().channel, LoggingToastChannel)


def test_emit_returns_toast_even_if_channel_fails():
    class BrokenChannel:
        def send(self, toast):
            raise RuntimeError("closed")

    toast = NotificationService(BrokenChannel()).notify_removed()

    assert toast == Toast(ToastLevel.SUCCESS, "Removed from cart", None)
