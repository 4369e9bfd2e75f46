"""Cart toasts shown when services are added, removed or cleared."""

from typing import Optional

from .base import NotificationServiceBase, Toast, ToastLevel


class CartNotificationsMixin(NotificationServiceBase):
    """Cart-related toasts."""

    def notify_added(self, service_name: str) -> Toast:
        return self._emit(ToastLevel.SUCCESS, "Added to cart", service_name)

    def notify_already_in_cart(self, service_name: str) -> Toast:
        return self._emit(ToastLevel.INFO, "Already in cart", service_name)

    def notify_removed(self, service_name: Optional[str] = None) -> Toast:
        return self._emit(ToastLevel.SUCCESS, "Removed from cart", service_name)

    def notify_cleared(self) -> Toast:
        return self._emit(ToastLevel.SUCCESS, "Cart cleared")

    def notify_error(self, title: str, description: Optional[str] = None) -> Toast:
        return self._emit(ToastLevel.ERROR, title, description)
