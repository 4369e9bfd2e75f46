"""
Cart Errors

Centralized error messages (SonarQube S1192) and the cart exception hierarchy.

Persistence errors are recovered inside the store; CartContextError is a
programming defect and always reaches the caller.
"""

# Persistence errors
ERROR_CART_SNAPSHOT_MALFORMED = "Stored cart snapshot is malformed"
ERROR_CART_SNAPSHOT_UNREADABLE = "Stored cart snapshot could not be read"
ERROR_CART_SNAPSHOT_UNWRITABLE = "Cart snapshot could not be written"

# Usage errors
ERROR_CART_NOT_INITIALIZED = "Cart used outside an active cart session"
ERROR_SESSION_NOT_FOUND = "No active cart session"


class CartError(Exception):
    """Base error for the promotion cart."""

    def __init__(self, message: str, code: str | None = None, raw_error: Exception | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.raw_error = raw_error


class PersistenceReadError(CartError):
    """Stored cart snapshot is malformed or unreadable."""

    def __init__(self, message: str = ERROR_CART_SNAPSHOT_UNREADABLE, raw_error: Exception | None = None) -> None:
        super().__init__(message, code="PERSISTENCE_READ", raw_error=raw_error)


class PersistenceWriteError(CartError):
    """Cart snapshot could not be written to its storage slot."""

    def __init__(self, message: str = ERROR_CART_SNAPSHOT_UNWRITABLE, raw_error: Exception | None = None) -> None:
        super().__init__(message, code="PERSISTENCE_WRITE", raw_error=raw_error)


class CartContextError(CartError):
    """Cart facade invoked without an initialized cart behind it."""

    def __init__(self, message: str = ERROR_CART_NOT_INITIALIZED) -> None:
        super().__init__(message, code="CART_CONTEXT")


NotInitializedError = CartContextError
