"""Cart storage configuration."""
import os
from enum import Enum
from pathlib import Path


class StorageBackend(str, Enum):
    """Where the cart snapshot lives between sessions."""
    FILE = "file"  # Local device storage
    REDIS = "redis"  # Upstash Redis, shared across devices
    MEMORY = "memory"  # Process-local, lost on restart


# Storage slot name; matches the key the web client used in localStorage
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "promo-cart")

CART_STORAGE_BACKEND = os.environ.get("CART_STORAGE_BACKEND", StorageBackend.FILE.value)

CART_STORAGE_DIR = Path(
    os.environ.get("CART_STORAGE_DIR", str(Path.home() / ".promocart"))
)

# 0 disables expiry
CART_TTL_SECONDS = int(os.environ.get("CART_TTL_SECONDS", "0") or 0)


def normalize_backend(value: str | None) -> StorageBackend:
    """Map a configured backend name to StorageBackend, defaulting to FILE."""
    if not value:
        return StorageBackend.FILE
    try:
        return StorageBackend(value.strip().lower())
    except ValueError:
        raise ValueError(
            f"Unknown CART_STORAGE_BACKEND {value!r}; "
            f"expected one of {', '.join(b.value for b in StorageBackend)}"
        ) from None
