"""
Cart Storage - durable key-value slots and the snapshot adapter on top of them.

A slot holds one JSON document per key. CartStore reads and writes the whole
cart as a JSON array of {"service": {...}, "addedAt": "<iso>"} under a single
key, and never lets a storage failure reach its caller.
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Protocol

from promocart.errors import (
    ERROR_CART_SNAPSHOT_MALFORMED,
    PersistenceReadError,
    PersistenceWriteError,
)
from promocart.logging import get_logger, sanitize_string_for_logging

from .config import (
    CART_STORAGE_BACKEND,
    CART_STORAGE_DIR,
    CART_STORAGE_KEY,
    CART_TTL_SECONDS,
    StorageBackend,
    normalize_backend,
)
from .models import CartEntry

logger = get_logger(__name__)


class StorageSlot(Protocol):
    """Durable key-value storage for serialized snapshots."""

    async def read(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        ...

    async def write(self, key: str, value: str) -> None:
        """Replace the stored value."""
        ...


class MemorySlot:
    """Process-local slot. Survives cart re-creation, not process restarts."""

    def __init__(self, initial: Optional[dict] = None):
        self.data: dict[str, str] = dict(initial or {})

    async def read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def write(self, key: str, value: str) -> None:
        self.data[key] = value


class FileSlot:
    """
    Local device storage: one JSON file per key inside a directory.

    Writes go to a temp file that is renamed over the target, so a crash
    mid-write leaves the previous snapshot intact. Disk I/O runs in a worker
    thread to keep the event loop responsive.
    """

    def __init__(self, directory: Path | str = CART_STORAGE_DIR):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    async def read(self, key: str) -> Optional[str]:
        try:
            return await asyncio.to_thread(self._read, self.path_for(key))
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceReadError(raw_error=e) from e

    async def write(self, key: str, value: str) -> None:
        try:
            await asyncio.to_thread(self._write, self.path_for(key), value)
        except OSError as e:
            raise PersistenceWriteError(raw_error=e) from e

    @staticmethod
    def _read(path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    @staticmethod
    def _write(path: Path, value: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except OSError:
            # Leave no stray temp file behind; the original error still propagates
            Path(tmp_name).unlink(missing_ok=True)
            raise


class RedisSlot:
    """Upstash Redis slot, keyed as cart:{key} with an optional TTL."""

    def __init__(self, redis=None, ttl: int = CART_TTL_SECONDS):
        self._redis = redis  # Lazy initialization
        self.ttl = ttl

    @property
    def redis(self):
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            from promocart.db import get_redis

            self._redis = get_redis()
        return self._redis

    async def read(self, key: str) -> Optional[str]:
        from promocart.db import RedisKeys

        try:
            return await self.redis.get(RedisKeys.cart_key(key))
        except Exception as e:
            raise PersistenceReadError(raw_error=e) from e

    async def write(self, key: str, value: str) -> None:
        from promocart.db import RedisKeys

        try:
            if self.ttl > 0:
                await self.redis.set(RedisKeys.cart_key(key), value, ex=self.ttl)
            else:
                await self.redis.set(RedisKeys.cart_key(key), value)
        except Exception as e:
            raise PersistenceWriteError(raw_error=e) from e


def build_slot(backend: str | StorageBackend | None = CART_STORAGE_BACKEND) -> StorageSlot:
    """Create the storage slot selected by configuration."""
    backend = normalize_backend(backend.value if isinstance(backend, StorageBackend) else backend)

    if backend == StorageBackend.REDIS:
        return RedisSlot()
    if backend == StorageBackend.MEMORY:
        return MemorySlot()
    return FileSlot()


def encode_entries(entries: Iterable[CartEntry]) -> str:
    """Serialize entries to the JSON array stored in the slot."""
    try:
        return json.dumps([entry.to_dict() for entry in entries])
    except (TypeError, ValueError) as e:
        raise PersistenceWriteError(raw_error=e) from e


def decode_entries(raw: str) -> List[CartEntry]:
    """
    Parse a stored snapshot back into entries.

    Duplicate service ids keep their first occurrence.

    Raises:
        PersistenceReadError: If the snapshot is not a well-formed entry array
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise PersistenceReadError(ERROR_CART_SNAPSHOT_MALFORMED, raw_error=e) from e

    if not isinstance(data, list):
        raise PersistenceReadError(ERROR_CART_SNAPSHOT_MALFORMED)

    entries: List[CartEntry] = []
    seen: set[str] = set()
    for item in data:
        try:
            entry = CartEntry.from_dict(item)
        except (KeyError, TypeError, ValueError) as e:
            # pydantic.ValidationError is a ValueError
            raise PersistenceReadError(ERROR_CART_SNAPSHOT_MALFORMED, raw_error=e) from e
        if entry.service_id in seen:
            logger.warning("Dropping duplicate cart entry for service %s", entry.service_id)
            continue
        seen.add(entry.service_id)
        entries.append(entry)

    return entries


class CartStore:
    """
    Persistent Store Adapter for the cart.

    Usage:
        store = CartStore(FileSlot("/var/lib/app"))
        entries = await store.load()
        await store.save(entries)
    """

    def __init__(self, slot: StorageSlot | None = None, key: str = CART_STORAGE_KEY):
        self.slot = slot if slot is not None else build_slot()
        self.key = key

    async def load(self) -> List[CartEntry]:
        """Read the saved cart; absent or broken snapshots load as an empty cart."""
        try:
            raw = await self.slot.read(self.key)
        except PersistenceReadError as e:
            logger.warning(
                "Failed to read cart snapshot %s: %s",
                sanitize_string_for_logging(self.key),
                type(e.raw_error).__name__ if e.raw_error else e,
            )
            return []
        except Exception as e:
            # Custom slots may raise anything; a broken slot still loads as empty
            logger.error(
                "Unexpected error reading cart snapshot %s: %s",
                sanitize_string_for_logging(self.key),
                type(e).__name__,
                exc_info=True,
            )
            return []

        if not raw:
            return []

        try:
            entries = decode_entries(raw)
        except PersistenceReadError as e:
            logger.warning(
                "Corrupted cart snapshot %s, starting empty: %s",
                sanitize_string_for_logging(self.key),
                e.raw_error or e,
            )
            return []

        logger.debug("Loaded %d cart entries from %s", len(entries), self.key)
        return entries

    async def save(self, entries: Iterable[CartEntry]) -> bool:
        """Write the full entry list, replacing the previous snapshot.

        Returns:
            True if written, False if the write failed (already logged)
        """
        try:
            await self.slot.write(self.key, encode_entries(entries))
        except PersistenceWriteError as e:
            logger.error(
                "Failed to save cart snapshot %s: %s",
                sanitize_string_for_logging(self.key),
                e.raw_error or e,
            )
            return False
        return True
