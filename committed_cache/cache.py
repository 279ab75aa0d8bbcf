"""
Cache facade over FileStore - serialization, fetch, expiry hints.

Values are serialized to canonical JSON (sorted keys, compact separators)
so writing an equal value twice yields the same bytes on disk. Expiry hints
are accepted for compatibility with generic cache callers and discarded:
entries live until they are deleted or cleared.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Optional, Union

from .persist.file_store import FileStore

logger = logging.getLogger(__name__)


def serialize_value(value: Any) -> bytes:
    """Encode a value as canonical UTF-8 JSON."""
    text = json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return text.encode("utf-8")


def deserialize_value(data: bytes) -> Any:
    """Decode bytes produced by serialize_value."""
    return json.loads(data.decode("utf-8"))


class CommittedCache:
    """
    Read/write/fetch/delete/clear over a file-backed store.

    Usage:
        >>> cache = CommittedCache("tmp/cache")
        >>> cache.write("config:app:settings", {"theme": "dark"})
        True
        >>> cache.fetch("config:app:settings", lambda: {"theme": "light"})
        {'theme': 'dark'}
        >>> cache.write("user:123", '{"name":"A"}', raw=True)
        True
    """

    def __init__(
        self,
        cache_path: Optional[Union[str, Path]] = None,
        addressing_delimiter: Optional[str] = None,
        store: Optional[FileStore] = None,
    ):
        """
        Initialize cache.

        Args:
            cache_path: Cache root directory (ignored when store is given)
            addressing_delimiter: Key segment separator for hierarchical mode
            store: Existing FileStore to wrap
        """
        if store is None:
            if cache_path is None:
                raise ValueError("Either cache_path or store is required")
            store = FileStore(cache_path, addressing_delimiter=addressing_delimiter)
        self.store = store

    @property
    def cache_path(self) -> Path:
        return self.store.cache_path

    def read(self, key: str, raw: bool = False) -> Any:
        """
        Read a cached value.

        Args:
            key: Cache key
            raw: Return the stored text as-is instead of decoding JSON

        Returns:
            The cached value, or None on a miss or undecodable entry
        """
        data = self.store.read(key)
        if data is None:
            return None

        try:
            if raw:
                return data.decode("utf-8")
            return deserialize_value(data)
        except ValueError as e:
            logger.warning(f"Treating undecodable entry for {key!r} as a miss: {e}")
            return None

    def write(
        self,
        key: str,
        value: Any,
        expires_in: Optional[float] = None,
        expires_at: Optional[float] = None,
        raw: bool = False,
        **options: Any,
    ) -> bool:
        """
        Write a value.

        Args:
            key: Cache key
            value: Any JSON-serializable value; str or bytes when raw
            expires_in: Accepted and ignored
            expires_at: Accepted and ignored
            raw: Store str/bytes as-is instead of encoding JSON
            **options: Accepted and ignored

        Returns:
            True on success, False if the value could not be serialized or written
        """
        if expires_in is not None or expires_at is not None:
            logger.debug(f"Ignoring expiry hint for {key!r}; entries never expire")

        try:
            if raw:
                if isinstance(value, str):
                    data = value.encode("utf-8")
                elif isinstance(value, (bytes, bytearray)):
                    data = bytes(value)
                else:
                    raise TypeError(f"raw values must be str or bytes, got {type(value).__name__}")
            else:
                data = serialize_value(value)
        except (TypeError, ValueError) as e:
            logger.warning(f"Cannot serialize value for {key!r}: {e}")
            return False

        return self.store.write(key, data)

    def fetch(
        self,
        key: str,
        compute: Optional[Callable[[], Any]] = None,
        raw: bool = False,
        force: bool = False,
        **options: Any,
    ) -> Any:
        """
        Return the cached value, computing and storing it on a miss.

        Args:
            key: Cache key
            compute: Zero-argument callable producing the value on a miss
            raw: Passed through to read/write
            force: Skip the read and always recompute
            **options: Passed to write (expiry hints are ignored)

        Returns:
            Cached or freshly computed value; None on a miss without compute
        """
        if not force:
            cached = self.read(key, raw=raw)
            if cached is not None:
                return cached

        if compute is None:
            return None

        value = compute()
        self.write(key, value, raw=raw, **options)
        return value

    def exist(self, key: str) -> bool:
        """Whether an entry is stored for a key."""
        return self.store.exists(key)

    def delete(self, key: str) -> bool:
        """Delete an entry; True if anything was removed."""
        return self.store.delete(key)

    def clear(self) -> bool:
        """Remove all entries. Always True."""
        return self.store.clear()
