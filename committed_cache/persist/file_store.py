"""
File-backed key-value store for caches committed to version control.

Entries are plain files under a cache root, named by SHA-256 digests so that
rewriting an unchanged key produces byte-identical files (no VCS diff).

Failures never escape a per-entry operation:
- read:   missing or unreadable file -> None
- write:  filesystem error -> False
- delete: nothing to remove -> False
- clear:  always True

Only an uncreatable cache root is fatal (CacheRootError at construction).
"""

import logging
import shutil
from pathlib import Path
from typing import Iterator, Optional, Union

from committed_cache.config.settings import StoreSettings
from committed_cache.exceptions import CacheRootError

from .addressing import Addressing, FlatAddressing, HierarchicalAddressing

logger = logging.getLogger(__name__)


class FileStore:
    """
    Byte-level cache backend over a directory tree.

    The addressing mode is fixed for the life of the store: flat when no
    delimiter is given, hierarchical otherwise.

    Usage:
        >>> store = FileStore("tmp/cache")
        >>> store.write("user:123", b'{"name":"A"}')
        True
        >>> store.read("user:123")
        b'{"name":"A"}'
        >>> nested = FileStore("tmp/nested", addressing_delimiter="---")
        >>> nested.write("foo---bar", b"27")
        True
    """

    def __init__(self, cache_path: Union[str, Path], addressing_delimiter: Optional[str] = None):
        """
        Initialize store, creating the cache root if needed.

        Args:
            cache_path: Directory owning all entries
            addressing_delimiter: Key segment separator; enables hierarchical mode

        Raises:
            CacheRootError: If the cache root cannot be created
            ValueError: If the delimiter is an empty string
        """
        self.cache_path = Path(cache_path)
        self.addressing_delimiter = addressing_delimiter

        try:
            self.cache_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheRootError(self.cache_path, str(e)) from e

        if addressing_delimiter is None:
            self._addressing: Addressing = FlatAddressing(self.cache_path)
        else:
            self._addressing = HierarchicalAddressing(self.cache_path, addressing_delimiter)

    @classmethod
    def from_settings(cls, settings: StoreSettings) -> "FileStore":
        """Create a store from validated settings."""
        return cls(settings.cache_path, addressing_delimiter=settings.addressing_delimiter)

    @property
    def mode(self) -> str:
        """Addressing mode name: 'flat' or 'hierarchical'."""
        return self._addressing.mode

    def value_path(self, key: str) -> Path:
        """Path of the value file for a key under the active mode."""
        return self._addressing.value_path(key)

    def read(self, key: str) -> Optional[bytes]:
        """
        Read the raw value bytes for a key.

        Args:
            key: Cache key

        Returns:
            Stored bytes, or None on a miss or unreadable entry
        """
        try:
            path = self.value_path(key)
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning(f"Treating unreadable entry for {key!r} as a miss: {e}")
            return None

    def write(self, key: str, value: bytes) -> bool:
        """
        Write value bytes for a key, overwriting in place.

        Writing the same key with the same bytes again leaves every entry
        file byte-identical.

        Args:
            key: Cache key
            value: Serialized value (str is stored as UTF-8)

        Returns:
            True on success, False if the value is not bytes/str or the
            filesystem rejected the write
        """
        if isinstance(value, str):
            value = value.encode("utf-8")

        try:
            if not isinstance(value, (bytes, bytearray, memoryview)):
                raise TypeError(f"expected bytes or str, got {type(value).__name__}")
            self._addressing.write(key, bytes(value))
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Failed to write cache entry {key!r}: {e}")
            return False
        return True

    def delete(self, key: str) -> bool:
        """
        Delete the entry for a key.

        In hierarchical mode the whole subtree under the key's first segment
        is removed, taking every key that shares that first segment with it.

        Returns:
            True if anything was removed, False otherwise
        """
        try:
            return self._addressing.delete(key)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to delete cache entry {key!r}: {e}")
            return False

    def exists(self, key: str) -> bool:
        """Whether a value file is present for a key."""
        try:
            return self.value_path(key).is_file()
        except (OSError, ValueError):
            return False

    def clear(self) -> bool:
        """
        Remove every entry, leaving the cache root present and empty.

        Returns:
            Always True
        """
        try:
            children = list(self.cache_path.iterdir())
        except OSError as e:
            logger.warning(f"Cannot list cache root {self.cache_path}: {e}")
            return True

        for child in children:
            try:
                if child.is_dir() and not child.is_symlink():
                    shutil.rmtree(child)
                else:
                    child.unlink()
            except FileNotFoundError:
                continue
            except OSError as e:
                logger.warning(f"Failed to remove {child} during clear: {e}")

        return True

    def keys(self) -> Iterator[str]:
        """Yield every stored key, recovered from the key and chunk files."""
        return self._addressing.keys()

    def stats(self) -> dict:
        """
        Get statistics for the cache root.

        Returns:
            Dict with mode, entries, files, total_bytes
        """
        entries = sum(1 for _ in self.keys())

        files = 0
        total_bytes = 0
        for path in self.cache_path.rglob("*"):
            try:
                if path.is_file():
                    files += 1
                    total_bytes += path.stat().st_size
            except OSError:
                continue

        return {
            "mode": self.mode,
            "entries": entries,
            "files": files,
            "total_bytes": total_bytes,
        }
