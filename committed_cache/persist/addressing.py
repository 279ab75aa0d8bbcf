"""
Addressing strategies - where an entry's bytes live on disk.

FileStore picks one strategy at construction:

- FlatAddressing: one key -> <digest>.key + <digest>.value in the root
- HierarchicalAddressing: key split on a delimiter -> one nested directory
  per segment, each with a _key_chunk file, the innermost holding `value`

Strategies raise OSError freely; FileStore turns failures into results.
"""

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterator, List, Tuple

from .paths import (
    KEY_CHUNK_FILE,
    KEY_SUFFIX,
    VALUE_FILE,
    VALUE_SUFFIX,
    first_segment_dir,
    hierarchical_chunk_dirs,
    hierarchical_value_path,
    key_file_path,
    value_file_path,
)

logger = logging.getLogger(__name__)


def _remove_file(path: Path) -> bool:
    """Unlink one file; True only if it was actually removed."""
    try:
        path.unlink()
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning(f"Failed to remove {path}: {e}")
        return False


class Addressing(ABC):
    """Maps keys to files under a cache root."""

    mode: str = ""

    def __init__(self, root: Path):
        self.root = root

    @abstractmethod
    def value_path(self, key: Any) -> Path:
        """File holding the value bytes for a key."""

    @abstractmethod
    def write(self, key: Any, value: bytes) -> None:
        """Persist an entry, overwriting any existing files in place."""

    @abstractmethod
    def delete(self, key: Any) -> bool:
        """Remove an entry; True if anything was removed."""

    @abstractmethod
    def keys(self) -> Iterator[str]:
        """Yield every stored key."""


class FlatAddressing(Addressing):
    """One file pair per key, named by the digest of the whole key."""

    mode = "flat"

    def value_path(self, key: Any) -> Path:
        return value_file_path(self.root, key)

    def key_path(self, key: Any) -> Path:
        return key_file_path(self.root, key)

    def write(self, key: Any, value: bytes) -> None:
        # Bytes, not text: no newline translation on any platform
        self.key_path(key).write_bytes(str(key).encode("utf-8"))
        self.value_path(key).write_bytes(value)

    def delete(self, key: Any) -> bool:
        removed_key = _remove_file(self.key_path(key))
        removed_value = _remove_file(self.value_path(key))
        return removed_key or removed_value

    def keys(self) -> Iterator[str]:
        for key_file in sorted(self.root.glob(f"*{KEY_SUFFIX}")):
            if not key_file.with_suffix(VALUE_SUFFIX).is_file():
                continue
            try:
                yield key_file.read_bytes().decode("utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Skipping unreadable key file {key_file}: {e}")


class HierarchicalAddressing(Addressing):
    """
    One directory per key segment.

    Keys sharing leading segments share the corresponding directories.
    Deleting a key prunes the whole subtree under its first segment, which
    also removes every other key that starts with the same segment.
    """

    mode = "hierarchical"

    def __init__(self, root: Path, delimiter: str):
        if not delimiter:
            raise ValueError("Addressing delimiter must be a non-empty string")
        super().__init__(root)
        self.delimiter = delimiter

    def value_path(self, key: Any) -> Path:
        return hierarchical_value_path(self.root, key, self.delimiter)

    def chunk_dirs(self, key: Any) -> List[Tuple[Path, str]]:
        return hierarchical_chunk_dirs(self.root, key, self.delimiter)

    def write(self, key: Any, value: bytes) -> None:
        levels = self.chunk_dirs(key)
        for directory, segment in levels:
            directory.mkdir(parents=True, exist_ok=True)
            (directory / KEY_CHUNK_FILE).write_bytes(segment.encode("utf-8"))

        innermost, _ = levels[-1]
        (innermost / VALUE_FILE).write_bytes(value)

    def delete(self, key: Any) -> bool:
        if not self.value_path(key).is_file():
            return False

        subtree = first_segment_dir(self.root, key, self.delimiter)
        try:
            shutil.rmtree(subtree)
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Failed to remove {subtree}: {e}")
            return False
        return True

    def keys(self) -> Iterator[str]:
        yield from self._walk(self.root, [])

    def _walk(self, directory: Path, segments: List[str]) -> Iterator[str]:
        try:
            children = sorted(child for child in directory.iterdir() if child.is_dir())
        except OSError as e:
            logger.warning(f"Skipping unreadable directory {directory}: {e}")
            return

        for child in children:
            try:
                segment = (child / KEY_CHUNK_FILE).read_bytes().decode("utf-8")
            except (OSError, UnicodeDecodeError):
                continue
            chain = segments + [segment]
            if (child / VALUE_FILE).is_file():
                yield self.delimiter.join(chain)
            yield from self._walk(child, chain)
