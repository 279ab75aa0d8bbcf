"""
Path resolution for cache entries.

Turns a key into the concrete files an entry occupies, for both layouts:

- flat:          <root>/<digest(key)>.key and <root>/<digest(key)>.value
- hierarchical:  <root>/<digest(seg1)>/.../<digest(segN)>/value, with a
                 _key_chunk file in every level holding the literal segment
"""

from pathlib import Path
from typing import Any, List, Tuple, Union

from .hashing import digest

KEY_SUFFIX = ".key"
VALUE_SUFFIX = ".value"
KEY_CHUNK_FILE = "_key_chunk"
VALUE_FILE = "value"

PathLike = Union[str, Path]


def split_key(key: Any, delimiter: str) -> List[str]:
    """
    Split a key into segments on a literal delimiter.

    Empty segments are kept as-is ("a------b" on "---" gives ["a", "", "b"]).
    A key without the delimiter is a single segment.

    Raises:
        ValueError: If the delimiter is empty
    """
    if not delimiter:
        raise ValueError("Addressing delimiter must be a non-empty string")
    return str(key).split(delimiter)


def key_file_path(root: PathLike, key: Any) -> Path:
    """Path of the flat-mode file holding the literal key text."""
    return Path(root) / f"{digest(key)}{KEY_SUFFIX}"


def value_file_path(root: PathLike, key: Any) -> Path:
    """Path of the flat-mode file holding the value bytes."""
    return Path(root) / f"{digest(key)}{VALUE_SUFFIX}"


def hierarchical_chunk_dirs(root: PathLike, key: Any, delimiter: str) -> List[Tuple[Path, str]]:
    """
    Resolve every directory level of a hierarchical entry.

    Args:
        root: Cache root directory
        key: Cache key
        delimiter: Segment separator

    Returns:
        Ordered (directory, segment_text) pairs, outermost first
    """
    current = Path(root)
    levels = []
    for segment in split_key(key, delimiter):
        current = current / digest(segment)
        levels.append((current, segment))
    return levels


def hierarchical_value_path(root: PathLike, key: Any, delimiter: str) -> Path:
    """Path of the value file in the innermost directory of a hierarchical entry."""
    innermost, _ = hierarchical_chunk_dirs(root, key, delimiter)[-1]
    return innermost / VALUE_FILE


def first_segment_dir(root: PathLike, key: Any, delimiter: str) -> Path:
    """Directory of the first key segment; deleting a hierarchical entry prunes this subtree."""
    first = split_key(key, delimiter)[0]
    return Path(root) / digest(first)
