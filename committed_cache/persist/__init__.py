"""
Persistence layer for the committed cache.

Provides:
- SHA-256 digests for file and directory names
- Path resolution for flat and hierarchical entries
- Addressing strategies selected once per store
- FileStore: byte-level read/write/delete/clear
"""

from .hashing import digest
from .paths import (
    KEY_CHUNK_FILE,
    KEY_SUFFIX,
    VALUE_FILE,
    VALUE_SUFFIX,
    first_segment_dir,
    key_file_path,
    value_file_path,
    hierarchical_chunk_dirs,
    hierarchical_value_path,
    split_key,
)
from .addressing import Addressing, FlatAddressing, HierarchicalAddressing
from .file_store import FileStore

__all__ = [
    "digest",
    "KEY_CHUNK_FILE",
    "KEY_SUFFIX",
    "VALUE_FILE",
    "VALUE_SUFFIX",
    "first_segment_dir",
    "key_file_path",
    "value_file_path",
    "hierarchical_chunk_dirs",
    "hierarchical_value_path",
    "split_key",
    "Addressing",
    "FlatAddressing",
    "HierarchicalAddressing",
    "FileStore",
]
