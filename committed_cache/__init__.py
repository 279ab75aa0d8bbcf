"""File-backed key-value cache whose contents are safe to commit to version control."""

from .cache import CommittedCache
from .exceptions import CacheRootError
from .persist import FileStore

__all__ = ["CommittedCache", "CacheRootError", "FileStore"]
