"""Exceptions raised by the cache."""

from __future__ import annotations

from pathlib import Path


class CacheRootError(RuntimeError):
    """Raised when the cache root directory cannot be created."""

    def __init__(self, cache_path: Path | str, reason: str):
        self.cache_path = Path(cache_path)
        self.reason = reason
        super().__init__(f"Cannot create cache root {self.cache_path}: {reason}")
