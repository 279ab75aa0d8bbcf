"""
Shared fixtures for cache unit tests.
"""
import pytest

from committed_cache.cache import CommittedCache
from committed_cache.persist.file_store import FileStore


@pytest.fixture
def cache_dir(tmp_path):
    """Cache root path that does not exist yet."""
    return tmp_path / "cache"


@pytest.fixture
def flat_store(cache_dir):
    """FileStore in flat addressing mode."""
    return FileStore(cache_dir)


@pytest.fixture
def nested_store(tmp_path):
    """FileStore in hierarchical addressing mode split on '---'."""
    return FileStore(tmp_path / "nested", addressing_delimiter="---")


@pytest.fixture
def cache(cache_dir):
    """CommittedCache over a flat store."""
    return CommittedCache(cache_dir)


@pytest.fixture
def nested_cache(nested_store):
    """CommittedCache over a hierarchical store."""
    return CommittedCache(store=nested_store)
