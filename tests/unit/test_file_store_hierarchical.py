"""
Unit tests for committed_cache/persist/file_store.py in hierarchical mode

Tests nested digest directories, _key_chunk files and subtree deletion.
"""
import hashlib

import pytest

from committed_cache.persist import addressing
from committed_cache.persist.file_store import FileStore


def sha(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def test_mode_and_delimiter(nested_store):
    """Delimiter selects hierarchical mode."""
    assert nested_store.mode == "hierarchical"
    assert nested_store.addressing_delimiter == "---"


def test_empty_delimiter_rejected(tmp_path):
    """An empty delimiter is a configuration error."""
    with pytest.raises(ValueError):
        FileStore(tmp_path, addressing_delimiter="")


def test_creates_nested_directories(nested_store):
    """Each segment becomes one nested directory named by its digest."""
    nested_store.write("foo---bar---boo-ba", b"27")
    root = nested_store.cache_path

    assert (root / sha("foo")).is_dir()
    assert (root / sha("foo") / sha("bar")).is_dir()
    assert (root / sha("foo") / sha("bar") / sha("boo-ba")).is_dir()
    assert [p.name for p in root.iterdir()] == [sha("foo")]


def test_key_chunk_files(nested_store):
    """Every level holds its literal segment text."""
    nested_store.write("foo---bar---boo-ba", b"27")
    foo = nested_store.cache_path / sha("foo")
    bar = foo / sha("bar")
    boo_ba = bar / sha("boo-ba")

    assert (foo / "_key_chunk").read_bytes() == b"foo"
    assert (bar / "_key_chunk").read_bytes() == b"bar"
    assert (boo_ba / "_key_chunk").read_bytes() == b"boo-ba"


def test_value_only_in_innermost_directory(nested_store, snapshot):
    """Only the last level contains a value file."""
    nested_store.write("foo---bar---boo-ba", b"27")
    files = snapshot(nested_store.cache_path)

    value_files = [path for path in files if path.endswith("value")]
    assert value_files == [f"{sha('foo')}/{sha('bar')}/{sha('boo-ba')}/value"]
    assert len(files) == 4
    assert nested_store.read("foo---bar---boo-ba") == b"27"


def test_single_segment_key(nested_store):
    """A key without the delimiter uses one directory level."""
    nested_store.write("single_key", b"single_value")
    level = nested_store.cache_path / sha("single_key")

    assert sorted(p.name for p in level.iterdir()) == ["_key_chunk", "value"]
    assert (level / "_key_chunk").read_bytes() == b"single_key"
    assert nested_store.read("single_key") == b"single_value"


def test_many_levels(nested_store):
    """Deep keys round-trip."""
    key = "a---b---c---d---e---f"
    nested_store.write(key, b"deep_value")
    assert nested_store.read(key) == b"deep_value"


def test_empty_segments_are_kept(nested_store):
    """Doubled and trailing delimiters create empty-segment levels."""
    nested_store.write("a------b---", b"v")
    root = nested_store.cache_path
    innermost = root / sha("a") / sha("") / sha("b") / sha("")

    assert (innermost / "value").read_bytes() == b"v"
    assert (root / sha("a") / sha("") / "_key_chunk").read_bytes() == b""
    assert nested_store.read("a------b---") == b"v"
    assert nested_store.read("a---b") is None


def test_prefix_key_and_longer_key_coexist(nested_store):
    """A key may be a segment prefix of another key."""
    nested_store.write("user", b"outer")
    nested_store.write("user---1", b"inner")

    assert nested_store.read("user") == b"outer"
    assert nested_store.read("user---1") == b"inner"


def test_read_missing_key(nested_store):
    """Unknown keys and partial chains are misses."""
    nested_store.write("foo---bar", b"v")

    assert nested_store.read("nope") is None
    assert nested_store.read("foo") is None


def test_overwrite(nested_store):
    """Second write replaces the value."""
    nested_store.write("key---sub", b"value1")
    nested_store.write("key---sub", b"value2")
    assert nested_store.read("key---sub") == b"value2"


def test_rewrite_same_value_is_idempotent(nested_store, snapshot):
    """Writing identical bytes again changes no file."""
    nested_store.write("foo---bar---baz", b"payload")
    nested_store.write("foo---qux", b"other")
    before = snapshot(nested_store.cache_path)

    nested_store.write("foo---bar---baz", b"payload")

    assert snapshot(nested_store.cache_path) == before


def test_write_failure_returns_false(nested_store):
    """A file where a segment directory should be fails the write softly."""
    (nested_store.cache_path / sha("foo")).write_bytes(b"in the way")

    assert nested_store.write("foo---bar", b"v") is False
    assert nested_store.read("foo---bar") is None


def test_delete_entry(nested_store):
    """Delete reports True and the key becomes a miss."""
    nested_store.write("foo---bar---baz", b"value")

    assert nested_store.delete("foo---bar---baz") is True
    assert nested_store.read("foo---bar---baz") is None
    assert list(nested_store.cache_path.iterdir()) == []


def test_delete_missing_entry(nested_store):
    """Nothing to delete reports False."""
    assert nested_store.delete("foo---bar") is False


def test_delete_prefix_without_value(nested_store):
    """A chain prefix with no value file is not deletable."""
    nested_store.write("foo---bar", b"v")

    assert nested_store.delete("foo") is False
    assert nested_store.read("foo---bar") == b"v"


def test_delete_cascades_to_first_segment_subtree(nested_store):
    """Deleting one key prunes every key sharing its first segment."""
    nested_store.write("user---1---name", b"A")
    nested_store.write("user---2---name", b"B")
    nested_store.write("account---1", b"C")

    assert nested_store.delete("user---1---name") is True

    assert nested_store.read("user---1---name") is None
    assert nested_store.read("user---2---name") is None
    assert nested_store.read("account---1") == b"C"


def test_delete_failure_returns_false(nested_store, monkeypatch):
    """Subtree removal errors surface as False."""
    nested_store.write("foo---bar", b"v")

    def refuse(path):
        raise PermissionError(f"denied: {path}")

    monkeypatch.setattr(addressing.shutil, "rmtree", refuse)

    assert nested_store.delete("foo---bar") is False
    assert nested_store.read("foo---bar") == b"v"


def test_clear_removes_all_subdirectories(nested_store):
    """Clear empties the root including nested chains."""
    nested_store.write("key1---sub1", b"value1")
    nested_store.write("key2---sub2", b"value2")
    nested_store.write("key3---sub3---sub4", b"value3")

    assert nested_store.clear() is True
    assert nested_store.cache_path.is_dir()
    assert list(nested_store.cache_path.iterdir()) == []


def test_keys_reconstructs_full_keys(nested_store):
    """keys() joins chunk texts along every chain that ends in a value."""
    written = ["foo---bar---boo-ba", "foo---qux", "single", "single---deeper", "a------b---"]
    for key in written:
        nested_store.write(key, b"v")

    assert sorted(nested_store.keys()) == sorted(written)


def test_stats(nested_store):
    """stats() counts entries and every chunk/value file."""
    nested_store.write("a---b", b"12")
    nested_store.write("a---c", b"345")

    stats = nested_store.stats()

    assert stats["mode"] == "hierarchical"
    assert stats["entries"] == 2
    # a/_key_chunk, a/b/_key_chunk, a/b/value, a/c/_key_chunk, a/c/value
    assert stats["files"] == 5
    assert stats["total_bytes"] == 1 + 1 + 2 + 1 + 3
