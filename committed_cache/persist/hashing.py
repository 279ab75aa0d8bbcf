"""
Stable hashing for cache addressing.

Every file and directory name in the cache is derived from a SHA-256 digest
of the key (or key segment) text, so the same key always lands on the same
path on every machine.
"""

import hashlib
from typing import Any


def digest(text: Any) -> str:
    """
    Compute the SHA-256 hex digest of a key or key segment.

    Non-string input is coerced with ``str()``. The text is hashed as UTF-8
    without any normalization, so the result is a pure function of the
    characters supplied.

    Returns:
        64-character lowercase hex string

    Examples:
        >>> digest("foo")
        '2c26b46b68ffc68ff99b453c1d30413413422d706483bfa0f98a5e886266e7ae'
        >>> digest(123) == digest("123")
        True
    """
    return hashlib.sha256(str(text).encode("utf-8")).hexdigest()
