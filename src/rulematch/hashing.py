"""SHA-256 helpers."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from typing import Any

from rulematch.serialization import stringify

__all__ = ["compute_object_sha256", "compute_sha256", "compute_string_sha256"]


def compute_sha256(data: bytes) -> str:
    """Return the lowercase hex SHA-256 digest of ``data``."""
    return hashlib.sha256(data).hexdigest()


def compute_string_sha256(text: str) -> str:
    """Return the SHA-256 digest of the UTF-8 encoding of ``text``."""
    return compute_sha256(text.encode("utf-8"))


def compute_object_sha256(obj: Any, exclude: Iterable[str] = ()) -> str:
    """Hash the canonical string form of ``obj``.

    Values that differ only in key order or sequence order hash the same.
    """
    return compute_string_sha256(stringify(obj, exclude))
