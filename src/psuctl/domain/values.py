"""Path selection over schema-less nested mappings.

The remote API returns diagnostic payloads (Docker info, snapshots) as
arbitrary JSON trees.  :func:`select_value` walks such a tree by a list of
keys and distinguishes a missing key from a path that runs into a leaf.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from psuctl.domain.errors import ShapeMismatchError, ValueNotFoundError


def select_value(tree: Mapping[str, Any], path: Sequence[str]) -> Any:
    """Return the value found at *path* inside *tree*.

    An explicit ``None`` leaf is returned as-is; only an absent key raises
    :class:`ValueNotFoundError`.

    Raises:
        ValueError: If *path* is empty.
        ValueNotFoundError: If a key along the path is absent.
        ShapeMismatchError: If an intermediate value is not a mapping.
    """
    if not path:
        raise ValueError("path must contain at least one key")

    key, rest = path[0], path[1:]
    if key not in tree:
        raise ValueNotFoundError(key=key, remaining=list(rest))

    value = tree[key]
    if not rest:
        return value
    if not isinstance(value, Mapping):
        raise ShapeMismatchError(
            f"Value at {key!r} is {type(value).__name__}, not a mapping",
            key=key,
            remaining=list(rest),
        )
    return select_value(value, rest)
