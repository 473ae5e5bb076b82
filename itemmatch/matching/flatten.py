"""Flattening of nested item data into a path/value index.

Nested mappings are walked depth-first; each leaf is stored under the
dot-joined keys leading to it, in the mapping's own iteration order.
Sequences are not indexed: their elements are joined with ``,`` and stored
at the path of the containing key.

One field may carry an opaque serialized blob (its path ends in
``internal``). It is kept aside as the fallback search surface for lookups
that find nothing in the structured paths.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from itemmatch.utils.text import to_text

FALLBACK_SUFFIX = "internal"


@dataclass(frozen=True)
class FlattenedRecord:
    """Flat view of an item's nested data.

    Attributes:
        values: Path to rendered value, in traversal order
        fallback: Value of the first path ending in ``internal`` (case-insensitive)
    """

    values: Dict[str, str] = field(default_factory=dict)
    fallback: Optional[str] = None


def flatten(value: Any) -> FlattenedRecord:
    """Flatten nested data into a FlattenedRecord.

    Args:
        value: Nested mappings, sequences and scalars; None gives an empty record

    Returns:
        FlattenedRecord with every leaf indexed by its path

    Example:
        >>> flatten({"tag": {"level": 5, "lore": ["a", "b"]}}).values
        {'tag.level': '5', 'tag.lore': 'a,b'}
    """
    values: Dict[str, str] = {}
    if value is not None:
        _flatten_into(values, "", value)
    return FlattenedRecord(values=values, fallback=find_fallback(values))


def _flatten_into(output: Dict[str, str], parent: str, value: Any) -> None:
    if isinstance(value, Mapping):
        for key, child in value.items():
            path = to_text(key) if not parent else f"{parent}.{to_text(key)}"
            _flatten_into(output, path, child)
        return

    if isinstance(value, (list, tuple)):
        output[parent] = ",".join(to_text(element) for element in value)
        return

    output[parent] = to_text(value)


def find_fallback(values: Dict[str, str]) -> Optional[str]:
    """Return the value of the first path ending in the fallback suffix."""
    for path, value in values.items():
        if path.lower().endswith(FALLBACK_SUFFIX):
            return value
    return None
