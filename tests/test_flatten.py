"""Unit tests for nested data flattening.

Tests:
- Path construction and ordering
- Sequence rendering
- Fallback blob detection
"""

from itemmatch.matching.flatten import FlattenedRecord, find_fallback, flatten


class TestFlatten:
    """Tests for flatten()."""

    def test_nested_paths_in_traversal_order(self):
        record = flatten({"b": 1, "a": {"y": "x", "x": {"z": 2.5}}, "c": True})

        assert list(record.values.items()) == [
            ("b", "1"),
            ("a.y", "x"),
            ("a.x.z", "2.5"),
            ("c", "true"),
        ]

    def test_flatten_is_deterministic(self):
        data = {"tag": {"level": 5, "lore": ["a", "b"]}, "Internal": "blob"}

        first = flatten(data)
        second = flatten(data)

        assert first == second
        assert list(first.values) == list(second.values)

    def test_sequence_is_joined_at_parent_path(self):
        record = flatten({"lore": ["a", "b", "c"]})
        assert record.values == {"lore": "a,b,c"}

    def test_sequence_elements_are_not_expanded(self):
        """Nested sequences and mappings inside a sequence are only string-converted."""
        record = flatten({"grid": [[1, 2], [3]], "items": [{"id": "x"}, None]})

        assert record.values == {
            "grid": "[1, 2],[3]",
            "items": "{id=x},",
        }

    def test_none_leaf_is_empty_string(self):
        assert flatten({"a": None}).values == {"a": ""}

    def test_none_input_gives_empty_record(self):
        assert flatten(None) == FlattenedRecord()

    def test_scalar_root_uses_empty_path(self):
        assert flatten("raw").values == {"": "raw"}

    def test_empty_mapping_has_no_paths(self):
        assert flatten({"tag": {}}).values == {}

    def test_non_string_keys_are_converted(self):
        assert flatten({1: {"on": False}}).values == {"1.on": "false"}


class TestFallback:
    """Tests for fallback blob detection."""

    def test_first_internal_path_wins(self):
        record = flatten({
            "a": {"PublicBukkitValues": "x"},
            "meta": {"INTERNAL": "first"},
            "other": {"internal": "second"},
        })
        assert record.fallback == "first"

    def test_suffix_match_on_whole_path(self):
        """The path only has to end with 'internal', not equal it."""
        record = flatten({"meta": {"dataInternal": "blob"}})
        assert record.fallback == "blob"

    def test_no_fallback(self):
        record = flatten({"meta": {"internals": "nope", "internal_id": 4}})
        assert record.fallback is None

    def test_find_fallback_on_plain_mapping(self):
        assert find_fallback({"x.Internal": "v"}) == "v"
        assert find_fallback({}) is None
