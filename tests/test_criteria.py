"""Tests for criteria parsing into typed criterion variants."""

import pytest

from itemmatch.config.criteria import (
    CriteriaSet,
    EntryListCriterion,
    IntegerCriterion,
    PatternCriterion,
    TagListCriterion,
    parse_criteria,
)
from itemmatch.config.exceptions import ConfigurationError


class TestParseCriteria:
    """Tests for the supported value shapes."""

    def test_empty_mapping(self):
        criteria = parse_criteria({})
        assert criteria.is_empty()
        assert criteria.diagnostics == []

    def test_none_is_empty(self):
        assert parse_criteria(None).is_empty()

    def test_material_wins_over_type(self):
        criteria = parse_criteria({"material": "*_sword", "type": "stone"})

        assert criteria.identifier == PatternCriterion(pattern="*_sword")
        assert criteria.diagnostics == ["'type' ignored because 'material' is already set"]

    def test_type_used_when_material_missing(self):
        criteria = parse_criteria({"type": "stone"})
        assert criteria.identifier == PatternCriterion(pattern="stone")

    def test_name_and_model_data(self):
        criteria = parse_criteria({"name": "Fire*", "custom-model-data": 7})

        assert criteria.name == PatternCriterion(pattern="Fire*")
        assert criteria.custom_model_data == IntegerCriterion(value=7)

    def test_nbt_value_plain_pattern(self):
        criteria = parse_criteria({"nbt-value": "*fire*"})
        assert criteria.nbt_value == PatternCriterion(pattern="*fire*")

    def test_nbt_value_key_value_string(self):
        criteria = parse_criteria({"nbt-value": "tag.level=5"})
        assert criteria.nbt_value == EntryListCriterion(entries=[("tag.level", "5")])

    def test_nbt_value_splits_at_first_separator(self):
        criteria = parse_criteria({"nbt": "a=b=c"})
        assert criteria.nbt_value == EntryListCriterion(entries=[("a", "b=c")])

    def test_nbt_value_mapping_values_are_coerced(self):
        criteria = parse_criteria({"nbt-value": {"tag.level": 5, "tag.flag": True, "x": None}})

        assert criteria.nbt_value.entries == [
            ("tag.level", "5"),
            ("tag.flag", "true"),
            ("x", ""),
        ]

    def test_nbt_tags_drop_blank_entries(self):
        criteria = parse_criteria({"nbt-tags": ["enchant", "  ", "lore"]})
        assert criteria.nbt_tags == TagListCriterion(tags=["enchant", "lore"])

    def test_needs_nested_data(self):
        assert parse_criteria({"nbt-value": "x"}).needs_nested_data(tag_presence=False)
        assert parse_criteria({"nbt-tags": ["x"]}).needs_nested_data()
        assert not parse_criteria({"nbt-tags": ["x"]}).needs_nested_data(tag_presence=False)
        assert not parse_criteria({"material": "x"}).needs_nested_data()

    def test_checks_tags_follows_switch(self):
        criteria = parse_criteria({"nbt-tags": ["x"]})

        assert criteria.checks_tags() is True
        assert criteria.checks_tags(tag_presence=False) is False


class TestLenientParsing:
    """Malformed values are dropped with a diagnostic."""

    @pytest.mark.parametrize(
        "mapping,field",
        [
            ({"material": 5}, "identifier"),
            ({"name": ["a"]}, "name"),
            ({"custom-model-data": "7"}, "custom_model_data"),
            ({"custom-model-data": True}, "custom_model_data"),
            ({"custom-model-data": 7.0}, "custom_model_data"),
            ({"nbt-value": ["a"]}, "nbt_value"),
            ({"nbt-tags": "enchant"}, "nbt_tags"),
            ({"nbt-tags": []}, "nbt_tags"),
        ],
    )
    def test_wrong_type_is_absent(self, mapping, field):
        criteria = parse_criteria(mapping)

        assert getattr(criteria, field) is None
        assert len(criteria.diagnostics) == 1

    def test_unknown_key(self):
        criteria = parse_criteria({"colour": "red"})

        assert criteria.is_empty()
        assert criteria.diagnostics == ["Unknown criterion 'colour' will be ignored"]

    def test_non_string_tag_entries_are_reported(self):
        criteria = parse_criteria({"nbt-tags": ["ok", 3]})

        assert criteria.nbt_tags.tags == ["ok"]
        assert "entry 1" in criteria.diagnostics[0]

    def test_non_mapping_criteria(self):
        criteria = parse_criteria("material=stone")

        assert isinstance(criteria, CriteriaSet)
        assert criteria.is_empty()
        assert "must be a mapping" in criteria.diagnostics[0]


class TestStrictParsing:
    """strict=True turns diagnostics into ConfigurationError."""

    def test_strict_raises_with_all_errors(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_criteria({"material": 5, "custom-model-data": "x"}, strict=True)

        assert exc_info.value.message == "Invalid match criteria"
        assert len(exc_info.value.errors) == 2

    def test_strict_accepts_valid_criteria(self):
        criteria = parse_criteria({"material": "stone", "nbt-tags": ["a"]}, strict=True)
        assert criteria.identifier.pattern == "stone"
