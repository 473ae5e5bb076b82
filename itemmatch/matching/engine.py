"""Criteria matching engine for evaluating items against configured rules.

An item matches when at least as many criteria pass as were configured.
Each configured criterion counts once towards the requirement whether it
passes or not; criteria that are absent (or were dropped as malformed at
parse time) do not count at all, so an empty criteria set matches every
item.
"""

import logging
from typing import Any, Callable, Mapping, Optional

from itemmatch.config.criteria import (
    CriteriaSet,
    EntryListCriterion,
    NestedValueCriterion,
    TagListCriterion,
    parse_criteria,
)
from itemmatch.domain.models import Item
from itemmatch.logging import get_logger
from itemmatch.utils.glob import glob_matches
from itemmatch.utils.text import render_plain_text

from .flatten import FlattenedRecord, flatten
from .models import MatchResult

logger = get_logger(__name__, component="matcher")

GlobMatcher = Callable[[str, str], bool]
TextRenderer = Callable[[Any], str]


def contains_entry(
    record: FlattenedRecord,
    key_pattern: str,
    value_pattern: str,
    matches: GlobMatcher = glob_matches,
) -> bool:
    """Check whether the record holds a key/value pair matching both patterns.

    Structured paths are searched first. When none matches, the fallback
    blob is searched for the key with its wildcards removed, and the text
    from that point on must contain something matching value_pattern.

    Args:
        record: Flattened item data
        key_pattern: Glob pattern for the path
        value_pattern: Glob pattern for the value
        matches: Glob matcher

    Returns:
        True if a matching entry was found
    """
    for path, value in record.values.items():
        if matches(key_pattern, path) and matches(value_pattern, value):
            return True

    if record.fallback is None:
        return False

    plain_key = key_pattern.replace("*", "")
    index = record.fallback.lower().find(plain_key.lower())
    if index < 0:
        return False
    return matches(f"*{value_pattern}*", record.fallback[index:])


def has_nested_tag(record: FlattenedRecord, key: str) -> bool:
    """Check whether any path (or the fallback blob) contains key, ignoring case."""
    if not key or not key.strip():
        return False
    lower = key.lower()

    for path in record.values:
        if lower in path.lower():
            return True

    return record.fallback is not None and lower in record.fallback.lower()


class ItemMatcher:
    """Evaluates items against one parsed CriteriaSet.

    The matcher holds no per-evaluation state, so one instance may be shared
    across threads.
    """

    def __init__(
        self,
        criteria: CriteriaSet,
        tag_presence: bool = True,
        glob: GlobMatcher = glob_matches,
        renderer: TextRenderer = render_plain_text,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize ItemMatcher.

        Args:
            criteria: Parsed criteria
            tag_presence: Evaluate the nbt-tags criterion; when False it is ignored
            glob: Glob matcher used for every pattern
            renderer: Converts rich display text to plain text
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.criteria = criteria
        self.tag_presence = tag_presence
        self.glob = glob
        self.renderer = renderer
        self.logger = logger_instance or logger

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[str, Any], strict: bool = False, **kwargs
    ) -> "ItemMatcher":
        """Build a matcher straight from a raw criteria mapping."""
        return cls(parse_criteria(mapping, strict=strict), **kwargs)

    def is_matching(self, item: Item) -> bool:
        return self.evaluate(item).is_match

    def evaluate(self, item: Item) -> MatchResult:
        """Evaluate an item against every configured criterion.

        Args:
            item: Item snapshot

        Returns:
            MatchResult with one outcome per configured criterion
        """
        criteria = self.criteria
        outcomes = {}

        if criteria.identifier is not None:
            outcomes["material"] = (
                item.identifier is not None
                and self.glob(criteria.identifier.pattern, item.identifier)
            )

        if criteria.name is not None:
            outcomes["name"] = self._match_name(criteria.name.pattern, item)

        if criteria.custom_model_data is not None:
            model_data = item.model_data
            outcomes["custom-model-data"] = (
                model_data is not None and model_data == criteria.custom_model_data.value
            )

        if criteria.needs_nested_data(self.tag_presence):
            record = flatten(item.raw_data)

            if criteria.nbt_value is not None:
                outcomes["nbt-value"] = self._match_nested_value(criteria.nbt_value, record)
            if criteria.checks_tags(self.tag_presence):
                outcomes["nbt-tags"] = self._match_tags(criteria.nbt_tags, record)

        result = MatchResult(outcomes=outcomes)

        self.logger.debug(
            "Item matched" if result.is_match else "Item did not match",
            extra={
                "event": "match.evaluated",
                "identifier": item.identifier,
                "is_match": result.is_match,
                "required": result.required_count,
                "passed": result.passed_count,
                "failed": ",".join(result.failed_criteria) or None,
            },
        )
        return result

    def _match_name(self, pattern: str, item: Item) -> bool:
        if item.display_text is None or item.display_text == "":
            return False
        return self.glob(pattern, self.renderer(item.display_text))

    def _match_nested_value(self, criterion: NestedValueCriterion, record: FlattenedRecord) -> bool:
        if isinstance(criterion, EntryListCriterion):
            return all(
                contains_entry(record, key, value, self.glob)
                for key, value in criterion.entries
            )

        pattern = criterion.pattern
        for value in record.values.values():
            if self.glob(pattern, value):
                return True
        return record.fallback is not None and self.glob(pattern, record.fallback)

    @staticmethod
    def _match_tags(criterion: TagListCriterion, record: FlattenedRecord) -> bool:
        return all(has_nested_tag(record, tag) for tag in criterion.tags)
