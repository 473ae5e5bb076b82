"""Criteria matching for items.

This module provides:
- flatten / FlattenedRecord: path/value index over nested item data
- ItemMatcher: evaluates an item against one criteria set
- MatchResult: per-criterion outcomes and the aggregate decision
- RuleSet: named matchers compiled from the configuration file
"""

from .engine import ItemMatcher, contains_entry, has_nested_tag
from .flatten import FlattenedRecord, flatten
from .models import MatchResult
from .rules import RuleSet

__all__ = [
    "ItemMatcher",
    "MatchResult",
    "RuleSet",
    "FlattenedRecord",
    "flatten",
    "contains_entry",
    "has_nested_tag",
]
