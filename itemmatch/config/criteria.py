"""Parsing of user-authored criteria mappings into typed criteria.

A criteria mapping comes straight from a YAML rule, so every value is
loosely typed. parse_criteria() decides the variant of each criterion once,
at load time, so the matcher never inspects raw values per item.

Malformed entries are lenient by default: the criterion is dropped (it then
counts as absent during matching) and a diagnostic is recorded. With
strict=True the same diagnostics raise ConfigurationError instead.
"""

from typing import Any, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, Field

from itemmatch.utils.text import to_text

from .exceptions import ConfigurationError

IDENTIFIER_KEYS = ("material", "type")
NAME_KEY = "name"
MODEL_DATA_KEY = "custom-model-data"
NBT_VALUE_KEYS = ("nbt-value", "nbt")
NBT_TAGS_KEY = "nbt-tags"

KNOWN_KEYS = frozenset(IDENTIFIER_KEYS + NBT_VALUE_KEYS + (NAME_KEY, MODEL_DATA_KEY, NBT_TAGS_KEY))


class PatternCriterion(BaseModel):
    """A single glob pattern."""

    kind: Literal["pattern"] = "pattern"
    pattern: str

    model_config = {"frozen": True}


class IntegerCriterion(BaseModel):
    """An exact integer value."""

    kind: Literal["integer"] = "integer"
    value: int

    model_config = {"frozen": True}


class EntryListCriterion(BaseModel):
    """Key/value glob pairs that must all be found in the nested data."""

    kind: Literal["entries"] = "entries"
    entries: List[Tuple[str, str]] = Field(default_factory=list)

    model_config = {"frozen": True}


class TagListCriterion(BaseModel):
    """Path fragments that must all be present in the nested data."""

    kind: Literal["tags"] = "tags"
    tags: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}


NestedValueCriterion = Union[PatternCriterion, EntryListCriterion]


class CriteriaSet(BaseModel):
    """Parsed criteria for one rule.

    Attributes:
        identifier: Pattern for the item identifier (``material`` / ``type``)
        name: Pattern for the plain display name (``name``)
        custom_model_data: Expected numeric tag (``custom-model-data``)
        nbt_value: Pattern or entries searched in nested data (``nbt-value`` / ``nbt``)
        nbt_tags: Path fragments required in nested data (``nbt-tags``)
        diagnostics: Problems found while parsing, one message per entry
    """

    identifier: Optional[PatternCriterion] = None
    name: Optional[PatternCriterion] = None
    custom_model_data: Optional[IntegerCriterion] = None
    nbt_value: Optional[NestedValueCriterion] = None
    nbt_tags: Optional[TagListCriterion] = None
    diagnostics: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    def checks_tags(self, tag_presence: bool = True) -> bool:
        """True when nbt-tags is configured and tag presence is enabled."""
        return tag_presence and self.nbt_tags is not None

    def needs_nested_data(self, tag_presence: bool = True) -> bool:
        """True when evaluation has to flatten the item's nested data."""
        return self.nbt_value is not None or self.checks_tags(tag_presence)

    def is_empty(self) -> bool:
        return all(criterion is None for criterion in (
            self.identifier, self.name, self.custom_model_data,
            self.nbt_value, self.nbt_tags,
        ))


def _lookup(mapping: Mapping[str, Any], keys: Tuple[str, ...], diagnostics: List[str]):
    """Return (key, value) for the first key with a non-null value."""
    found = None
    for key in keys:
        if mapping.get(key) is None:
            continue
        if found is None:
            found = (key, mapping[key])
        else:
            diagnostics.append(f"'{key}' ignored because '{found[0]}' is already set")
    return found or (None, None)


def _parse_nested_value(key: str, value: Any, diagnostics: List[str]) -> Optional[NestedValueCriterion]:
    if isinstance(value, str):
        key_pattern, sep, value_pattern = value.partition("=")
        if sep:
            return EntryListCriterion(entries=[(key_pattern, value_pattern)])
        return PatternCriterion(pattern=value)

    if isinstance(value, Mapping):
        entries = [(to_text(k), to_text(v)) for k, v in value.items()]
        return EntryListCriterion(entries=entries)

    diagnostics.append(
        f"'{key}' must be a string or a mapping, got {type(value).__name__}"
    )
    return None


def _parse_tags(value: Any, diagnostics: List[str]) -> Optional[TagListCriterion]:
    if not isinstance(value, (list, tuple)):
        diagnostics.append(f"'{NBT_TAGS_KEY}' must be a list of strings, got {type(value).__name__}")
        return None
    if not value:
        diagnostics.append(f"'{NBT_TAGS_KEY}' is empty and will be ignored")
        return None

    tags = []
    for index, entry in enumerate(value):
        if not isinstance(entry, str):
            diagnostics.append(f"'{NBT_TAGS_KEY}' entry {index} is not a string and will be ignored")
        elif entry.strip():
            tags.append(entry)
    return TagListCriterion(tags=tags)


def parse_criteria(mapping: Any, strict: bool = False) -> CriteriaSet:
    """Parse a raw criteria mapping into a CriteriaSet.

    Args:
        mapping: Raw mapping from criterion name to loosely-typed value
        strict: Raise instead of recording diagnostics

    Returns:
        CriteriaSet with one typed entry per recognized criterion

    Raises:
        ConfigurationError: If strict and any diagnostic was produced
    """
    diagnostics: List[str] = []

    if mapping is None:
        mapping = {}
    if not isinstance(mapping, Mapping):
        diagnostics.append(f"Criteria must be a mapping, got {type(mapping).__name__}")
        mapping = {}

    for key in mapping:
        if key not in KNOWN_KEYS:
            diagnostics.append(f"Unknown criterion '{key}' will be ignored")

    fields = {}

    key, value = _lookup(mapping, IDENTIFIER_KEYS, diagnostics)
    if key is not None:
        if isinstance(value, str):
            fields["identifier"] = PatternCriterion(pattern=value)
        else:
            diagnostics.append(f"'{key}' must be a string, got {type(value).__name__}")

    value = mapping.get(NAME_KEY)
    if value is not None:
        if isinstance(value, str):
            fields["name"] = PatternCriterion(pattern=value)
        else:
            diagnostics.append(f"'{NAME_KEY}' must be a string, got {type(value).__name__}")

    value = mapping.get(MODEL_DATA_KEY)
    if value is not None:
        # bool is an int subclass but never a valid model data value
        if isinstance(value, int) and not isinstance(value, bool):
            fields["custom_model_data"] = IntegerCriterion(value=value)
        else:
            diagnostics.append(f"'{MODEL_DATA_KEY}' must be an integer, got {type(value).__name__}")

    key, value = _lookup(mapping, NBT_VALUE_KEYS, diagnostics)
    if key is not None:
        nested = _parse_nested_value(key, value, diagnostics)
        if nested is not None:
            fields["nbt_value"] = nested

    value = mapping.get(NBT_TAGS_KEY)
    if value is not None:
        tags = _parse_tags(value, diagnostics)
        if tags is not None:
            fields["nbt_tags"] = tags

    if strict and diagnostics:
        raise ConfigurationError(
            "Invalid match criteria",
            errors=diagnostics,
            suggestions=[
                "Use strings for material, type, name and nbt-tags entries",
                "Use an integer for custom-model-data",
                "Use a string or a key/value mapping for nbt-value",
            ],
        )

    return CriteriaSet(diagnostics=diagnostics, **fields)
