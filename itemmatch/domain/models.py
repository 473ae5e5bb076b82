"""Core domain model for matchable items.

Item is the subject of every match attempt. It is built once per attempt
from whatever object model the caller owns, and is immutable while the
criteria are evaluated.
"""

import math
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


class Item(BaseModel):
    """Snapshot of a game item's matchable fields.

    Fields that the caller could not resolve are left as None; the matcher
    treats them as absent rather than raising.
    """

    identifier: Optional[str] = Field(
        None, description="Type or material name, e.g. DIAMOND_SWORD"
    )
    display_text: Optional[Any] = Field(
        None, description="Custom display name as plain string or JSON text component"
    )
    numeric_tag: Optional[List[float]] = Field(
        None, description="Custom model data values; only the first one is compared"
    )
    raw_data: Optional[Any] = Field(
        None, description="All persisted auxiliary data as nested maps, lists and scalars"
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {"example": {
            "identifier": "DIAMOND_SWORD",
            "display_text": {"text": "Fire Sword", "color": "red"},
            "numeric_tag": [7.0],
            "raw_data": {"tag": {"level": 5, "type": "fire"}},
        }},
    }

    @field_validator("identifier")
    @classmethod
    def strip_identifier(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace; blank identifiers count as unresolved."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped if stripped else None

    @property
    def model_data(self) -> Optional[int]:
        """Comparable numeric tag: first value truncated toward zero."""
        if not self.numeric_tag or not math.isfinite(self.numeric_tag[0]):
            return None
        return int(self.numeric_tag[0])
