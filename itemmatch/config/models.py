"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class RuleConfig(BaseModel):
    """A named set of match criteria."""

    name: str = Field(..., min_length=1, description="Unique rule name")
    enabled: bool = Field(True, description="Whether to evaluate this rule")
    criteria: Dict[str, Any] = Field(
        default_factory=dict,
        description="Criterion name to value, e.g. material, name, nbt-value",
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Strip whitespace from the rule name."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Rule name cannot be empty or whitespace-only")
        return stripped


class MatcherSettings(BaseModel):
    """Matcher behaviour switches."""

    tag_presence: bool = Field(
        True, description="Evaluate the nbt-tags presence criterion"
    )
    strict_criteria: bool = Field(
        False, description="Reject malformed criteria instead of ignoring them"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object."""

    rules: List[RuleConfig] = Field(..., min_length=1, description="Match rules")
    matcher: MatcherSettings = Field(
        default_factory=MatcherSettings, description="Matcher settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @model_validator(mode="after")
    def validate_rules(self):
        """Reject duplicate rule names."""
        seen = set()
        for rule in self.rules:
            if rule.name in seen:
                raise ValueError(f"Duplicate rule: {rule.name} appears multiple times")
            seen.add(rule.name)
        return self

    def get_enabled_rules(self) -> List[RuleConfig]:
        """Get list of enabled rules."""
        return [rule for rule in self.rules if rule.enabled]

    def get_rule(self, name: str) -> Optional[RuleConfig]:
        """Get a rule by name."""
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None
