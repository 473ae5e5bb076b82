"""Configuration management: rules file, criteria parsing and environment."""

from .criteria import (
    CriteriaSet,
    EntryListCriterion,
    IntegerCriterion,
    PatternCriterion,
    TagListCriterion,
    parse_criteria,
)
from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, load_items
from .models import (
    AppConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
    MatcherSettings,
    RuleConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "load_items",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "RuleConfig",
    "MatcherSettings",
    "LoggingConfig",
    "EnvironmentConfig",
    # Criteria
    "parse_criteria",
    "CriteriaSet",
    "PatternCriterion",
    "IntegerCriterion",
    "EntryListCriterion",
    "TagListCriterion",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
