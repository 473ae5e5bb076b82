"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List

from .criteria import parse_criteria


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    rules = config_dict.get("rules", [])
    if not isinstance(rules, list):
        return warning_messages

    for index, rule in enumerate(rules):
        if not isinstance(rule, dict):
            continue
        name = rule.get("name", f"#{index}")

        if not rule.get("enabled", True):
            warning_messages.append(f"Rule '{name}' is disabled and will be skipped")
            continue

        criteria = parse_criteria(rule.get("criteria"))
        for diagnostic in criteria.diagnostics:
            warning_messages.append(f"Rule '{name}': {diagnostic}")
        if criteria.is_empty():
            warning_messages.append(f"Rule '{name}' has no usable criteria and matches every item")

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
