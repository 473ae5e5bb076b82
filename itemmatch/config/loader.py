"""Configuration and item file loading."""

import json
from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import ValidationError

from itemmatch.domain.models import Item

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import AppConfig
from .validators import check_for_warnings, emit_warnings


def load_config(config_path: Optional[Path] = None) -> tuple[AppConfig, EnvironmentConfig]:
    """
    Load and validate the rules file and environment variables.

    Config file location:
    1. Use provided config_path if given
    2. Try rules.yaml in current directory
    3. Try ./config/rules.yaml
    4. Fail with helpful error message

    Args:
        config_path: Optional path to configuration file

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with validated configuration

    Raises:
        ConfigurationError: If configuration is invalid or file not found
    """
    config_file = _find_config_file(config_path)
    config_dict = _read_document(config_file)

    if not config_dict:
        raise ConfigurationError(
            "Configuration file is empty",
            suggestions=["Add a 'rules' list to your config file"],
        )
    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Configuration root must be a mapping, got {type(config_dict).__name__}",
            suggestions=["Start the file with a top-level 'rules:' key"],
        )

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    try:
        app_config = AppConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            "Configuration validation failed",
            errors=format_validation_errors(e),
            suggestions=[
                "Check that every rule has a name and a criteria mapping",
                "Verify field types match the expected schema",
            ],
        )

    env_config = load_environment_config()
    return app_config, env_config


def load_items(items_path: Path) -> List[Item]:
    """
    Load items from a YAML or JSON file holding a list of item mappings.

    Args:
        items_path: Path to the items file

    Returns:
        List of validated Item instances, in file order

    Raises:
        ConfigurationError: If the file is missing, unparseable or invalid
    """
    if not items_path.exists():
        raise ConfigurationError(
            f"Items file not found: {items_path}",
            suggestions=[f"Ensure {items_path} exists", "Check the path and try again"],
        )

    document = _read_document(items_path)
    if document is None:
        return []
    if not isinstance(document, list):
        raise ConfigurationError(
            f"Items file must contain a list, got {type(document).__name__}",
            suggestions=["Write one list entry per item"],
        )

    items = []
    errors = []
    for index, entry in enumerate(document):
        try:
            items.append(Item.model_validate(entry))
        except ValidationError as e:
            errors.extend(f"item {index}: {message}" for message in format_validation_errors(e))

    if errors:
        raise ConfigurationError(
            "Items validation failed",
            errors=errors,
            suggestions=["Items accept identifier, display_text, numeric_tag and raw_data"],
        )
    return items


def format_validation_errors(error: ValidationError) -> List[str]:
    """Convert pydantic validation errors into user-friendly messages."""
    messages = []
    for detail in error.errors():
        field_path = " -> ".join(str(loc) for loc in detail["loc"])
        error_type = detail["type"]

        if error_type == "missing":
            messages.append(f"Missing required field: {field_path}")
        elif error_type in ["string_type", "int_type", "bool_type", "list_type", "dict_type"]:
            expected_type = error_type.replace("_type", "")
            messages.append(
                f"Invalid type for '{field_path}': expected {expected_type}, got {detail.get('input')}"
            )
        else:
            messages.append(f"{field_path}: {detail['msg']}")
    return messages


def _read_document(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Failed to parse {path}: {e}",
            suggestions=[
                "Check the file syntax",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        )
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read {path}: {e}",
            suggestions=[f"Ensure {path} is readable", "Check file permissions"],
        )


def _find_config_file(config_path: Optional[Path] = None) -> Path:
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Check the path and try again",
                ],
            )
        return config_path

    candidates = [
        Path("rules.yaml"),
        Path("config") / "rules.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    raise ConfigurationError(
        "Configuration file not found",
        errors=[
            "Tried: rules.yaml",
            "Tried: config/rules.yaml",
        ],
        suggestions=[
            "Create a rules.yaml file in the current directory",
            "Use --config flag to specify a custom location",
        ],
    )
