"""Command line entry point: evaluate items from a file against configured rules."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from itemmatch.config.environment import EnvironmentConfig
from itemmatch.config.exceptions import ConfigurationError
from itemmatch.config.loader import load_config, load_items
from itemmatch.config.models import AppConfig
from itemmatch.logging import get_logger
from itemmatch.logging.config import configure_logging
from itemmatch.logging.context import log_context
from itemmatch.matching.rules import RuleSet

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Path, log_level_override: Optional[str], strict: bool = False
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve runtime overrides.

    Log level priority: CLI > environment > config file.

    Args:
        config_path: Path to configuration file
        log_level_override: Log level from CLI
        strict: Force strict criteria parsing

    Returns:
        Tuple of (AppConfig, EnvironmentConfig)

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level or "INFO"

    if strict:
        app_config.matcher.strict_criteria = True

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="itemmatch",
        description="Evaluate game items against glob-based match rules",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to rules file (default: rules.yaml or config/rules.yaml)",
    )
    parser.add_argument(
        "--items",
        type=Path,
        required=True,
        help="Path to a YAML or JSON list of items",
    )
    parser.add_argument(
        "--rule",
        default=None,
        help="Only evaluate the rule with this name",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject malformed criteria instead of ignoring them",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        0 when every item was evaluated, 2 on configuration errors,
        1 on unexpected errors.
    """
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level, args.strict)
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        rules = app_config.rules
        if args.rule:
            rule = app_config.get_rule(args.rule)
            if rule is None:
                raise ConfigurationError(
                    f"Unknown rule: {args.rule}",
                    suggestions=[f"Available rules: {', '.join(r.name for r in rules)}"],
                )
            if not rule.enabled:
                raise ConfigurationError(
                    f"Rule is disabled: {args.rule}",
                    suggestions=["Set enabled: true for this rule or choose another rule"],
                )
            rules = [rule]

        rule_set = RuleSet(
            rules,
            tag_presence=app_config.matcher.tag_presence,
            strict=app_config.matcher.strict_criteria,
        )
        items = load_items(args.items)

        logger.info(
            "Evaluating items",
            extra={
                "event": "run.started",
                "item_count": len(items),
                "rule_count": len(rule_set.names),
            },
        )

        matched_count = 0
        for index, item in enumerate(items):
            with log_context(item=index):
                matched = rule_set.matching_rules(item)
            if matched:
                matched_count += 1
            label = item.identifier or "<unknown>"
            print(f"{index}\t{label}\t{', '.join(matched) if matched else '-'}")

        logger.info(
            "Evaluation completed",
            extra={
                "event": "run.completed",
                "item_count": len(items),
                "matched_count": matched_count,
            },
        )
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error",
            extra={"event": "run.failed", "error_type": type(e).__name__},
            exc_info=True,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
