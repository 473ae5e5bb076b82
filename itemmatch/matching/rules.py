"""Named rule sets built from the configuration file."""

from typing import Dict, List, Optional

from itemmatch.config.criteria import parse_criteria
from itemmatch.config.models import AppConfig, RuleConfig
from itemmatch.domain.models import Item
from itemmatch.logging import get_logger

from .engine import ItemMatcher

logger = get_logger(__name__, component="rules")


class RuleSet:
    """Ordered collection of named matchers.

    Disabled rules are skipped at construction time. Rules keep the order
    they were declared in, which decides the result of first_match().
    """

    def __init__(self, rules: List[RuleConfig], tag_presence: bool = True, strict: bool = False):
        """Compile enabled rules into matchers.

        Args:
            rules: Rule configurations
            tag_presence: Evaluate the nbt-tags criterion
            strict: Raise ConfigurationError on malformed criteria

        Raises:
            ConfigurationError: If strict and a rule has malformed criteria
        """
        self.matchers: Dict[str, ItemMatcher] = {}
        for rule in rules:
            if not rule.enabled:
                continue
            criteria = parse_criteria(rule.criteria, strict=strict)
            self.matchers[rule.name] = ItemMatcher(criteria, tag_presence=tag_presence)

        logger.debug(
            "Rule set compiled",
            extra={"event": "rules.compiled", "rule_count": len(self.matchers)},
        )

    @classmethod
    def from_config(cls, app_config: AppConfig) -> "RuleSet":
        return cls(
            app_config.rules,
            tag_presence=app_config.matcher.tag_presence,
            strict=app_config.matcher.strict_criteria,
        )

    @property
    def names(self) -> List[str]:
        return list(self.matchers)

    def matching_rules(self, item: Item) -> List[str]:
        """Names of all rules the item matches, in declaration order."""
        return [name for name, matcher in self.matchers.items() if matcher.is_matching(item)]

    def first_match(self, item: Item) -> Optional[str]:
        """Name of the first rule the item matches, or None."""
        for name, matcher in self.matchers.items():
            if matcher.is_matching(item):
                return name
        return None
