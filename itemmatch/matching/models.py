"""Data models for the matching engine."""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class MatchResult:
    """Result of evaluating one item against one CriteriaSet.

    Only criteria that were configured appear in ``outcomes``; absent or
    malformed criteria are not counted.

    Attributes:
        outcomes: Criterion name to pass/fail, in evaluation order
    """

    outcomes: Dict[str, bool] = field(default_factory=dict)

    @property
    def required_count(self) -> int:
        return len(self.outcomes)

    @property
    def passed_count(self) -> int:
        return sum(1 for passed in self.outcomes.values() if passed)

    @property
    def is_match(self) -> bool:
        """True when at least as many criteria passed as were configured."""
        return self.passed_count >= self.required_count

    @property
    def failed_criteria(self) -> List[str]:
        return [name for name, passed in self.outcomes.items() if not passed]

    def __bool__(self) -> bool:
        return self.is_match
