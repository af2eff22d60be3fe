"""
Ordered-rule cascade driver.

Each rule attempt produces a tagged ``RuleOutcome``. The driver stops at the
first ``MATCHED`` or ``MATCHED_INVALID`` outcome and only moves on past
``NO_MATCH``: an invalid date on a specific rule means the title is not
confidently parseable, so a laxer rule must not get a second try at it.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional

from parsing.patterns import PatternRule

logger = logging.getLogger(__name__)

# Returns a reason string when the match carries an invalid date
DateCheck = Callable[[re.Match, str], Optional[str]]


class OutcomeKind(Enum):
    MATCHED = "matched"
    NO_MATCH = "no_match"
    MATCHED_INVALID = "matched_invalid"


@dataclass(frozen=True)
class RuleOutcome:
    kind: OutcomeKind
    rule: Optional[PatternRule] = None
    match: Optional[re.Match] = None
    reason: str = ""

    @property
    def matched(self) -> bool:
        return self.kind is OutcomeKind.MATCHED


NO_MATCH = RuleOutcome(OutcomeKind.NO_MATCH)


def apply_rule(rule: PatternRule, text: str, date_check: Optional[DateCheck] = None) -> RuleOutcome:
    """Try a single rule against ``text``."""
    match = rule.pattern.search(text)
    if match is None:
        return NO_MATCH

    if date_check is not None:
        reason = date_check(match, text)
        if reason:
            return RuleOutcome(OutcomeKind.MATCHED_INVALID, rule, match, reason)

    return RuleOutcome(OutcomeKind.MATCHED, rule, match)


def run_cascade(
    rules: Iterable[PatternRule],
    text: str,
    date_check: Optional[DateCheck] = None
) -> RuleOutcome:
    """
    Run ``rules`` in priority order against a normalized title.

    Args:
        rules: Ordered rule table
        text: Normalized title
        date_check: Optional validator for date captures

    Returns:
        The first MATCHED or MATCHED_INVALID outcome, or NO_MATCH
    """
    for rule in rules:
        outcome = apply_rule(rule, text, date_check)

        if outcome.kind is OutcomeKind.NO_MATCH:
            continue

        logger.debug(f"Rule '{rule.name}' matched '{text}'")
        return outcome

    return NO_MATCH
