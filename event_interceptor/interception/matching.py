"""
Interceptor rule matching.

Pure predicate deciding whether an interceptor rule applies to an event at a
given timing. Checks run in a fixed order and the first failing check
rejects the rule:

1. timing
2. parallel exclusion
3. page number (1-based, 0 = any page)
4. classification (exact tag match, or any tag except the "none" sentinel)
"""

from __future__ import annotations

from typing import Iterable, Optional

from event_interceptor.config.interceptor_models import (
    NONE_SENTINEL,
    InterceptorRule,
    Timing,
)
from event_interceptor.interception.host import ClassifiedEvent


def rule_matches(
    rule: InterceptorRule,
    event: ClassifiedEvent,
    timing: Timing,
    on_primary_interpreter: bool = True,
) -> bool:
    """
    Check whether a rule applies to an event.

    Args:
        rule: The interceptor rule
        event: The live map event
        timing: Hook point being evaluated
        on_primary_interpreter: False when the event is run by a parallel
            interpreter

    Returns:
        True if the rule matches
    """
    if rule.timing != timing:
        return False
    if rule.invalid_parallel and not on_primary_interpreter:
        return False
    if rule.page_index > 0 and rule.page_index != event.page_index + 1:
        return False

    event_type = event.event_type
    if rule.matches_any_tag:
        return event_type != NONE_SENTINEL
    return event_type == rule.tag_value


def select_rule(
    rules: Iterable[InterceptorRule],
    event: ClassifiedEvent,
    timing: Timing,
    on_primary_interpreter: bool = True,
) -> Optional[InterceptorRule]:
    """Return the first rule in table order that matches, or None."""
    for rule in rules:
        if rule_matches(rule, event, timing, on_primary_interpreter):
            return rule
    return None
