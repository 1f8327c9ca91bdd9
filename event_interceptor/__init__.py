"""
Event Interceptor.

Runs a shared common event automatically before or after map events, chosen
by the event's note tag (<EvTp:value>) and an ordered interceptor table.
"""

from event_interceptor.config import (
    InterceptorRule,
    InterceptorSettings,
    Timing,
    load_settings,
    parse_settings,
)
from event_interceptor.interception import (
    InterceptionEngine,
    InterceptionRecord,
    rule_matches,
    select_rule,
)

__all__ = [
    "InterceptorRule",
    "InterceptorSettings",
    "Timing",
    "load_settings",
    "parse_settings",
    "InterceptionEngine",
    "InterceptionRecord",
    "rule_matches",
    "select_rule",
]
