"""
Event interception.

Classification of map events by note tag, the interceptor rule predicate,
and the engine that starts matching common events at the start and finish
hook points.
"""

from event_interceptor.interception.classification import (
    classify_event,
    find_meta_value,
)
from event_interceptor.interception.engine import (
    InterceptionEngine,
    InterceptionRecord,
)
from event_interceptor.interception.host import (
    ClassifiedEvent,
    ExecutionContext,
    InterceptionHost,
)
from event_interceptor.interception.matching import rule_matches, select_rule

__all__ = [
    "classify_event",
    "find_meta_value",
    "InterceptionEngine",
    "InterceptionRecord",
    "ClassifiedEvent",
    "ExecutionContext",
    "InterceptionHost",
    "rule_matches",
    "select_rule",
]
