"""
Interceptor configuration models.

Static configuration for the event interceptor: the ordered rule table and
the note tag name used to classify map events. Both are loaded once at
startup and are read-only afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


DEFAULT_TAG_NAME = "EvTp"

# Classification value that opts an event out of untagged (match-any) rules.
NONE_SENTINEL = "none"


class Timing(str, Enum):
    """When an interceptor runs relative to the event's own commands."""

    START = "start"  # After setup, before the first command
    FINISH = "finish"  # After the last top-level command


@dataclass(frozen=True)
class InterceptorRule:
    """
    One entry of the interceptor table.

    Rules are evaluated in table order and only the first matching rule
    runs its common event.
    """

    id: str = ""
    tag_value: Optional[str] = None
    timing: Timing = Timing.START
    page_index: int = 0  # 1-based page number, 0 = any page
    invalid_parallel: bool = False
    common_event_id: int = 1

    @property
    def matches_any_tag(self) -> bool:
        """True when the rule has no tag value and applies to untagged events."""
        return not self.tag_value

    def to_dict(self) -> dict:
        """Convert to dictionary using the plugin parameter key names."""
        return {
            "id": self.id,
            "tagValue": self.tag_value or "",
            "timing": self.timing.value,
            "pageIndex": self.page_index,
            "invalidParallel": self.invalid_parallel,
            "commonEventId": self.common_event_id,
        }

    def __str__(self) -> str:
        label = self.id or "<unnamed>"
        tag = self.tag_value or "*"
        page = self.page_index or "any"
        return f"{label} [{self.timing.value}] tag={tag} page={page} -> common event {self.common_event_id}"


@dataclass(frozen=True)
class InterceptorSettings:
    """Immutable interceptor configuration passed to the engine."""

    rules: tuple[InterceptorRule, ...] = field(default_factory=tuple)
    tag_name: str = DEFAULT_TAG_NAME

    def rules_for(self, timing: Timing) -> list[InterceptorRule]:
        """Get the rules for one timing, in table order."""
        return [rule for rule in self.rules if rule.timing == timing]
