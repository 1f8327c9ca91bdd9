"""
Interception engine.

Runs a configured common event as a nested context right before a map event's
commands start, or right after its last top-level command, depending on the
first interceptor rule that matches the event.

Every failure mode is a silent skip: nested contexts, contexts left behind
on a map that is no longer active, unknown events, no matching rule, and
rules pointing at common events that do not exist.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from event_interceptor.config.interceptor_models import (
    InterceptorRule,
    InterceptorSettings,
    Timing,
)
from event_interceptor.interception.host import ExecutionContext, InterceptionHost
from event_interceptor.interception.matching import select_rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InterceptionRecord:
    """A common event started by the engine."""

    rule: InterceptorRule
    event_id: int
    map_id: Optional[int]
    timing: Timing
    common_event_id: int
    child_depth: int

    def __str__(self) -> str:
        return (
            f"INTERCEPT {self.timing.value} event {self.event_id} (map {self.map_id}) "
            f"-> common event {self.common_event_id} at depth {self.child_depth}"
        )


InterceptionListener = Callable[[InterceptionRecord], None]


class InterceptionEngine:
    """
    Matches interceptor rules against events and starts their common events.

    The engine holds the immutable settings and the listener list only;
    everything else is read from the host at call time.
    """

    def __init__(self, settings: InterceptorSettings, host: InterceptionHost):
        """
        Initialize the engine.

        Args:
            settings: Loaded interceptor settings
            host: Host lookups (events, interpreters, common events)
        """
        self._settings = settings
        self._host = host
        self._listeners: list[InterceptionListener] = []

    @property
    def settings(self) -> InterceptorSettings:
        return self._settings

    def add_listener(self, callback: InterceptionListener) -> None:
        """Register a callback receiving every started interception."""
        self._listeners.append(callback)

    def remove_listener(self, callback: InterceptionListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    # =========================================================================
    # HOOK POINTS
    # =========================================================================

    def on_setup(self, context: ExecutionContext, event_id: int) -> Optional[InterceptionRecord]:
        """Hook called right after an interpreter is set up for a fresh run."""
        return self.try_intercept(context, event_id, Timing.START)

    def on_terminator(
        self,
        context: ExecutionContext,
        has_next_command: bool,
    ) -> Optional[InterceptionRecord]:
        """
        Hook called by the end-of-block command.

        Only the end of the whole command list counts as the event finishing;
        an end-of-block inside a branch always has a command after it.
        """
        if has_next_command:
            return None
        return self.try_intercept(context, context.event_id, Timing.FINISH)

    # =========================================================================
    # TRIGGERING
    # =========================================================================

    def try_intercept(
        self,
        context: ExecutionContext,
        event_id: int,
        timing: Timing,
    ) -> Optional[InterceptionRecord]:
        """
        Start the first matching interceptor for an event, if any.

        Args:
            context: The interpreter running the event
            event_id: Event being started or finished
            timing: Hook point

        Returns:
            InterceptionRecord if a common event was started, None otherwise
        """
        # Nested contexts (including interceptors themselves) never re-trigger
        if context.depth > 0:
            return None
        if not context.is_on_current_map():
            return None
        event = self._host.find_event(event_id)
        if event is None:
            return None

        primary = self._host.is_primary_interpreter(context)
        rule = select_rule(self._settings.rules, event, timing, primary)
        if rule is None:
            return None

        commands = self._host.common_event_commands(rule.common_event_id)
        if commands is None:
            return None

        context.setup_child(commands, event_id)

        record = InterceptionRecord(
            rule=rule,
            event_id=event_id,
            map_id=getattr(context, "map_id", None),
            timing=timing,
            common_event_id=rule.common_event_id,
            child_depth=context.depth + 1,
        )
        logger.debug(str(record))
        self._notify(record)
        return record

    def _notify(self, record: InterceptionRecord) -> None:
        for listener in self._listeners:
            try:
                listener(record)
            except Exception as e:
                logger.warning(f"Interception listener error: {e}")
