"""
Host interfaces consumed by the interception engine.

The engine never owns events, interpreters or common events. It reads them
through these protocols, which the reference runtime in
event_interceptor.runtime implements.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence


class ClassifiedEvent(Protocol):
    """A live map event as seen by the rule predicate."""

    @property
    def event_type(self) -> Optional[str]:
        """Classification read from the event's note tag (None if untagged)."""
        ...

    @property
    def page_index(self) -> int:
        """Current page, 0-based (-1 when no page is active)."""
        ...


class ExecutionContext(Protocol):
    """An interpreter running a command list on behalf of an event."""

    @property
    def depth(self) -> int:
        ...

    @property
    def event_id(self) -> int:
        ...

    def is_on_current_map(self) -> bool:
        ...

    def setup_child(self, commands: Sequence[Any], event_id: int) -> None:
        """Push a nested context at depth + 1 bound to event_id."""
        ...


class InterceptionHost(Protocol):
    """Lookups the engine needs from the running game."""

    def find_event(self, event_id: int) -> Optional[ClassifiedEvent]:
        """Resolve an event on the active map, or None if it does not exist."""
        ...

    def is_primary_interpreter(self, context: ExecutionContext) -> bool:
        """True if context is the active map's main (non-parallel) interpreter."""
        ...

    def common_event_commands(self, common_event_id: int) -> Optional[Sequence[Any]]:
        """Command list of a common event, or None if it is not defined."""
        ...
