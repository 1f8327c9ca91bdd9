"""
Test helpers for the event interceptor test suite.

Stand-in events for predicate tests and builders for reference-runtime
events whose commands record what ran.
"""

from dataclasses import dataclass
from typing import Optional

from event_interceptor.runtime import Command, EventData, EventPage


@dataclass
class StubEvent:
    """Minimal ClassifiedEvent for predicate tests."""

    event_type: Optional[str] = None
    page_index: int = 0


def recorder(trace: list, label: str, indent: int = 0) -> Command:
    """Script command appending (label, depth, event id) to trace."""
    return Command.script(
        lambda interp: trace.append((label, interp.depth, interp.event_id)),
        indent=indent,
    )


def labels(trace: list) -> list[str]:
    return [entry[0] for entry in trace]


def simple_event(
    trace: list,
    event_id: int = 1,
    meta: Optional[dict] = None,
    pages: int = 1,
    parallel: bool = False,
) -> EventData:
    """
    Event whose page n records "event{id}:p{n}" then ends.

    Page 1 has no condition; page n > 1 requires switch n - 1.
    """
    return EventData(
        id=event_id,
        name=f"EV{event_id:03d}",
        meta=dict(meta or {}),
        pages=[
            EventPage(
                commands=[recorder(trace, f"event{event_id}:p{n + 1}"), Command.end()],
                switch_id=n if n > 0 else None,
                parallel=parallel,
            )
            for n in range(pages)
        ],
    )
