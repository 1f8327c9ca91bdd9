"""
Pytest fixtures for the event interceptor test suite.

Provides rule tables, stand-in events, and small reference worlds whose
commands record what ran into a shared trace list.
"""

import pytest

from event_interceptor.config import InterceptorRule, InterceptorSettings, Timing
from event_interceptor.runtime import Command, CommonEvent, GameWorld, MapData
from tests.helpers import StubEvent, recorder


# =============================================================================
# STAND-IN EVENTS
# =============================================================================


@pytest.fixture
def tagged_event():
    """Event tagged <EvTp:aaa> on page 1."""
    return StubEvent(event_type="aaa", page_index=0)


@pytest.fixture
def untagged_event():
    """Event with no tag on page 1."""
    return StubEvent(event_type=None, page_index=0)


@pytest.fixture
def opted_out_event():
    """Event tagged <EvTp:none>."""
    return StubEvent(event_type="none", page_index=0)


# =============================================================================
# RULES
# =============================================================================


@pytest.fixture
def start_rule():
    """Run common event 5 before <EvTp:aaa> events."""
    return InterceptorRule(
        id="aaa-start",
        tag_value="aaa",
        timing=Timing.START,
        page_index=0,
        invalid_parallel=False,
        common_event_id=5,
    )


@pytest.fixture
def finish_any_rule():
    """Run common event 6 after every event not tagged <EvTp:none>."""
    return InterceptorRule(
        id="any-finish",
        tag_value=None,
        timing=Timing.FINISH,
        common_event_id=6,
    )


# =============================================================================
# REFERENCE WORLD
# =============================================================================


@pytest.fixture
def trace():
    """Shared list the recorder commands append to."""
    return []


@pytest.fixture
def common_events(trace):
    """Common events 5 and 6, each recording itself."""
    return [
        CommonEvent(id=5, name="Before", commands=[recorder(trace, "ce5"), Command.end()]),
        CommonEvent(id=6, name="After", commands=[recorder(trace, "ce6"), Command.end()]),
    ]


@pytest.fixture
def make_world(common_events):
    """
    Factory building a world with map 1 (given events, active) and empty map 2.

    Usage:
        world = make_world(rules=[...], events=[simple_event(trace)])
    """

    def _make(rules=(), events=(), tag_name="EvTp", extra_common_events=()):
        settings = InterceptorSettings(rules=tuple(rules), tag_name=tag_name)
        maps = [
            MapData(map_id=1, name="Village", events=list(events)),
            MapData(map_id=2, name="Forest"),
        ]
        world = GameWorld(
            maps=maps,
            common_events=list(common_events) + list(extra_common_events),
            settings=settings,
        )
        world.setup_map(1)
        return world

    return _make
