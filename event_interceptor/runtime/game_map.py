"""
Maps and map events for the reference runtime.

Static definitions (MapData, EventData, EventPage, CommonEvent) describe the
content; GameMap and MapEvent are the live instances built when a map becomes
active. A map event's classification is computed once, in its constructor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from event_interceptor.interception.classification import TagName, classify_event
from event_interceptor.runtime.commands import Command
from event_interceptor.runtime.interpreter import Interpreter

if TYPE_CHECKING:
    from event_interceptor.runtime.world import GameWorld

logger = logging.getLogger(__name__)


# =============================================================================
# STATIC DEFINITIONS
# =============================================================================


@dataclass
class EventPage:
    """One page of an event: its commands and when it is active."""
    commands: list[Command] = field(default_factory=lambda: [Command.end()])
    switch_id: Optional[int] = None  # Page active only while this switch is on
    parallel: bool = False


@dataclass
class EventData:
    """Static definition of a map event."""
    id: int
    name: str = ""
    meta: dict[str, Any] = field(default_factory=dict)  # Parsed note tags
    pages: list[EventPage] = field(default_factory=list)


@dataclass
class CommonEvent:
    """A shared command list callable from any event."""
    id: int
    name: str = ""
    commands: list[Command] = field(default_factory=lambda: [Command.end()])


@dataclass
class MapData:
    """Static definition of a map."""
    map_id: int
    name: str = ""
    events: list[EventData] = field(default_factory=list)


# =============================================================================
# LIVE INSTANCES
# =============================================================================


class MapEvent:
    """A map event instance on the active map."""

    def __init__(self, world: "GameWorld", map_id: int, data: EventData, tag_name: TagName):
        self._world = world
        self._map_id = map_id
        self._data = data
        self._event_type = classify_event(data, tag_name)
        self._page_index = -1
        self._interpreter: Optional[Interpreter] = None
        self.refresh()

    @property
    def event_id(self) -> int:
        return self._data.id

    @property
    def map_id(self) -> int:
        return self._map_id

    @property
    def event_type(self) -> Optional[str]:
        """Classification from the note tag, fixed at construction."""
        return self._event_type

    @property
    def page_index(self) -> int:
        return self._page_index

    @property
    def interpreter(self) -> Optional[Interpreter]:
        """Own interpreter, present only while a parallel page is active."""
        return self._interpreter

    def event(self) -> EventData:
        return self._data

    def page(self) -> Optional[EventPage]:
        if 0 <= self._page_index < len(self._data.pages):
            return self._data.pages[self._page_index]
        return None

    def commands(self) -> list[Command]:
        page = self.page()
        return page.commands if page else []

    def is_parallel(self) -> bool:
        page = self.page()
        return bool(page and page.parallel)

    def refresh(self) -> None:
        """Re-select the active page after a game state change."""
        new_index = self.find_proper_page_index()
        if new_index != self._page_index:
            self._page_index = new_index
            self._setup_page_settings()

    def find_proper_page_index(self) -> int:
        """Highest-numbered page whose condition holds, or -1."""
        for index in range(len(self._data.pages) - 1, -1, -1):
            if self._meets_conditions(self._data.pages[index]):
                return index
        return -1

    def _meets_conditions(self, page: EventPage) -> bool:
        if page.switch_id is not None:
            return self._world.switch(page.switch_id)
        return True

    def _setup_page_settings(self) -> None:
        if self.is_parallel():
            self._interpreter = Interpreter(self._world)
        else:
            self._interpreter = None


class GameMap:
    """
    The active map.

    Owns the primary interpreter that runs player-triggered events; events
    with a parallel page run on their own interpreters.
    """

    def __init__(self, world: "GameWorld", data: MapData, tag_name: TagName):
        self._world = world
        self._data = data
        self._interpreter = Interpreter(world)
        self._events: dict[int, MapEvent] = {
            event_data.id: MapEvent(world, data.map_id, event_data, tag_name)
            for event_data in data.events
        }

    @property
    def map_id(self) -> int:
        return self._data.map_id

    @property
    def interpreter(self) -> Interpreter:
        return self._interpreter

    @property
    def events(self) -> list[MapEvent]:
        return list(self._events.values())

    def event(self, event_id: int) -> Optional[MapEvent]:
        return self._events.get(event_id)

    def erase_event(self, event_id: int) -> None:
        """Remove an event instance from the map."""
        self._events.pop(event_id, None)

    def is_active(self) -> bool:
        return self._world.current_map is self

    def is_interpreter_of(self, interpreter: Any) -> bool:
        return self._interpreter is interpreter

    def refresh(self) -> None:
        for event in self.events:
            event.refresh()

    def start_event(self, event_id: int) -> bool:
        """
        Run an event's active page on the primary interpreter.

        Returns:
            False if the event does not exist or has no active page
        """
        event = self.event(event_id)
        if event is None or event.page() is None:
            return False
        if self._interpreter.is_running():
            logger.debug(f"Event {event_id} not started: map interpreter busy")
            return False

        self._interpreter.setup(event.commands(), event_id)
        self._interpreter.run()
        return True

    def update_parallel(self) -> None:
        """Run one full cycle of every parallel event on this map."""
        for event in self.events:
            if not self.is_active():
                break
            interpreter = event.interpreter
            if interpreter is None:
                continue
            if not interpreter.is_running():
                interpreter.setup(event.commands(), event.event_id)
            interpreter.run()
