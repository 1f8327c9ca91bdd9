"""
Game world for the reference runtime.

Holds the static content, the switches, the active map and the interception
engine. The world is also the engine's host: it resolves events on the
active map, identifies the primary interpreter and looks up common events.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

from event_interceptor.config.interceptor_models import InterceptorSettings
from event_interceptor.interception.engine import InterceptionEngine
from event_interceptor.runtime.commands import Command
from event_interceptor.runtime.game_map import CommonEvent, GameMap, MapData, MapEvent

logger = logging.getLogger(__name__)


class GameWorld:
    """
    Content registry and active-map holder.

    Usage:
        world = GameWorld(maps=[map_data], common_events=[ce], settings=settings)
        world.setup_map(1)
        world.current_map.start_event(3)
    """

    def __init__(
        self,
        maps: Iterable[MapData] = (),
        common_events: Iterable[CommonEvent] = (),
        settings: Optional[InterceptorSettings] = None,
    ):
        """
        Initialize the world.

        Args:
            maps: Map definitions
            common_events: Common event definitions
            settings: Interceptor settings (no rules if omitted)
        """
        self._maps: dict[int, MapData] = {m.map_id: m for m in maps}
        self._common_events: dict[int, CommonEvent] = {ce.id: ce for ce in common_events}
        self._settings = settings or InterceptorSettings()
        self._switches: dict[int, bool] = {}
        self._current_map: Optional[GameMap] = None
        self.interception: Optional[InterceptionEngine] = InterceptionEngine(self._settings, self)

    @property
    def settings(self) -> InterceptorSettings:
        return self._settings

    @property
    def current_map(self) -> Optional[GameMap]:
        return self._current_map

    @property
    def current_map_id(self) -> int:
        return self._current_map.map_id if self._current_map else 0

    @property
    def common_event_ids(self) -> list[int]:
        return sorted(self._common_events)

    # =========================================================================
    # MAPS
    # =========================================================================

    def setup_map(self, map_id: int) -> GameMap:
        """
        Make a map active, building fresh event instances.

        Raises:
            ValueError: If the map is not defined
        """
        data = self._maps.get(map_id)
        if data is None:
            raise ValueError(f"Unknown map id: {map_id}")

        self._current_map = GameMap(self, data, self._settings.tag_name)
        logger.debug(f"Map {map_id} set up with {len(data.events)} events")
        return self._current_map

    def transfer(self, map_id: int) -> GameMap:
        """Move the player to another map."""
        old_map_id = self.current_map_id
        new_map = self.setup_map(map_id)
        logger.debug(f"Transfer {old_map_id} -> {map_id}")
        return new_map

    # =========================================================================
    # SWITCHES
    # =========================================================================

    def switch(self, switch_id: int) -> bool:
        return self._switches.get(switch_id, False)

    def set_switch(self, switch_id: int, value: bool) -> None:
        self._switches[switch_id] = value
        if self._current_map is not None:
            self._current_map.refresh()

    # =========================================================================
    # INTERCEPTION HOST
    # =========================================================================

    def find_event(self, event_id: int) -> Optional[MapEvent]:
        if self._current_map is None:
            return None
        return self._current_map.event(event_id)

    def is_primary_interpreter(self, context: Any) -> bool:
        return self._current_map is not None and self._current_map.is_interpreter_of(context)

    def common_event_commands(self, common_event_id: int) -> Optional[Sequence[Command]]:
        common_event = self._common_events.get(common_event_id)
        return common_event.commands if common_event else None
