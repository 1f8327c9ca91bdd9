"""
Reference runtime.

A minimal map / event / interpreter host that calls the interception engine
from its setup and end-of-list hook points.
"""

from event_interceptor.runtime.commands import Command, CommandCode
from event_interceptor.runtime.game_map import (
    CommonEvent,
    EventData,
    EventPage,
    GameMap,
    MapData,
    MapEvent,
)
from event_interceptor.runtime.interpreter import Interpreter
from event_interceptor.runtime.world import GameWorld

__all__ = [
    "Command",
    "CommandCode",
    "CommonEvent",
    "EventData",
    "EventPage",
    "GameMap",
    "MapData",
    "MapEvent",
    "Interpreter",
    "GameWorld",
]
