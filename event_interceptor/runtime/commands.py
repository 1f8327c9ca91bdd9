"""
Command lists for the reference runtime.

A command list is a flat sequence of commands. Nesting is expressed through
indent: every block, including the top level, is closed by an END command at
the block's own indent.

Example, an event with one conditional branch:

    [
        Command.branch(lambda interp: True),        # indent 0
        Command.script(say_hello, indent=1),
        Command.end(indent=1),                      # closes the branch body
        Command.end_branch(),                       # indent 0
        Command.end(),                              # closes the event
    ]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable


class CommandCode(IntEnum):
    """Command codes understood by the reference interpreter."""

    END = 0
    CALL_COMMON_EVENT = 117
    CONDITIONAL_BRANCH = 111
    TRANSFER_PLAYER = 201
    SCRIPT = 355
    ELSE = 411
    END_BRANCH = 412


@dataclass(frozen=True)
class Command:
    """One command of a command list."""

    code: CommandCode
    indent: int = 0
    parameters: tuple[Any, ...] = field(default_factory=tuple)

    @classmethod
    def end(cls, indent: int = 0) -> "Command":
        return cls(CommandCode.END, indent)

    @classmethod
    def script(cls, fn: Callable[[Any], None], indent: int = 0) -> "Command":
        """Command calling fn(interpreter)."""
        return cls(CommandCode.SCRIPT, indent, (fn,))

    @classmethod
    def branch(cls, condition: Callable[[Any], bool], indent: int = 0) -> "Command":
        """Conditional branch on condition(interpreter)."""
        return cls(CommandCode.CONDITIONAL_BRANCH, indent, (condition,))

    @classmethod
    def else_(cls, indent: int = 0) -> "Command":
        return cls(CommandCode.ELSE, indent)

    @classmethod
    def end_branch(cls, indent: int = 0) -> "Command":
        return cls(CommandCode.END_BRANCH, indent)

    @classmethod
    def call_common_event(cls, common_event_id: int, indent: int = 0) -> "Command":
        return cls(CommandCode.CALL_COMMON_EVENT, indent, (common_event_id,))

    @classmethod
    def transfer(cls, map_id: int, indent: int = 0) -> "Command":
        return cls(CommandCode.TRANSFER_PLAYER, indent, (map_id,))
