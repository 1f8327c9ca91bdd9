"""
Reference command interpreter.

Runs a command list for a map event or common event. A nested child
interpreter (common event calls and interceptors) is drained completely
before the parent moves on to its next command.

The interception engine is called from two places:
- setup(), once the list is installed and before the first command
- the END command handler, which passes whether another command follows
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional, Sequence

from event_interceptor.runtime.commands import Command, CommandCode

if TYPE_CHECKING:
    from event_interceptor.runtime.world import GameWorld

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Executes a command list synchronously.

    Attributes:
        depth: Nesting level, 0 for a top-level interpreter
        event_id: Event the list runs for (0 for none)
        map_id: Map that was active when the list was set up
    """

    def __init__(self, world: "GameWorld", depth: int = 0):
        """
        Initialize the interpreter.

        Args:
            world: The running game world
            depth: Nesting level (0 for map and parallel interpreters)
        """
        self._world = world
        self._depth = depth
        self._handlers: dict[CommandCode, Callable[[Command], None]] = {
            CommandCode.END: self._command_end,
            CommandCode.CONDITIONAL_BRANCH: self._command_branch,
            CommandCode.ELSE: self._command_else,
            CommandCode.END_BRANCH: self._command_end_branch,
            CommandCode.CALL_COMMON_EVENT: self._command_call_common_event,
            CommandCode.TRANSFER_PLAYER: self._command_transfer,
            CommandCode.SCRIPT: self._command_script,
        }
        self.clear()

    def clear(self) -> None:
        """Reset to the idle state."""
        self._map_id: int = 0
        self._event_id: int = 0
        self._commands: Optional[list[Command]] = None
        self._index: int = 0
        self._branch: dict[int, bool] = {}
        self._child: Optional[Interpreter] = None

    @property
    def world(self) -> "GameWorld":
        return self._world

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def event_id(self) -> int:
        return self._event_id

    @property
    def map_id(self) -> int:
        return self._map_id

    @property
    def index(self) -> int:
        return self._index

    @property
    def child(self) -> Optional["Interpreter"]:
        return self._child

    def is_running(self) -> bool:
        return self._commands is not None

    def is_on_current_map(self) -> bool:
        return self._map_id == self._world.current_map_id

    def current_command(self) -> Optional[Command]:
        if self._commands is not None and self._index < len(self._commands):
            return self._commands[self._index]
        return None

    def has_next_command(self) -> bool:
        return self._commands is not None and self._index + 1 < len(self._commands)

    # =========================================================================
    # SETUP
    # =========================================================================

    def setup(self, commands: Sequence[Command], event_id: int = 0) -> None:
        """
        Install a command list and fire the start hook.

        Args:
            commands: Command list to run
            event_id: Event the list belongs to (0 for none)
        """
        self.clear()
        self._map_id = self._world.current_map_id
        self._event_id = event_id
        self._commands = list(commands)

        engine = self._world.interception
        if engine is not None:
            engine.on_setup(self, event_id)

    def setup_child(self, commands: Sequence[Command], event_id: int) -> None:
        """Start a nested interpreter one level deeper."""
        self._child = Interpreter(self._world, self._depth + 1)
        self._child.setup(commands, event_id)

    # =========================================================================
    # EXECUTION
    # =========================================================================

    def run(self) -> None:
        """Run until the list (and any child) is exhausted."""
        while self.is_running():
            self.update()

    def update(self) -> None:
        """Drain the active child, or execute the next command."""
        if self._child is not None:
            if self._child.is_running():
                self._child.run()
            self._child = None
            return
        self.execute_command()

    def execute_command(self) -> None:
        command = self.current_command()
        if command is None:
            self.terminate()
            return

        handler = self._handlers.get(command.code)
        if handler is not None:
            handler(command)
        else:
            logger.debug(f"Ignoring unknown command code {command.code}")
        self._index += 1

    def terminate(self) -> None:
        self._commands = None
        self._index = 0

    def _skip_branch(self, indent: int) -> None:
        assert self._commands is not None
        while self._index + 1 < len(self._commands) and self._commands[self._index + 1].indent > indent:
            self._index += 1

    # =========================================================================
    # COMMAND HANDLERS
    # =========================================================================

    def _command_end(self, command: Command) -> None:
        engine = self._world.interception
        if engine is not None:
            engine.on_terminator(self, self.has_next_command())

    def _command_branch(self, command: Command) -> None:
        condition = command.parameters[0]
        result = bool(condition(self))
        self._branch[command.indent] = result
        if not result:
            self._skip_branch(command.indent)

    def _command_else(self, command: Command) -> None:
        if self._branch.get(command.indent, False):
            self._skip_branch(command.indent)

    def _command_end_branch(self, command: Command) -> None:
        pass

    def _command_call_common_event(self, command: Command) -> None:
        commands = self._world.common_event_commands(command.parameters[0])
        if commands is not None:
            self.setup_child(commands, self._event_id)

    def _command_transfer(self, command: Command) -> None:
        self._world.transfer(command.parameters[0])

    def _command_script(self, command: Command) -> None:
        command.parameters[0](self)
