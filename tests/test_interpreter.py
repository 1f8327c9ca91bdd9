"""
Tests for the reference runtime - interpreter, map events and world.

These run without interceptor rules, so only the host behavior is checked.
"""

import pytest

from event_interceptor.runtime import (
    Command,
    CommonEvent,
    EventData,
    EventPage,
    Interpreter,
)
from tests.helpers import labels, recorder, simple_event


class TestInterpreterExecution:
    """Command execution order and nesting."""

    def test_runs_commands_in_order(self, make_world, trace):
        world = make_world()
        interpreter = Interpreter(world)
        interpreter.setup([recorder(trace, "a"), recorder(trace, "b"), Command.end()])
        interpreter.run()

        assert labels(trace) == ["a", "b"]
        assert not interpreter.is_running()

    def test_setup_records_map_and_event(self, make_world):
        world = make_world()
        interpreter = Interpreter(world)
        interpreter.setup([Command.end()], event_id=7)
        assert interpreter.map_id == 1
        assert interpreter.event_id == 7
        assert interpreter.is_on_current_map()

    def test_call_common_event_runs_child_first(self, make_world, trace):
        world = make_world()
        interpreter = Interpreter(world)
        interpreter.setup(
            [recorder(trace, "before"), Command.call_common_event(5), recorder(trace, "after"), Command.end()],
            event_id=3,
        )
        interpreter.run()

        assert trace == [("before", 0, 3), ("ce5", 1, 3), ("after", 0, 3)]

    def test_call_missing_common_event_is_ignored(self, make_world, trace):
        world = make_world()
        interpreter = Interpreter(world)
        interpreter.setup([Command.call_common_event(99), recorder(trace, "after"), Command.end()])
        interpreter.run()
        assert labels(trace) == ["after"]

    def test_unknown_command_code_ignored(self, make_world, trace):
        world = make_world()
        interpreter = Interpreter(world)
        interpreter.setup([Command(code=999), recorder(trace, "a"), Command.end()])
        interpreter.run()
        assert labels(trace) == ["a"]


class TestConditionalBranch:
    """Branches skip to the matching else / end at their indent."""

    @staticmethod
    def branch_list(trace, condition):
        return [
            Command.branch(lambda interp: condition),
            recorder(trace, "then", indent=1),
            Command.end(indent=1),
            Command.else_(),
            recorder(trace, "else", indent=1),
            Command.end(indent=1),
            Command.end_branch(),
            recorder(trace, "after"),
            Command.end(),
        ]

    @pytest.mark.parametrize("condition, expected", [
        (True, ["then", "after"]),
        (False, ["else", "after"]),
    ])
    def test_branch(self, make_world, trace, condition, expected):
        world = make_world()
        interpreter = Interpreter(world)
        interpreter.setup(self.branch_list(trace, condition))
        interpreter.run()
        assert labels(trace) == expected


class TestMapEvents:
    """Page selection and event lookup."""

    def test_highest_page_with_met_condition(self, make_world, trace):
        world = make_world(events=[simple_event(trace, 1, pages=2)])
        event = world.current_map.event(1)
        assert event.page_index == 0

        world.set_switch(1, True)
        assert event.page_index == 1

    def test_no_active_page(self, make_world):
        data = EventData(id=1, pages=[EventPage(switch_id=9)])
        world = make_world(events=[data])
        event = world.current_map.event(1)
        assert event.page_index == -1
        assert world.current_map.start_event(1) is False

    def test_start_event_runs_active_page(self, make_world, trace):
        world = make_world(events=[simple_event(trace, 1, pages=2)])
        world.set_switch(1, True)
        assert world.current_map.start_event(1)
        assert labels(trace) == ["event1:p2"]

    def test_start_unknown_event(self, make_world):
        world = make_world()
        assert world.current_map.start_event(42) is False

    def test_parallel_event_has_own_interpreter(self, make_world, trace):
        world = make_world(events=[simple_event(trace, 1, parallel=True), simple_event(trace, 2)])
        game_map = world.current_map

        assert game_map.event(1).interpreter is not None
        assert game_map.event(2).interpreter is None
        assert not game_map.is_interpreter_of(game_map.event(1).interpreter)
        assert game_map.is_interpreter_of(game_map.interpreter)

        game_map.update_parallel()
        assert labels(trace) == ["event1:p1"]

    def test_erased_event_not_found(self, make_world, trace):
        world = make_world(events=[simple_event(trace, 1)])
        world.current_map.erase_event(1)
        assert world.find_event(1) is None


class TestWorld:
    """Map setup, transfer and host lookups."""

    def test_transfer_changes_active_map(self, make_world):
        world = make_world()
        world.transfer(2)
        assert world.current_map_id == 2

    def test_unknown_map_raises(self, make_world):
        world = make_world()
        with pytest.raises(ValueError):
            world.setup_map(404)

    def test_common_event_lookup(self, make_world):
        world = make_world(extra_common_events=[CommonEvent(id=9, commands=[Command.end()])])
        assert world.common_event_commands(9) == [Command.end()]
        assert world.common_event_commands(10) is None
        assert world.common_event_ids == [5, 6, 9]

    def test_transfer_leaves_old_interpreter_off_map(self, make_world):
        world = make_world()
        interpreter = world.current_map.interpreter
        interpreter.setup([Command.end()])
        world.transfer(2)
        assert not interpreter.is_on_current_map()
