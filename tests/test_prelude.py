from enum import Enum

import pytest

from qbreakout.prelude import Action, DebugVisualizer, Environment, QlError


class Move(Action, Enum):
    STAY = 2
    LEFT = 0
    RIGHT = 1


class CounterState(DebugVisualizer):
    def __init__(self) -> None:
        self.values: list[int] = [0]

    def one_line_info(self) -> str:
        return f"count={self.values[0]}"

    def render_to_console(self) -> str:
        return "#" * self.values[0]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, CounterState) and self.values == other.values


class CounterEnvironment(Environment[CounterState, Move]):
    def __init__(self) -> None:
        self._state = CounterState()

    def reset(self) -> None:
        self._state = CounterState()

    def state(self) -> CounterState:
        return self._state

    def step(self, action: Move):
        if action is Move.RIGHT:
            self._state.values[0] += 1
        return self._state, float(action.numeric()), self._state.values[0] >= 2

    def episode_reward_goal_mean(self) -> float:
        return 1.5


@pytest.mark.parametrize("action", list(Move))
def test_numeric_round_trip(action):
    assert Move.from_numeric(Action.numeric(action)) is action


def test_numeric_values_cover_action_space():
    assert sorted(Action.numeric(a) for a in Move) == list(range(len(Move)))


def test_from_numeric_out_of_range_raises():
    beyond = max(Action.numeric(a) for a in Move) + 5
    assert beyond == 7
    with pytest.raises(QlError) as info:
        Move.from_numeric(beyond)
    assert "out of range" in str(info.value)


def test_ql_error_message():
    assert str(QlError("broken")) == "broken"


def test_environment_is_abstract():
    with pytest.raises(TypeError):
        Environment()


def test_state_copy_is_independent():
    env = CounterEnvironment()
    snapshot = Environment.state_copy(env)
    env.step(Move.RIGHT)
    assert snapshot.values == [0]
    assert env.state().values == [1]


def test_step_copy_returns_detached_state():
    env = CounterEnvironment()
    state, reward, done = Environment.step_copy(env, Move.RIGHT)
    assert state == env.state()
    assert state is not env.state()
    assert reward == float(Move.RIGHT.numeric())
    assert done is False
    env.step(Move.RIGHT)
    assert state.values == [1]


def test_step_done_and_reset():
    env = CounterEnvironment()
    Environment.step_copy(env, Move.RIGHT)
    _, _, done = Environment.step_copy(env, Move.RIGHT)
    assert done is True
    env.reset()
    assert Environment.state_copy(env).values == [0]


def test_debug_visualizer_output():
    env = CounterEnvironment()
    Environment.step_copy(env, Move.RIGHT)
    snapshot = Environment.state_copy(env)
    assert snapshot.one_line_info() == "count=1"
    assert snapshot.render_to_console() == "#"