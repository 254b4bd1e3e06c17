"""Core abstractions shared by learning environments, actions and agents."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

S = TypeVar("S")
A = TypeVar("A", bound="Action")


class QlError(Exception):
    """Error raised by the Q-learning framework."""


class Action:
    """Mixin for enumerations of the actions an agent may take.

    Use it as ``class MyAction(Action, Enum)`` and give each member its numeric
    model encoding as value. The encodings must cover ``range(action_space())``.
    """

    def numeric(self) -> int:
        """Unique value in ``range(action_space())`` identifying this action."""
        return int(self.value)  # type: ignore[attr-defined]

    @classmethod
    def from_numeric(cls, value: int):
        """Return the action encoded by ``value``; raise QlError if there is none."""
        try:
            return cls(value)  # type: ignore[call-arg]
        except ValueError:
            raise QlError(f"value {value} out of range") from None

    @classmethod
    def action_space(cls) -> int:
        """Number of possible actions."""
        return len(cls)  # type: ignore[arg-type]


class DebugVisualizer(ABC):
    """Ways to show a state while debugging."""

    @abstractmethod
    def one_line_info(self) -> str:
        """Short single-line description of the state."""

    @abstractmethod
    def render_to_console(self) -> str:
        """Multi-line text picture of the state."""


class Environment(ABC, Generic[S, A]):
    """Learning environment, modelling the world of a learning agent."""

    @abstractmethod
    def reset(self) -> None:
        """Reset the environment to a defined starting point."""

    @abstractmethod
    def state(self) -> S:
        """Current state."""

    def state_copy(self) -> S:
        """Independent copy of the current state."""
        return copy.deepcopy(self.state())

    @abstractmethod
    def step(self, action: A) -> tuple[S, float, bool]:
        """Apply ``action``; return the next state, the immediate reward and the done flag."""

    def step_copy(self, action: A) -> tuple[S, float, bool]:
        """Like :meth:`step`, but the returned state is an independent copy."""
        state, reward, done = self.step(action)
        return copy.deepcopy(state), reward, done

    @abstractmethod
    def episode_reward_goal_mean(self) -> float:
        """Average episode reward to reach over all episodes."""