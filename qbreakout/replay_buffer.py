"""Bounded experience replay buffers."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
S = TypeVar("S")
A = TypeVar("A")


class Buffer(Generic[T]):
    """FIFO buffer holding at most ``max_buffer_len`` elements; the oldest drop out."""

    def __init__(self, max_buffer_len: int) -> None:
        if max_buffer_len <= 0:
            raise ValueError("max_buffer_len must be positive")
        self.max_buffer_len = max_buffer_len
        self.buffer: deque[T] = deque(maxlen=max_buffer_len)

    def __len__(self) -> int:
        return len(self.buffer)

    def __iter__(self) -> Iterator[T]:
        return iter(self.buffer)

    def add(self, element: T) -> None:
        self.buffer.append(element)

    def get_many(self, indices: Iterable[int]) -> list[T]:
        """Elements at ``indices``, in the order given."""
        result = []
        for i in indices:
            if not 0 <= i < len(self.buffer):
                raise IndexError(f"index {i} out of range 0..{len(self.buffer)}")
            result.append(self.buffer[i])
        return result


@dataclass
class BufferSample(Generic[S, A]):
    """A batch of recorded steps."""

    state: list[S]
    state_next: list[S]
    reward: list[float]
    action: list[A]
    done: list[bool]


class ReplayBuffer(Generic[S, A]):
    """Experience replay: recorded steps plus recent episode rewards."""

    def __init__(self, step_buffer_len: int, episode_reward_buffer_len: int) -> None:
        self._actions: Buffer[A] = Buffer(step_buffer_len)
        self._states: Buffer[S] = Buffer(step_buffer_len)
        self._states_next: Buffer[S] = Buffer(step_buffer_len)
        self._rewards: Buffer[float] = Buffer(step_buffer_len)
        self._dones: Buffer[bool] = Buffer(step_buffer_len)
        self._episode_rewards: Buffer[float] = Buffer(episode_reward_buffer_len)

    def __len__(self) -> int:
        return len(self._dones)

    def add(self, action: A, state: S, state_next: S, reward: float, done: bool) -> None:
        self._actions.add(action)
        self._states.add(state)
        self._states_next.add(state_next)
        self._rewards.add(reward)
        self._dones.add(done)

    def add_episode_reward(self, episode_reward: float) -> None:
        self._episode_rewards.add(episode_reward)

    def _require_episode_rewards(self) -> None:
        if not self._episode_rewards:
            raise ValueError("no episode rewards recorded")

    def avg_episode_reward(self) -> float:
        self._require_episode_rewards()
        return sum(self._episode_rewards) / len(self._episode_rewards)

    def min_episode_reward(self) -> float:
        self._require_episode_rewards()
        return min(self._episode_rewards)

    def actions(self) -> Buffer[A]:
        return self._actions

    def episode_rewards(self) -> list[float]:
        return list(self._episode_rewards)

    def get_many(self, indices: Sequence[int]) -> BufferSample[S, A]:
        return BufferSample(
            state=self._states.get_many(indices),
            state_next=self._states_next.get_many(indices),
            reward=self._rewards.get_many(indices),
            action=self._actions.get_many(indices),
            done=self._dones.get_many(indices),
        )