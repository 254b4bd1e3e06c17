"""Ring buffer holding the most recent grayscale frames of an environment."""

from __future__ import annotations

import numpy as np

NUM_FRAMES = 4


def _blank_frame(frame_size_x: int, frame_size_y: int) -> np.ndarray:
    return np.zeros((frame_size_y, frame_size_x), dtype=np.uint8)


class FrameRingBuffer:
    """The ``NUM_FRAMES`` most recent grayscale frames.

    A frame is a ``uint8`` array of shape ``(frame_size_y, frame_size_x)``,
    so the pixel at ``(x, y)`` is ``frame[y, x]``.
    """

    def __init__(self, frame_size_x: int, frame_size_y: int) -> None:
        self.frame_size_x = frame_size_x
        self.frame_size_y = frame_size_y
        self.buffer: list[np.ndarray] = [
            _blank_frame(frame_size_x, frame_size_y) for _ in range(NUM_FRAMES)
        ]
        self.next_slot = 0

    @classmethod
    def random(
        cls,
        frame_size_x: int,
        frame_size_y: int,
        rng: np.random.Generator | None = None,
    ) -> FrameRingBuffer:
        """A buffer filled with frames of random pixel values."""
        rng = rng if rng is not None else np.random.default_rng()
        result = cls(frame_size_x, frame_size_y)
        result.buffer = [
            rng.integers(0, 256, size=(frame_size_y, frame_size_x), dtype=np.uint8)
            for _ in range(NUM_FRAMES)
        ]
        return result

    def add(self, frame: np.ndarray) -> None:
        """Store ``frame`` in place of the oldest one."""
        frame = np.asarray(frame, dtype=np.uint8)
        expected = (self.frame_size_y, self.frame_size_x)
        if frame.shape != expected:
            raise ValueError(f"frame shape {frame.shape} does not match {expected}")
        self.buffer[self.next_slot] = frame
        self.next_slot = (self.next_slot + 1) % NUM_FRAMES

    def get(self, steps_into_history: int) -> np.ndarray:
        """Frame added ``steps_into_history`` additions before the latest one."""
        if not 0 <= steps_into_history < NUM_FRAMES:
            raise ValueError(f"available steps into history: 0..{NUM_FRAMES - 1}")
        slot = (self.next_slot - 1 - steps_into_history) % NUM_FRAMES
        return self.buffer[slot]