"""Fixed-size experience replay memory."""

from __future__ import annotations

import random

from talawa.types import Transition


class ReplayBuffer:
    """Ring buffer of transitions; once full, the oldest entry is overwritten."""

    def __init__(self, max_size: int, rng: random.Random | None = None):
        if max_size < 1:
            raise ValueError("Replay buffer size must be at least 1.")
        self.max_size = max_size
        self._buffer: list[Transition] = []
        self._cursor = 0
        self._rng = rng if rng is not None else random.Random()

    def add(self, transition: Transition) -> None:
        if len(self._buffer) < self.max_size:
            self._buffer.append(transition)
        else:
            self._buffer[self._cursor] = transition
        self._cursor = (self._cursor + 1) % self.max_size

    def sample(self, batch_size: int = 1) -> list[Transition]:
        """Draw ``batch_size`` transitions uniformly, with replacement."""
        if batch_size > len(self._buffer):
            raise ValueError("Requested batch size larger than buffer size.")
        return [self._rng.choice(self._buffer) for _ in range(batch_size)]

    def __len__(self) -> int:
        return len(self._buffer)