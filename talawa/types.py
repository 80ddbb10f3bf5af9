"""Value types shared by environments, agents and replay memory."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

Observation = np.ndarray
Action = np.ndarray
ActionMask = np.ndarray
AgentID = int


def _empty() -> np.ndarray:
    return np.zeros((0, 0), dtype=np.float32)


class SpaceType(enum.Enum):
    """Kind of an action or observation space."""

    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


@dataclass(frozen=True)
class Space:
    """Description of an action or observation space.

    Bounds given as a single value apply to every index.
    """

    type: SpaceType
    shape: tuple[int, ...]
    raw_low: tuple[float, ...]
    raw_high: tuple[float, ...]

    @staticmethod
    def continuous(
        dims: Sequence[int], low: Sequence[float], high: Sequence[float]
    ) -> Space:
        return Space(
            SpaceType.CONTINUOUS,
            tuple(int(d) for d in dims),
            tuple(float(v) for v in low),
            tuple(float(v) for v in high),
        )

    @staticmethod
    def discrete(n: int) -> Space:
        return Space(SpaceType.DISCRETE, (1,), (0.0,), (float(n),))

    def low(self, i: int = 0) -> float:
        """Lower bound at index ``i``."""
        return self.raw_low[0] if len(self.raw_low) == 1 else self.raw_low[i]

    def high(self, i: int = 0) -> float:
        """Upper bound at index ``i``."""
        return self.raw_high[0] if len(self.raw_high) == 1 else self.raw_high[i]

    def n(self) -> int:
        """Number of actions of a discrete space."""
        if self.type is not SpaceType.DISCRETE:
            raise ValueError("Not Discrete!")
        return int(self.raw_high[0])


class EpisodeStatus(enum.Enum):
    """State of an episode after an action."""

    RUNNING = "running"
    TERMINATED = "terminated"
    TRUNCATED = "truncated"


@dataclass
class Transition:
    """One step of experience: (s, a, r, s', status)."""

    state: Observation
    action: Action
    reward: float
    next_state: Observation
    status: EpisodeStatus


@dataclass
class StepReport:
    """What happened to an agent on its most recent step."""

    previous_state: Observation = field(default_factory=_empty)
    action: Action = field(default_factory=_empty)
    reward: float = 0.0
    resulting_state: Observation = field(default_factory=_empty)
    episode_status: EpisodeStatus = EpisodeStatus.RUNNING