"""Tabular Q-learning agent for discrete action spaces."""

from __future__ import annotations

import enum
import logging
import math
import random
from dataclasses import dataclass, replace

import numpy as np

from talawa.agents import Agent
from talawa.types import Action, EpisodeStatus, Observation, Space, SpaceType, Transition

logger = logging.getLogger(__name__)


class UpdateRule(enum.Enum):
    """How the value of the next state enters the target."""

    STANDARD = "standard"  # single agent: reward + discount * max Q(s')
    ZERO_SUM = "zero_sum"  # competitive games: reward - discount * max Q(s')


@dataclass
class QValue:
    """Value of one action in one state, and whether the action is allowed."""

    value: float = 0.0
    available: bool = True

    def make_unavailable(self) -> None:
        self.available = False


@dataclass(frozen=True)
class HyperParameters:
    learning_rate: float = 0.1
    discount_factor: float = 0.99
    epsilon: float = 1.0
    starting_q_value: float = 0.0
    update_rule: UpdateRule = UpdateRule.STANDARD


def _single_action(index: int) -> Action:
    return np.array([[float(index)]], dtype=np.float32)


class QTable(Agent):
    """Epsilon-greedy agent keeping one row of Q-values per observed state.

    States are keyed by their values truncated to integers and joined with
    underscores. An action masked out in a state stays unavailable there.
    """

    def __init__(
        self,
        space: Space,
        params: HyperParameters | None = None,
        rng: random.Random | None = None,
    ):
        if space.type is not SpaceType.DISCRETE:
            raise ValueError("QTable only supports discrete action spaces.")
        self.params = params if params is not None else HyperParameters()
        self.num_actions = space.n()
        self.learning_rate = self.params.learning_rate
        self.discount_factor = self.params.discount_factor
        self.epsilon = self.params.epsilon
        self._table: dict[str, list[QValue]] = {}
        self._rng = rng if rng is not None else random.Random()

    @staticmethod
    def _key(observation: Observation) -> str:
        return "_".join(str(int(v)) for v in np.asarray(observation).ravel())

    def _q(self, key: str) -> list[QValue]:
        if key not in self._table:
            self._table[key] = [
                QValue(self.params.starting_q_value) for _ in range(self.num_actions)
            ]
        return self._table[key]

    def _max_q(self, key: str) -> float:
        q_values = self._table.get(key)
        if q_values is None:
            return 0.0
        available = [q.value for q in q_values if q.available]
        best = max(available, default=-math.inf)
        if best == -math.inf:
            logger.warning(
                "All Q-values unavailable for state %s. Returning 0.0.", key
            )
            return 0.0
        return best

    def act(self, state, mask=None, training=False):
        q_values = self._q(self._key(state))
        if mask is not None:
            row = np.atleast_2d(mask)[0]
            for q, flag in zip(q_values, row):
                if flag < 0.5:
                    q.make_unavailable()

        if training and self._rng.random() < self.epsilon:
            available = [i for i, q in enumerate(q_values) if q.available]
            if not available:
                raise RuntimeError("No available actions to choose from!")
            return _single_action(self._rng.choice(available))

        best_action = -1
        max_q = -math.inf
        for i, q in enumerate(q_values):
            if q.available and q.value > max_q:
                max_q = q.value
                best_action = i
        if best_action == -1:
            raise RuntimeError("No available actions to choose from!")
        return _single_action(best_action)

    def update(self, transition: Transition) -> None:
        key = self._key(transition.state)
        max_next_q = 0.0
        if transition.status is not EpisodeStatus.TERMINATED:
            max_next_q = self._max_q(self._key(transition.next_state))

        q_values = self._q(key)
        index = int(np.asarray(transition.action).item())
        if not 0 <= index < len(q_values):
            raise IndexError(f"Action index {index} out of bounds.")

        if self.params.update_rule is UpdateRule.STANDARD:
            target = transition.reward + self.discount_factor * max_next_q
        elif self.params.update_rule is UpdateRule.ZERO_SUM:
            target = transition.reward - self.discount_factor * max_next_q
        else:
            raise ValueError("Unknown update rule.")

        old_q = q_values[index].value
        q_values[index].value = old_q + self.learning_rate * (target - old_q)

    def table(self) -> dict[str, list[QValue]]:
        """Copy of the table, ordered by state key."""
        return {
            key: [replace(q) for q in values]
            for key, values in sorted(self._table.items())
        }

    def describe(self) -> str:
        lines = []
        for key, values in sorted(self._table.items()):
            shown = ", ".join(f"{q.value:.6f}" if q.available else "*" for q in values)
            lines.append(f"State [{key}]: Q-values = [{shown}]")
        return "\n".join(lines)