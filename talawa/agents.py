"""Agent interfaces and simple agents."""

from __future__ import annotations

import enum
import random
import sys
from abc import ABC, abstractmethod
from typing import Callable, TextIO

import numpy as np

from talawa.types import Action, Observation, Space, SpaceType, Transition


def _single_action(choice: int) -> Action:
    return np.array([[float(choice)]], dtype=np.float32)


class Agent(ABC):
    """Something that picks actions and may learn from transitions."""

    @abstractmethod
    def act(
        self,
        observation: Observation,
        mask: np.ndarray | None = None,
        training: bool = False,
    ) -> Action:
        """Choose an action for ``observation``."""

    @abstractmethod
    def update(self, transition: Transition) -> None:
        """Learn from one transition."""

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable description."""


class Explorability(enum.Enum):
    EXPLORE = "explore"
    EXPLOIT = "exploit"


class Explorable:
    """Mixin for epsilon-greedy exploration."""

    def __init__(self, epsilon: float = 1.0, rng: random.Random | None = None):
        self.epsilon = epsilon
        self._rng = rng if rng is not None else random.Random()

    def explorability(self) -> Explorability:
        """Draw whether to explore or exploit this time."""
        if self._rng.random() < self.epsilon:
            return Explorability.EXPLORE
        return Explorability.EXPLOIT


class RandomAgent(Agent):
    """Picks uniformly among the legal actions of a discrete space."""

    def __init__(self, action_space: Space, rng: random.Random | None = None):
        if action_space.type is not SpaceType.DISCRETE:
            raise ValueError("RandomAgent only supports discrete action spaces.")
        self.action_size = action_space.n()
        self.transitions_seen = 0
        self._rng = rng if rng is not None else random.Random()

    def act(self, observation, mask=None, training=False):
        if mask is None:
            return _single_action(self._rng.randrange(self.action_size))
        legal = [
            col for (_, col), value in np.ndenumerate(np.atleast_2d(mask))
            if value > 0.5
        ]
        if not legal:
            raise RuntimeError("No legal actions available for RandomAgent.")
        return _single_action(self._rng.choice(legal))

    def update(self, transition):
        """Count the transition; random agents do not learn from it."""
        self.transitions_seen += 1

    def describe(self):
        return f"RandomAgent: Action Size = {self.action_size}"


class HumanAgent(Agent):
    """Asks a person for each move until a valid one is given."""

    def __init__(
        self,
        action_size: int,
        prompt: str = "Your move: ",
        read: Callable[[str], str] = input,
        out: TextIO | None = None,
    ):
        self.action_size = action_size
        self.prompt = prompt
        self.transitions_seen = 0
        self._read = read
        self._out = out

    def act(self, observation, mask=None, training=False):
        out = self._out if self._out is not None else sys.stdout
        if mask is None:
            valid = list(range(self.action_size))
        else:
            row = np.atleast_2d(mask)[0]
            valid = [i for i in range(self.action_size) if row[i] > 0.5]

        while True:
            out.write(f"Current Observation: {observation}\n")
            out.write("Valid moves: " + "".join(f"{m} " for m in valid) + "\n")
            text = self._read(self.prompt)
            try:
                choice = int(text.strip())
            except ValueError:
                out.write("Invalid input. Try again.\n")
                continue
            if choice in valid:
                return _single_action(choice)
            out.write("Invalid move\n")

    def update(self, transition):
        """Count the transition; a human does not learn through this interface."""
        self.transitions_seen += 1

    def describe(self):
        return f"HumanAgent: Action Size = {self.action_size}"