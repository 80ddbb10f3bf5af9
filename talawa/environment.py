"""Base classes for multi-agent environments."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, Iterable

import numpy as np

from talawa.agents import Agent
from talawa.types import Action, AgentID, Observation, Space, StepReport


@dataclass
class AgentData:
    """Registration record of an agent in an environment."""

    id: AgentID
    name: str = ""
    report: StepReport = field(default_factory=StepReport)


class Environment(ABC):
    """An environment in which several agents take turns."""

    def __init__(self, agent_order: Iterable[AgentID] = ()):
        self._agent_order: list[AgentID] = list(agent_order)
        self._agents_data: dict[AgentID, AgentData] = {}
        self._agent_instances: dict[AgentID, Agent] = {}
        self._cumulative_rewards: dict[AgentID, float] = {}

    @abstractmethod
    def reset(self, random_seed: int = 42) -> None:
        """Start a new episode."""

    @abstractmethod
    def active_agent(self) -> AgentID:
        """Agent whose turn it is."""

    @abstractmethod
    def observe(self, agent_id: AgentID) -> Observation:
        """What ``agent_id`` currently sees."""

    @abstractmethod
    def step(self, action: Action) -> None:
        """Apply the active agent's action."""

    def last(self, agent_id: AgentID) -> StepReport:
        """Copy of the latest report for ``agent_id``."""
        return replace(self._agents_data[agent_id].report)

    @abstractmethod
    def action_space(self, agent_id: AgentID) -> Space:
        """Action space of ``agent_id``."""

    @abstractmethod
    def observation_space(self, agent_id: AgentID) -> Space:
        """Observation space of ``agent_id``."""

    @abstractmethod
    def clone(self) -> Environment:
        """Independent copy sharing the registered agents."""

    def legal_mask(self, agent_id: AgentID) -> np.ndarray | None:
        """Mask of legal actions, or None when every action is legal."""
        return None

    def total_reward(self, agent_id: AgentID) -> float:
        return self._cumulative_rewards.get(agent_id, 0.0)

    @abstractmethod
    def is_done(self) -> bool:
        """Whether the episode has ended."""

    def register_agent(self, agent_id: AgentID, agent: Agent, name: str = "") -> None:
        self._agents_data[agent_id] = AgentData(agent_id, name, StepReport())
        self._agent_instances[agent_id] = agent

    def agent_order(self) -> list[AgentID]:
        return list(self._agent_order)

    def get_agent(self, agent_id: AgentID) -> Agent:
        return self._agent_instances[agent_id]

    def agent_name(self, agent_id: AgentID) -> str:
        return self._agents_data[agent_id].name

    def is_agent_available(self, agent_id: AgentID) -> bool:
        """Whether ``agent_id`` may act at all in the current episode."""
        return not self.is_done()

    def _copy(self) -> Any:
        """Shallow copy with its own bookkeeping; agents stay shared."""
        twin = copy.copy(self)
        twin._agent_order = list(self._agent_order)
        twin._agents_data = {
            key: replace(data, report=replace(data.report))
            for key, data in self._agents_data.items()
        }
        twin._agent_instances = dict(self._agent_instances)
        twin._cumulative_rewards = dict(self._cumulative_rewards)
        return twin


class Snapshotable(ABC):
    """Something whose state can be captured and put back."""

    @abstractmethod
    def snapshot(self) -> Any:
        """Capture the current state."""

    @abstractmethod
    def restore(self, state: Any) -> None:
        """Return to a previously captured state."""