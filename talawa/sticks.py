"""The stick-taking game for two players (the "Game of 21")."""

from __future__ import annotations

import enum

import numpy as np

from talawa.environment import Environment, Snapshotable
from talawa.types import EpisodeStatus, Space, StepReport


class Player(enum.IntEnum):
    PLAYER_1 = 0
    PLAYER_2 = 1


class StickGame(Environment, Snapshotable):
    """Players take 1 to 3 sticks in turn; whoever takes the last stick loses.

    Action ``k`` means taking ``k + 1`` sticks.
    """

    def __init__(self, num_sticks: int = 21):
        super().__init__([Player.PLAYER_1, Player.PLAYER_2])
        self._initial = num_sticks
        self._remaining = num_sticks
        self._active_index = 0
        self._cumulative_rewards[Player.PLAYER_1] = 0.0
        self._cumulative_rewards[Player.PLAYER_2] = 0.0

    def reset(self, random_seed: int = 42) -> None:
        self._remaining = 21
        self._active_index = 0
        self._cumulative_rewards[Player.PLAYER_1] = 0.0
        self._cumulative_rewards[Player.PLAYER_2] = 0.0
        for data in self._agents_data.values():
            data.report = StepReport()

    def active_agent(self) -> Player:
        return self._agent_order[self._active_index]

    def observe(self, agent_id=None) -> np.ndarray:
        return np.array([[float(self._remaining)]], dtype=np.float32)

    def step(self, action) -> None:
        active = self.active_agent()
        report = self._agents_data[active].report
        report.previous_state = self.observe(active)
        report.action = action

        taken = int(np.asarray(action).item()) + 1
        if not 1 <= taken <= 3:
            raise ValueError("Invalid action: can only take 1, 2, or 3 sticks.")
        if taken > self._remaining:
            raise ValueError(
                "Invalid action: cannot take more sticks than are remaining."
            )

        self._remaining -= taken
        report.resulting_state = self.observe(active)

        if self._remaining <= 0:
            report.reward = -1.0
            report.episode_status = EpisodeStatus.TERMINATED
            self._cumulative_rewards[active] += -1.0

            other = self._agent_order[(self._active_index + 1) % 2]
            other_report = self._agents_data[other].report
            other_report.reward = 1.0
            other_report.episode_status = EpisodeStatus.TERMINATED
            self._cumulative_rewards[other] += 1.0
        else:
            report.reward = 0.0
            report.episode_status = EpisodeStatus.RUNNING

        self._active_index = (self._active_index + 1) % 2

    def legal_mask(self, agent_id=None) -> np.ndarray:
        mask = np.zeros((1, 3), dtype=np.float32)
        mask[0, : max(0, min(3, self._remaining))] = 1.0
        return mask

    def snapshot(self) -> int:
        return self._remaining & 0xFF

    def restore(self, state: int) -> None:
        self._remaining = int(state)

    def action_space(self, agent_id=None) -> Space:
        return Space.discrete(3)

    def observation_space(self, agent_id=None) -> Space:
        return Space.continuous([1], [0.0], [21.0])

    def clone(self) -> StickGame:
        return self._copy()

    def is_done(self) -> bool:
        return self._remaining <= 0

    def is_agent_available(self, agent_id=None) -> bool:
        return self._remaining > 0