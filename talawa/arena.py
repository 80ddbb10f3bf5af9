"""Running episodes and tournaments between agents in an environment."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from talawa.environment import Environment
from talawa.types import AgentID, EpisodeStatus, Transition


@dataclass
class AgentMetrics:
    """Results of one agent over a tournament."""

    reward_history: list[float] = field(default_factory=list)
    wins: int = 0
    losses: int = 0
    draws: int = 0
    max_reward: float = -math.inf
    min_reward: float = math.inf

    def avg_reward(self) -> float:
        if not self.reward_history:
            return 0.0
        return sum(self.reward_history) / len(self.reward_history)

    def std_dev(self) -> float:
        if len(self.reward_history) < 2:
            return 0.0
        mean = self.avg_reward()
        mean_sq = sum(r * r for r in self.reward_history) / len(self.reward_history)
        return math.sqrt(max(0.0, mean_sq - mean * mean))

    def win_rate(self) -> float:
        """Share of games won, in percent."""
        if not self.reward_history:
            return 0.0
        return self.wins / len(self.reward_history) * 100.0


@dataclass
class TournamentStats:
    arena: Arena
    episodes_played: int = 0
    agents: dict[AgentID, AgentMetrics] = field(default_factory=dict)

    def report(self) -> str:
        parts = [
            "\n========== TOURNAMENT REPORT ==========\n",
            f"Episodes Played: {self.episodes_played}\n",
            "---------------------------------------\n",
        ]
        for agent_id, m in self.agents.items():
            name = self.arena.environment.agent_name(agent_id)
            parts.append(
                f"Agent ({int(agent_id)}, {name}) Results:\n"
                f"  Win Rate:   {m.win_rate():.1f}% "
                f"(W:{m.wins} L:{m.losses} D:{m.draws})\n"
                f"  Avg Reward: {m.avg_reward():.3f} (+/- {m.std_dev():.3f})\n"
                f"  Range:      [{m.min_reward:.3f}, {m.max_reward:.3f}]\n\n"
            )
        parts.append("=======================================\n")
        return "".join(parts)


@dataclass(frozen=True)
class TournamentConfig:
    rounds: int = 100
    max_steps: int = 1000


_TIE_TOLERANCE = 0.0001


class Arena:
    """Plays the agents registered in an environment against each other."""

    def __init__(self, environment: Environment):
        self.environment = environment

    def match(self, max_steps: int, training: bool = True) -> None:
        """Play one episode, letting agents learn when ``training`` is set."""
        env = self.environment
        env.reset()
        retired: set[AgentID] = set()
        ticks = 0
        while len(retired) < len(env.agent_order()):
            for agent_id in env.agent_order():
                agent = env.get_agent(agent_id)
                if agent_id in retired:
                    continue
                if not env.is_done() and env.is_agent_available(agent_id):
                    observation = env.observe(agent_id)
                    mask = env.legal_mask(agent_id)
                    env.step(agent.act(observation, mask, training))

                report = env.last(agent_id)
                if training:
                    agent.update(
                        Transition(
                            state=report.previous_state,
                            action=report.action,
                            reward=report.reward,
                            next_state=report.resulting_state,
                            status=report.episode_status,
                        )
                    )
                if report.episode_status is not EpisodeStatus.RUNNING:
                    retired.add(agent_id)
            ticks += 1
            if ticks >= max_steps:
                break

    def tournament(self, config: TournamentConfig = TournamentConfig()) -> TournamentStats:
        """Play ``config.rounds`` episodes without training and tally results."""
        stats = TournamentStats(arena=self, episodes_played=config.rounds)
        env = self.environment
        for _ in range(config.rounds):
            self.match(config.max_steps, training=False)

            scores = {agent_id: env.total_reward(agent_id) for agent_id in env.agent_order()}
            highest = max(scores.values(), default=-math.inf)
            winners = sum(
                1 for score in scores.values() if abs(score - highest) < _TIE_TOLERANCE
            )

            for agent_id, score in scores.items():
                m = stats.agents.setdefault(agent_id, AgentMetrics())
                m.reward_history.append(score)
                m.max_reward = max(m.max_reward, score)
                m.min_reward = min(m.min_reward, score)
                if abs(score - highest) < _TIE_TOLERANCE:
                    if winners > 1:
                        m.draws += 1
                    else:
                        m.wins += 1
                else:
                    m.losses += 1
        return stats