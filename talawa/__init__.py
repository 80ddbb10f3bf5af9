"""Environments, agents, Q-learning, arenas, datasets, losses, pooling and a genetic algorithm."""

__version__ = "0.1.0"