# talawa

Building blocks for trying out reinforcement learning, evolutionary search and
parts of small neural networks. It is built on NumPy.

## Install

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `talawa.types`: `Space` (made with `Space.discrete(n)` or
  `Space.continuous(dims, low, high)`), `SpaceType`, `EpisodeStatus`,
  `Transition` and `StepReport`. These are the data that environments and
  agents pass to each other. Observations, actions and masks are NumPy arrays.
- `talawa.environment`: `Environment`, the abstract base for turn-based
  environments with several agents. It tracks registered agents
  (`register_agent`, `get_agent`, `agent_name`, `agent_order`), the last
  `StepReport` of each agent (`last`) and cumulative rewards (`total_reward`).
  The module also defines the `Snapshotable` interface with `snapshot` and
  `restore`.
- `talawa.sticks`: `StickGame`, the two-player stick game. Players
  (`Player.PLAYER_1`, `Player.PLAYER_2`) take turns removing 1 to 3 sticks,
  where action `k` means taking `k + 1` sticks. The player who takes the last
  stick loses and gets -1, and the other player gets +1. `legal_mask` marks the
  moves that are allowed. `reset()` always starts again from 21 sticks.
- `talawa.agents`: the `Agent` interface (`act`, `update`, `describe`), the
  `Explorable` epsilon-greedy mixin, `RandomAgent` (picks uniformly among legal
  actions) and `HumanAgent`. `HumanAgent` reads moves through a `read`
  callable, which defaults to `input`, and asks again until the move is valid.
- `talawa.qtable`: `QTable`, a tabular epsilon-greedy Q-learning agent. It is
  configured with `HyperParameters` and `UpdateRule.STANDARD` or
  `UpdateRule.ZERO_SUM`. An action that is masked out in a state stays
  unavailable in that state. `table()` returns a copy of the learned values.
- `talawa.replay`: `ReplayBuffer`, a fixed-size ring buffer of transitions.
  Its `sample` method draws with replacement.
- `talawa.arena`: `Arena.match` plays one episode and lets the agents learn
  when `training` is true. `Arena.tournament(TournamentConfig(...))` plays
  rounds without training and returns `TournamentStats`. The stats hold an
  `AgentMetrics` for each agent (wins, losses, draws, average reward, standard
  deviation, win rate), and `report()` turns them into text.
- `talawa.dataset`: `Dataset`, which holds features and labels with a
  shufflable reading order. `splice(start, end)` returns a batch. `load_csv`
  reads a numeric CSV file, one-hot encodes the label column, divides the
  features by `scale` and drops rows whose feature count does not match the
  first row.
- `talawa.losses`: `MeanSquaredError`, `HuberLoss`, `CrossEntropyLoss`,
  `CategoricalCrossEntropyLoss`, `CrossEntropyWithLogitsLoss` and `EmptyLoss`.
  Each has `calculate(prediction, target)` and `gradient(prediction, target)`.
- `talawa.pooling`: `Pooling2DLayer`, which does max or average pooling
  (`PoolingType`) over inputs of shape `(batch, depth * height * width)`. It
  provides `forward`, `backward`, `output_shape` (a `LayerShape`), `info`, and
  binary `save` and `load`.
- `talawa.evolution`: `Genome`, `Population` and the strategy interfaces
  `SelectionStrategy`, `CrossoverStrategy`, `MutationStrategy`,
  `FitnessStrategy` and `GenomeGenerator`. Each call to `Population.step()`
  scores the current generation and replaces it with mutated, scored
  offspring.
- `talawa.timer`: `ScopedTimer`, a context manager that prints
  `[TIMER] name: duration` when the block exits, and `format_duration`.

## Example: training a Q-table on the stick game

```python
from talawa.agents import RandomAgent
from talawa.arena import Arena, TournamentConfig
from talawa.qtable import HyperParameters, QTable, UpdateRule
from talawa.sticks import Player, StickGame

game = StickGame()
space = game.action_space(Player.PLAYER_1)

learner = QTable(space, HyperParameters(update_rule=UpdateRule.ZERO_SUM))
opponent = RandomAgent(space)

game.register_agent(Player.PLAYER_1, learner, "q-table")
game.register_agent(Player.PLAYER_2, opponent, "random")

arena = Arena(game)
for _ in range(5000):
    arena.match(max_steps=100, training=True)

stats = arena.tournament(TournamentConfig(rounds=200))
print(stats.report())
```

## Example: timing a block

```python
from talawa.timer import ScopedTimer

with ScopedTimer("sum"):
    total = sum(range(1_000_000))
```

## What it does not do

This package is a library and has no command-line program. It has no dense or
convolutional layers, optimizers or network builder. Losses and
`Pooling2DLayer` work on their own and cannot be assembled into a trainable
network. It has no deep Q-learning agent. It does not draw or render
environments. `StickGame` is the only environment included, and other
environments are written by subclassing `Environment`.