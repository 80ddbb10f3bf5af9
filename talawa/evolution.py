"""Genetic algorithm: genomes, pluggable strategies and a population."""

from __future__ import annotations

import copy as _copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass
class Genome(Generic[T]):
    """A candidate solution: its genes and the fitness last assigned to it."""

    genes: T
    fitness: float = 0.0

    def copy(self) -> Genome[T]:
        """Deep copy; the genes of the copy are independent of the original."""
        return _copy.deepcopy(self)


class SelectionStrategy(ABC, Generic[T]):
    """Picks a parent out of a population."""

    @abstractmethod
    def select(self, population: Sequence[Genome[T]]) -> Genome[T]:
        """Return one member of ``population``."""


class CrossoverStrategy(ABC, Generic[T]):
    """Combines two parents into an offspring."""

    @abstractmethod
    def crossover(self, parent1: Genome[T], parent2: Genome[T]) -> Genome[T] | None:
        """Return a new genome made from both parents."""


class MutationStrategy(ABC, Generic[T]):
    """Changes a genome in place."""

    @abstractmethod
    def mutate(self, genome: Genome[T]) -> None:
        """Mutate ``genome`` in place."""


class FitnessStrategy(ABC, Generic[T]):
    """Scores a genome; higher is fitter."""

    @abstractmethod
    def calculate_fitness(self, genome: Genome[T]) -> float:
        """Return the fitness of ``genome``."""


class GenomeGenerator(ABC, Generic[T]):
    """Produces fresh genomes for an initial population."""

    @abstractmethod
    def generate(self) -> Genome[T]:
        """Return a new genome."""


class Population(Generic[T]):
    """A fixed-size population evolved one generation per ``step``."""

    def __init__(
        self,
        size: int,
        selection: SelectionStrategy[T] | None = None,
        crossover: CrossoverStrategy[T] | None = None,
        mutation: MutationStrategy[T] | None = None,
        fitness: FitnessStrategy[T] | None = None,
    ):
        if size < 0:
            raise ValueError("Population size cannot be negative.")
        self.size = size
        self.selection = selection
        self.crossover = crossover
        self.mutation = mutation
        self.fitness = fitness
        self.genomes: list[Genome[T] | None] = [None] * size
        self._initialized = False

    def initialize(self, generator: GenomeGenerator[T]) -> None:
        """Fill the population with genomes from ``generator``."""
        self.genomes = [generator.generate() for _ in range(self.size)]
        self._initialized = True

    def step(self) -> list[Genome[T]]:
        """Score the current generation and replace it with its offspring.

        Offspring are scored as they are created, so the returned generation
        already carries fitness values.
        """
        if not self._initialized:
            raise RuntimeError("Population not initialized with genes.")
        if (
            self.selection is None
            or self.crossover is None
            or self.mutation is None
            or self.fitness is None
        ):
            raise RuntimeError("Population strategies not fully configured.")

        for genome in self.genomes:
            if genome is not None:
                genome.fitness = float(self.fitness.calculate_fitness(genome))

        next_generation: list[Genome[T]] = []
        for _ in range(self.size):
            parent1 = self.selection.select(self.genomes)
            parent2 = self.selection.select(self.genomes)
            offspring = self.crossover.crossover(parent1, parent2)
            if offspring is None:
                raise RuntimeError("Crossover returned null offspring.")
            self.mutation.mutate(offspring)
            offspring.fitness = float(self.fitness.calculate_fitness(offspring))
            next_generation.append(offspring)

        self.genomes = next_generation
        return self.genomes