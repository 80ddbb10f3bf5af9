import pytest

from talawa.evolution import (
    CrossoverStrategy,
    FitnessStrategy,
    Genome,
    GenomeGenerator,
    MutationStrategy,
    Population,
    SelectionStrategy,
)


class SumFitness(FitnessStrategy):
    def calculate_fitness(self, genome):
        return float(sum(genome.genes))


class BestSelection(SelectionStrategy):
    def __init__(self):
        self.seen_fitness = []

    def select(self, population):
        self.seen_fitness.append([(g.fitness, sum(g.genes)) for g in population])
        return max(population, key=lambda g: g.fitness)


class HalfCrossover(CrossoverStrategy):
    def crossover(self, parent1, parent2):
        half = len(parent1.genes) // 2
        return Genome(list(parent1.genes[:half]) + list(parent2.genes[half:]))


class NullCrossover(CrossoverStrategy):
    def crossover(self, parent1, parent2):
        return None


class AddOneMutation(MutationStrategy):
    def mutate(self, genome):
        genome.genes = [g + 1 for g in genome.genes]


class CountingGenerator(GenomeGenerator):
    def __init__(self):
        self.count = 0

    def generate(self):
        self.count += 1
        return Genome([self.count, self.count * 2, self.count * 3])


def _population(size=4, crossover=None):
    return Population(
        size,
        selection=BestSelection(),
        crossover=crossover if crossover is not None else HalfCrossover(),
        mutation=AddOneMutation(),
        fitness=SumFitness(),
    )


def test_genome_copy_is_independent():
    original = Genome([1, 2, 3], fitness=5.0)
    twin = original.copy()
    twin.genes.append(4)
    twin.fitness = 9.0
    assert original.genes == [1, 2, 3]
    assert original.fitness == 5.0
    assert twin.genes == [1, 2, 3, 4]


def test_genome_default_fitness_is_zero():
    assert Genome([0]).fitness == 0.0


def test_step_before_initialize_raises():
    pop = _population()
    with pytest.raises(RuntimeError, match="not initialized"):
        pop.step()


def test_step_without_strategies_raises():
    pop = Population(3)
    pop.initialize(CountingGenerator())
    with pytest.raises(RuntimeError, match="not fully configured"):
        pop.step()


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        Population(-1)


def test_initialize_fills_population_from_generator():
    generator = CountingGenerator()
    pop = _population(size=5)
    pop.initialize(generator)
    assert generator.count == 5
    assert [g.genes[0] for g in pop.genomes] == [1, 2, 3, 4, 5]


def test_null_offspring_raises():
    pop = _population(crossover=NullCrossover())
    pop.initialize(CountingGenerator())
    with pytest.raises(RuntimeError, match="null offspring"):
        pop.step()


def test_step_returns_scored_generation_of_same_size():
    pop = _population(size=6)
    pop.initialize(CountingGenerator())
    generation = pop.step()
    assert len(generation) == 6
    assert generation is pop.genomes
    for genome in generation:
        assert genome.fitness == float(sum(genome.genes))


def test_current_generation_scored_before_selection():
    selection = BestSelection()
    pop = Population(
        3,
        selection=selection,
        crossover=HalfCrossover(),
        mutation=AddOneMutation(),
        fitness=SumFitness(),
    )
    pop.initialize(CountingGenerator())
    pop.step()
    assert len(selection.seen_fitness) == 6
    for snapshot in selection.seen_fitness:
        for fitness, total in snapshot:
            assert fitness == float(total)


def test_best_selection_breeds_mutated_best():
    generator = CountingGenerator()
    pop = _population(size=4)
    pop.initialize(generator)
    best = max(pop.genomes, key=lambda g: sum(g.genes))
    expected = [g + 1 for g in best.genes]
    generation = pop.step()
    assert all(g.genes == expected for g in generation)


def test_offspring_are_distinct_objects_from_parents():
    pop = _population(size=3)
    pop.initialize(CountingGenerator())
    parents = list(pop.genomes)
    generation = pop.step()
    assert all(child is not parent for child in generation for parent in parents)


def test_fitness_improves_over_generations():
    pop = _population(size=4)
    pop.initialize(CountingGenerator())
    first = max(g.fitness for g in pop.step())
    second = max(g.fitness for g in pop.step())
    assert second > first