"""
acyclic_gp/population.py - Population management and genetic operators
"""
import logging
from typing import Any, Dict, List, Optional, Tuple, Union
import numpy as np

from .chromosome import Chromosome
from .config import validate_gene_count, validate_population_size
from .dataset import as_dataset, variable_count as dataset_variable_count
from .errors import InvariantViolation
from .evaluator import ParallelEvaluator
from .operators import MAX_FLOAT

logger = logging.getLogger(__name__)

SeedLike = Union[None, int, np.random.SeedSequence]


def _seed_sequence(seed: SeedLike) -> np.random.SeedSequence:
    if isinstance(seed, np.random.SeedSequence):
        return seed
    return np.random.SeedSequence(seed)


class Population:
    """Manages a population of chromosomes with genetic operators.

    Random decisions come from generators spawned off one SeedSequence: one
    per chromosome at initialization, one per offspring pair during
    reproduction, and one for tournament draws.
    """

    def __init__(self, chromosomes: List[Chromosome], variable_count: int,
                 seed: SeedLike = None, evaluator: Optional[ParallelEvaluator] = None):
        validate_population_size(len(chromosomes))
        self.chromosomes = list(chromosomes)
        self.size = len(self.chromosomes)
        self.variable_count = variable_count
        self.seed_sequence = _seed_sequence(seed)
        self.rng = np.random.default_rng(self.seed_sequence.spawn(1)[0])
        self.evaluator = evaluator
        self.generation = 0
        # Worst possible individual until refresh_best() runs
        self.best = Chromosome()

    @classmethod
    def initialize(cls, size: int, gene_count: int, dataset: np.ndarray,
                   seed: SeedLike = None,
                   evaluator: Optional[ParallelEvaluator] = None) -> 'Population':
        """Create ``size`` random chromosomes of ``gene_count`` genes each"""
        validate_population_size(size)
        validate_gene_count(gene_count)
        dataset = as_dataset(dataset)
        num_variables = dataset_variable_count(dataset)

        seed_sequence = _seed_sequence(seed)
        chromosomes = [
            Chromosome.generate(gene_count, num_variables, np.random.default_rng(child))
            for child in seed_sequence.spawn(size)
        ]
        population = cls(chromosomes, num_variables, seed_sequence, evaluator)
        population.refresh_best()
        return population

    def __len__(self) -> int:
        return self.size

    def evaluate(self, dataset: np.ndarray) -> None:
        """Compute every member's fitness, then refresh the cached best.

        All evaluations have finished when this returns; selection relies on it.
        """
        if self.evaluator is None:
            completed = 0
            for chromosome in self.chromosomes:
                chromosome.evaluate_mse(dataset)
                completed += 1
        else:
            completed = self.evaluator.evaluate(self.chromosomes, dataset)

        if completed != self.size:
            raise InvariantViolation(
                f"Only {completed} of {self.size} chromosomes were evaluated")
        self.refresh_best()

    def refresh_best(self) -> Chromosome:
        """Cache the member with the lowest fitness; ties keep the earliest"""
        self.best = min(self.chromosomes, key=lambda c: c.fitness)
        return self.best

    def tournament_select(self, rng: Optional[np.random.Generator] = None) -> Chromosome:
        """Binary tournament with replacement; ties go to the first draw"""
        rng = rng or self.rng
        first = self.chromosomes[rng.integers(self.size)]
        second = self.chromosomes[rng.integers(self.size)]
        return first if first.fitness <= second.fitness else second

    def reproduce(self, variable_count: Optional[int] = None,
                  crossover_chance: float = 0.5,
                  mutation_chance: float = 0.5) -> Tuple[List[Chromosome], float]:
        """Build the next generation and return it with the elite's fitness.

        The elite is copied unchanged into the first slot. The other slots are
        filled in pairs of tournament winners, optionally crossed and mutated.
        The current generation is only read.
        """
        if variable_count is None:
            variable_count = self.variable_count

        elite = self.best.copy()
        next_generation = [elite]

        for child in self.seed_sequence.spawn((self.size - 1) // 2):
            rng = np.random.default_rng(child)
            offspring_one = self.tournament_select().copy()
            offspring_two = self.tournament_select().copy()

            if rng.random() < crossover_chance:
                offspring_one.cross_with(offspring_two, rng)
            if rng.random() < mutation_chance:
                offspring_one.mutate(variable_count, rng)
            if rng.random() < mutation_chance:
                offspring_two.mutate(variable_count, rng)

            next_generation.append(offspring_one)
            next_generation.append(offspring_two)

        return next_generation, elite.fitness

    def replace_and_reevaluate(self, next_generation: List[Chromosome],
                               dataset: np.ndarray) -> None:
        """Swap in the next generation and evaluate it"""
        if len(next_generation) != self.size:
            raise InvariantViolation(
                f"Next generation has {len(next_generation)} members, expected {self.size}")
        self.chromosomes = list(next_generation)
        self.generation += 1
        self.evaluate(dataset)

    def get_stats(self) -> Dict[str, Any]:
        """Get population statistics"""
        fitnesses = np.array([c.fitness for c in self.chromosomes])
        finite = fitnesses[fitnesses < MAX_FLOAT]
        complexities = [c.get_complexity() for c in self.chromosomes]

        stats = {
            'generation': self.generation,
            'population_size': self.size,
            'evaluated': int(len(finite)),
            'best_fitness': self.best.fitness,
            'complexity': {
                'min': min(complexities),
                'max': max(complexities),
                'mean': float(np.mean(complexities)),
            },
        }
        if len(finite):
            with np.errstate(over='ignore', invalid='ignore'):
                stats['fitness'] = {
                    'min': float(np.min(finite)),
                    'max': float(np.max(finite)),
                    'mean': float(np.mean(finite)),
                    'std': float(np.std(finite)),
                }
        return stats
