"""
acyclic_gp/island.py - Independently evolving sub-populations

Islands never exchange individuals; each one runs the same generational
loop with its own random stream.
"""
from typing import List, Optional, Tuple
import numpy as np

from .chromosome import Chromosome
from .evaluator import ParallelEvaluator
from .population import Population, SeedLike, _seed_sequence


class Archipelago:
    """A group of populations driven through the same generations"""

    def __init__(self, islands: List[Population]):
        if not islands:
            raise ValueError("An archipelago needs at least one island")
        self.islands = list(islands)

    @classmethod
    def initialize(cls, island_count: int, size: int, gene_count: int,
                   dataset: np.ndarray, seed: SeedLike = None,
                   evaluator: Optional[ParallelEvaluator] = None) -> 'Archipelago':
        seed_sequence = _seed_sequence(seed)
        return cls([
            Population.initialize(size, gene_count, dataset, child, evaluator)
            for child in seed_sequence.spawn(island_count)
        ])

    def __len__(self) -> int:
        return len(self.islands)

    @property
    def generation(self) -> int:
        return self.islands[0].generation

    @property
    def best(self) -> Chromosome:
        """Best cached individual across all islands (earliest island on ties)"""
        return min((island.best for island in self.islands), key=lambda c: c.fitness)

    def evaluate(self, dataset: np.ndarray) -> None:
        for island in self.islands:
            island.evaluate(dataset)

    def reproduce(self, variable_count: Optional[int] = None,
                  crossover_chance: float = 0.5,
                  mutation_chance: float = 0.5) -> Tuple[List[List[Chromosome]], float]:
        """Reproduce every island; returns the next generations and the best elite fitness"""
        next_generations = []
        elite_fitnesses = []
        for island in self.islands:
            next_generation, elite_fitness = island.reproduce(
                variable_count, crossover_chance, mutation_chance)
            next_generations.append(next_generation)
            elite_fitnesses.append(elite_fitness)
        return next_generations, min(elite_fitnesses)

    def replace_and_reevaluate(self, next_generations: List[List[Chromosome]],
                               dataset: np.ndarray) -> None:
        if len(next_generations) != len(self.islands):
            raise ValueError(
                f"Got {len(next_generations)} generations for {len(self.islands)} islands")
        for island, next_generation in zip(self.islands, next_generations):
            island.replace_and_reevaluate(next_generation, dataset)

    def get_stats(self) -> List[dict]:
        """Per-island statistics"""
        return [island.get_stats() for island in self.islands]
