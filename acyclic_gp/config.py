"""
acyclic_gp/config.py - Run configuration and validation
"""
from dataclasses import dataclass
from typing import Optional
import numpy as np

from .errors import ConfigurationError

MIN_GENE_COUNT = 2
# Evaluation and rendering recurse once per gene along the longest reference
# chain, which can be as long as the chromosome.
MAX_GENE_COUNT = 500


def validate_population_size(size: int) -> None:
    """Elitism takes one slot and the rest are filled in pairs, so size must be odd"""
    if size < 1:
        raise ConfigurationError(f"Population size must be positive, got {size}")
    if size % 2 == 0:
        raise ConfigurationError(
            f"The number of individuals in the population must be odd for elitism to work, got {size}")


def validate_gene_count(gene_count: int) -> None:
    if gene_count < MIN_GENE_COUNT:
        raise ConfigurationError(
            f"Gene count must be at least {MIN_GENE_COUNT}, got {gene_count}")
    if gene_count > MAX_GENE_COUNT:
        raise ConfigurationError(
            f"Gene count must be at most {MAX_GENE_COUNT}, got {gene_count}")


def validate_probability(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ConfigurationError(f"{name} must be between 0 and 1, got {value}")


@dataclass
class EvolutionConfig:
    """Configuration for one evolutionary run"""

    # Evolution control
    generations: int = 100
    population_size: int = 101
    gene_count: int = 100

    # Genetic operators
    crossover_chance: float = 0.5
    mutation_chance: float = 0.5

    # Reproducibility
    seed: Optional[int] = None

    # Performance parameters
    workers: Optional[int] = None
    islands: int = 1

    def validate(self, dataset: Optional[np.ndarray] = None) -> bool:
        """Validate configuration parameters, and the dataset when given"""
        if self.generations < 1:
            raise ConfigurationError(f"Generation count must be positive, got {self.generations}")
        validate_population_size(self.population_size)
        validate_gene_count(self.gene_count)
        validate_probability("Crossover chance", self.crossover_chance)
        validate_probability("Mutation chance", self.mutation_chance)
        if self.workers is not None and self.workers < 1:
            raise ConfigurationError(f"Worker count must be positive, got {self.workers}")
        if self.islands < 1:
            raise ConfigurationError(f"Island count must be positive, got {self.islands}")
        if dataset is not None:
            from .dataset import as_dataset
            as_dataset(dataset)
        return True
