"""
acyclic_gp/evolution.py - Generational loop

Init -> (evaluate -> select & reproduce -> replace) x generations -> report
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .chromosome import Chromosome
from .config import EvolutionConfig
from .dataset import GenerationRecord, as_dataset
from .evaluator import ParallelEvaluator
from .island import Archipelago
from .population import Population

logger = logging.getLogger(__name__)


@dataclass
class EvolutionResult:
    """Outcome of a run: the best chromosome and the per-generation best fitness"""
    best: Chromosome
    trace: List[GenerationRecord] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def fitness(self) -> float:
        return self.best.fitness

    @property
    def expression(self) -> str:
        return self.best.to_expression_string()


def evolve(dataset, config: Optional[EvolutionConfig] = None,
           callback: Optional[Callable[[GenerationRecord, object], None]] = None) -> EvolutionResult:
    """Run the evolutionary search on ``dataset``.

    ``callback`` is called after every generation with the generation's record
    and the population (or archipelago).
    """
    config = config or EvolutionConfig()
    dataset = as_dataset(dataset)
    config.validate(dataset)

    start_time = time.time()
    trace = []

    with ParallelEvaluator(config.workers) as evaluator:
        if config.islands > 1:
            population = Archipelago.initialize(
                config.islands, config.population_size, config.gene_count,
                dataset, config.seed, evaluator)
        else:
            population = Population.initialize(
                config.population_size, config.gene_count, dataset,
                config.seed, evaluator)

        population.evaluate(dataset)

        for generation in range(config.generations):
            next_generation, elite_fitness = population.reproduce(
                None, config.crossover_chance, config.mutation_chance)
            record = GenerationRecord(generation, elite_fitness)
            trace.append(record)

            population.replace_and_reevaluate(next_generation, dataset)

            logger.debug("Generation %d: best fitness %s", generation, elite_fitness)
            if callback is not None:
                callback(record, population)

    best = population.best
    elapsed = time.time() - start_time
    logger.info("Evolution finished in %.2fs with best fitness %s", elapsed, best.fitness)
    return EvolutionResult(best=best, trace=trace, elapsed=elapsed)
