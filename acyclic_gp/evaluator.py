"""
acyclic_gp/evaluator.py - Parallel fitness evaluation
"""
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence
import numpy as np

from .chromosome import Chromosome

logger = logging.getLogger(__name__)


def _evaluate(job):
    chromosome, dataset = job
    chromosome.evaluate_mse(dataset)
    return 1


class ParallelEvaluator:
    """Evaluates chromosomes on a fixed-size thread pool.

    Each chromosome reads only the shared dataset and writes only its own
    fitness, so no locking is needed. ``evaluate`` returns once every task has
    finished.
    """

    def __init__(self, workers: Optional[int] = None):
        self.workers = workers or os.cpu_count() or 1
        self.executor = ThreadPoolExecutor(max_workers=self.workers,
                                           thread_name_prefix='acyclic-gp-eval')
        logger.debug("ParallelEvaluator started with %d workers", self.workers)

    def evaluate(self, chromosomes: Sequence[Chromosome], dataset: np.ndarray) -> int:
        """Evaluate all chromosomes and return how many completed"""
        jobs = [(chromosome, dataset) for chromosome in chromosomes]
        # map() re-raises the first worker exception; consuming it all is the barrier
        return sum(self.executor.map(_evaluate, jobs))

    def close(self) -> None:
        self.executor.shutdown(wait=True)

    def __enter__(self) -> 'ParallelEvaluator':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
