"""
acyclic_gp/dataset.py - Dataset loading and fitness trace output

A dataset is a 2-D float array. The last column is the regression target and
the other columns are the variables v0..v(n-1).
"""
from typing import Iterable, NamedTuple, Sequence
import numpy as np

from .errors import ConfigurationError
from .fitness import format_number


class GenerationRecord(NamedTuple):
    generation: int
    fitness: float


def as_dataset(rows) -> np.ndarray:
    """Convert rows to a float64 matrix, rejecting empty or ragged input"""
    if isinstance(rows, np.ndarray):
        data = rows.astype(np.float64, copy=False)
    else:
        rows = [list(row) for row in rows]
        if rows and len({len(row) for row in rows}) > 1:
            raise ConfigurationError("Every dataset row must have the same length")
        data = np.array(rows, dtype=np.float64)

    if data.ndim != 2 or data.shape[0] == 0:
        raise ConfigurationError("Dataset must contain at least one row")
    if data.shape[1] == 0:
        raise ConfigurationError("Dataset rows must contain a target column")
    return data


def variable_count(dataset: np.ndarray) -> int:
    """Number of input variables (all columns but the target)"""
    return np.shape(dataset)[1] - 1


def read_csv(path: str, has_header: bool = True) -> np.ndarray:
    """Read a comma separated file of numbers into a dataset"""
    try:
        data = np.loadtxt(path, delimiter=',', skiprows=1 if has_header else 0,
                          dtype=np.float64, ndmin=2)
    except ValueError as e:
        raise ConfigurationError(f"Could not parse dataset {path}: {e}") from e
    return as_dataset(data)


def write_fitness_trace(trace: Iterable[GenerationRecord], path: str) -> None:
    """Write one 'generation, fitness' line per record"""
    with open(path, 'w') as f:
        for record in trace:
            f.write(f"{record.generation}, {format_number(record.fitness)}\n")


def read_fitness_trace(path: str) -> Sequence[GenerationRecord]:
    records = []
    with open(path, 'r') as f:
        for line in f:
            if line.strip():
                generation, fitness = line.split(',')
                records.append(GenerationRecord(int(generation), float(fitness)))
    return records
