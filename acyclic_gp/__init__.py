"""
acyclic_gp - Genetic programming for symbolic regression

Chromosomes are small acyclic computation graphs stored as gene lists whose
operator genes point back at earlier genes by position. A population of them
is evolved to minimize mean squared error against a dataset whose last column
is the target.
"""

__version__ = "0.1.0"
__author__ = "Acyclic GP Project"

from .operators import (
    Operator, OperatorKind, OPERATORS, UNARY_OPS, BINARY_OPS, MAX_FLOAT,
    UNARY_SENTINEL, pick_unary, pick_binary, get_operator
)
from .genes import (
    Gene, Constant, Variable, UnaryOp, BinaryOp, gene_from_dict, generate_gene
)
from .chromosome import Chromosome
from .population import Population
from .island import Archipelago
from .evaluator import ParallelEvaluator
from .config import EvolutionConfig
from .dataset import GenerationRecord, as_dataset, read_csv, write_fitness_trace
from .errors import ConfigurationError, InvariantViolation
from .evolution import EvolutionResult, evolve
from .archive import RunArchive

__all__ = [
    'Operator', 'OperatorKind', 'OPERATORS', 'UNARY_OPS', 'BINARY_OPS', 'MAX_FLOAT',
    'UNARY_SENTINEL', 'pick_unary', 'pick_binary', 'get_operator',
    'Gene', 'Constant', 'Variable', 'UnaryOp', 'BinaryOp',
    'gene_from_dict', 'generate_gene',
    'Chromosome',
    'Population', 'Archipelago', 'ParallelEvaluator',
    'EvolutionConfig',
    'GenerationRecord', 'as_dataset', 'read_csv', 'write_fitness_trace',
    'ConfigurationError', 'InvariantViolation',
    'EvolutionResult', 'evolve',
    'RunArchive'
]
