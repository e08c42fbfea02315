"""
acyclic_gp/operators.py - Operator library for expression genes

Operators work on numpy scalars and arrays alike, so a gene can be evaluated
on a single dataset row or on whole dataset columns at once.
"""
import sys
from enum import Enum
from typing import Callable, Dict, List, NamedTuple
import numpy as np

MAX_FLOAT = sys.float_info.max

# Second argument handed to unary operators; it is ignored.
UNARY_SENTINEL = -1.0


def add(x, y):
    return np.add(x, y)


def subtract(x, y):
    return np.subtract(x, y)


def divide(x, y):
    """Division where x / 0 is +MAX_FLOAT for x >= 0 and -MAX_FLOAT otherwise"""
    with np.errstate(divide='ignore', invalid='ignore'):
        quotient = np.true_divide(x, y)
    clamped = np.where(np.greater_equal(x, 0.0), MAX_FLOAT, -MAX_FLOAT)
    return np.where(np.equal(y, 0.0), clamped, quotient)[()]


def multiply(x, y):
    return np.multiply(x, y)


def maximum(x, y):
    return np.fmax(x, y)


def minimum(x, y):
    return np.fmin(x, y)


def square(x, _y=UNARY_SENTINEL):
    return np.multiply(x, x)


def log2(x, _y=UNARY_SENTINEL):
    return np.log2(x)


class OperatorKind(Enum):
    ADD = 'add'
    SUBTRACT = 'sub'
    DIVIDE = 'truediv'
    MULTIPLY = 'mul'
    MAX = 'max'
    MIN = 'min'
    SQUARE = 'square'
    LOG2 = 'log2'


class Operator(NamedTuple):
    """A pure two-argument numeric function plus its display name"""
    kind: OperatorKind
    function: Callable
    arity: int

    @property
    def name(self) -> str:
        return self.kind.value

    def __call__(self, x, y=UNARY_SENTINEL):
        return self.function(x, y)

    def __str__(self):
        return self.name


OPERATORS: Dict[OperatorKind, Operator] = {
    OperatorKind.ADD: Operator(OperatorKind.ADD, add, 2),
    OperatorKind.SUBTRACT: Operator(OperatorKind.SUBTRACT, subtract, 2),
    OperatorKind.DIVIDE: Operator(OperatorKind.DIVIDE, divide, 2),
    OperatorKind.MULTIPLY: Operator(OperatorKind.MULTIPLY, multiply, 2),
    OperatorKind.MAX: Operator(OperatorKind.MAX, maximum, 2),
    OperatorKind.MIN: Operator(OperatorKind.MIN, minimum, 2),
    OperatorKind.SQUARE: Operator(OperatorKind.SQUARE, square, 1),
    OperatorKind.LOG2: Operator(OperatorKind.LOG2, log2, 1),
}

# Primitive sets for random generation
BINARY_OPS: List[Operator] = [op for op in OPERATORS.values() if op.arity == 2]
UNARY_OPS: List[Operator] = [op for op in OPERATORS.values() if op.arity == 1]


def pick_unary(rng: np.random.Generator) -> Operator:
    """Uniformly pick a unary operator"""
    return UNARY_OPS[rng.integers(len(UNARY_OPS))]


def pick_binary(rng: np.random.Generator) -> Operator:
    """Uniformly pick a binary operator"""
    return BINARY_OPS[rng.integers(len(BINARY_OPS))]


def get_operator(name: str) -> Operator:
    """Look up an operator by its display name"""
    try:
        return OPERATORS[OperatorKind(name)]
    except ValueError:
        raise ValueError(f"Unknown operator: {name}") from None
