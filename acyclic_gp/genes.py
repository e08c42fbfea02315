"""
acyclic_gp/genes.py - Genes: the nodes of a chromosome's expression graph

A gene never holds a reference to another gene. Operator genes point at
earlier loci of their owning chromosome by integer index, and every index must
be strictly smaller than the gene's own locus.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple
import numpy as np

from .operators import Operator, UNARY_SENTINEL, get_operator, pick_binary, pick_unary

# Gene generation probabilities
TERMINAL_CHANCE = 0.5
CONSTANT_CHANCE = 0.5
BINARY_CHANCE = 0.5

NOTHING = 'nothing'


class Gene(ABC):
    """Base class for all genes"""

    arity = 0

    @abstractmethod
    def evaluate(self, chromosome, inputs):
        """Evaluate the graph rooted at this gene.

        ``inputs`` is indexed by variable number: either one dataset row
        (giving scalars) or the column-major view of a dataset (giving arrays).
        """
        pass

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary"""
        pass

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Gene':
        """Deserialize from dictionary"""
        pass

    def references(self) -> Tuple[int, ...]:
        """Loci this gene reads from"""
        return ()

    def operator_name(self) -> str:
        return NOTHING

    def is_terminal(self) -> bool:
        return self.arity == 0

    def __eq__(self, other):
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash((type(self).__name__, repr(sorted(self.to_dict().items()))))

    def __repr__(self):
        return str(self)


class Constant(Gene):
    """Numeric constant"""

    def __init__(self, value: float):
        self.value = float(value)

    def evaluate(self, chromosome, inputs):
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'Constant', 'value': self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Constant':
        return cls(data['value'])

    def __str__(self):
        return f"Constant({self.value})"


class Variable(Gene):
    """Input variable, i.e. a column of the dataset"""

    def __init__(self, index: int):
        if index < 0:
            raise ValueError(f"Variable index must be non-negative, got {index}")
        self.index = int(index)

    def evaluate(self, chromosome, inputs):
        return inputs[self.index]

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'Variable', 'index': self.index}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Variable':
        return cls(data['index'])

    def __str__(self):
        return f"Variable({self.index})"


class UnaryOp(Gene):
    """Unary operator applied to one earlier gene"""

    arity = 1

    def __init__(self, op: Operator, left: int):
        self.op = op
        self.left = int(left)

    def evaluate(self, chromosome, inputs):
        child_val = chromosome.genes[self.left].evaluate(chromosome, inputs)
        return self.op(child_val, UNARY_SENTINEL)

    def references(self) -> Tuple[int, ...]:
        return (self.left,)

    def operator_name(self) -> str:
        return self.op.name

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'UnaryOp', 'op': self.op.name, 'left': self.left}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UnaryOp':
        return cls(get_operator(data['op']), data['left'])

    def __str__(self):
        return f"Unary({self.op.name})[{self.left}]"


class BinaryOp(Gene):
    """Binary operator applied to two earlier genes"""

    arity = 2

    def __init__(self, op: Operator, left: int, right: int):
        self.op = op
        self.left = int(left)
        self.right = int(right)

    def evaluate(self, chromosome, inputs):
        left_val = chromosome.genes[self.left].evaluate(chromosome, inputs)
        right_val = chromosome.genes[self.right].evaluate(chromosome, inputs)
        return self.op(left_val, right_val)

    def references(self) -> Tuple[int, ...]:
        return (self.left, self.right)

    def operator_name(self) -> str:
        return self.op.name

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'BinaryOp', 'op': self.op.name, 'left': self.left, 'right': self.right}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BinaryOp':
        return cls(get_operator(data['op']), data['left'], data['right'])

    def __str__(self):
        return f"Binary({self.op.name})[{self.left}, {self.right}]"


# Gene creation helpers
def gene_from_dict(data: Dict[str, Any]) -> Gene:
    """Create gene from dictionary representation"""
    gene_type = data.get('type')

    if gene_type == 'Constant':
        return Constant.from_dict(data)
    elif gene_type == 'Variable':
        return Variable.from_dict(data)
    elif gene_type == 'UnaryOp':
        return UnaryOp.from_dict(data)
    elif gene_type == 'BinaryOp':
        return BinaryOp.from_dict(data)
    else:
        raise ValueError(f"Unknown gene type: {gene_type}")


def random_terminal(variable_count: int, rng: np.random.Generator) -> Gene:
    """Create a random constant or variable gene"""
    if variable_count <= 0 or rng.random() < CONSTANT_CHANCE:
        return Constant(rng.random())
    return Variable(rng.integers(variable_count))


def generate_gene(position: int, variable_count: int, force_terminal: bool,
                  rng: np.random.Generator) -> Gene:
    """Create a random gene for the given locus.

    Operator genes only reference loci in ``[0, position)``, so a position of
    0 always yields a terminal.
    """
    if force_terminal or position == 0 or rng.random() < TERMINAL_CHANCE:
        return random_terminal(variable_count, rng)

    if rng.random() < BINARY_CHANCE:
        return BinaryOp(pick_binary(rng), rng.integers(position), rng.integers(position))
    return UnaryOp(pick_unary(rng), rng.integers(position))
