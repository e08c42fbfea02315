"""
acyclic_gp/chromosome.py - Chromosome representation and JSON serialization
"""
import json
from typing import Any, Dict, Iterable, List, Optional, Set
import numpy as np

from .errors import ConfigurationError, InvariantViolation
from .fitness import format_number, mean_squared_error
from .genes import Constant, Gene, Variable, gene_from_dict, generate_gene
from .operators import MAX_FLOAT


class Chromosome:
    """An expression graph stored as an ordered list of genes.

    The last gene is the root of the expression. Fitness is the mean squared
    error against a dataset; lower is better and MAX_FLOAT means unevaluated.
    """

    def __init__(self, genes: List[Gene] = None):
        self.genes = list(genes) if genes is not None else []
        self.fitness = MAX_FLOAT

    @classmethod
    def from_genes(cls, genes: Iterable[Gene]) -> 'Chromosome':
        """Build a chromosome from caller-supplied genes, checking the invariant"""
        chromosome = cls(list(genes))
        chromosome.validate()
        return chromosome

    @classmethod
    def generate(cls, length: int, variable_count: int,
                 rng: np.random.Generator) -> 'Chromosome':
        """Create a random chromosome; loci 0 and 1 are always terminals"""
        return cls([generate_gene(i, variable_count, i < 2, rng) for i in range(length)])

    def __len__(self) -> int:
        return len(self.genes)

    def validate(self, variable_count: Optional[int] = None) -> None:
        """Raise InvariantViolation unless every reference points to an earlier locus.

        With ``variable_count`` also raise ConfigurationError for a variable the
        dataset does not have; index ``variable_count`` would read the target.
        """
        for locus, gene in enumerate(self.genes):
            for ref in gene.references():
                if not 0 <= ref < locus:
                    raise InvariantViolation(
                        f"Gene {gene} at locus {locus} references locus {ref}")
            if (variable_count is not None and isinstance(gene, Variable)
                    and gene.index >= variable_count):
                raise ConfigurationError(
                    f"Gene {gene} at locus {locus} needs variable v{gene.index}, "
                    f"but the dataset only has {variable_count} variables")

    def evaluate(self, inputs):
        """Evaluate the expression for one dataset row (or dataset columns)"""
        if not self.genes:
            raise InvariantViolation("Cannot evaluate an empty chromosome")
        return self.genes[-1].evaluate(self, inputs)

    def evaluate_mse(self, dataset: np.ndarray) -> float:
        """Compute, store and return the mean squared error over ``dataset``.

        The last column of every row is the target. The graph is walked once
        over the dataset columns rather than once per row.
        """
        columns = np.asarray(dataset, dtype=np.float64).T
        self.validate(len(columns) - 1)
        with np.errstate(all='ignore'):
            predictions = self.evaluate(columns)
        self.fitness = mean_squared_error(predictions, columns[-1])
        return self.fitness

    def active_loci(self) -> Set[int]:
        """Loci reachable from the root gene"""
        if not self.genes:
            return set()
        active = set()
        pending = [len(self.genes) - 1]
        while pending:
            locus = pending.pop()
            if locus in active:
                continue
            active.add(locus)
            pending.extend(self.genes[locus].references())
        return active

    def get_complexity(self) -> int:
        """Number of genes that contribute to the expression"""
        return len(self.active_loci())

    def to_expression_string(self, position: Optional[int] = None) -> str:
        """Render the expression rooted at ``position`` (default: the root)"""
        if position is None:
            position = len(self.genes) - 1
        gene = self.genes[position]

        if isinstance(gene, Constant):
            return format_number(gene.value)
        if isinstance(gene, Variable):
            return f"v{gene.index}"
        children = []
        for ref in gene.references():
            children.append(self.to_expression_string(ref))
        return f"{gene.operator_name()}({', '.join(children)})"

    def cross_with(self, other: 'Chromosome', rng: np.random.Generator,
                   locus: Optional[int] = None) -> int:
        """Swap every gene from ``locus`` to the end with ``other``, in place.

        References are positional and positions do not move, so both
        chromosomes keep satisfying the invariant. Returns the locus used.
        """
        if len(self) != len(other):
            raise InvariantViolation(
                f"Crossover between chromosomes of length {len(self)} and {len(other)}")
        if locus is None:
            locus = int(rng.integers(len(self)))
        elif not 0 <= locus < len(self):
            raise InvariantViolation(f"Crossover locus {locus} outside [0, {len(self)})")

        self.genes[locus:], other.genes[locus:] = other.genes[locus:], self.genes[locus:]
        return locus

    def mutate(self, variable_count: int, rng: np.random.Generator) -> int:
        """Replace the gene at one random locus with a new random gene"""
        locus = int(rng.integers(len(self)))
        self.genes[locus] = generate_gene(locus, variable_count, locus < 2, rng)
        return locus

    def copy(self) -> 'Chromosome':
        """Create a copy of this chromosome; genes are immutable and shared"""
        new_chromosome = Chromosome(self.genes)
        new_chromosome.fitness = self.fitness
        return new_chromosome

    def to_dict(self) -> Dict[str, Any]:
        """Serialize chromosome to dictionary"""
        return {
            'genes': [gene.to_dict() for gene in self.genes],
            'fitness': self.fitness,
            'expression': self.to_expression_string() if self.genes else '',
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Chromosome':
        """Deserialize chromosome from dictionary"""
        if 'genes' not in data:
            raise ValueError("Chromosome data has no 'genes' entry")
        chromosome = cls.from_genes(gene_from_dict(gene) for gene in data['genes'])
        chromosome.fitness = data.get('fitness', MAX_FLOAT)
        return chromosome

    def to_json(self, filename: str = None) -> str:
        """Serialize to JSON string or file"""
        json_str = json.dumps(self.to_dict(), indent=2)
        if filename:
            with open(filename, 'w') as f:
                f.write(json_str)
        return json_str

    @classmethod
    def from_json(cls, json_data: str = None, filename: str = None) -> 'Chromosome':
        """Deserialize from JSON string or file"""
        if filename:
            with open(filename, 'r') as f:
                json_data = f.read()

        data = json.loads(json_data)
        return cls.from_dict(data)

    def __str__(self) -> str:
        return ' '.join(str(gene) for gene in self.genes)

    def __repr__(self) -> str:
        return f"Chromosome(fitness={self.fitness}, genes=[{self}])"
