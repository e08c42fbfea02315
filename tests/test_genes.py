import numpy as np
import pytest

from acyclic_gp.genes import (
    NOTHING, BinaryOp, Constant, UnaryOp, Variable, gene_from_dict, generate_gene
)
from acyclic_gp.operators import get_operator


def test_forced_terminals(rng):
    for _ in range(200):
        gene = generate_gene(1, 3, True, rng)
        assert isinstance(gene, (Constant, Variable))


def test_position_zero_is_always_terminal(rng):
    for _ in range(200):
        assert generate_gene(0, 3, False, rng).is_terminal()


def test_generated_references_point_backwards(rng):
    kinds = set()
    for position in range(2, 30):
        for _ in range(20):
            gene = generate_gene(position, 4, False, rng)
            kinds.add(type(gene))
            assert all(0 <= ref < position for ref in gene.references())
            if isinstance(gene, Variable):
                assert 0 <= gene.index < 4
            if isinstance(gene, Constant):
                assert 0.0 <= gene.value < 1.0
    assert kinds == {Constant, Variable, UnaryOp, BinaryOp}


def test_no_variables_gives_constants(rng):
    for _ in range(50):
        assert isinstance(generate_gene(0, 0, True, rng), Constant)


def test_operator_name():
    assert Constant(1.0).operator_name() == NOTHING
    assert Variable(0).operator_name() == NOTHING
    assert UnaryOp(get_operator('log2'), 0).operator_name() == 'log2'
    assert BinaryOp(get_operator('mul'), 0, 1).operator_name() == 'mul'


def test_string_forms():
    assert str(Constant(1.5)) == 'Constant(1.5)'
    assert str(Variable(2)) == 'Variable(2)'
    assert str(UnaryOp(get_operator('square'), 1)) == 'Unary(square)[1]'
    assert str(BinaryOp(get_operator('add'), 0, 1)) == 'Binary(add)[0, 1]'


def test_equality():
    assert Constant(0.5) == Constant(0.5)
    assert Constant(0.5) != Variable(0)
    assert BinaryOp(get_operator('add'), 0, 1) == BinaryOp(get_operator('add'), 0, 1)
    assert BinaryOp(get_operator('add'), 0, 1) != BinaryOp(get_operator('sub'), 0, 1)
    assert len({Variable(1), Variable(1), Variable(2)}) == 2


def test_from_dict():
    gene = gene_from_dict({'type': 'BinaryOp', 'op': 'truediv', 'left': 0, 'right': 1})
    assert gene == BinaryOp(get_operator('truediv'), 0, 1)
    with pytest.raises(ValueError):
        gene_from_dict({'type': 'Noise'})


def test_negative_variable_rejected():
    with pytest.raises(ValueError):
        Variable(-1)
