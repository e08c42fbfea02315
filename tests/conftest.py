import numpy as np
import pytest

from acyclic_gp import as_dataset


ROWS = [
    [1.0, 2.0, 3.0, 5.0],
    [0.5, 4.0, 1.5, 3.5],
    [2.0, 8.0, 0.25, 16.25],
    [3.0, 1.0, 2.0, 5.0],
]


class ScriptedRng:
    """Stands in for a numpy Generator, replaying fixed draws"""

    def __init__(self, integers=(), randoms=()):
        self._integers = list(integers)
        self._randoms = list(randoms)

    def integers(self, high):
        value = self._integers.pop(0)
        assert 0 <= value < high
        return value

    def random(self):
        return self._randoms.pop(0)


@pytest.fixture
def rows():
    return [list(row) for row in ROWS]


@pytest.fixture
def dataset():
    return as_dataset(ROWS)


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "data.csv"
    lines = ["a,b,c,target"] + [",".join(str(v) for v in row) for row in ROWS]
    path.write_text("\n".join(lines) + "\n")
    return str(path)
