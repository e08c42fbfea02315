import numpy as np
import pytest

from acyclic_gp import (
    MAX_FLOAT, ConfigurationError, GenerationRecord, as_dataset, read_csv, write_fitness_trace
)
from acyclic_gp.dataset import read_fitness_trace, variable_count


def test_as_dataset(rows):
    data = as_dataset(rows)
    assert data.dtype == np.float64
    assert data.shape == (4, 4)
    assert variable_count(data) == 3


@pytest.mark.parametrize("rows", [[], [[1.0, 2.0], [3.0]], [[]], np.zeros((0, 3))])
def test_as_dataset_rejects(rows):
    with pytest.raises(ConfigurationError):
        as_dataset(rows)


def test_target_only_dataset_has_no_variables():
    assert variable_count(as_dataset([[1.0], [2.0]])) == 0


def test_read_csv_skips_header(csv_file, rows):
    data = read_csv(csv_file)
    assert data.tolist() == rows


def test_read_csv_single_row(tmp_path):
    path = tmp_path / "one.csv"
    path.write_text("x,y,z\n1,1,1\n")
    assert read_csv(str(path)).tolist() == [[1.0, 1.0, 1.0]]


def test_read_csv_rejects_text(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("x,y\n1,abc\n")
    with pytest.raises(ConfigurationError):
        read_csv(str(path))


def test_write_fitness_trace(tmp_path):
    path = tmp_path / "gp_out.txt"
    trace = [GenerationRecord(0, 2.5), GenerationRecord(1, 1.25)]
    write_fitness_trace(trace, str(path))
    assert path.read_text() == "0, 2.5\n1, 1.25\n"
    assert read_fitness_trace(str(path)) == trace


def test_write_fitness_trace_is_positional(tmp_path):
    path = tmp_path / "gp_out.txt"
    trace = [GenerationRecord(0, MAX_FLOAT), GenerationRecord(1, 2.0), GenerationRecord(2, 1e-07)]
    write_fitness_trace(trace, str(path))
    lines = path.read_text().splitlines()
    assert all('e' not in line for line in lines)
    assert lines[1:] == ["1, 2", "2, 0.0000001"]
    assert read_fitness_trace(str(path)) == trace
