import numpy as np
import pytest

from acyclic_gp import (
    Archipelago, ConfigurationError, EvolutionConfig, GenerationRecord, evolve
)


def small_config(**overrides):
    settings = dict(generations=5, population_size=7, gene_count=8,
                    crossover_chance=0.5, mutation_chance=0.5, seed=17, workers=2)
    settings.update(overrides)
    return EvolutionConfig(**settings)


def test_single_row_end_to_end():
    config = EvolutionConfig(generations=1, population_size=3, gene_count=3,
                             crossover_chance=0.0, mutation_chance=0.0, seed=0)
    result = evolve([[1.0, 1.0, 1.0]], config)

    assert len(result.trace) == 1
    assert result.trace[0].generation == 0
    assert result.fitness == result.trace[0].fitness
    assert np.isfinite(result.fitness)
    assert result.fitness >= 0.0
    assert isinstance(result.expression, str) and result.expression


def test_trace_has_one_record_per_generation(dataset):
    result = evolve(dataset, small_config(generations=12))
    assert [record.generation for record in result.trace] == list(range(12))
    assert all(isinstance(record, GenerationRecord) for record in result.trace)


def test_trace_is_non_increasing(dataset):
    result = evolve(dataset, small_config(generations=20, population_size=11))
    fitnesses = [record.fitness for record in result.trace]
    assert fitnesses == sorted(fitnesses, reverse=True)
    assert result.fitness <= fitnesses[-1]


def test_best_is_reevaluated_consistently(dataset):
    result = evolve(dataset, small_config())
    expected = result.best.fitness
    assert result.best.copy().evaluate_mse(dataset) == expected


def test_seeded_runs_are_reproducible(dataset):
    first = evolve(dataset, small_config(seed=99))
    second = evolve(dataset, small_config(seed=99, workers=1))
    assert first.trace == second.trace
    assert first.expression == second.expression


def test_callback_sees_every_generation(dataset):
    seen = []
    evolve(dataset, small_config(generations=4), callback=lambda record, pop: seen.append(record.generation))
    assert seen == [0, 1, 2, 3]


def test_islands(dataset):
    islands_seen = []

    def callback(record, population):
        islands_seen.append(len(population))

    result = evolve(dataset, small_config(islands=3), callback=callback)
    assert islands_seen == [3] * 5
    assert len(result.trace) == 5
    assert np.isfinite(result.fitness)


def test_archipelago_best_is_best_of_islands(dataset):
    archipelago = Archipelago.initialize(3, 5, 6, dataset, seed=1)
    archipelago.evaluate(dataset)
    assert archipelago.best.fitness == min(island.best.fitness for island in archipelago.islands)

    next_generations, elite_fitness = archipelago.reproduce(None, 0.5, 0.5)
    assert len(next_generations) == 3
    assert elite_fitness == archipelago.best.fitness
    archipelago.replace_and_reevaluate(next_generations, dataset)
    assert archipelago.generation == 1


@pytest.mark.parametrize("overrides", [
    dict(population_size=4),
    dict(population_size=0),
    dict(gene_count=1),
    dict(gene_count=501),
    dict(generations=0),
    dict(crossover_chance=1.5),
    dict(mutation_chance=-0.1),
    dict(workers=0),
    dict(islands=0),
])
def test_configuration_errors(dataset, overrides):
    with pytest.raises(ConfigurationError):
        evolve(dataset, small_config(**overrides))


@pytest.mark.parametrize("rows", [[], [[1.0, 2.0], [1.0]], [[]]])
def test_bad_datasets(rows):
    with pytest.raises(ConfigurationError):
        evolve(rows, small_config())
