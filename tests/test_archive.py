from acyclic_gp import EvolutionConfig, RunArchive, evolve


def test_save_run_and_summary(tmp_path, dataset):
    config = EvolutionConfig(generations=3, population_size=5, gene_count=6, seed=2, workers=1)
    result = evolve(dataset, config)

    archive = RunArchive(str(tmp_path / "run"))
    archive.save_run(result, {'generations': 3, 'population_size': 5})

    assert archive.load_trace() == result.trace
    best = archive.load_best()
    assert best.genes == result.best.genes
    assert best.fitness == result.fitness

    report = archive.export_summary_report()
    assert "EVOLUTION SUMMARY REPORT" in report
    assert result.expression in report
    assert (tmp_path / "run" / RunArchive.REPORT_FILE).exists()


def test_empty_archive(tmp_path):
    archive = RunArchive(str(tmp_path / "empty"))
    assert archive.load_best() is None
    assert archive.export_summary_report() == "No evolution data to summarize"
