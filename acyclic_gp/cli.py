"""
acyclic_gp/cli.py - Command-line interface
"""
import dataclasses
import logging
import os

import click

from .archive import RunArchive
from .chromosome import Chromosome
from .config import EvolutionConfig
from .dataset import read_csv, write_fitness_trace
from .errors import ConfigurationError, InvariantViolation
from .evolution import evolve


@click.group()
def cli():
    """Acyclic GP - symbolic regression with graph-encoded chromosomes.

    The last column of the dataset is the regression target.
    """
    pass


@cli.command()
@click.option('--file', '-f', 'dataset_file', required=True,
              type=click.Path(exists=True, dir_okay=False),
              help='CSV file (with a header line) of the values to regress')
@click.option('--genes', '-n', default=100, help='Number of genes in a chromosome')
@click.option('--generations', '-g', default=100, help='Number of generations to evolve')
@click.option('--population', '-p', default=101, help='Population size (must be odd)')
@click.option('--crossover-chance', '-c', default=0.5, help='Crossover chance (0.0-1.0)')
@click.option('--mutation-chance', '-m', default=0.5, help='Mutation chance (0.0-1.0)')
@click.option('--seed', type=int, default=None, help='Random seed for a reproducible run')
@click.option('--workers', type=int, default=None, help='Fitness evaluation threads')
@click.option('--islands', default=1, help='Number of independent populations')
@click.option('--out', '-o', default='gp_out.txt', help='Per-generation fitness output file')
@click.option('--save-best', 'save_best', default=None,
              help='Write the best chromosome as JSON to this file')
@click.option('--archive', '-a', 'archive_dir', default=None,
              help='Directory to archive the run (trace, best chromosome, summary)')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def run(dataset_file, genes, generations, population, crossover_chance, mutation_chance,
        seed, workers, islands, out, save_best, archive_dir, verbose):
    """Evolve an expression for a dataset"""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    config = EvolutionConfig(
        generations=generations,
        population_size=population,
        gene_count=genes,
        crossover_chance=crossover_chance,
        mutation_chance=mutation_chance,
        seed=seed,
        workers=workers,
        islands=islands,
    )

    try:
        config.validate()
        dataset = read_csv(dataset_file)
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    click.echo(f"Starting evolution: {generations} generations, population {population}, "
               f"{genes} genes, {dataset.shape[0]} rows")

    def report(record, pop):
        if verbose or record.generation % 10 == 0 or record.generation == generations - 1:
            click.echo(f"Gen {record.generation:4d}/{generations}: Best={record.fitness:.6g}")
        if verbose:
            stats = pop.get_stats()
            for island_stats in (stats if isinstance(stats, list) else [stats]):
                complexity = island_stats['complexity']
                click.echo(f"         Complexity: {complexity['mean']:.1f} (max {complexity['max']}) "
                           f"Evaluated: {island_stats['evaluated']}/{island_stats['population_size']}")

    try:
        result = evolve(dataset, config, callback=report)
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    write_fitness_trace(result.trace, out)

    if save_best:
        result.best.to_json(save_best)
        click.echo(f"Best chromosome saved to {save_best}")

    if archive_dir:
        archive = RunArchive(archive_dir)
        archive.save_run(result, dataclasses.asdict(config))
        archive.export_summary_report()
        click.echo(f"Run archived to {archive_dir}")

    click.echo(f"{result.fitness}")
    click.echo(f"Expression: {result.expression}")
    click.echo(f"Elapsed: {result.elapsed:.2f}s")


@cli.command()
@click.option('--chromosome', '-c', 'chromosome_file', required=True,
              type=click.Path(exists=True, dir_okay=False), help='Path to chromosome JSON file')
@click.option('--file', '-f', 'dataset_file', default=None,
              type=click.Path(exists=True, dir_okay=False),
              help='CSV file to evaluate the chromosome against')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def show(chromosome_file, dataset_file, verbose):
    """Show a chromosome from a JSON file"""
    try:
        chromosome = Chromosome.from_json(filename=chromosome_file)
    except (ValueError, InvariantViolation) as e:
        raise click.ClickException(f"Error loading chromosome: {e}")

    click.echo(f"Expression: {chromosome.to_expression_string()}")
    if verbose:
        click.echo(f"Genes: {len(chromosome)}, Active: {chromosome.get_complexity()}")
        click.echo(f"Encoding: {chromosome}")

    if dataset_file:
        try:
            dataset = read_csv(dataset_file)
            fitness = chromosome.evaluate_mse(dataset)
        except ConfigurationError as e:
            raise click.ClickException(str(e))
        click.echo(f"Fitness: {fitness}")
    else:
        click.echo(f"Fitness: {chromosome.fitness}")


@cli.command()
@click.option('--archive', '-a', 'archive_dir', default='out/', help='Archive directory path')
def analyze(archive_dir):
    """Print the summary report of an archived run"""
    if not os.path.isdir(archive_dir):
        raise click.ClickException(f"No archive found at {archive_dir}")
    click.echo(RunArchive(archive_dir).export_summary_report())


if __name__ == '__main__':
    cli()
