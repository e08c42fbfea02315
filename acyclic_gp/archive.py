"""
acyclic_gp/archive.py - Run archive and persistence
"""
import json
import os
import time
from datetime import datetime
from typing import Any, Dict, List, Optional

from .chromosome import Chromosome
from .dataset import GenerationRecord, read_fitness_trace, write_fitness_trace


class RunArchive:
    """Archive the outputs of an evolutionary run"""

    TRACE_FILE = 'gp_out.txt'
    BEST_FILE = 'best_chromosome.json'
    REPORT_FILE = 'evolution_summary.txt'
    META_FILE = 'run.json'

    def __init__(self, base_path: str):
        self.base_path = base_path
        os.makedirs(base_path, exist_ok=True)

    def path(self, name: str) -> str:
        return os.path.join(self.base_path, name)

    def save_trace(self, trace: List[GenerationRecord]) -> str:
        """Save the per-generation best fitness"""
        trace_file = self.path(self.TRACE_FILE)
        write_fitness_trace(trace, trace_file)
        return trace_file

    def load_trace(self) -> List[GenerationRecord]:
        return list(read_fitness_trace(self.path(self.TRACE_FILE)))

    def save_best(self, chromosome: Chromosome) -> str:
        best_file = self.path(self.BEST_FILE)
        chromosome.to_json(best_file)
        return best_file

    def load_best(self) -> Optional[Chromosome]:
        best_file = self.path(self.BEST_FILE)
        if not os.path.exists(best_file):
            return None
        return Chromosome.from_json(filename=best_file)

    def save_run(self, result, config: Dict[str, Any]) -> None:
        """Save trace, best chromosome and run metadata"""
        self.save_trace(result.trace)
        self.save_best(result.best)

        timestamp = time.time()
        metadata = {
            'timestamp': timestamp,
            'datetime': datetime.fromtimestamp(timestamp).isoformat(),
            'elapsed': result.elapsed,
            'config': config,
            'best_fitness': result.fitness,
            'expression': result.expression,
            'generations': len(result.trace),
        }
        with open(self.path(self.META_FILE), 'w') as f:
            json.dump(metadata, f, indent=2)

    def export_summary_report(self) -> str:
        """Generate and save a summary report of the archived run"""
        meta_file = self.path(self.META_FILE)
        if not os.path.exists(meta_file):
            return "No evolution data to summarize"

        with open(meta_file, 'r') as f:
            metadata = json.load(f)
        trace = self.load_trace()

        report_lines = []
        report_lines.append("=" * 60)
        report_lines.append("EVOLUTION SUMMARY REPORT")
        report_lines.append("=" * 60)

        report_lines.append(f"Finished: {metadata['datetime']}")
        report_lines.append(f"Duration: {metadata['elapsed']:.1f} seconds")
        report_lines.append(f"Generations: {metadata['generations']}")
        for key, value in sorted(metadata.get('config', {}).items()):
            report_lines.append(f"{key}: {value}")

        report_lines.append("\n" + "-" * 40)
        report_lines.append("FITNESS EVOLUTION")
        report_lines.append("-" * 40)

        if trace:
            report_lines.append(f"Initial best fitness: {trace[0].fitness:.6g}")
            report_lines.append(f"Final best fitness: {trace[-1].fitness:.6g}")

            # Sample about ten generations
            for record in trace[::max(1, len(trace) // 10)]:
                report_lines.append(f"Gen {record.generation:4d}: Best={record.fitness:.6g}")

        report_lines.append("\n" + "-" * 40)
        report_lines.append("BEST CHROMOSOME")
        report_lines.append("-" * 40)
        report_lines.append(f"Fitness: {metadata['best_fitness']}")
        report_lines.append(f"Expression: {metadata['expression']}")

        report_text = "\n".join(report_lines)

        with open(self.path(self.REPORT_FILE), 'w') as f:
            f.write(report_text)

        return report_text
