"""Benchmarking framework for comparing the puzzle solvers."""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor, TimeoutError
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence
import json
import logging
import os

from tqdm import tqdm

from ..core.puzzle import Puzzle
from ..core.validator import validate_solution
from ..solvers import BaseSolver, CompositeSolver, PropagationSolver, SearchSolver

log = logging.getLogger(__name__)

SolverFactory = Callable[[], BaseSolver]


@dataclass
class BenchmarkResult:
    """Results from a single solver run on a single puzzle."""
    puzzle: str
    width: int
    algorithm: str
    solved: bool
    contradictory: bool
    time_seconds: float
    iterations: int = 0
    backtracks: int = 0
    nodes_explored: int = 0
    skipped: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle": self.puzzle,
            "width": self.width,
            "algorithm": self.algorithm,
            "solved": self.solved,
            "contradictory": self.contradictory,
            "time_seconds": self.time_seconds,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "skipped": self.skipped,
            **self.extra
        }


def is_tough(puzzle: Puzzle) -> bool:
    """Puzzles that take plain backtracking far too long: 16x16 and unsolvable ones."""
    return puzzle.name.startswith("16") or "NO_SOLUTION" in puzzle.name


class Benchmark:
    """
    Runs every solver over a set of puzzles and collects timing and outcome.

    Each run gets a freshly built solver on a single worker thread. A run
    that exceeds the timeout is abandoned: the core offers no cancellation,
    so its thread is left to finish in the background.
    """

    DEFAULT_SOLVERS: Dict[str, SolverFactory] = {
        "Search": SearchSolver,
        "Propagation": PropagationSolver,
        "Composite": CompositeSolver,
    }

    # solvers that skip tough puzzles unless include_tough is set
    SKIP_TOUGH = ("Search",)

    def __init__(
        self,
        puzzles: Sequence[Puzzle],
        solvers: Optional[Dict[str, SolverFactory]] = None,
        timeout_seconds: float = 60.0,
        include_tough: bool = False
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles: Puzzles to solve; their names identify them in results.
            solvers: Dict of solver_name -> factory building a solver
                (default: all three solvers).
            timeout_seconds: Maximum time per puzzle per solver.
            include_tough: Also run backtracking-only solvers on 16x16 and
                unsolvable puzzles.
        """
        self.puzzles = list(puzzles)
        self.solvers = dict(solvers) if solvers is not None else dict(self.DEFAULT_SOLVERS)
        self.timeout_seconds = timeout_seconds
        self.include_tough = include_tough
        self.results: List[BenchmarkResult] = []

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects, one per solver per puzzle.
        """
        self.results = []
        total_tests = len(self.puzzles) * len(self.solvers)

        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)
        for puzzle in self.puzzles:
            for solver_name, factory in self.solvers.items():
                if (
                    not self.include_tough
                    and solver_name in self.SKIP_TOUGH
                    and is_tough(puzzle)
                ):
                    log.info("Skipping %s for %s", puzzle.name, solver_name)
                    result = BenchmarkResult(
                        puzzle=puzzle.name,
                        width=puzzle.width,
                        algorithm=solver_name,
                        solved=False,
                        contradictory=False,
                        time_seconds=0.0,
                        skipped=True,
                    )
                else:
                    result = self._run_single(puzzle, solver_name, factory)
                self.results.append(result)
                pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(
        self,
        puzzle: Puzzle,
        solver_name: str,
        factory: SolverFactory
    ) -> BenchmarkResult:
        """Run a single solver on a single puzzle."""
        solver = factory()
        executor = ThreadPoolExecutor(max_workers=1)
        future = executor.submit(solver.solve_puzzle, puzzle)
        try:
            solved = future.result(timeout=self.timeout_seconds)
        except TimeoutError:
            log.warning("%s timed out on %s", solver_name, puzzle.name)
            return BenchmarkResult(
                puzzle=puzzle.name,
                width=puzzle.width,
                algorithm=solver_name,
                solved=False,
                contradictory=False,
                time_seconds=self.timeout_seconds,
                extra={"error": "Timeout"}
            )
        except Exception as e:
            log.warning("%s failed on %s: %s", solver_name, puzzle.name, e)
            return BenchmarkResult(
                puzzle=puzzle.name,
                width=puzzle.width,
                algorithm=solver_name,
                solved=False,
                contradictory=False,
                time_seconds=0.0,
                extra={"error": str(e)}
            )
        finally:
            executor.shutdown(wait=False)

        stats = solver.stats
        extra = {
            key: value for key, value in stats.extra.items()
            if key != "remaining_history"
        }
        if solved:
            extra["verified"] = validate_solution(puzzle, solver.snapshot())
        return BenchmarkResult(
            puzzle=puzzle.name,
            width=puzzle.width,
            algorithm=solver_name,
            solved=solved,
            contradictory=stats.contradictory,
            time_seconds=stats.time_seconds,
            iterations=stats.iterations,
            backtracks=stats.backtracks,
            nodes_explored=stats.nodes_explored,
            extra=extra
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_puzzles": len(self.puzzles),
            "solvers_tested": list(self.solvers.keys()),
            "results_by_algorithm": {}
        }

        for solver_name in self.solvers:
            solver_results = [
                r for r in self.results
                if r.algorithm == solver_name and not r.skipped
            ]
            if not solver_results:
                continue
            solved = [r for r in solver_results if r.solved]
            contradictions = [r for r in solver_results if r.contradictory]
            times = [r.time_seconds for r in solver_results]

            summary["results_by_algorithm"][solver_name] = {
                "accuracy": len(solved) / len(solver_results) * 100,
                "avg_time_seconds": sum(times) / len(times),
                "max_time_seconds": max(times),
                "min_time_seconds": min(times),
                "total_solved": len(solved),
                "total_contradictions": len(contradictions),
                "total_tested": len(solver_results),
                "total_skipped": sum(
                    1 for r in self.results if r.algorithm == solver_name and r.skipped
                ),
            }

        return summary

    def save_results(self, output_dir: str) -> List[str]:
        """
        Save raw results and the summary as JSON.

        Returns:
            Paths of the written files.
        """
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        log.info("Results saved to %s", output_dir)
        return [results_file, summary_file]
