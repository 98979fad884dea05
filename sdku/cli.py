"""Command-line interface for the sdku solvers."""

import argparse
import logging
import sys
from typing import List, Optional

from .benchmark import Benchmark, Visualizer
from .core.errors import BadSudokuDataFileError
from .core.puzzle import iter_puzzle_files, load_sdku
from .solvers import CompositeSolver, PropagationSolver, SearchSolver

SOLVERS = {
    "propagation": ("Propagation", PropagationSolver),
    "search": ("Search", SearchSolver),
    "composite": ("Composite", CompositeSolver),
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="sdku",
        description="Deductive, backtracking and composite Sudoku solvers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a puzzle with the composite solver
  sdku solve puzzles/9x9/wikipedia.sdku

  # Compare every solver on one puzzle
  sdku solve puzzles/4x4/kids.sdku --algorithm all -v

  # Benchmark every puzzle under a directory
  sdku benchmark puzzles/ --output results/
        """
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed statistics and debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser(
        "solve", parents=[common], help="Solve a .sdku puzzle file"
    )
    solve_parser.add_argument("file", help="Path to a .sdku puzzle file")
    solve_parser.add_argument(
        "--algorithm", "-a",
        choices=sorted(SOLVERS) + ["all"],
        default="composite",
        help="Solving algorithm to use (default: composite)"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser(
        "benchmark", parents=[common], help="Run solver benchmarks"
    )
    bench_parser.add_argument(
        "directory",
        help="Directory searched recursively for .sdku files"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--timeout", "-t", type=float, default=60.0,
        help="Seconds allowed per puzzle per solver (default: 60)"
    )
    bench_parser.add_argument(
        "--include-tough", action="store_true",
        help="Also run plain backtracking on 16x16 and NO_SOLUTION puzzles"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )
    bench_parser.add_argument(
        "--no-progress", action="store_true",
        help="Hide the progress bar"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "solve":
        return cmd_solve(args)
    return cmd_benchmark(args)


def cmd_solve(args) -> int:
    """Handle the solve command."""
    try:
        puzzle = load_sdku(args.file)
    except (FileNotFoundError, BadSudokuDataFileError) as e:
        print(f"Error loading puzzle: {e}")
        return 1

    given = SearchSolver()
    given.load_puzzle(puzzle)
    print(f"Input puzzle ({puzzle.width}x{puzzle.width}, {puzzle.clue_count} clues):")
    print(given)
    print()

    if args.algorithm == "all":
        selected = [SOLVERS[key] for key in ("propagation", "search", "composite")]
    else:
        selected = [SOLVERS[args.algorithm]]

    for name, solver_class in selected:
        solver = solver_class()
        print(f"Solving with {name}...")
        solved = solver.solve_puzzle(puzzle)
        stats = solver.stats

        if solved:
            print(f"✓ Solved in {stats.time_seconds:.4f}s")
        elif stats.contradictory:
            print(f"✗ No solution: puzzle is contradictory ({stats.time_seconds:.4f}s)")
        else:
            print(f"✗ Not fully solved ({stats.time_seconds:.4f}s)")

        if args.verbose:
            print(f"  Iterations: {stats.iterations:,}")
            print(f"  Backtracks: {stats.backtracks:,}")
            print(f"  Digits tried: {stats.nodes_explored:,}")
            if "phase" in stats.extra:
                print(f"  Final phase: {stats.extra['phase']}")
        print(solver)
        print()

    return 0


def cmd_benchmark(args) -> int:
    """Handle the benchmark command."""
    files = iter_puzzle_files(args.directory)
    if not files:
        print(f"No .sdku files found under {args.directory}")
        return 1

    puzzles = []
    for path in files:
        try:
            puzzles.append(load_sdku(path))
        except BadSudokuDataFileError as e:
            print(f"Skipping {path}: {e}")

    print("=" * 60)
    print("SUDOKU SOLVER BENCHMARK")
    print("=" * 60)
    print(f"Puzzles: {len(puzzles)}")

    benchmark = Benchmark(
        puzzles,
        timeout_seconds=args.timeout,
        include_tough=args.include_tough
    )

    print(f"Algorithms: {', '.join(benchmark.solvers.keys())}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    results = benchmark.run(show_progress=not args.no_progress)
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)
    for algo, stats in summary["results_by_algorithm"].items():
        print(f"\n{algo}:")
        print(f"  Solved: {stats['accuracy']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Contradictions: {stats['total_contradictions']}")
        print(f"  Skipped: {stats['total_skipped']}")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")

    if args.verbose:
        print("\nPer puzzle:")
        for result in results:
            status = "SKIPPED" if result.skipped else ("SOLVED" if result.solved else "NOT SOLVED")
            print(f"  {result.algorithm:<12} {result.puzzle}, {result.time_seconds:.4f} seconds, {status}")

    benchmark.save_results(args.output)
    print(f"\nResults saved to {args.output}/")

    if not args.no_charts:
        print("\nGenerating charts...")
        charts = Visualizer(results, args.output).generate_all()
        for chart in charts:
            print(f"  - {chart}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
