"""Benchmark module for comparing the solvers."""

from .benchmark import Benchmark, BenchmarkResult, is_tough
from .visualizer import Visualizer

__all__ = ["Benchmark", "BenchmarkResult", "Visualizer", "is_tough"]
