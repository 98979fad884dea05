"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Chart generator for solver benchmark results.

    Skipped runs are left out of every chart.
    """

    # Color palette for algorithms
    COLORS = {
        "Search": "#2ecc71",       # Green
        "Propagation": "#3498db",  # Blue
        "Composite": "#9b59b6",    # Purple
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = [r for r in results if not r.skipped]
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        sns.set_theme(style="whitegrid")

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        if not self.results:
            return []
        return [
            self.plot_time_comparison(),
            self.plot_accuracy_by_width(),
            self.plot_time_distribution(),
        ]

    def _algorithms(self) -> List[str]:
        return sorted(set(r.algorithm for r in self.results))

    def plot_time_comparison(self) -> str:
        """Create bar chart comparing average solve times."""
        fig, ax = plt.subplots(figsize=(10, 6))

        algorithms = self._algorithms()
        avg_times = []
        colors = []
        for algo in algorithms:
            times = [r.time_seconds for r in self.results if r.algorithm == algo]
            avg_times.append(np.mean(times))
            colors.append(self.COLORS.get(algo, "#95a5a6"))

        bars = ax.bar(algorithms, avg_times, color=colors, edgecolor='black', linewidth=0.5)
        for bar, time in zip(bars, avg_times):
            ax.annotate(f'{time:.4f}s',
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Algorithm', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Average Solve Time by Algorithm', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save(fig, "time_comparison.png")

    def plot_accuracy_by_width(self) -> str:
        """Create grouped bar chart of the share of puzzles solved per width."""
        fig, ax = plt.subplots(figsize=(12, 6))

        algorithms = self._algorithms()
        widths = sorted(set(r.width for r in self.results))
        x = np.arange(len(widths))
        bar_width = 0.8 / len(algorithms)

        for i, algo in enumerate(algorithms):
            accuracies = []
            for width in widths:
                runs = [r for r in self.results if r.algorithm == algo and r.width == width]
                solved = sum(1 for r in runs if r.solved)
                accuracies.append((solved / len(runs)) * 100 if runs else 0)

            offset = (i - len(algorithms) / 2 + 0.5) * bar_width
            ax.bar(x + offset, accuracies, bar_width,
                   label=algo,
                   color=self.COLORS.get(algo, "#95a5a6"),
                   edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Puzzle Width', fontsize=12)
        ax.set_ylabel('Solved (%)', fontsize=12)
        ax.set_title('Puzzles Solved by Width and Algorithm', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels([f"{w}x{w}" for w in widths])
        ax.legend(title='Algorithm', bbox_to_anchor=(1.05, 1), loc='upper left')
        ax.set_ylim(0, 115)
        ax.axhline(y=100, color='gray', linestyle='--', alpha=0.3)

        return self._save(fig, "accuracy_comparison.png")

    def plot_time_distribution(self) -> str:
        """Strip plot of every run's solve time, per algorithm."""
        fig, ax = plt.subplots(figsize=(10, 6))

        algorithms = self._algorithms()
        sns.stripplot(
            x=[r.algorithm for r in self.results],
            y=[r.time_seconds for r in self.results],
            order=algorithms,
            hue=[r.algorithm for r in self.results],
            palette={a: self.COLORS.get(a, "#95a5a6") for a in algorithms},
            legend=False,
            ax=ax,
        )
        ax.set_xlabel('Algorithm', fontsize=12)
        ax.set_ylabel('Time (seconds)', fontsize=12)
        ax.set_title('Solve Time Distribution', fontsize=14, fontweight='bold')

        return self._save(fig, "time_distribution.png")

    def _save(self, fig, filename: str) -> str:
        fig.tight_layout()
        path = os.path.join(self.output_dir, filename)
        fig.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        return path
