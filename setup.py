from setuptools import setup, find_packages

setup(
    name="sdku",
    version="1.0.0",
    description="Deductive, backtracking and composite solvers for N x N Sudoku puzzles",
    packages=find_packages(include=["sdku", "sdku.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "matplotlib>=3.5.0",
        "seaborn>=0.12.0",
        "tqdm>=4.62.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "sdku=sdku.cli:main",
        ],
    },
)
