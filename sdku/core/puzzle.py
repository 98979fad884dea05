"""
Puzzle description and the .sdku text format.

A .sdku file holds, in order:

1. Optional header comments: any number of lines starting with ``//``.
   No comment may follow the first non-comment line.
2. The puzzle width, a single integer on its own line. It must be a
   non-zero perfect square.
3. Exactly ``width`` lines of exactly ``width`` whitespace-separated
   integers, one per cell. 0 stands for an unknown value.

Example::

    // This is a header comment
    4
    0 3 4 0
    4 0 0 2
    1 0 0 3
    0 2 1 0
"""

from __future__ import annotations
from dataclasses import dataclass
import math
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .errors import BadSudokuDataFileError, ConfigurationError, RangeError
from .grid import sector_size

Clue = Tuple[int, int, int]

SDKU_SUFFIX = ".sdku"
COMMENT_PREFIX = "//"


@dataclass(frozen=True)
class Puzzle:
    """A puzzle width plus its sparse clues as (row, col, value) triples."""
    width: int
    clues: Tuple[Clue, ...] = ()
    name: str = ""

    def __post_init__(self):
        sector_size(self.width)
        clues = tuple((int(r), int(c), int(v)) for r, c, v in self.clues)
        for row, col, value in clues:
            if not (0 <= row < self.width and 0 <= col < self.width):
                raise RangeError(
                    f"Clue cell ({row}, {col}) is outside a "
                    f"{self.width}x{self.width} grid"
                )
            if value < 1 or value > self.width:
                raise RangeError(f"Clue value must be 1-{self.width}, got {value}")
        object.__setattr__(self, "clues", clues)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]], name: str = "") -> Puzzle:
        """
        Build a puzzle from a dense square grid where 0 marks an unknown cell.
        """
        width = len(rows)
        for i, row in enumerate(rows):
            if len(row) != width:
                raise RangeError(f"Row {i} has {len(row)} cells, expected {width}")
        clues = [
            (r, c, int(value))
            for r, row in enumerate(rows)
            for c, value in enumerate(row)
            if value != 0
        ]
        return cls(width, tuple(clues), name)

    @classmethod
    def from_string(cls, s: str, name: str = "") -> Puzzle:
        """
        Build a puzzle from a compact string of width*width characters.

        0 or . mark empty cells, 1-9 are digits, A-Z stand for 10 and up.
        """
        width = math.isqrt(len(s))
        if width * width != len(s):
            raise ConfigurationError(f"String length must be a square, got {len(s)}")
        values = []
        for ch in s:
            if ch in "0.":
                values.append(0)
            elif ch.isdigit():
                values.append(int(ch))
            else:
                values.append(ord(ch.upper()) - ord("A") + 10)
        rows = [values[i * width:(i + 1) * width] for i in range(width)]
        return cls.from_rows(rows, name)

    def to_rows(self) -> List[List[int]]:
        rows = [[0] * self.width for _ in range(self.width)]
        for row, col, value in self.clues:
            rows[row][col] = value
        return rows

    @property
    def clue_count(self) -> int:
        return len({(r, c) for r, c, _ in self.clues})

    def __str__(self) -> str:
        return dump_sdku(self)


def parse_sdku(text: str, name: str = "<string>") -> Puzzle:
    """
    Parse the text of a .sdku file.

    Args:
        text: File contents.
        name: Name used in error messages and stored on the puzzle.

    Raises:
        BadSudokuDataFileError: If the text does not follow the format.
    """
    lines = text.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        raise BadSudokuDataFileError(name, "File is empty")

    index = 0
    while index < len(lines) and lines[index].startswith(COMMENT_PREFIX):
        index += 1
    if index >= len(lines) - 1:
        raise BadSudokuDataFileError(name, "File contains no puzzle data")

    try:
        width = int(lines[index].strip())
    except ValueError:
        raise BadSudokuDataFileError(
            name,
            "First substantive line is not a single integer giving the puzzle width",
        ) from None
    try:
        sector_size(width)
    except ConfigurationError:
        raise BadSudokuDataFileError(name, f"Illegal width specifier {width}") from None
    index += 1

    clues = []
    for row in range(width):
        if index + row >= len(lines):
            raise BadSudokuDataFileError(name, "File is shorter than expected")
        tokens = lines[index + row].split()
        if len(tokens) < width:
            raise BadSudokuDataFileError(
                name, f"Row {row} of cell values has fewer elements than expected"
            )
        if len(tokens) > width:
            raise BadSudokuDataFileError(
                name, f"Row {row} of cell values has more elements than expected"
            )
        for col, token in enumerate(tokens):
            try:
                value = int(token)
            except ValueError:
                raise BadSudokuDataFileError(
                    name, f"Non-integer {token!r} found where a cell value was expected"
                ) from None
            if value == 0:
                continue
            if value < 1 or value > width:
                raise BadSudokuDataFileError(
                    name,
                    f'The value "{value}" in row {row} is outside the legal '
                    f"cell value range of 1 to {width}",
                )
            clues.append((row, col, value))

    if index + width < len(lines):
        raise BadSudokuDataFileError(name, "File is longer than expected")

    return Puzzle(width, tuple(clues), name)


def load_sdku(path: Union[str, Path]) -> Puzzle:
    """
    Read a puzzle from a .sdku file.

    Raises:
        FileNotFoundError: If the file does not exist.
        BadSudokuDataFileError: If the file is a directory, is not utf-8,
            or does not follow the format.
    """
    path = Path(path)
    if path.is_dir():
        raise BadSudokuDataFileError(path.name, "Path is a directory")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        raise BadSudokuDataFileError(path.name, "File does not conform to utf-8") from None
    return parse_sdku(text, path.name)


def dump_sdku(puzzle: Puzzle, comments: Optional[Iterable[str]] = None) -> str:
    """Format a puzzle as .sdku text (with a trailing newline)."""
    lines = [f"{COMMENT_PREFIX} {comment}" for comment in (comments or [])]
    lines.append(str(puzzle.width))
    for row in puzzle.to_rows():
        lines.append(" ".join(str(v) for v in row))
    return "\n".join(lines) + "\n"


def iter_puzzle_files(root: Union[str, Path]) -> List[Path]:
    """All .sdku files under ``root`` (recursively), in sorted order."""
    root = Path(root)
    if root.is_file():
        return [root]
    return sorted(p for p in root.rglob(f"*{SDKU_SUFFIX}") if p.is_file())
