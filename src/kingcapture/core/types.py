"""Cell coordinate type and helpers.

Board layout:
    rank 0 is White's back row, rank 7 is Black's.
    file 0..7 runs left to right (a..h).

    (0, 0) = a1, (0, 7) = h1, (7, 0) = a8, (7, 7) = h8
"""

from __future__ import annotations

from typing import NamedTuple


class Cell(NamedTuple):
    """Immutable (rank, file) board coordinate."""

    rank: int
    file: int

    def __str__(self) -> str:
        return cell_name(self)


def make_cell(rank: int, file: int) -> Cell:
    """Create a cell from rank (0–7) and file (0–7)."""
    return Cell(rank, file)


def is_on_board(cell: tuple[int, int]) -> bool:
    """Check whether both coordinates lie inside the 8x8 board."""
    rank, file = cell
    return 0 <= rank < 8 and 0 <= file < 8


def cell_name(cell: tuple[int, int]) -> str:
    """Human-readable name, e.g. (0, 4) → 'e1'."""
    rank, file = cell
    return chr(ord("a") + file) + str(rank + 1)


def parse_cell(name: str) -> Cell:
    """Parse cell name, e.g. 'e4' → Cell(rank=3, file=4)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid cell name: {name!r}")
    return Cell(int(name[1]) - 1, ord(name[0]) - ord("a"))


ALL_CELLS: tuple[Cell, ...] = tuple(Cell(r, f) for r in range(8) for f in range(8))
