"""Move legality: a pure predicate over (piece, destination, pieces).

Nothing here mutates a piece or a board, so every function may be called
from any number of readers at once.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping

from kingcapture.core.enums import Color, PieceKind
from kingcapture.core.piece import Piece
from kingcapture.core.types import ALL_CELLS, Cell, is_on_board

_Occupancy = Mapping[Cell, Piece]


def _occupancy(pieces: Iterable[Piece]) -> dict[Cell, Piece]:
    return {p.position: p for p in pieces}


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


# -- Shared helpers ----------------------------------------------------------


def occupant_color(cell: tuple[int, int], pieces: Iterable[Piece]) -> Color | None:
    """Color of whatever piece sits on *cell*, or ``None`` if empty."""
    occupant = _occupancy(pieces).get(Cell(*cell))
    return occupant.color if occupant is not None else None


def path_clear(
    start: tuple[int, int], end: tuple[int, int], pieces: Iterable[Piece]
) -> bool:
    """Whether every cell strictly between *start* and *end* is empty.

    Only rank, file and diagonal lines are walked; any other pair has no
    intermediate cells and is reported clear.
    """
    return _path_clear(Cell(*start), Cell(*end), _occupancy(pieces))


def _path_clear(start: Cell, end: Cell, occupancy: _Occupancy) -> bool:
    d_rank = end.rank - start.rank
    d_file = end.file - start.file
    if d_rank and d_file and abs(d_rank) != abs(d_file):
        return True
    step_rank, step_file = _sign(d_rank), _sign(d_file)
    rank, file = start.rank + step_rank, start.file + step_file
    while (rank, file) != end:
        if Cell(rank, file) in occupancy:
            return False
        rank += step_rank
        file += step_file
    return True


# -- Per-kind rules ------------------------------------------------------------


def _king(mover: Piece, dest: Cell, occupancy: _Occupancy) -> bool:
    dx = abs(mover.position.rank - dest.rank)
    dy = abs(mover.position.file - dest.file)
    return (dx, dy) in ((1, 0), (0, 1), (1, 1))


def _knight(mover: Piece, dest: Cell, occupancy: _Occupancy) -> bool:
    dx = abs(mover.position.rank - dest.rank)
    dy = abs(mover.position.file - dest.file)
    return (dx, dy) in ((2, 1), (1, 2))


def _is_diagonal(mover: Piece, dest: Cell) -> bool:
    dx = abs(mover.position.rank - dest.rank)
    dy = abs(mover.position.file - dest.file)
    return dx == dy and dx > 0


def _is_straight(mover: Piece, dest: Cell) -> bool:
    dx = abs(mover.position.rank - dest.rank)
    dy = abs(mover.position.file - dest.file)
    return (dx == 0) != (dy == 0)


def _bishop(mover: Piece, dest: Cell, occupancy: _Occupancy) -> bool:
    return _is_diagonal(mover, dest) and _path_clear(mover.position, dest, occupancy)


def _rook(mover: Piece, dest: Cell, occupancy: _Occupancy) -> bool:
    return _is_straight(mover, dest) and _path_clear(mover.position, dest, occupancy)


def _queen(mover: Piece, dest: Cell, occupancy: _Occupancy) -> bool:
    if not (_is_diagonal(mover, dest) or _is_straight(mover, dest)):
        return False
    return _path_clear(mover.position, dest, occupancy)


def _pawn(mover: Piece, dest: Cell, occupancy: _Occupancy) -> bool:
    direction = mover.color.forward
    rank, file = mover.position
    advance = dest.rank - rank
    target = occupancy.get(dest)

    if dest.file == file:
        if target is not None:
            return False
        if advance == direction:
            return True
        return (
            rank == mover.color.pawn_rank
            and advance == 2 * direction
            and _path_clear(mover.position, dest, occupancy)
        )

    # Diagonal capture
    return (
        advance == direction
        and abs(dest.file - file) == 1
        and target is not None
        and target.color != mover.color
    )


_RULES: dict[PieceKind, Callable[[Piece, Cell, _Occupancy], bool]] = {
    PieceKind.KING: _king,
    PieceKind.QUEEN: _queen,
    PieceKind.ROOK: _rook,
    PieceKind.BISHOP: _bishop,
    PieceKind.KNIGHT: _knight,
    PieceKind.PAWN: _pawn,
}


# -- Public API ----------------------------------------------------------------


def is_legal(
    mover: Piece, destination: tuple[int, int], pieces: Iterable[Piece]
) -> bool:
    """Whether *mover* may go to *destination* given the live *pieces*."""
    return _is_legal(mover, Cell(*destination), _occupancy(pieces))


def _is_legal(mover: Piece, dest: Cell, occupancy: _Occupancy) -> bool:
    if not is_on_board(dest):
        return False
    occupant = occupancy.get(dest)
    if occupant is not None and occupant.color == mover.color:
        return False
    rule = _RULES.get(mover.kind)
    if rule is None:
        return False
    return rule(mover, dest, occupancy)


def legal_destinations(mover: Piece, pieces: Iterable[Piece]) -> list[Cell]:
    """Every cell *mover* could legally go to right now."""
    occupancy = _occupancy(pieces)
    return [cell for cell in ALL_CELLS if _is_legal(mover, cell, occupancy)]
