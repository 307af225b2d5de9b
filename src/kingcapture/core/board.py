"""Board - the set of live pieces and their occupancy on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from kingcapture.core.enums import Color, PieceKind
from kingcapture.core.piece import Piece
from kingcapture.core.types import Cell, is_on_board

_BACK_RANK = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


class Board:
    """Mutable store of pieces keyed by id with a cell → id index.

    The board never checks chess legality; it only keeps the
    one-piece-per-cell invariant.
    """

    __slots__ = ("_pieces", "_occupancy", "_next_id")

    def __init__(self) -> None:
        self._pieces: dict[int, Piece] = {}
        self._occupancy: dict[Cell, int] = {}
        self._next_id = 1

    # -- Element access -----------------------------------------------------

    def piece_at(self, cell: tuple[int, int]) -> Piece | None:
        piece_id = self._occupancy.get(Cell(*cell))
        if piece_id is None:
            return None
        return self._pieces[piece_id]

    def __getitem__(self, cell: tuple[int, int]) -> Piece | None:
        return self.piece_at(cell)

    def get(self, piece_id: int) -> Piece:
        """Live piece with *piece_id*; raises ``KeyError`` if captured or unknown."""
        try:
            return self._pieces[piece_id]
        except KeyError:
            raise KeyError(f"No piece with id {piece_id} on board") from None

    def is_empty(self, cell: tuple[int, int]) -> bool:
        return Cell(*cell) not in self._occupancy

    # -- Query helpers ------------------------------------------------------

    def all_pieces(self) -> list[Piece]:
        """Snapshot of every live piece."""
        return list(self._pieces.values())

    def pieces(self, color: Color, kind: PieceKind | None = None) -> list[Piece]:
        """Live pieces of *color*, optionally restricted to *kind*."""
        return [
            p
            for p in self._pieces.values()
            if p.color == color and (kind is None or p.kind == kind)
        ]

    def has_piece(self, color: Color, kind: PieceKind) -> bool:
        return any(p.color == color and p.kind == kind for p in self._pieces.values())

    def __iter__(self) -> Iterator[Piece]:
        return iter(self.all_pieces())

    def __len__(self) -> int:
        return len(self._pieces)

    # -- Mutation -----------------------------------------------------------

    def place(self, color: Color, kind: PieceKind, cell: tuple[int, int]) -> Piece:
        """Add a new piece at *cell* and return it."""
        cell = Cell(*cell)
        if not is_on_board(cell):
            raise ValueError(f"Cell off board: {cell!r}")
        if cell in self._occupancy:
            raise ValueError(f"Cell already occupied: {cell}")
        piece = Piece(color, kind, cell, self._next_id)
        self._next_id += 1
        self._pieces[piece.id] = piece
        self._occupancy[cell] = piece.id
        return piece

    def relocate(self, piece_id: int, destination: tuple[int, int]) -> Piece:
        """Move a piece to *destination* without any legality check."""
        piece = self.get(piece_id)
        destination = Cell(*destination)
        if destination == piece.position:
            return piece
        if destination in self._occupancy:
            raise ValueError(f"Cell already occupied: {destination}")
        del self._occupancy[piece.position]
        piece.position = destination
        self._occupancy[destination] = piece_id
        return piece

    def remove(self, piece_id: int) -> Piece:
        """Take a piece off the board (capture)."""
        piece = self.get(piece_id)
        del self._pieces[piece_id]
        del self._occupancy[piece.position]
        return piece

    def copy(self) -> Board:
        b = Board()
        for piece in self._pieces.values():
            b._pieces[piece.id] = Piece(
                piece.color, piece.kind, piece.position, piece.id
            )
        b._occupancy = self._occupancy.copy()
        b._next_id = self._next_id
        return b

    def clear(self) -> None:
        self._pieces = {}
        self._occupancy = {}

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting layout."""
        b = cls()
        for f, kind in enumerate(_BACK_RANK):
            b.place(Color.WHITE, kind, (0, f))
        for f in range(8):
            b.place(Color.WHITE, PieceKind.PAWN, (1, f))
        for f, kind in enumerate(_BACK_RANK):
            b.place(Color.BLACK, kind, (7, f))
        for f in range(8):
            b.place(Color.BLACK, PieceKind.PAWN, (6, f))
        return b

    # -- Dunder helpers -----------------------------------------------------

    def _placement(self) -> dict[Cell, tuple[Color, PieceKind]]:
        return {p.position: (p.color, p.kind) for p in self._pieces.values()}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._placement() == other._placement()

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self.piece_at((rank, file))
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
