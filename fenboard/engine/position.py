from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

from .piece import Color, Piece, PieceType
from .square import from_algebraic, to_algebraic


SquareRef = Union[int, str]


@dataclass(frozen=True)
class CastlingRights:
    """Four independent castling flags.

    The flags are carried as given; whether castling is still possible in
    the game that reached the position is not checked here.
    """

    white_kingside: bool = False
    white_queenside: bool = False
    black_kingside: bool = False
    black_queenside: bool = False

    @classmethod
    def none(cls) -> "CastlingRights":
        return cls()

    @classmethod
    def all(cls) -> "CastlingRights":
        return cls(True, True, True, True)

    def any(self) -> bool:
        return self.white_kingside or self.white_queenside or self.black_kingside or self.black_queenside

    def to_fen(self) -> str:
        """Canonical ``KQkq`` subset, or ``"-"`` when no right is left."""
        letters = [
            ch
            for ch, flag in (
                ("K", self.white_kingside),
                ("Q", self.white_queenside),
                ("k", self.black_kingside),
                ("q", self.black_queenside),
            )
            if flag
        ]
        return "".join(letters) if letters else "-"


@dataclass(frozen=True)
class Position:
    """Immutable chess position: 64 cells plus the FEN side fields.

    Notes:
    - ``cells`` is indexed a8=0 .. h1=63, row-major from White's view.
    - Legality of the arrangement is not verified; only the shape is.
    """

    cells: Tuple[Optional[Piece], ...]
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights()
    en_passant_target: Optional[int] = None
    half_move_clock: int = 0
    full_move_number: int = 1

    def __post_init__(self) -> None:
        cells = tuple(self.cells)
        if len(cells) != 64:
            raise ValueError(f"position must have 64 cells, got {len(cells)}")
        for cell in cells:
            if cell is not None and not isinstance(cell, Piece):
                raise ValueError(f"invalid cell content: {cell!r}")
        object.__setattr__(self, "cells", cells)
        if not isinstance(self.side_to_move, Color):
            raise ValueError(f"invalid side to move: {self.side_to_move!r}")
        if self.en_passant_target is not None:
            # Raises ValueError for anything off the board
            to_algebraic(self.en_passant_target)
        for name in ("half_move_clock", "full_move_number"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name.replace('_', ' ')} must be an int, got {value!r}")
        if self.half_move_clock < 0:
            raise ValueError("half-move clock must be >= 0")
        if self.full_move_number < 1:
            raise ValueError("full-move number must be >= 1")

    @property
    def white_to_move(self) -> bool:
        return self.side_to_move is Color.WHITE

    def piece_at(self, square: SquareRef) -> Optional[Piece]:
        """Return the piece on ``square`` (index or name like ``"e4"``), if any."""
        if isinstance(square, str):
            return self.cells[from_algebraic(square)]
        to_algebraic(square)
        return self.cells[square]

    def __getitem__(self, square: SquareRef) -> Optional[Piece]:
        return self.piece_at(square)

    def pieces(self) -> Iterator[Tuple[int, Piece]]:
        for sq, cell in enumerate(self.cells):
            if cell is not None:
                yield sq, cell

    def __str__(self) -> str:
        from .fen import to_fen

        return to_fen(self)


_BACK_RANK = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def starting_position() -> Position:
    """Create the standard chess starting position.

    Returns:
        Position: White to move, all castling rights, no en-passant target,
            half-move clock 0 and full-move number 1.
    """
    empty: Tuple[Optional[Piece], ...] = (None,) * 32
    cells = (
        tuple(Piece(t, Color.BLACK) for t in _BACK_RANK)
        + (Piece(PieceType.PAWN, Color.BLACK),) * 8
        + empty
        + (Piece(PieceType.PAWN, Color.WHITE),) * 8
        + tuple(Piece(t, Color.WHITE) for t in _BACK_RANK)
    )
    return Position(
        cells=cells,
        side_to_move=Color.WHITE,
        castling=CastlingRights.all(),
        en_passant_target=None,
        half_move_clock=0,
        full_move_number=1,
    )
