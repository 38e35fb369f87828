from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List


class Color(Enum):
    WHITE = "w"
    BLACK = "b"

    @property
    def letter(self) -> str:
        return self.value

    @classmethod
    def from_letter(cls, letter: str) -> "Color":
        """Map a FEN side-to-move letter to a color.

        Raises:
            ValueError: If ``letter`` is neither ``"w"`` nor ``"b"``.
        """
        try:
            return cls(letter)
        except ValueError as e:
            raise ValueError(f"invalid color letter: {letter!r}") from e


class PieceType(Enum):
    PAWN = "p"
    KNIGHT = "n"
    BISHOP = "b"
    ROOK = "r"
    QUEEN = "q"
    KING = "k"


@dataclass(frozen=True)
class Piece:
    """A colored chess piece.

    Attributes:
        piece_type (PieceType): Kind of piece.
        color (Color): Owner of the piece.
    """

    piece_type: PieceType
    color: Color

    def symbol(self) -> str:
        """Return the FEN letter: uppercase for White, lowercase for Black."""
        ch = self.piece_type.value
        return ch.upper() if self.color is Color.WHITE else ch

    @classmethod
    def from_symbol(cls, ch: str) -> "Piece":
        """Parse a single FEN piece letter.

        Raises:
            ValueError: If ``ch`` is not one of ``PNBRQKpnbrqk``.
        """
        piece = SYMBOL_TO_PIECE.get(ch)
        if piece is None:
            raise ValueError(f"invalid piece symbol: {ch!r}")
        return piece

    def __str__(self) -> str:
        return self.symbol()


ALL_PIECES: List[Piece] = [Piece(t, c) for c in Color for t in PieceType]
SYMBOL_TO_PIECE: Dict[str, Piece] = {p.symbol(): p for p in ALL_PIECES}
PIECE_SYMBOLS = "".join(SYMBOL_TO_PIECE)
