from __future__ import annotations

from enum import IntEnum


FILES = "abcdefgh"
RANKS = "12345678"


def file_of(idx: int) -> int:
    """File index 0..7 (a..h)."""
    return idx % 8


def rank_of(idx: int) -> int:
    """Rank number 1..8 as printed on the board."""
    return 8 - idx // 8


def make_square(file: int, rank: int) -> int:
    """Build a square index from a file index (0..7) and a rank number (1..8).

    Raises:
        ValueError: If either coordinate is off the board.
    """
    if not (0 <= file < 8 and 1 <= rank <= 8):
        raise ValueError(f"invalid square coordinates: file={file}, rank={rank}")
    return (8 - rank) * 8 + file


def from_algebraic(s: str) -> int:
    """Convert algebraic notation into a 0-based square index.

    Squares are numbered row-major from the top-left of the board as White
    sees it, so ``"a8"`` is 0, ``"h8"`` is 7 and ``"h1"`` is 63.

    Args:
        s (str): Square name such as ``"e4"``.

    Returns:
        int: Zero-based square index.

    Raises:
        ValueError: If ``s`` is not a valid square.
    """
    if not isinstance(s, str) or len(s) != 2 or s[0] not in FILES or s[1] not in RANKS:
        raise ValueError(f"invalid square: {s!r}")
    return make_square(FILES.index(s[0]), int(s[1]))


def to_algebraic(idx: int) -> str:
    """Convert a 0-based square index into algebraic notation.

    Args:
        idx (int): Square index in range 0..63.

    Returns:
        str: Algebraic notation for ``idx``.

    Raises:
        ValueError: If ``idx`` is outside the valid square range.
    """
    if isinstance(idx, bool) or not isinstance(idx, int) or idx < 0 or idx > 63:
        raise ValueError(f"invalid square index: {idx!r}")
    return FILES[file_of(idx)] + str(rank_of(idx))


class Square(IntEnum):
    """Named board squares, a8=0 .. h1=63."""

    A8, B8, C8, D8, E8, F8, G8, H8 = range(0, 8)
    A7, B7, C7, D7, E7, F7, G7, H7 = range(8, 16)
    A6, B6, C6, D6, E6, F6, G6, H6 = range(16, 24)
    A5, B5, C5, D5, E5, F5, G5, H5 = range(24, 32)
    A4, B4, C4, D4, E4, F4, G4, H4 = range(32, 40)
    A3, B3, C3, D3, E3, F3, G3, H3 = range(40, 48)
    A2, B2, C2, D2, E2, F2, G2, H2 = range(48, 56)
    A1, B1, C1, D1, E1, F1, G1, H1 = range(56, 64)

    def __str__(self) -> str:
        return to_algebraic(int(self))

    @classmethod
    def parse(cls, s: str) -> "Square":
        return cls(from_algebraic(s))
