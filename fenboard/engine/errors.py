from __future__ import annotations

from typing import Optional


class FenError(ValueError):
    """FEN text could not be turned into a position.

    Attributes:
        field (str): FEN field that failed (``placement``, ``side_to_move``,
            ``castling``, ``en_passant``, ``half_move_clock``,
            ``full_move_number``) or ``fen`` for the overall shape.
        token (Optional[str]): Offending text, when there is one.
        code (str): Stable snake_case identifier of the error kind.
    """

    code = "invalid_fen"

    def __init__(self, message: str, *, field: str, token: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.token = token


class StructuralMismatch(FenError):
    code = "structural_mismatch"


class MalformedRank(FenError):
    """A rank field with a foreign character or a square count other than 8."""

    code = "malformed_rank"

    def __init__(self, message: str, *, rank: int, token: Optional[str] = None) -> None:
        super().__init__(message, field="placement", token=token)
        self.rank = rank


class InvalidTurnToken(FenError):
    code = "invalid_turn_token"


class InvalidCastlingToken(FenError):
    code = "invalid_castling_token"


class InvalidEnPassantToken(FenError):
    code = "invalid_en_passant_token"


class InvalidNumber(FenError):
    code = "invalid_number"
