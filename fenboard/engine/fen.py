from __future__ import annotations

import re
from typing import List, Optional

from .errors import (
    FenError,
    InvalidCastlingToken,
    InvalidEnPassantToken,
    InvalidNumber,
    InvalidTurnToken,
    MalformedRank,
    StructuralMismatch,
)
from .piece import SYMBOL_TO_PIECE, Color, Piece
from .position import CastlingRights, Position
from .square import from_algebraic, rank_of, to_algebraic


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_HALFMOVE_RE = re.compile(r"0|[1-9][0-9]*")
_FULLMOVE_RE = re.compile(r"[1-9][0-9]*")
_CASTLING_FLAGS = {
    "K": "white_kingside",
    "Q": "white_queenside",
    "k": "black_kingside",
    "q": "black_queenside",
}


def to_fen(position: Position) -> str:
    """Serialize a position into a normalized FEN string.

    Args:
        position (Position): Position to encode.

    Returns:
        str: FEN string describing the position, without trailing whitespace.
    """
    ranks_str: List[str] = []
    for rank_start in range(0, 64, 8):  # rank 8 first, as stored
        run = 0
        row = []
        for cell in position.cells[rank_start : rank_start + 8]:
            if cell is None:
                run += 1
            else:
                if run > 0:
                    row.append(str(run))
                    run = 0
                row.append(cell.symbol())
        if run > 0:
            row.append(str(run))
        ranks_str.append("".join(row))
    placement = "/".join(ranks_str)

    stm = position.side_to_move.letter
    castling = position.castling.to_fen()
    ep = to_algebraic(position.en_passant_target) if position.en_passant_target is not None else "-"
    return f"{placement} {stm} {castling} {ep} {position.half_move_clock} {position.full_move_number}"


def parse_fen(fen: str) -> Position:
    """Create a position from a Forsyth–Edwards Notation (FEN) string.

    Args:
        fen (str): FEN string describing the position to load. Surrounding
            whitespace is ignored; fields are separated by single spaces.

    Returns:
        Position: Position encoded in ``fen``.

    Raises:
        StructuralMismatch: If ``fen`` is empty, is not six space-separated
            fields, or the placement is not eight ``/``-separated ranks.
        MalformedRank: If a rank holds a foreign character or does not
            describe exactly 8 squares.
        InvalidTurnToken: If the side to move is not ``w`` or ``b``.
        InvalidCastlingToken: If castling rights contain foreign or
            duplicate letters.
        InvalidEnPassantToken: If the en-passant target is not ``-`` or a
            rank-3/6 square matching the side to move.
        InvalidNumber: If a move counter is not a decimal without leading
            zeros, or the full-move number is 0.

    Notes:
        Castling letters are accepted in any order and normalized to
        ``KQkq`` ordering on output.
    """
    if not isinstance(fen, str) or not fen.strip():
        raise StructuralMismatch("FEN must be a non-empty string", field="fen")
    parts = fen.strip().split(" ")
    if len(parts) != 6 or "" in parts:
        raise StructuralMismatch(
            f"FEN must have 6 space-separated fields, got {len(parts)}", field="fen", token=fen
        )
    placement, stm, castling, ep, halfmove, fullmove = parts

    cells = _parse_placement(placement)
    side = _parse_side(stm)
    rights = _parse_castling(castling)
    ep_square = _parse_en_passant(ep, side)
    halfmove_clock = _parse_counter(halfmove, _HALFMOVE_RE, "half_move_clock")
    fullmove_number = _parse_counter(fullmove, _FULLMOVE_RE, "full_move_number")

    return Position(
        cells=tuple(cells),
        side_to_move=side,
        castling=rights,
        en_passant_target=ep_square,
        half_move_clock=halfmove_clock,
        full_move_number=fullmove_number,
    )


def try_parse_fen(fen: str) -> Optional[Position]:
    """Like :func:`parse_fen` but return ``None`` instead of raising."""
    try:
        return parse_fen(fen)
    except FenError:
        return None


def _parse_placement(placement: str) -> List[Optional[Piece]]:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise StructuralMismatch(
            f"FEN board must have 8 ranks, got {len(ranks)}", field="placement", token=placement
        )
    cells: List[Optional[Piece]] = []
    for idx, rank in enumerate(ranks):  # top (rank 8) to bottom (rank 1)
        rank_no = 8 - idx
        if not rank:
            raise MalformedRank(f"rank {rank_no} is empty", rank=rank_no, token=rank)
        row: List[Optional[Piece]] = []
        for ch in rank:
            if ch in "12345678":
                row.extend([None] * int(ch))
            elif ch in SYMBOL_TO_PIECE:
                row.append(SYMBOL_TO_PIECE[ch])
            else:
                raise MalformedRank(
                    f"invalid character {ch!r} in rank {rank_no}", rank=rank_no, token=rank
                )
        if len(row) != 8:
            raise MalformedRank(
                f"rank {rank_no} describes {len(row)} squares, expected 8",
                rank=rank_no,
                token=rank,
            )
        cells.extend(row)
    return cells


def _parse_side(stm: str) -> Color:
    if stm not in ("w", "b"):
        raise InvalidTurnToken("side to move must be 'w' or 'b'", field="side_to_move", token=stm)
    return Color.from_letter(stm)


def _parse_castling(castling: str) -> CastlingRights:
    if castling == "-":
        return CastlingRights.none()
    flags = {}
    for ch in castling:
        name = _CASTLING_FLAGS.get(ch)
        if name is None:
            raise InvalidCastlingToken(
                f"invalid castling letter {ch!r}", field="castling", token=castling
            )
        if name in flags:
            raise InvalidCastlingToken(
                f"duplicate castling letter {ch!r}", field="castling", token=castling
            )
        flags[name] = True
    return CastlingRights(**flags)


def _parse_en_passant(ep: str, side: Color) -> Optional[int]:
    if ep == "-":
        return None
    try:
        square = from_algebraic(ep)
    except ValueError as e:
        raise InvalidEnPassantToken(
            "invalid en passant square", field="en_passant", token=ep
        ) from e
    # The pawn that just double-stepped belongs to the side not on move
    expected = 6 if side is Color.WHITE else 3
    if rank_of(square) != expected:
        raise InvalidEnPassantToken(
            f"en passant square must be on rank {expected} with {side.name.lower()} to move",
            field="en_passant",
            token=ep,
        )
    return square


def _parse_counter(text: str, pattern: "re.Pattern[str]", field: str) -> int:
    if not pattern.fullmatch(text):
        raise InvalidNumber(f"invalid {field.replace('_', ' ')}: {text!r}", field=field, token=text)
    try:
        return int(text)
    except ValueError as e:
        # int() refuses very long digit strings
        raise InvalidNumber(
            f"{field.replace('_', ' ')} is too large ({len(text)} digits)", field=field, token=text
        ) from e
