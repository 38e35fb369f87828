from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException

from .error import (
    exception_handler,
    fen_error_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestLoggingMiddleware, note_fen_outcome
from ...engine.errors import FenError
from ...engine.fen import parse_fen, to_fen
from ...engine.position import Position, starting_position
from ...engine.square import to_algebraic


class ParseRequest(BaseModel):
    fen: str = Field(..., description="FEN string")


class CastlingState(BaseModel):
    white_kingside: bool
    white_queenside: bool
    black_kingside: bool
    black_queenside: bool


class PositionState(BaseModel):
    fen: str
    side_to_move: str
    castling: CastlingState
    en_passant: Optional[str]
    half_move_clock: int
    full_move_number: int
    pieces: Dict[str, str]


def position_state(position: Position) -> PositionState:
    rights = position.castling
    ep = position.en_passant_target
    return PositionState(
        fen=to_fen(position),
        side_to_move=position.side_to_move.letter,
        castling=CastlingState(
            white_kingside=rights.white_kingside,
            white_queenside=rights.white_queenside,
            black_kingside=rights.black_kingside,
            black_queenside=rights.black_queenside,
        ),
        en_passant=to_algebraic(ep) if ep is not None else None,
        half_move_clock=position.half_move_clock,
        full_move_number=position.full_move_number,
        pieces={to_algebraic(sq): piece.symbol() for sq, piece in position.pieces()},
    )


def create_app() -> FastAPI:
    app = FastAPI(title="FEN Board API", version="0.1.0")

    # Basic logging setup
    logging.basicConfig(level=logging.INFO)

    # Middleware & error handling
    app.add_middleware(RequestLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(FenError, fen_error_handler)
    app.add_exception_handler(Exception, exception_handler)

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/positions/start", response_model=PositionState)
    async def start_position() -> PositionState:
        return position_state(starting_position())

    @app.post("/api/positions/parse", response_model=PositionState)
    async def parse_position(req: ParseRequest, request: Request) -> PositionState:
        # FenError propagates to fen_error_handler
        state = position_state(parse_fen(req.fen))
        note_fen_outcome(request, fen=state.fen)
        return state

    return app


# Default app for non-factory servers
app = create_app()
