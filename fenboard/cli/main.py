from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, List, Optional

from ..engine.errors import FenError
from ..engine.fen import parse_fen, to_fen
from ..engine.position import Position, starting_position


logger = logging.getLogger(__name__)

Writer = Callable[[str], None]

# Position after 1. e4, printed by the bare driver
E4_FEN = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"


def render_board(position: Position) -> str:
    """Return an 8x8 text diagram, rank 8 on top, ``.`` for empty squares."""
    lines: List[str] = []
    for row in range(8):
        cells = position.cells[row * 8 : row * 8 + 8]
        squares = " ".join(p.symbol() if p is not None else "." for p in cells)
        lines.append(f"{8 - row}  {squares}")
    lines.append("   a b c d e f g h")
    return "\n".join(lines)


def _write_position(position: Position, board: bool, write: Writer) -> None:
    write(to_fen(position))
    if board:
        write(render_board(position))


def cmd_show(fens: List[str], board: bool, write: Writer, write_err: Writer) -> int:
    if not fens:
        _write_position(starting_position(), board, write)
        return 0
    failed = 0
    for fen in fens:
        try:
            position = parse_fen(fen)
        except FenError as e:
            failed += 1
            logger.warning("rejected FEN %r: %s", fen, e)
            write_err(f"error: {e.field}: {e.message}")
            continue
        _write_position(position, board, write)
    return 1 if failed else 0


def cmd_serve(host: str, port: int, log_level: str) -> int:
    import uvicorn

    uvicorn.run(
        "fenboard.protocol.http.app:create_app",
        factory=True,
        host=host,
        port=port,
        log_level=log_level,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fenboard", description="Chess position FEN tool")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Logging level (default: info)",
    )
    sub = parser.add_subparsers(dest="command")

    show = sub.add_parser("show", help="Print the normalized FEN of each position")
    show.add_argument("fens", nargs="*", metavar="FEN", help="FEN strings (default: startpos)")
    show.add_argument("--board", action="store_true", help="Also print a board diagram")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", type=str, default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    serve.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper()))

    def write(line: str) -> None:
        print(line)

    def write_err(line: str) -> None:
        print(line, file=sys.stderr)

    if args.command == "show":
        return cmd_show(args.fens, args.board, write, write_err)
    if args.command == "serve":
        return cmd_serve(args.host, args.port, args.log_level)
    # No subcommand: starting position, then the position after 1. e4
    write(to_fen(starting_position()))
    return cmd_show([E4_FEN], False, write, write_err)


if __name__ == "__main__":
    sys.exit(main())
