from __future__ import annotations

from typing import List

import pytest

from fenboard.cli.main import E4_FEN, cmd_show, main, render_board
from fenboard.engine.fen import STARTPOS_FEN, parse_fen


def _run_show(fens: List[str], board: bool = False):
    out: List[str] = []
    err: List[str] = []
    rc = cmd_show(fens, board, out.append, err.append)
    return rc, out, err


def test_show_defaults_to_startpos() -> None:
    rc, out, err = _run_show([])
    assert rc == 0
    assert out == [STARTPOS_FEN]
    assert err == []


def test_show_normalizes_input() -> None:
    rc, out, _ = _run_show(["r3k2r/8/8/8/8/8/8/R3K2R w kqKQ - 0 1"])
    assert rc == 0
    assert out == ["r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"]


def test_show_reports_errors_and_continues() -> None:
    rc, out, err = _run_show(["8/8/8/8/8/8/8/8 w - - 0 0", E4_FEN])
    assert rc == 1
    assert out == [E4_FEN]
    assert len(err) == 1
    assert err[0].startswith("error: full_move_number:")


def test_show_output_follows_argument_order() -> None:
    lines: List[str] = []
    rc = cmd_show(
        [E4_FEN, "8/8/8/8/8/8/8/8 x - - 0 1", STARTPOS_FEN],
        False,
        lines.append,
        lambda line: lines.append("ERR " + line),
    )
    assert rc == 1
    assert lines[0] == E4_FEN
    assert lines[1].startswith("ERR error: side_to_move:")
    assert lines[2] == STARTPOS_FEN


def test_render_board() -> None:
    text = render_board(parse_fen(E4_FEN))
    lines = text.splitlines()
    assert lines[0] == "8  r n b q k b n r"
    assert lines[4] == "4  . . . . P . . ."
    assert lines[6] == "2  P P P P . P P P"
    assert lines[-1] == "   a b c d e f g h"


def test_main_without_command_prints_driver_output(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main([])
    assert rc == 0
    assert capsys.readouterr().out.splitlines() == [STARTPOS_FEN, E4_FEN]


def test_main_show_with_board(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["show", "--board", STARTPOS_FEN])
    assert rc == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == STARTPOS_FEN
    assert lines[1] == "8  r n b q k b n r"
    assert len(lines) == 10


def test_main_show_bad_fen_exit_code(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["show", "8/8/8/8/8/8/8/8 x - - 0 1"])
    assert rc == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "error: side_to_move:" in captured.err
