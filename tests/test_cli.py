import logging
from pathlib import Path

import pytest

from farc3.io.cli import main

PROBLEMS = Path(__file__).resolve().parent.parent / "problems"


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("farc3")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_cli_lists_solutions(capsys):
    assert main([str(PROBLEMS / "two_mines.yaml")]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["0=True 1=False 2=True", "0=True 1=True 2=False", "2 solution(s)"]


def test_cli_limit_and_summary(capsys):
    assert main([str(PROBLEMS / "two_mines.yaml"), "--limit", "1", "--heuristic", "first", "--summary"]) == 0
    out = capsys.readouterr().out
    assert "1 solution(s)" in out
    assert "most informative variable: 0 (0.000 bits)" in out


def test_cli_summary(capsys):
    assert main([str(PROBLEMS / "two_mines.yaml"), "--summary"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert "0: True: 2 (0.000 bits)" in out
    assert "1: False: 1, True: 1 (1.000 bits)" in out
    assert "most informative variable: 1 (1.000 bits)" in out


def test_cli_configuration_error(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("variables: [a]\nconstraints:\n  - {kind: mines, tiles: [b], count: 1}\n", encoding="utf-8")
    assert main([str(path)]) == 2


def test_cli_malformed_constraint(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("constraints:\n  - {kind: mines, tiles: [a], count: many}\n", encoding="utf-8")
    assert main([str(path)]) == 2


def test_cli_coordinate_tiles(tmp_path, capsys):
    path = tmp_path / "board.yaml"
    path.write_text(
        "constraints:\n"
        "  - {kind: mines, tiles: [[0, 0], [0, 1]], count: 1}\n"
        "  - {kind: mines, tiles: [[0, 1], [1, 0]], count: 2}\n",
        encoding="utf-8",
    )
    assert main([str(path)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["(0, 0)=False (0, 1)=True (1, 0)=True", "1 solution(s)"]


@pytest.mark.parametrize("flags", [["--limit", "-1"], ["--limit", "lots"], ["--log-level", "chatty"]])
def test_cli_rejects_bad_flags(flags, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(PROBLEMS / "two_mines.yaml"), *flags])
    assert exc.value.code == 2


def test_cli_log_level_is_case_insensitive(capsys):
    assert main([str(PROBLEMS / "two_mines.yaml"), "--log-level", "debug"]) == 0
    assert "2 solution(s)" in capsys.readouterr().out
