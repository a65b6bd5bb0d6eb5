# tests/test_cli.py
import json

from apps.cli.solve_cli import build_parser, main
from hint_engine.config import DEFAULT_CONFIG

from conftest import CLASSIC_PUZZLE, CLASSIC_SOLUTION


def test_solves_puzzle_argument(capsys):
    args = build_parser().parse_args(["--puzzle", CLASSIC_PUZZLE])
    assert main(args) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["solved"] is True
    assert out["stop_reason"] == "solved"
    assert "".join(out["grid"]) == CLASSIC_SOLUTION
    assert out["moves"][0]["index"] == 1
    assert out["techniques_used"] == len(out["technique_counts"])


def test_reads_file_and_honours_max_hints(tmp_path, capsys):
    path = tmp_path / "puzzle.txt"
    path.write_text(CLASSIC_PUZZLE.replace("0", ".") + "\n", encoding="utf-8")
    args = build_parser().parse_args(["--file", str(path), "--max-hints", "4"])
    assert main(args) == 1
    out = json.loads(capsys.readouterr().out)
    assert out["stop_reason"] == "max_hints"
    assert len(out["moves"]) == 4


def test_invalid_puzzle_returns_2(capsys):
    args = build_parser().parse_args(["--puzzle", "123"])
    assert main(args) == 2
    assert capsys.readouterr().out == ""


def test_shipped_config_is_the_default(capsys):
    args = build_parser().parse_args(["--puzzle", CLASSIC_PUZZLE])
    assert args.config == DEFAULT_CONFIG
    assert DEFAULT_CONFIG.is_file()
    assert main(args) == 0
    assert json.loads(capsys.readouterr().out)["solved"] is True


def test_config_file_restricts_techniques(tmp_path, capsys):
    path = tmp_path / "solver.yaml"
    path.write_text("techniques: [x_wing]\n", encoding="utf-8")
    args = build_parser().parse_args(["--puzzle", CLASSIC_PUZZLE, "--config", str(path)])
    assert main(args) == 1
    out = json.loads(capsys.readouterr().out)
    assert out["stop_reason"] == "exhausted"
    assert all(m["technique"] == "x_wing" for m in out["moves"])
