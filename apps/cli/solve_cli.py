"""Command-line driver: solve a puzzle with human-style techniques and print the hints as JSON."""

# solve_cli.py
# - Reads an 81-character puzzle (digits, '0' or '.' for blanks) from --puzzle or --file
# - Loads the solver config (YAML) and applies --max-hints / --verbose overrides
# - Runs the solver and prints the applied hints, the solved flag and the final grid
#
# Usage:
#   python -m apps.cli.solve_cli --puzzle 530070000600195000098000060800060003400803001700020006060000280000419005000080079
#   python -m apps.cli.solve_cli --file puzzle.txt --config configs/solver.yaml --verbose

import argparse
import json
import logging
import sys
from pathlib import Path

from hint_engine.config import DEFAULT_CONFIG, configured_techniques, load_solver_config
from hint_engine.grid import Grid
from hint_engine.grid_solver import GridSolver

log = logging.getLogger("solve_cli")


def read_puzzle(args) -> str:
    if args.puzzle:
        return args.puzzle
    return Path(args.file).read_text(encoding="utf-8")


def main(args) -> int:
    cfg = load_solver_config(args.config, max_hints=args.max_hints,
                             log_level="DEBUG" if args.verbose else None)
    logging.basicConfig(level=cfg.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    try:
        grid = Grid.from_string(read_puzzle(args))
    except ValueError as e:
        log.error("Invalid puzzle: %s", e)
        return 2
    original = grid.to_rows()
    result = GridSolver(grid, techniques=configured_techniques(cfg), max_hints=cfg.max_hints).solve()
    moves = []
    for i, hint in enumerate(result.hints_applied, start=1):
        move = hint.to_payload()
        move["index"] = i
        moves.append(move)
    payload = {
        "original": original,
        "current": result.grid.to_rows(),
        "solved": result.solved,
        "stop_reason": result.stop_reason.value,
        "duration_ms": round(result.duration.total_seconds() * 1000, 3),
        "techniques_used": result.number_of_techniques_used,
        "technique_counts": result.technique_counts(),
        "moves": moves,
        "grid": str(result.grid).splitlines(),
    }
    print(json.dumps(payload, indent=2))
    return 0 if result.solved else 1


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description=__doc__)
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--puzzle", type=str, help="81 characters, row by row; 0 or . for blanks")
    src.add_argument("--file", type=str, help="Text file holding the puzzle")
    ap.add_argument("--config", default=DEFAULT_CONFIG if DEFAULT_CONFIG.is_file() else None,
                    help="YAML config path (default: configs/solver.yaml when present)")
    ap.add_argument("--max-hints", type=int, default=None, help="Stop after this many hints")
    ap.add_argument("--verbose", action="store_true", help="Log every applied hint")
    return ap


def cli():
    sys.exit(main(build_parser().parse_args()))


if __name__ == "__main__":
    cli()
