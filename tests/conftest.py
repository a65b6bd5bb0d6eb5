# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "hint_engine" and "apps" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

CLASSIC_PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
CLASSIC_SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"


def to_rows(digits: str) -> list[list[int]]:
    return [[int(ch) for ch in digits[r * 9:(r + 1) * 9]] for r in range(9)]


@pytest.fixture
def classic_rows():
    return to_rows(CLASSIC_PUZZLE)


@pytest.fixture
def classic_solution():
    return to_rows(CLASSIC_SOLUTION)


@pytest.fixture
def classic_grid():
    from hint_engine.grid import Grid

    grid = Grid.from_string(CLASSIC_PUZZLE)
    grid.show_remaining_candidates()
    return grid


@pytest.fixture
def config_path():
    return ROOT / "configs" / "solver.yaml"


def solve_by_search(rows: list[list[int]]) -> list[list[int]]:
    """Reference solution by backtracking, fewest options first."""
    grid = [row[:] for row in rows]

    def options(r: int, c: int) -> list[int]:
        br, bc = 3 * (r // 3), 3 * (c // 3)
        used = set(grid[r]) | {grid[i][c] for i in range(9)}
        used |= {grid[br + i][bc + j] for i in range(3) for j in range(3)}
        return [d for d in range(1, 10) if d not in used]

    def search() -> bool:
        best = None
        for r in range(9):
            for c in range(9):
                if grid[r][c] == 0:
                    opts = options(r, c)
                    if not opts:
                        return False
                    if best is None or len(opts) < len(best[2]):
                        best = (r, c, opts)
        if best is None:
            return True
        r, c, opts = best
        for d in opts:
            grid[r][c] = d
            if search():
                return True
        grid[r][c] = 0
        return False

    if not search():
        raise ValueError("Puzzle has no solution")
    return grid
