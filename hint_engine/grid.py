"""The 81-cell grid aggregate: cells keyed by Position, candidate initialization, validation and builders."""

# grid.py
# A Grid owns exactly 81 Cells for its whole lifetime. Detectors only read it;
# hint.apply(grid) and the explicit cell mutators are the only writers.

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence

import numpy as np

from hint_engine.errors import GivenCellError
from hint_engine.geometry import ALL_HOUSES, House, Position, Value
from hint_engine.pencil_marks import FULL_MASK, PencilMarks, bit, mask_of, values_of

Rows = list[list[int]]


class Cell:
    __slots__ = ("_given", "_value", "_marks")

    def __init__(self, value: Optional[Value] = None, given: bool = False):
        if given and value is None:
            raise ValueError("A given cell must have a value")
        self._given = given
        self._value = Value.of(value) if value is not None else None
        self._marks = PencilMarks.for_given_cell() if given else PencilMarks.for_unknown_cell()

    @classmethod
    def given_cell(cls, value: Value) -> "Cell":
        return cls(value, given=True)

    @classmethod
    def empty(cls) -> "Cell":
        return cls()

    @classmethod
    def with_value(cls, value: Value) -> "Cell":
        return cls(value)

    @classmethod
    def with_candidates(cls, values: Iterable[Value]) -> "Cell":
        cell = cls()
        cell.pencil_marks.set_values(values)
        return cell

    @property
    def is_given(self) -> bool:
        return self._given

    @property
    def value(self) -> Optional[Value]:
        return self._value

    @property
    def has_value(self) -> bool:
        return self._value is not None

    @property
    def pencil_marks(self) -> PencilMarks:
        return self._marks

    @property
    def candidates(self) -> int:
        """The center marks as a mask."""
        return self._marks.mask

    @property
    def is_empty(self) -> bool:
        return self._value is None and self._marks.is_empty and self._marks.corner_mask == 0

    def set_value(self, value: Value) -> None:
        if self._given:
            raise GivenCellError("Cannot set the value of a given cell")
        self._value = Value.of(value)
        self._marks.clear()

    def clear_content(self) -> None:
        """Clears the value if there is one, else the center marks, else the corner marks."""
        if self._given:
            raise GivenCellError("Cannot clear a given cell")
        if self._value is not None:
            self._value = None
        elif not self._marks.is_empty:
            self._marks.clear()
        else:
            self._marks.clear_corner()

    def reset(self) -> None:
        if self._given:
            raise GivenCellError("Cannot reset a given cell")
        self._value = None
        self._marks.clear()
        self._marks.clear_corner()

    def copy(self) -> "Cell":
        if self._given:
            return Cell.given_cell(self._value)
        clone = Cell(self._value)
        clone._marks = self._marks.copy()
        return clone

    def is_equivalent(self, other: "Cell") -> bool:
        return (
            self._value == other._value
            and self._given == other._given
            and self._marks == other._marks
        )

    def __repr__(self) -> str:
        if self._given:
            return f"Cell(given={self._value})"
        if self._value is not None:
            return f"Cell(value={self._value})"
        return f"Cell({self._marks!r})"


@dataclass(frozen=True)
class ValidationResult:
    invalid_positions: frozenset

    @property
    def is_valid(self) -> bool:
        return not self.invalid_positions


class Grid:
    def __init__(self, cells: Mapping[Position, Cell]):
        if len(cells) != 81 or set(cells) != set(Position.all()):
            raise ValueError(f"Must provide 81 cells, one per position (got {len(cells)})")
        self._cells = {p: cells[p] for p in Position.all()}

    # -- construction --

    @classmethod
    def empty(cls) -> "Grid":
        return cls({p: Cell.empty() for p in Position.all()})

    @classmethod
    def from_cells(cls, cells: Sequence[Cell]) -> "Grid":
        """81 cells in row-major order."""
        cells = list(cells)
        if len(cells) != 81:
            raise ValueError(f"Must provide 81 cells (got {len(cells)})")
        return cls(dict(zip(Position.all(), cells)))

    @classmethod
    def from_rows(cls, rows) -> "Grid":
        """9x9 digits (list of lists or an array), 0 = empty, anything else is a given."""
        arr = np.asarray(rows)
        if arr.shape != (9, 9):
            raise ValueError(f"Grid must be 9x9, got shape {arr.shape}")
        if not np.issubdtype(arr.dtype, np.integer) or arr.min() < 0 or arr.max() > 9:
            raise ValueError("Grid digits must be integers in 0..9")
        return cls.from_cells(_to_cell(int(d)) for d in arr.reshape(-1))

    @classmethod
    def from_strings(cls, *rows: str) -> "Grid":
        """Nine strings of nine characters; '0' or '.' marks an empty cell."""
        if len(rows) != 9 or any(len(r) != 9 for r in rows):
            raise ValueError("Must provide 9 rows of 9 digits")
        return cls.from_string("".join(rows))

    @classmethod
    def from_string(cls, puzzle: str) -> "Grid":
        digits = []
        for ch in puzzle:
            if ch.isdigit():
                digits.append(int(ch))
            elif ch in {".", "_", "-", "x"}:
                digits.append(0)
            elif not ch.isspace():
                raise ValueError(f"Unexpected character {ch!r} in puzzle")
        if len(digits) != 81:
            raise ValueError(f"Sudoku puzzle must yield 81 cells (got {len(digits)})")
        return cls.from_cells(_to_cell(d) for d in digits)

    def copy(self) -> "Grid":
        """Deep copy; the new grid shares no cells with this one."""
        return Grid({p: c.copy() for p, c in self._cells.items()})

    # -- access --

    def cell_at(self, p: Position) -> Cell:
        return self._cells[p]

    def cells(self) -> Mapping[Position, Cell]:
        return dict(self._cells)

    def candidates_at(self, p: Position) -> int:
        """Center marks of a valueless cell, 0 for a cell with a value."""
        cell = self._cells[p]
        return 0 if cell.has_value else cell.candidates

    def is_candidate(self, p: Position, value: Value) -> bool:
        return bool(self.candidates_at(p) & bit(value))

    def is_empty(self) -> bool:
        return all(c.is_empty for c in self._cells.values())

    # -- solving state --

    def is_solved(self) -> bool:
        if any(not c.has_value for c in self._cells.values()):
            return False
        for house in ALL_HOUSES:
            if {self._cells[p].value for p in house.positions()} != set(Value):
                return False
        return True

    def duplicates(self) -> frozenset:
        """Positions whose value is repeated in one of their houses."""
        dups = set()
        for house in ALL_HOUSES:
            seen: dict[Value, list[Position]] = {}
            for p in house.positions():
                v = self._cells[p].value
                if v is not None:
                    seen.setdefault(v, []).append(p)
            for ps in seen.values():
                if len(ps) > 1:
                    dups.update(ps)
        return frozenset(dups)

    def validate(self) -> ValidationResult:
        empty = {p for p, c in self._cells.items() if not c.has_value}
        return ValidationResult(frozenset(empty | self.duplicates()))

    def all_cells_have_value_or_candidates(self, positions: Iterable[Position] = None) -> bool:
        positions = Position.all() if positions is None else positions
        return all(self._cells[p].has_value or self._cells[p].candidates for p in positions)

    def show_remaining_candidates(self) -> None:
        """Fill the center marks of every valueless, unmarked cell with the digits its peers allow."""
        for p in Position.all():
            cell = self._cells[p]
            if cell.has_value or not cell.pencil_marks.is_empty:
                continue
            seen = mask_of(self._cells[q].value for q in p.seen_by() if self._cells[q].has_value)
            cell.pencil_marks.set_mask(FULL_MASK & ~seen)

    # -- conversions --

    def to_rows(self) -> Rows:
        return [
            [int(self._cells[Position(r, c)].value or 0) for c in range(1, 10)]
            for r in range(1, 10)
        ]

    def to_array(self) -> np.ndarray:
        return np.array(self.to_rows(), dtype=np.int8)

    def candidates_map(self) -> dict[str, list[int]]:
        """{'r1c2': [1, 2, 5], ...} for every valueless cell."""
        return {
            str(p): [int(v) for v in values_of(c.candidates)]
            for p, c in self._cells.items()
            if not c.has_value
        }

    def is_equivalent(self, other: "Grid") -> bool:
        return all(self._cells[p].is_equivalent(other.cell_at(p)) for p in Position.all())

    def __str__(self) -> str:
        lines = []
        for r in range(1, 10):
            lines.append("".join(
                str(self._cells[Position(r, c)].value or "x") for c in range(1, 10)
            ))
        return "\n".join(lines)


def _to_cell(digit: int) -> Cell:
    return Cell.empty() if digit == 0 else Cell.given_cell(Value.of(digit))


class GridBuilder:
    """Builds grids from per-house notation.

    A given cell is written as its digit, e.g. "7"; a valueless cell as its
    center marks in brackets, e.g. "[25]" or "[]". Spaces between cells are
    ignored. Cells not covered by any house stay empty with no marks.
    """

    def __init__(self):
        self._cells: dict[Position, Cell] = {}

    def row(self, n: int, notation: str) -> "GridBuilder":
        return self.house(House.row(n), parse_cells(notation, 9))

    def column(self, n: int, notation: str) -> "GridBuilder":
        return self.house(House.column(n), parse_cells(notation, 9))

    def box(self, n: int, row1: str, row2: str, row3: str) -> "GridBuilder":
        cells = parse_cells(row1, 3) + parse_cells(row2, 3) + parse_cells(row3, 3)
        return self.house(House.box(n), cells)

    def fully_unknown_row(self, n: int) -> "GridBuilder":
        return self._fully_unknown(House.row(n))

    def fully_unknown_column(self, n: int) -> "GridBuilder":
        return self._fully_unknown(House.column(n))

    def fully_unknown_box(self, n: int) -> "GridBuilder":
        return self._fully_unknown(House.box(n))

    def house(self, house: House, cells: Sequence[Cell]) -> "GridBuilder":
        if len(cells) != 9:
            raise ValueError(f"A house needs 9 cells, got {len(cells)}")
        for p, cell in zip(house.positions(), cells):
            if p in self._cells:
                raise ValueError(f"A cell has already been added at position {p}")
            self._cells[p] = cell
        return self

    def _fully_unknown(self, house: House) -> "GridBuilder":
        return self.house(house, [Cell.with_candidates(Value) for _ in range(9)])

    def build(self) -> Grid:
        cells = {p: self._cells.get(p) or Cell.empty() for p in Position.all()}
        return Grid(cells)


def parse_cells(notation: str, expected: int) -> list[Cell]:
    cells: list[Cell] = []
    i = 0
    while i < len(notation):
        ch = notation[i]
        if ch.isdigit() and ch != "0":
            cells.append(Cell.given_cell(Value.of(int(ch))))
            i += 1
        elif ch == "[":
            end = notation.find("]", i)
            if end < 0:
                raise ValueError(f"Unterminated pencil mark cell at position {i} in input {notation!r}")
            marks = notation[i + 1:end]
            if not all(m.isdigit() and m != "0" for m in marks):
                raise ValueError(f"Unexpected pencil marks {marks!r} at position {i} in input {notation!r}")
            cells.append(Cell.with_candidates(Value.of(int(m)) for m in marks))
            i = end + 1
        elif ch == " ":
            i += 1
        else:
            raise ValueError(f"Unexpected character {ch!r} at position {i} in input {notation!r}")
    if len(cells) != expected:
        raise ValueError(f"Expected {expected} cells, got {len(cells)} in {notation!r}")
    return cells


__all__ = [
    "Cell",
    "Grid",
    "GridBuilder",
    "Rows",
    "ValidationResult",
    "parse_cells",
]
