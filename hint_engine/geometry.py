"""Grid geometry: digits, positions, houses (rows, columns, boxes) and the peer relation."""

# geometry.py
# Index math shared by every technique:
# - Value: the nine digits
# - Position: a 1-based (row, column) cell address with its derived box
# - House: a row, column or box, as a view over a grid
# Nothing here holds grid state; House.remaining_values reads the grid it is given.

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from functools import lru_cache
from typing import TYPE_CHECKING, Iterable, Optional

if TYPE_CHECKING:
    from hint_engine.grid import Grid


class Value(IntEnum):
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9

    @classmethod
    def of(cls, digit: int) -> "Value":
        if isinstance(digit, bool) or not 1 <= int(digit) <= 9:
            raise ValueError(f"Invalid value: {digit}")
        return cls(int(digit))

    def __str__(self) -> str:
        return str(int(self))


ALL_VALUES: tuple[Value, ...] = tuple(Value)
Value.ALL = ALL_VALUES


def which_box(r: int, c: int) -> int:
    return 3 * ((r - 1) // 3) + ((c - 1) // 3) + 1


def _check_index(name: str, n: int) -> None:
    if isinstance(n, bool) or not isinstance(n, int) or not 1 <= n <= 9:
        raise ValueError(f"{name} must be in [1,9], was {n!r}")


@dataclass(frozen=True, order=True)
class Position:
    """A cell address. Ordering is by row, then column."""

    row: int
    column: int

    def __post_init__(self):
        _check_index("row", self.row)
        _check_index("column", self.column)

    @property
    def box(self) -> int:
        return which_box(self.row, self.column)

    def sees(self, other: "Position") -> bool:
        """True if the two positions share a house. A position does not see itself."""
        if self == other:
            return False
        return self.row == other.row or self.column == other.column or self.box == other.box

    def seen_by(self) -> tuple["Position", ...]:
        """The 20 peers: the rest of the row, the rest of the column, then the rest of the box."""
        return _peers(self.row, self.column)

    def member_of(self) -> tuple["House", ...]:
        return (House.row(self.row), House.column(self.column), House.box(self.box))

    def up(self) -> Optional["Position"]:
        return Position(self.row - 1, self.column) if self.row > 1 else None

    def down(self) -> Optional["Position"]:
        return Position(self.row + 1, self.column) if self.row < 9 else None

    def left(self) -> Optional["Position"]:
        return Position(self.row, self.column - 1) if self.column > 1 else None

    def right(self) -> Optional["Position"]:
        return Position(self.row, self.column + 1) if self.column < 9 else None

    def orthogonally_connected(self) -> tuple["Position", ...]:
        return tuple(p for p in (self.up(), self.down(), self.left(), self.right()) if p is not None)

    def __str__(self) -> str:
        return f"r{self.row}c{self.column}"

    @classmethod
    def from_string(cls, s: str) -> "Position":
        """Parse the "r3c7" form produced by str()."""
        if len(s) != 4 or s[0] != "r" or s[2] != "c" or not s[1].isdigit() or not s[3].isdigit():
            raise ValueError(f"Invalid string: {s}")
        return cls(int(s[1]), int(s[3]))

    @staticmethod
    def all() -> tuple["Position", ...]:
        return _ALL_POSITIONS

    @staticmethod
    def seen_by_all(*positions: "Position") -> tuple["Position", ...]:
        """Positions seen by every one of the given positions, not including those positions."""
        if len(positions) < 2:
            raise ValueError("Need at least two positions")
        first, rest = positions[0], positions[1:]
        return tuple(p for p in first.seen_by() if all(o.sees(p) for o in rest))


def unit_cells_row(r: int) -> tuple[Position, ...]:
    return tuple(Position(r, c) for c in range(1, 10))


def unit_cells_col(c: int) -> tuple[Position, ...]:
    return tuple(Position(r, c) for r in range(1, 10))


def unit_cells_box(b: int) -> tuple[Position, ...]:
    br = (b - 1) // 3
    bc = (b - 1) % 3
    r0 = 3 * br + 1
    c0 = 3 * bc + 1
    return tuple(Position(r0 + i, c0 + j) for i in range(3) for j in range(3))


_ALL_POSITIONS: tuple[Position, ...] = tuple(Position(r, c) for r in range(1, 10) for c in range(1, 10))


@lru_cache(maxsize=None)
def _peers(r: int, c: int) -> tuple[Position, ...]:
    me = Position(r, c)
    in_row = [p for p in unit_cells_row(r) if p != me]
    in_col = [p for p in unit_cells_col(c) if p != me]
    in_box = [p for p in unit_cells_box(me.box) if p.row != r and p.column != c]
    return tuple(in_row + in_col + in_box)


class HouseType(Enum):
    ROW = "row"
    COLUMN = "column"
    BOX = "box"

    def cross(self) -> "HouseType":
        """ROW <-> COLUMN. Boxes have no cross orientation."""
        if self is HouseType.ROW:
            return HouseType.COLUMN
        if self is HouseType.COLUMN:
            return HouseType.ROW
        raise ValueError("Boxes have no cross orientation")

    def create_house(self, number: int) -> "House":
        return House(self, number)


_CELLS_BY_TYPE = {
    HouseType.ROW: unit_cells_row,
    HouseType.COLUMN: unit_cells_col,
    HouseType.BOX: unit_cells_box,
}


@dataclass(frozen=True)
class House:
    """A row, column or box. A view over whatever grid it is asked about, never a snapshot."""

    type: HouseType
    number: int

    def __post_init__(self):
        if not isinstance(self.type, HouseType):
            raise ValueError(f"Invalid house type: {self.type!r}")
        _check_index(f"{self.type.value} number", self.number)

    @staticmethod
    def row(n: int) -> "House":
        return House(HouseType.ROW, n)

    @staticmethod
    def column(n: int) -> "House":
        return House(HouseType.COLUMN, n)

    @staticmethod
    def box(n: int) -> "House":
        return House(HouseType.BOX, n)

    def positions(self) -> tuple[Position, ...]:
        return _house_positions(self.type, self.number)

    def position(self, n: int) -> Position:
        """The n-th (1-based) position of this house."""
        _check_index("index", n)
        return self.positions()[n - 1]

    def contains(self, p: Position) -> bool:
        if self.type is HouseType.ROW:
            return p.row == self.number
        if self.type is HouseType.COLUMN:
            return p.column == self.number
        return p.box == self.number

    def remaining_values(self, grid: "Grid") -> tuple[Value, ...]:
        """The values not yet placed in this house, ascending."""
        placed = {grid.cell_at(p).value for p in self.positions()}
        return tuple(v for v in ALL_VALUES if v not in placed)

    def __str__(self) -> str:
        return f"{self.type.value} {self.number}"

    @staticmethod
    def in_row_or_column(positions: Iterable[Position]) -> Optional["House"]:
        """The single row, else the single column, containing all the positions."""
        ps = list(positions)
        if not ps:
            return None
        if len({p.row for p in ps}) == 1:
            return House.row(ps[0].row)
        if len({p.column for p in ps}) == 1:
            return House.column(ps[0].column)
        return None

    @staticmethod
    def in_box(positions: Iterable[Position]) -> Optional["House"]:
        ps = list(positions)
        if ps and len({p.box for p in ps}) == 1:
            return House.box(ps[0].box)
        return None


@lru_cache(maxsize=None)
def _house_positions(house_type: HouseType, number: int) -> tuple[Position, ...]:
    return _CELLS_BY_TYPE[house_type](number)


ALL_HOUSES: tuple[House, ...] = (
    tuple(House.row(n) for n in range(1, 10))
    + tuple(House.column(n) for n in range(1, 10))
    + tuple(House.box(n) for n in range(1, 10))
)
House.ALL = ALL_HOUSES
