"""Hints: what a technique found and how to apply it to a grid.

Every hint is an immutable value over positions and values. It holds no
reference to the grid it was found on; ``hint.apply(grid)`` mutates the grid
passed in, which must be in the state the hint was computed from.
"""

# hints.py
# - Technique: the closed tag set, one member per catalog entry
# - Single: placement (naked or hidden)
# - EliminatingHint and its subclasses: remove values from target cells
# - HiddenMultiple, SimpleColoring: per-cell eliminations / placements
# - to_payload(): the JSON-friendly move dict used by tools, CLI and API

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Mapping, Optional

from hint_engine.errors import InvalidHintError
from hint_engine.geometry import House, HouseType, Position, Value
from hint_engine.pencil_marks import mask_of
from hint_engine.types_sudoku import Move

if TYPE_CHECKING:
    from hint_engine.grid import Grid


class Technique(Enum):
    NAKED_SINGLE = ("naked_single", "Naked Single")
    HIDDEN_SINGLE = ("hidden_single", "Hidden Single")
    NAKED_PAIR = ("naked_pair", "Naked Pair")
    NAKED_TRIPLE = ("naked_triple", "Naked Triple")
    NAKED_QUADRUPLE = ("naked_quadruple", "Naked Quadruple")
    HIDDEN_PAIR = ("hidden_pair", "Hidden Pair")
    HIDDEN_TRIPLE = ("hidden_triple", "Hidden Triple")
    HIDDEN_QUADRUPLE = ("hidden_quadruple", "Hidden Quadruple")
    POINTING_PAIR = ("pointing_pair", "Pointing Pair")
    BOX_LINE_REDUCTION = ("box_line_reduction", "Box Line Reduction")
    X_WING = ("x_wing", "X-Wing")
    SWORDFISH = ("swordfish", "Swordfish")
    XY_WING = ("xy_wing", "XY-Wing")
    XYZ_WING = ("xyz_wing", "XYZ-Wing")
    SIMPLE_COLORING = ("simple_coloring", "Simple Coloring")

    def __init__(self, key: str, display_name: str):
        self.key = key
        self.display_name = display_name

    @classmethod
    def from_key(cls, key: str) -> "Technique":
        for t in cls:
            if t.key == key:
                return t
        raise ValueError(f"Unknown technique: {key!r}")

    def __str__(self) -> str:
        return self.display_name


_NAKED_BY_SIZE = {2: Technique.NAKED_PAIR, 3: Technique.NAKED_TRIPLE, 4: Technique.NAKED_QUADRUPLE}
_HIDDEN_BY_SIZE = {2: Technique.HIDDEN_PAIR, 3: Technique.HIDDEN_TRIPLE, 4: Technique.HIDDEN_QUADRUPLE}


def house_key(house: House) -> str:
    """'r4', 'c7' or 'b3'."""
    prefix = {HouseType.ROW: "r", HouseType.COLUMN: "c", HouseType.BOX: "b"}[house.type]
    return f"{prefix}{house.number}"


def _positions(ps: Iterable[Position]) -> tuple[Position, ...]:
    return tuple(sorted(set(ps)))


def _values(vs: Iterable[Value]) -> tuple[Value, ...]:
    return tuple(sorted({Value.of(v) for v in vs}))


def _keys(ps: Iterable[Position]) -> list[str]:
    return [str(p) for p in ps]


def _digits(vs: Iterable[Value]) -> list[int]:
    return [int(v) for v in vs]


def _check(condition: bool, message: str) -> None:
    if not condition:
        raise InvalidHintError(message)


def _place(grid: "Grid", position: Position, value: Value) -> None:
    """Set the value, then strip it from the marks of every valueless peer."""
    grid.cell_at(position).set_value(value)
    for p in position.seen_by():
        cell = grid.cell_at(p)
        if not cell.has_value:
            cell.pencil_marks.remove(value)


class Hint:
    """Base of all hints. Subclasses expose `technique`, `apply(grid)` and `to_payload()`."""

    def apply(self, grid: "Grid") -> None:
        raise NotImplementedError

    def to_payload(self) -> Move:
        raise NotImplementedError

    def describe(self) -> str:
        return self.to_payload()["explanation"]["why"]


@dataclass(frozen=True)
class Single(Hint):
    value: Value
    house: House
    position: Position
    naked: bool

    def __post_init__(self):
        object.__setattr__(self, "value", Value.of(self.value))
        _check(self.house.contains(self.position), f"{self.position} is not in {self.house}")

    @property
    def technique(self) -> Technique:
        return Technique.NAKED_SINGLE if self.naked else Technique.HIDDEN_SINGLE

    def apply(self, grid: "Grid") -> None:
        _place(grid, self.position, self.value)

    def to_payload(self) -> Move:
        p = self.position
        if self.naked:
            why = f"Only one candidate fits {p}."
            units = {"row": f"r{p.row}", "col": f"c{p.column}", "box": f"b{p.box}"}
        else:
            why = f"Digit {self.value} appears in only one cell in {self.house}."
            units = {self.house.type.value: house_key(self.house)}
        return {
            "technique": self.technique.key,
            "name": self.technique.display_name,
            "type": "placement",
            "cell": str(p),
            "digit": int(self.value),
            "highlights": {"cells": [str(p)], "house": house_key(self.house)},
            "explanation": {"why": why, "units": units},
        }


@dataclass(frozen=True)
class EliminatingHint(Hint):
    """Removes `values` from the center marks of `target_positions`, justified by `forcing_positions`."""

    technique: Technique
    forcing_positions: tuple[Position, ...]
    values: tuple[Value, ...]
    target_positions: tuple[Position, ...]

    def __post_init__(self):
        object.__setattr__(self, "forcing_positions", _positions(self.forcing_positions))
        object.__setattr__(self, "values", _values(self.values))
        object.__setattr__(self, "target_positions", _positions(self.target_positions))
        _check(len(self.forcing_positions) >= 2, "Must have at least two forcing positions")
        _check(len(self.values) >= 1, "Must have at least one value")
        _check(len(self.target_positions) >= 1, "Must have at least one target position")
        _check(
            not set(self.forcing_positions) & set(self.target_positions),
            "Forcing positions and target positions must not overlap",
        )
        self._validate()

    def _validate(self) -> None:
        pass

    def apply(self, grid: "Grid") -> None:
        mask = mask_of(self.values)
        for p in self.target_positions:
            cell = grid.cell_at(p)
            if not cell.is_given:
                cell.pencil_marks.remove_mask(mask)

    def _houses(self) -> dict:
        return {}

    def _why(self) -> str:
        digits = ", ".join(str(v) for v in self.values)
        return f"{self.technique.display_name} on {digits} removes candidates from {len(self.target_positions)} cell(s)."

    def to_payload(self) -> Move:
        targets = _keys(self.target_positions)
        payload: Move = {
            "technique": self.technique.key,
            "name": self.technique.display_name,
            "type": "elimination",
            "digits": _digits(self.values),
            "eliminate": targets,
            "eliminations": {k: _digits(self.values) for k in targets},
            "highlights": {"cells": _keys(self.forcing_positions), "targets": targets, **self._houses()},
            "explanation": {"why": self._why()},
        }
        if len(self.values) == 1:
            payload["digit"] = int(self.values[0])
        return payload


@dataclass(frozen=True, init=False)
class NakedMultiple(EliminatingHint):
    house: Optional[House] = None

    def __init__(self, house: House, positions: Iterable[Position], values: Iterable[Value],
                 targets: Iterable[Position]):
        positions = _positions(positions)
        technique = _NAKED_BY_SIZE.get(len(positions))
        _check(technique is not None, f"A naked multiple has 2 to 4 cells, got {len(positions)}")
        object.__setattr__(self, "house", house)
        super().__init__(technique, positions, values, targets)

    def _validate(self) -> None:
        _check(len(self.forcing_positions) == len(self.values),
               "A naked multiple needs as many values as positions")
        _check(all(self.house.contains(p) for p in self.forcing_positions + self.target_positions),
               f"All positions must be in {self.house}")

    @property
    def positions(self) -> tuple[Position, ...]:
        return self.forcing_positions

    def _houses(self) -> dict:
        return {self.house.type.value: house_key(self.house)}

    def _why(self) -> str:
        digits = ", ".join(str(v) for v in self.values)
        cells = ", ".join(_keys(self.positions))
        return (f"In {self.house}, cells {cells} can only hold {digits} between them. "
                f"Eliminate those digits from the rest of {self.house}.")


@dataclass(frozen=True, init=False)
class PointingPair(EliminatingHint):
    def __init__(self, value: Value, positions: Iterable[Position], targets: Iterable[Position]):
        super().__init__(Technique.POINTING_PAIR, positions, (value,), targets)

    def _validate(self) -> None:
        _check(self.box is not None, "Pointing positions must be in the same box")
        _check(self.line is not None, "Pointing positions must be in the same row or column")
        _check(all(self.line.contains(p) and not self.box.contains(p) for p in self.target_positions),
               "Targets must be in the line, outside the box")

    @property
    def value(self) -> Value:
        return self.values[0]

    @property
    def box(self) -> Optional[House]:
        return House.in_box(self.forcing_positions)

    @property
    def line(self) -> Optional[House]:
        return House.in_row_or_column(self.forcing_positions)

    def _houses(self) -> dict:
        return {"box": house_key(self.box), self.line.type.value: house_key(self.line)}

    def _why(self) -> str:
        return (f"In {self.box}, digit {self.value}'s candidates lie only in {self.line}. "
                f"Eliminate {self.value} from {self.line} outside this box.")


@dataclass(frozen=True, init=False)
class BoxLineReduction(EliminatingHint):
    def __init__(self, value: Value, positions: Iterable[Position], targets: Iterable[Position]):
        super().__init__(Technique.BOX_LINE_REDUCTION, positions, (value,), targets)

    def _validate(self) -> None:
        _check(self.box is not None, "Positions must be in the same box")
        _check(self.line is not None, "Positions must be in the same row or column")
        _check(all(self.box.contains(p) and not self.line.contains(p) for p in self.target_positions),
               "Targets must be in the box, outside the line")

    @property
    def value(self) -> Value:
        return self.values[0]

    @property
    def box(self) -> Optional[House]:
        return House.in_box(self.forcing_positions)

    @property
    def line(self) -> Optional[House]:
        return House.in_row_or_column(self.forcing_positions)

    def _houses(self) -> dict:
        return {"box": house_key(self.box), self.line.type.value: house_key(self.line)}

    def _why(self) -> str:
        return (f"In {self.line}, digit {self.value}'s candidates are confined to {self.box}. "
                f"Eliminate {self.value} from other cells in {self.box}.")


@dataclass(frozen=True, init=False)
class XWing(EliminatingHint):
    def __init__(self, value: Value, corners: Iterable[Position], targets: Iterable[Position]):
        super().__init__(Technique.X_WING, corners, (value,), targets)

    def _validate(self) -> None:
        corners = self.forcing_positions
        rows = {p.row for p in corners}
        cols = {p.column for p in corners}
        _check(len(corners) == 4 and len(rows) == 2 and len(cols) == 2,
               "An X-Wing needs four corners on two rows and two columns")

    @property
    def value(self) -> Value:
        return self.values[0]

    @property
    def corners(self) -> tuple[Position, ...]:
        return self.forcing_positions

    def _houses(self) -> dict:
        return {
            "rows": sorted({f"r{p.row}" for p in self.corners}),
            "cols": sorted({f"c{p.column}" for p in self.corners}),
        }

    def _why(self) -> str:
        rows = sorted({p.row for p in self.corners})
        cols = sorted({p.column for p in self.corners})
        return (f"Digit {self.value} is locked to rows {rows[0]} and {rows[1]} and columns "
                f"{cols[0]} and {cols[1]}. Eliminate it from the rest of those lines.")


@dataclass(frozen=True, init=False)
class Swordfish(EliminatingHint):
    houses: tuple[House, ...] = ()

    def __init__(self, value: Value, houses: Iterable[House], positions: Iterable[Position],
                 targets: Iterable[Position]):
        object.__setattr__(self, "houses", tuple(sorted(houses, key=lambda h: h.number)))
        super().__init__(Technique.SWORDFISH, positions, (value,), targets)

    def _validate(self) -> None:
        _check(len(self.houses) == 3, "A swordfish spans three houses")
        _check(len({h.type for h in self.houses}) == 1 and self.houses[0].type is not HouseType.BOX,
               "Swordfish houses must be three rows or three columns")
        _check(all(any(h.contains(p) for h in self.houses) for p in self.forcing_positions),
               "Swordfish positions must lie in its houses")
        _check(not any(h.contains(p) for h in self.houses for p in self.target_positions),
               "Swordfish targets must lie outside its houses")

    @property
    def value(self) -> Value:
        return self.values[0]

    @property
    def positions(self) -> tuple[Position, ...]:
        return self.forcing_positions

    def _houses(self) -> dict:
        return {"houses": [house_key(h) for h in self.houses]}

    def _why(self) -> str:
        houses = ", ".join(str(h) for h in self.houses)
        return (f"Digit {self.value} is locked to the same three cross lines in {houses}. "
                f"Eliminate it from the rest of those cross lines.")


@dataclass(frozen=True, init=False)
class XyWing(EliminatingHint):
    pivot: Optional[Position] = None
    wings: tuple[Position, ...] = ()

    def __init__(self, pivot: Position, wings: Iterable[Position], value: Value,
                 targets: Iterable[Position], technique: Technique = Technique.XY_WING):
        wings = _positions(wings)
        object.__setattr__(self, "pivot", pivot)
        object.__setattr__(self, "wings", wings)
        super().__init__(technique, (pivot,) + wings, (value,), targets)

    def _validate(self) -> None:
        _check(len(self.wings) == 2, "A wing pattern needs exactly two wings")
        _check(self.pivot not in self.wings, "The pivot cannot be a wing")
        _check(all(self.pivot.sees(w) for w in self.wings), "The pivot must see both wings")

    @property
    def value(self) -> Value:
        return self.values[0]

    def _houses(self) -> dict:
        return {"pivot": str(self.pivot), "wings": _keys(self.wings)}

    def _why(self) -> str:
        w1, w2 = self.wings
        return (f"Whichever value {self.pivot} takes, one of {w1} and {w2} must be {self.value}. "
                f"Cells seeing both wings cannot be {self.value}.")


@dataclass(frozen=True, init=False)
class XyzWing(XyWing):
    def __init__(self, pivot: Position, wings: Iterable[Position], value: Value, targets: Iterable[Position]):
        super().__init__(pivot, wings, value, targets, technique=Technique.XYZ_WING)

    def _validate(self) -> None:
        super()._validate()
        _check(all(self.pivot.sees(t) for t in self.target_positions), "Targets must see the pivot")

    def _why(self) -> str:
        return (f"One of {self.pivot} and its wings {', '.join(_keys(self.wings))} must be {self.value}. "
                f"Cells seeing all three cannot be {self.value}.")


@dataclass(frozen=True, init=False)
class HiddenMultiple(Hint):
    """k values confined to k cells of a house; the other candidates of those cells are eliminated."""

    house: House
    positions: tuple[Position, ...]
    hidden_values: tuple[Value, ...]
    eliminated: tuple[tuple[Position, tuple[Value, ...]], ...]

    def __init__(self, house: House, positions: Iterable[Position], hidden_values: Iterable[Value],
                 eliminations: Mapping[Position, Iterable[Value]]):
        positions = _positions(positions)
        hidden_values = _values(hidden_values)
        eliminated = tuple(sorted(
            ((p, _values(vs)) for p, vs in eliminations.items()),
            key=lambda item: item[0],
        ))
        object.__setattr__(self, "house", house)
        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "hidden_values", hidden_values)
        object.__setattr__(self, "eliminated", eliminated)
        _check(len(positions) in _HIDDEN_BY_SIZE, f"A hidden multiple has 2 to 4 cells, got {len(positions)}")
        _check(len(positions) == len(hidden_values), "A hidden multiple needs as many values as positions")
        _check(all(house.contains(p) for p in positions), f"All positions must be in {house}")
        _check(bool(eliminated) and all(vs for _, vs in eliminated), "Must eliminate at least one value")
        _check(all(p in positions for p, _ in eliminated), "Eliminations must target the hidden cells")
        _check(all(not set(vs) & set(hidden_values) for _, vs in eliminated),
               "Eliminated values must not include the hidden values")

    @property
    def technique(self) -> Technique:
        return _HIDDEN_BY_SIZE[len(self.positions)]

    @property
    def eliminations(self) -> dict[Position, tuple[Value, ...]]:
        return dict(self.eliminated)

    @property
    def forcing_positions(self) -> tuple[Position, ...]:
        return self.positions

    @property
    def target_positions(self) -> tuple[Position, ...]:
        return tuple(p for p, _ in self.eliminated)

    @property
    def values(self) -> tuple[Value, ...]:
        return self.hidden_values

    def apply(self, grid: "Grid") -> None:
        for p, vs in self.eliminated:
            grid.cell_at(p).pencil_marks.remove_mask(mask_of(vs))

    def to_payload(self) -> Move:
        digits = ", ".join(str(v) for v in self.hidden_values)
        return {
            "technique": self.technique.key,
            "name": self.technique.display_name,
            "type": "elimination",
            "digits": _digits(self.hidden_values),
            "eliminate": _keys(self.target_positions),
            "eliminations": {str(p): _digits(vs) for p, vs in self.eliminated},
            "highlights": {"cells": _keys(self.positions), self.house.type.value: house_key(self.house)},
            "explanation": {
                "why": (f"In {self.house}, digits {digits} only fit in {', '.join(_keys(self.positions))}. "
                        f"Remove every other candidate from those cells."),
            },
        }


class Color(Enum):
    BLUE = "blue"
    ORANGE = "orange"

    def next(self) -> "Color":
        return Color.ORANGE if self is Color.BLUE else Color.BLUE


@dataclass(frozen=True)
class TooCrowdedHouse:
    """A house holding two cells of `color`; that color cannot hold the value."""

    house: House
    color: Color


@dataclass(frozen=True)
class SimpleColoring(Hint):
    value: Value
    blue: tuple[Position, ...]
    orange: tuple[Position, ...]
    eliminated: tuple[Position, ...]
    too_crowded_house: Optional[TooCrowdedHouse] = None

    def __post_init__(self):
        object.__setattr__(self, "value", Value.of(self.value))
        object.__setattr__(self, "blue", _positions(self.blue))
        object.__setattr__(self, "orange", _positions(self.orange))
        object.__setattr__(self, "eliminated", _positions(self.eliminated))
        _check(bool(self.blue) and bool(self.orange), "Both colors must have cells")
        _check(not set(self.blue) & set(self.orange), "A cell cannot have both colors")
        _check(bool(self.eliminated), "Must eliminate from at least one cell")
        if self.too_crowded_house is not None:
            _check(set(self.eliminated) == set(self.cells_of(self.too_crowded_house.color)),
                   "A too crowded house eliminates exactly the cells of the crowded color")
        else:
            _check(not set(self.eliminated) & (set(self.blue) | set(self.orange)),
                   "Colored cells cannot be eliminated when no house is too crowded")

    @property
    def technique(self) -> Technique:
        return Technique.SIMPLE_COLORING

    def cells_of(self, color: Color) -> tuple[Position, ...]:
        return self.blue if color is Color.BLUE else self.orange

    @property
    def cells_that_can_be_penciled_in(self) -> tuple[Position, ...]:
        if self.too_crowded_house is None:
            return ()
        return self.cells_of(self.too_crowded_house.color.next())

    @property
    def forcing_positions(self) -> tuple[Position, ...]:
        return tuple(sorted(self.blue + self.orange))

    @property
    def target_positions(self) -> tuple[Position, ...]:
        return self.eliminated

    @property
    def values(self) -> tuple[Value, ...]:
        return (self.value,)

    def apply(self, grid: "Grid") -> None:
        for p in self.eliminated:
            grid.cell_at(p).pencil_marks.remove(self.value)
        for p in self.cells_that_can_be_penciled_in:
            _place(grid, p, self.value)

    def to_payload(self) -> Move:
        eliminate = _keys(self.eliminated)
        payload: Move = {
            "technique": self.technique.key,
            "name": self.technique.display_name,
            "type": "elimination",
            "digit": int(self.value),
            "digits": [int(self.value)],
            "eliminate": eliminate,
            "eliminations": {k: [int(self.value)] for k in eliminate},
            "highlights": {"blue": _keys(self.blue), "orange": _keys(self.orange)},
        }
        crowded = self.too_crowded_house
        if crowded is None:
            why = (f"Either every blue or every orange cell holds {self.value}. "
                   f"Cells that see both colors cannot be {self.value}.")
        else:
            payload["type"] = "placement"
            payload["place"] = _keys(self.cells_that_can_be_penciled_in)
            payload["highlights"]["house"] = house_key(crowded.house)
            why = (f"Two {crowded.color.value} cells share {crowded.house}, so no {crowded.color.value} "
                   f"cell can be {self.value}. Every {crowded.color.next().value} cell is {self.value}.")
        payload["explanation"] = {"why": why}
        return payload
