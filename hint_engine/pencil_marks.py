"""Per-cell candidate annotations stored as 9-bit masks (bit v-1 set means digit v is marked)."""

# pencil_marks.py
# Two independent sets per cell:
# - center marks: the live candidates every technique works on
# - corner marks: free annotations, never read by the solving logic
# A given cell shares one immutable, empty instance.

from __future__ import annotations

from typing import Iterable

from hint_engine.errors import GivenCellError
from hint_engine.geometry import ALL_VALUES, Value

FULL_MASK = 0x1FF


def bit(value: Value) -> int:
    return 1 << (int(value) - 1)


def mask_of(values: Iterable[Value]) -> int:
    m = 0
    for v in values:
        m |= bit(Value.of(v))
    return m


def values_of(mask: int) -> tuple[Value, ...]:
    return tuple(v for v in ALL_VALUES if mask & bit(v))


def popcount(mask: int) -> int:
    return bin(mask).count("1")


class PencilMarks:
    __slots__ = ("_center", "_corner")

    def __init__(self, center: int = 0, corner: int = 0):
        self._center = center & FULL_MASK
        self._corner = corner & FULL_MASK

    @staticmethod
    def for_given_cell() -> "PencilMarks":
        return _GIVEN_CELL_MARKS

    @classmethod
    def for_unknown_cell(cls) -> "PencilMarks":
        return cls()

    # -- center marks (candidates) --

    @property
    def mask(self) -> int:
        return self._center

    @property
    def values(self) -> tuple[Value, ...]:
        return values_of(self._center)

    @property
    def is_empty(self) -> bool:
        return self._center == 0

    def __len__(self) -> int:
        return popcount(self._center)

    def contains(self, value: Value) -> bool:
        return bool(self._center & bit(value))

    __contains__ = contains

    def toggle(self, value: Value) -> "PencilMarks":
        self._center ^= bit(value)
        return self

    def remove(self, value: Value) -> None:
        self._center &= ~bit(value)

    def remove_mask(self, mask: int) -> None:
        self._center &= ~mask

    def set_values(self, values: Iterable[Value]) -> None:
        self._center = mask_of(values)

    def set_mask(self, mask: int) -> None:
        self._center = mask & FULL_MASK

    def clear(self) -> None:
        self._center = 0

    # -- corner marks (annotations) --

    @property
    def corner_mask(self) -> int:
        return self._corner

    @property
    def corner_values(self) -> tuple[Value, ...]:
        return values_of(self._corner)

    def corner_contains(self, value: Value) -> bool:
        return bool(self._corner & bit(value))

    def toggle_corner(self, value: Value) -> "PencilMarks":
        self._corner ^= bit(value)
        return self

    def remove_corner(self, value: Value) -> None:
        self._corner &= ~bit(value)

    def clear_corner(self) -> None:
        self._corner = 0

    def copy(self) -> "PencilMarks":
        return PencilMarks(self._center, self._corner)

    def __eq__(self, other):
        if not isinstance(other, PencilMarks):
            return NotImplemented
        return self._center == other._center and self._corner == other._corner

    __hash__ = None

    def __repr__(self) -> str:
        center = "".join(str(v) for v in self.values)
        corner = "".join(str(v) for v in self.corner_values)
        return f"PencilMarks(center=[{center}], corner=[{corner}])"


class _GivenCellMarks(PencilMarks):
    """Always empty. Every mutation is a caller bug."""

    __slots__ = ()

    def _refuse(self, *args, **kwargs):
        raise GivenCellError("The pencil marks of a given cell cannot be changed")

    toggle = _refuse
    remove = _refuse
    remove_mask = _refuse
    set_values = _refuse
    set_mask = _refuse
    clear = _refuse
    toggle_corner = _refuse
    remove_corner = _refuse
    clear_corner = _refuse

    def copy(self) -> "PencilMarks":
        return self


_GIVEN_CELL_MARKS = _GivenCellMarks()
