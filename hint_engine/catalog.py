"""Technique catalog: named detectors in the solver's priority order (simplest first)."""

# catalog.py
# TECHNIQUES is built once at import time. New detectors are added with
# register(), which needs no change to the Technique enum or to the solver.

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from hint_engine.grid import Grid
from hint_engine.hints import Hint, Technique
from hint_engine.techniques.coloring import find_simple_coloring
from hint_engine.techniques.fish import find_swordfish, find_x_wing
from hint_engine.techniques.intersections import find_box_line_reduction, find_pointing_pair
from hint_engine.techniques.singles import find_hidden_single, find_naked_single
from hint_engine.techniques.subsets import (
    find_hidden_pair,
    find_hidden_quadruple,
    find_hidden_triple,
    find_naked_pair,
    find_naked_quadruple,
    find_naked_triple,
)
from hint_engine.techniques.wings import find_xy_wing, find_xyz_wing


class Detector(Protocol):
    def __call__(self, grid: Grid) -> Optional[Hint]:
        ...


@dataclass(frozen=True)
class SolvingTechnique:
    key: str
    name: str
    detector: Detector

    @classmethod
    def of(cls, technique: Technique, detector: Detector) -> "SolvingTechnique":
        return cls(technique.key, technique.display_name, detector)

    def analyze(self, grid: Grid) -> Optional[Hint]:
        """Run the detector. Never mutates the grid; None when the pattern is absent."""
        return self.detector(grid)

    def __str__(self) -> str:
        return self.name


TECHNIQUES: list[SolvingTechnique] = [
    SolvingTechnique.of(Technique.NAKED_SINGLE, find_naked_single),
    SolvingTechnique.of(Technique.HIDDEN_SINGLE, find_hidden_single),
    SolvingTechnique.of(Technique.POINTING_PAIR, find_pointing_pair),
    SolvingTechnique.of(Technique.BOX_LINE_REDUCTION, find_box_line_reduction),
    SolvingTechnique.of(Technique.NAKED_PAIR, find_naked_pair),
    SolvingTechnique.of(Technique.HIDDEN_PAIR, find_hidden_pair),
    SolvingTechnique.of(Technique.NAKED_TRIPLE, find_naked_triple),
    SolvingTechnique.of(Technique.HIDDEN_TRIPLE, find_hidden_triple),
    SolvingTechnique.of(Technique.NAKED_QUADRUPLE, find_naked_quadruple),
    SolvingTechnique.of(Technique.HIDDEN_QUADRUPLE, find_hidden_quadruple),
    SolvingTechnique.of(Technique.X_WING, find_x_wing),
    SolvingTechnique.of(Technique.XY_WING, find_xy_wing),
    SolvingTechnique.of(Technique.SWORDFISH, find_swordfish),
    SolvingTechnique.of(Technique.XYZ_WING, find_xyz_wing),
    SolvingTechnique.of(Technique.SIMPLE_COLORING, find_simple_coloring),
]


def register(
    technique: SolvingTechnique,
    before: Optional[str] = None,
    catalog: Optional[list[SolvingTechnique]] = None,
) -> SolvingTechnique:
    """Add `technique` to `catalog` (TECHNIQUES by default), at the end or ahead of key `before`."""
    catalog = TECHNIQUES if catalog is None else catalog
    keys = [t.key for t in catalog]
    if technique.key in keys:
        raise ValueError(f"Technique already registered: {technique.key!r}")
    if before is None:
        catalog.append(technique)
    elif before in keys:
        catalog.insert(keys.index(before), technique)
    else:
        raise ValueError(f"Unknown technique: {before!r}")
    return technique


def default_techniques() -> tuple[SolvingTechnique, ...]:
    return tuple(TECHNIQUES)


def techniques_by_key(keys: Iterable[str]) -> tuple[SolvingTechnique, ...]:
    """The techniques named by `keys`, in the order given."""
    by_key = {t.key: t for t in TECHNIQUES}
    selected = []
    for key in keys:
        if key not in by_key:
            raise ValueError(f"Unknown technique: {key!r}. Known: {', '.join(by_key)}")
        selected.append(by_key[key])
    return tuple(selected)


def find_first_hint(grid: Grid, techniques: Optional[Iterable[SolvingTechnique]] = None) -> Optional[Hint]:
    """The hint of the first technique, in priority order, that finds one."""
    for technique in TECHNIQUES if techniques is None else techniques:
        hint = technique.analyze(grid)
        if hint is not None:
            return hint
    return None
