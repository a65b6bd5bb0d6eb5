# tests/test_intersections.py
from hint_engine.geometry import House, Position, Value
from hint_engine.grid import GridBuilder
from hint_engine.techniques.intersections import find_box_line_reduction, find_pointing_pair

P = Position


def _locked_grid():
    return (
        GridBuilder()
        .row(1, "1[27][167] [58]39 [247][578][68]")
        .row(2, "[345][345][345] 12[58] [247][578][68]")
        .row(3, "[289][289][289] [467][467][467] 13[568]")
        .build()
    )


def test_pointing_pair():
    grid = _locked_grid()
    hint = find_pointing_pair(grid)
    assert hint is not None
    assert hint.value is Value.SEVEN
    assert set(hint.forcing_positions) == {P(1, 2), P(1, 3)}
    assert set(hint.target_positions) == {P(1, 7), P(1, 8)}
    assert hint.box == House.box(1)
    assert hint.line == House.row(1)

    hint.apply(grid)
    assert grid.cell_at(P(1, 7)).pencil_marks.values == (Value.TWO, Value.FOUR)
    assert grid.cell_at(P(1, 8)).pencil_marks.values == (Value.FIVE, Value.EIGHT)


def test_box_line_reduction():
    grid = _locked_grid()
    hint = find_box_line_reduction(grid)
    assert hint is not None
    assert hint.value is Value.SEVEN
    assert set(hint.forcing_positions) == {P(2, 7), P(2, 8)}
    assert set(hint.target_positions) == {P(1, 7), P(1, 8)}
    assert hint.line == House.row(2)
    assert hint.box == House.box(3)


def test_no_locked_candidates_on_unmarked_grid():
    grid = GridBuilder().row(1, "123456789").build()
    assert find_pointing_pair(grid) is None
    assert find_box_line_reduction(grid) is None


def test_pointing_pair_payload():
    payload = find_pointing_pair(_locked_grid()).to_payload()
    assert payload["technique"] == "pointing_pair"
    assert payload["digit"] == 7
    assert payload["eliminate"] == ["r1c7", "r1c8"]
    assert payload["highlights"]["cells"] == ["r1c2", "r1c3"]
