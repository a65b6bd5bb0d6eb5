# tests/test_coloring.py
from hint_engine.geometry import House, Position, Value
from hint_engine.grid import GridBuilder
from hint_engine.hints import Color, Technique
from hint_engine.sudoku_tools import apply_hint_tool
from hint_engine.techniques.coloring import find_simple_coloring

P = Position


def _sees_both_grid(row1: str, row3: str):
    return (
        GridBuilder()
        .row(1, row1)
        .row(2, "154 378 692")
        .row(3, row3)
        .row(4, "62[57] 831 [57]49")
        .row(5, "[89][789]3 456 2[178][178]")
        .row(6, "41[58] 297 [58]63")
        .row(7, "5[78]1 623 9[78][47]")
        .row(8, "2[47][68] 719 3[58][568]")
        .row(9, "[39][39][67] 584 1[27][67]")
        .build()
    )


def _colored_cells_keep_value(grid, hint):
    cells = hint.cells_of(Color.BLUE) + hint.cells_of(Color.ORANGE)
    return all(grid.is_candidate(p, hint.value) for p in cells)


def test_sees_both_colors():
    grid = _sees_both_grid("[38]6[27] 945 [78][1378][178]", "7[38]9 162 4[358][58]")
    hint = find_simple_coloring(grid)
    assert hint is not None
    assert hint.technique is Technique.SIMPLE_COLORING
    assert hint.value is Value.EIGHT
    assert set(hint.target_positions) == {P(1, 8), P(3, 8)}
    assert hint.too_crowded_house is None
    assert hint.cells_that_can_be_penciled_in == ()

    hint.apply(grid)
    assert grid.cell_at(P(1, 8)).pencil_marks.values == (Value.ONE, Value.THREE, Value.SEVEN)
    assert grid.cell_at(P(3, 8)).pencil_marks.values == (Value.THREE, Value.FIVE)
    assert _colored_cells_keep_value(grid, hint)


def test_sees_both_colors_single_target():
    grid = _sees_both_grid("[38]6[27] 945 [78][137][178]", "7[38]9 162 4[35][58]")
    hint = find_simple_coloring(grid)
    assert hint is not None
    assert hint.value is Value.EIGHT
    assert hint.target_positions == (P(5, 9),)
    assert hint.too_crowded_house is None

    hint.apply(grid)
    assert grid.cell_at(P(5, 9)).pencil_marks.values == (Value.ONE, Value.SEVEN)
    assert _colored_cells_keep_value(grid, hint)


def _crowded_grid():
    return (
        GridBuilder()
        .row(1, "289 [146][46][14] 3[47]5")
        .row(2, "364 [57]9[57] 812")
        .row(3, "517 283 964")
        .row(4, "893 [457]2[457] 6[45]1")
        .row(5, "145 836 729")
        .row(6, "726 [19][45][19] [45]8[34]")
        .row(7, "451 378 296")
        .row(8, "[69]72 [4569]1[459] [45]38")
        .row(9, "[69]38 [4569][456][2] 1[45]7")
        .build()
    )


def test_too_crowded_house():
    grid = _crowded_grid()
    hint = find_simple_coloring(grid)
    assert hint is not None
    assert hint.value is Value.FIVE
    assert set(hint.target_positions) == {P(6, 7), P(9, 5), P(9, 8)}
    assert hint.too_crowded_house is not None
    assert hint.too_crowded_house.house == House.row(9)
    assert set(hint.cells_that_can_be_penciled_in) == {P(4, 8), P(6, 5), P(8, 7)}

    payload = hint.to_payload()
    assert payload["type"] == "placement"
    assert payload["highlights"]["house"] == "r9"

    hint.apply(grid)
    assert all(grid.cell_at(p).value is Value.FIVE for p in hint.cells_that_can_be_penciled_in)
    assert not any(grid.cell_at(p).pencil_marks.contains(Value.FIVE) for p in hint.target_positions)
    for placed in hint.cells_that_can_be_penciled_in:
        assert not any(grid.is_candidate(p, Value.FIVE) for p in placed.seen_by())
    assert grid.cell_at(P(4, 4)).pencil_marks.values == (Value.FOUR, Value.SEVEN)
    assert grid.cell_at(P(8, 6)).pencil_marks.values == (Value.FOUR, Value.NINE)


def test_needs_candidates_everywhere():
    grid = GridBuilder().row(1, "[12][12]3456789").build()
    assert find_simple_coloring(grid) is None


def test_placement_matches_the_tool_path():
    grid = _crowded_grid()
    rows, cands = grid.to_rows(), grid.candidates_map()
    hint = find_simple_coloring(grid)
    via_tool = apply_hint_tool(rows, cands, hint.to_payload())
    hint.apply(grid)
    assert via_tool["current"] == grid.to_rows()
    assert via_tool["candidates"] == grid.candidates_map()
