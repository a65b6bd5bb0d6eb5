# tests/test_hints.py
import pytest

from hint_engine.errors import GivenCellError, InvalidHintError
from hint_engine.geometry import House, HouseType, Position, Value
from hint_engine.grid import Grid, GridBuilder
from hint_engine.hints import (
    BoxLineReduction,
    Color,
    HiddenMultiple,
    NakedMultiple,
    PointingPair,
    SimpleColoring,
    Single,
    Swordfish,
    Technique,
    TooCrowdedHouse,
    XWing,
    XyWing,
    XyzWing,
    house_key,
)

P = Position


def test_technique_keys_are_unique_and_resolvable():
    keys = [t.key for t in Technique]
    assert len(keys) == len(set(keys)) == 15
    assert Technique.from_key("x_wing") is Technique.X_WING
    assert str(Technique.BOX_LINE_REDUCTION) == "Box Line Reduction"
    with pytest.raises(ValueError):
        Technique.from_key("jellyfish")


def test_house_key():
    assert house_key(House.row(4)) == "r4"
    assert house_key(House.column(7)) == "c7"
    assert house_key(House.box(3)) == "b3"


def test_single_requires_position_in_house():
    with pytest.raises(InvalidHintError):
        Single(Value.ONE, House.row(2), P(1, 1), naked=True)
    assert issubclass(InvalidHintError, ValueError)


def test_single_apply_sets_value_and_clears_peers(classic_grid):
    hint = Single(Value.FIVE, House.row(5), P(5, 5), naked=True)
    assert hint.technique is Technique.NAKED_SINGLE
    hint.apply(classic_grid)
    assert classic_grid.cell_at(P(5, 5)).value is Value.FIVE
    assert not any(classic_grid.is_candidate(p, Value.FIVE) for p in P(5, 5).seen_by())


def test_single_cannot_overwrite_a_given(classic_grid):
    with pytest.raises(GivenCellError):
        Single(Value.ONE, House.row(1), P(1, 1), naked=True).apply(classic_grid)


def test_single_payload():
    payload = Single(Value.NINE, House.column(3), P(4, 3), naked=False).to_payload()
    assert payload["technique"] == "hidden_single"
    assert payload["type"] == "placement"
    assert payload["cell"] == "r4c3"
    assert payload["digit"] == 9
    assert payload["explanation"]["units"] == {"column": "c3"}
    assert "column 3" in payload["explanation"]["why"]


def test_hints_are_values():
    a = PointingPair(Value.SEVEN, [P(1, 3), P(1, 2)], [P(1, 8), P(1, 7)])
    b = PointingPair(Value.SEVEN, [P(1, 2), P(1, 3)], [P(1, 7), P(1, 8)])
    assert a == b
    assert hash(a) == hash(b)
    assert a.forcing_positions == (P(1, 2), P(1, 3))
    assert a != BoxLineReduction(Value.SEVEN, [P(2, 7), P(2, 8)], [P(1, 7), P(1, 8)])


def test_eliminating_hint_common_checks():
    with pytest.raises(InvalidHintError):
        PointingPair(Value.SEVEN, [P(1, 2)], [P(1, 7)])
    with pytest.raises(InvalidHintError):
        PointingPair(Value.SEVEN, [P(1, 2), P(1, 3)], [])
    with pytest.raises(InvalidHintError):
        PointingPair(Value.SEVEN, [P(1, 2), P(1, 3)], [P(1, 3)])


def test_pointing_pair_shape():
    hint = PointingPair(Value.SEVEN, [P(1, 2), P(1, 3)], [P(1, 7), P(1, 8)])
    assert hint.box == House.box(1)
    assert hint.line == House.row(1)
    with pytest.raises(InvalidHintError):
        PointingPair(Value.SEVEN, [P(1, 2), P(2, 3)], [P(1, 7)])
    with pytest.raises(InvalidHintError):
        PointingPair(Value.SEVEN, [P(1, 2), P(1, 3)], [P(2, 1)])


def test_box_line_reduction_shape():
    hint = BoxLineReduction(Value.SEVEN, [P(2, 7), P(2, 8)], [P(1, 7), P(1, 8)])
    assert hint.box == House.box(3)
    assert hint.line == House.row(2)
    with pytest.raises(InvalidHintError):
        BoxLineReduction(Value.SEVEN, [P(2, 7), P(2, 8)], [P(2, 1)])
    payload = hint.to_payload()
    assert payload["highlights"]["box"] == "b3"
    assert payload["highlights"]["row"] == "r2"


def test_naked_multiple():
    hint = NakedMultiple(House.row(1), [P(1, 1), P(1, 2)], [Value.ONE, Value.TWO], [P(1, 3)])
    assert hint.technique is Technique.NAKED_PAIR
    assert hint.positions == (P(1, 1), P(1, 2))
    with pytest.raises(InvalidHintError):
        NakedMultiple(House.row(1), [P(1, 1), P(1, 2)], [Value.ONE], [P(1, 3)])
    with pytest.raises(InvalidHintError):
        NakedMultiple(House.row(1), [P(1, 1), P(1, 2)], [Value.ONE, Value.TWO], [P(2, 3)])
    with pytest.raises(InvalidHintError):
        NakedMultiple(House.row(1), [P(1, c) for c in range(1, 6)], list(Value)[:5], [P(1, 9)])


def test_x_wing_needs_a_rectangle():
    hint = XWing(Value.THREE, [P(1, 2), P(1, 7), P(6, 2), P(6, 7)], [P(1, 1)])
    assert hint.corners[0] == P(1, 2)
    with pytest.raises(InvalidHintError):
        XWing(Value.THREE, [P(1, 2), P(1, 7), P(6, 2), P(5, 7)], [P(1, 1)])
    payload = hint.to_payload()
    assert payload["highlights"]["rows"] == ["r1", "r6"]
    assert payload["highlights"]["cols"] == ["c2", "c7"]
    assert payload["digit"] == 3


def test_swordfish_checks_its_houses():
    rows = [House.row(7), House.row(1), House.row(4)]
    ps = [P(1, 1), P(1, 4), P(4, 1), P(4, 7), P(7, 4), P(7, 7)]
    hint = Swordfish(Value.FIVE, rows, ps, [P(2, 1)])
    assert [h.number for h in hint.houses] == [1, 4, 7]
    with pytest.raises(InvalidHintError):
        Swordfish(Value.FIVE, rows, ps, [P(4, 2)])
    with pytest.raises(InvalidHintError):
        Swordfish(Value.FIVE, [House.row(1), House.row(4), House.column(7)], ps, [P(2, 1)])
    with pytest.raises(InvalidHintError):
        Swordfish(Value.FIVE, rows[:2], ps[:4], [P(2, 1)])


def test_xy_wing_checks():
    hint = XyWing(P(2, 4), [P(6, 4), P(3, 5)], Value.SEVEN, [P(4, 5), P(6, 5)])
    assert hint.technique is Technique.XY_WING
    assert hint.wings == (P(3, 5), P(6, 4))
    assert hint.to_payload()["highlights"]["pivot"] == "r2c4"
    with pytest.raises(InvalidHintError):
        XyWing(P(2, 4), [P(6, 4)], Value.SEVEN, [P(4, 5)])
    with pytest.raises(InvalidHintError):
        XyWing(P(2, 4), [P(6, 4), P(7, 7)], Value.SEVEN, [P(4, 5)])


def test_xyz_wing_targets_must_see_pivot():
    hint = XyzWing(P(1, 5), [P(1, 4), P(5, 5)], Value.ONE, [P(3, 5)])
    assert hint.technique is Technique.XYZ_WING
    with pytest.raises(InvalidHintError):
        XyzWing(P(1, 5), [P(1, 4), P(5, 5)], Value.ONE, [P(5, 4)])


def test_hidden_multiple():
    hint = HiddenMultiple(
        House.row(1),
        [P(1, 1), P(1, 2)],
        [Value.ONE, Value.TWO],
        {P(1, 2): [Value.FOUR], P(1, 1): [Value.THREE]},
    )
    assert hint.technique is Technique.HIDDEN_PAIR
    assert hint.target_positions == (P(1, 1), P(1, 2))
    assert hint.eliminations == {P(1, 1): (Value.THREE,), P(1, 2): (Value.FOUR,)}
    payload = hint.to_payload()
    assert payload["eliminations"] == {"r1c1": [3], "r1c2": [4]}
    assert payload["highlights"]["row"] == "r1"

    with pytest.raises(InvalidHintError):
        HiddenMultiple(House.row(1), [P(1, 1), P(1, 2)], [Value.ONE, Value.TWO], {})
    with pytest.raises(InvalidHintError):
        HiddenMultiple(House.row(1), [P(1, 1), P(1, 2)], [Value.ONE, Value.TWO], {P(1, 1): [Value.ONE]})
    with pytest.raises(InvalidHintError):
        HiddenMultiple(House.row(1), [P(1, 1), P(1, 2)], [Value.ONE, Value.TWO], {P(1, 3): [Value.FOUR]})


def test_hidden_multiple_apply():
    grid = GridBuilder().row(1, "[123][124][34][345][345]6789").build()
    HiddenMultiple(
        House.row(1), [P(1, 1), P(1, 2)], [Value.ONE, Value.TWO],
        {P(1, 1): [Value.THREE], P(1, 2): [Value.FOUR]},
    ).apply(grid)
    assert grid.cell_at(P(1, 1)).pencil_marks.values == (Value.ONE, Value.TWO)
    assert grid.cell_at(P(1, 2)).pencil_marks.values == (Value.ONE, Value.TWO)


def test_simple_coloring_checks():
    blue = [P(1, 1), P(2, 3)]
    orange = [P(1, 3)]
    with pytest.raises(InvalidHintError):
        SimpleColoring(Value.ONE, blue, [], [P(5, 5)])
    with pytest.raises(InvalidHintError):
        SimpleColoring(Value.ONE, blue, [P(1, 1)], [P(5, 5)])
    with pytest.raises(InvalidHintError):
        SimpleColoring(Value.ONE, blue, orange, [P(1, 3)])
    crowded = TooCrowdedHouse(House.box(1), Color.BLUE)
    with pytest.raises(InvalidHintError):
        SimpleColoring(Value.ONE, blue, orange, [P(1, 1)], crowded)
    hint = SimpleColoring(Value.ONE, blue, orange, blue, crowded)
    assert hint.cells_that_can_be_penciled_in == (P(1, 3),)
    payload = hint.to_payload()
    assert payload["type"] == "placement"
    assert payload["place"] == ["r1c3"]
    assert payload["highlights"]["house"] == "b1"


def test_color_next():
    assert Color.BLUE.next() is Color.ORANGE
    assert Color.ORANGE.next() is Color.BLUE


def test_apply_leaves_givens_alone():
    grid = GridBuilder().row(1, "[12][12]3[124]56789").build()
    hint = NakedMultiple(House.row(1), [P(1, 1), P(1, 2)], [Value.ONE, Value.TWO], [P(1, 3), P(1, 4)])
    hint.apply(grid)
    assert grid.cell_at(P(1, 4)).pencil_marks.values == (Value.FOUR,)
    assert grid.cell_at(P(1, 3)).value is Value.THREE


def test_describe_returns_explanation():
    hint = PointingPair(Value.SEVEN, [P(1, 2), P(1, 3)], [P(1, 7), P(1, 8)])
    assert hint.describe() == hint.to_payload()["explanation"]["why"]
    assert "box 1" in hint.describe()


def test_hint_does_not_reference_the_grid(classic_grid):
    hint = Single(Value.FIVE, House.row(5), P(5, 5), naked=True)
    other = Grid.empty()
    hint.apply(other)
    assert other.cell_at(P(5, 5)).value is Value.FIVE
    assert classic_grid.cell_at(P(5, 5)).value is None
    assert HouseType.ROW is hint.house.type
