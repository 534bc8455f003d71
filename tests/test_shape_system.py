from itertools import permutations

import pytest

from loopfill.components.board import Board
from loopfill.components.fill_region import FillRegion
from loopfill.events.bus import (
    EventBus,
    EVENT_SHAPE_CREATED,
    EVENT_SHAPE_FILLED,
    EVENT_SHAPES_BAKED,
)
from loopfill.systems import shape_system as shape_module
from loopfill.utils.movement import Direction, Turn
from loopfill.world import create_world

from tests.helpers import (
    DEAD_END,
    L_SHAPE,
    LOLLIPOP,
    OPEN_GRID,
    SQUARE_THREE_DOTS,
    TWIN_SQUARES,
    TWIN_SQUARES_ONE_DOT,
    U_SHAPE,
    build_level,
    covered_cells,
    enclosed_cells,
)


def _capture(bus, name):
    events = []
    bus.subscribe(name, lambda sender, **payload: events.append(payload))
    return events


def _board(world) -> Board:
    return world.component_for_entity(world.level_system.level_entity, Board)


def test_open_grid_single_square_and_single_rectangle():
    bus, world = build_level(OPEN_GRID)
    filled = _capture(bus, EVENT_SHAPE_FILLED)

    shapes = world.shape_system.shapes()
    assert len(shapes) == 1
    shape = shapes[0]
    assert shape.signature == (0, 1, 4, 5)
    assert shape.tiles == frozenset({0, 1, 4, 5})
    assert shape.dots == (0,)

    world.level_system.consume_dot(0)

    assert len(filled) == 1
    assert filled[0]["shape"] is shape
    assert filled[0]["rects"] == [(0, 5)]
    assert shape.completed and shape.rects == [(0, 5)]
    regions = [region for _, region in world.get_component(FillRegion)]
    assert [region.rects for region in regions] == [[(0, 5)]]
    assert regions[0].shape_id == shape.shape_id


def test_only_inner_loop_is_found_inside_enclosing_outline():
    _, world = build_level(TWIN_SQUARES_ONE_DOT)

    signatures = [shape.signature for shape in world.shape_system.shapes()]

    assert signatures == [(0, 2, 10, 12)]


def test_same_loop_from_several_dots_registers_once():
    _, world = build_level(SQUARE_THREE_DOTS)

    shapes = world.shape_system.shapes()
    assert len(shapes) == 1
    shape = shapes[0]
    assert set(shape.dots) == {0, 2, 6}
    assert shape.remaining == 3
    for tile in (0, 2, 6):
        assert world.shape_system.shapes_at(tile) == [shape]


@pytest.mark.parametrize("order", list(permutations((0, 2, 6))))
def test_shape_completes_once_on_last_dot(order):
    bus, world = build_level(SQUARE_THREE_DOTS)
    filled = _capture(bus, EVENT_SHAPE_FILLED)
    shape = world.shape_system.shapes()[0]

    for count, tile in enumerate(order, start=1):
        world.shape_system.remove_at(tile)
        assert len(filled) == (1 if count == len(order) else 0)

    # Removing again never refires completion.
    for tile in order:
        world.shape_system.remove_at(tile)
    assert len(filled) == 1
    assert shape.remaining == 0
    assert filled[0]["rects"] == [(0, 8)]


def test_shared_dot_counts_toward_both_shapes():
    bus, world = build_level(TWIN_SQUARES)
    filled = _capture(bus, EVENT_SHAPE_FILLED)

    shapes = {shape.signature: shape for shape in world.shape_system.shapes()}
    assert set(shapes) == {(0, 2, 10, 12), (2, 4, 12, 14)}
    left, right = shapes[(0, 2, 10, 12)], shapes[(2, 4, 12, 14)]
    assert set(world.shape_system.shapes_at(2)) == {left, right}

    world.level_system.consume_dot(2)
    assert (left.remaining, right.remaining) == (1, 1)
    assert filled == []

    world.level_system.consume_dot(0)
    assert [event["shape"] for event in filled] == [left]
    assert left.rects == [(0, 12)]
    assert right.remaining == 1

    world.level_system.consume_dot(4)
    assert [event["shape"] for event in filled] == [left, right]
    assert right.rects == [(2, 14)]


@pytest.mark.parametrize("lines", [DEAD_END, LOLLIPOP])
def test_dot_without_a_closable_loop_registers_nothing(lines):
    bus, world = build_level(lines)
    filled = _capture(bus, EVENT_SHAPE_FILLED)

    assert world.shape_system.shapes() == []
    world.shape_system.remove_at(0)
    assert filled == []


def test_rebake_is_idempotent():
    _, world = build_level(TWIN_SQUARES)
    before = sorted(shape.signature for shape in world.shape_system.shapes())

    world.shape_system.rebake()
    after = sorted(shape.signature for shape in world.shape_system.shapes())

    assert before == after
    assert len(after) == 2


def test_bake_again_without_changes_adds_nothing():
    _, world = build_level(TWIN_SQUARES)

    assert world.shape_system.bake() == 0
    assert len(world.shape_system.shapes()) == 2


def test_rebake_discards_shape_identity():
    _, world = build_level(OPEN_GRID)
    old = world.shape_system.shapes()[0]

    world.shape_system.rebake()
    new = world.shape_system.shapes()[0]

    assert new.signature == old.signature
    assert new.shape_id != old.shape_id
    assert world.shape_system.shapes_at(0) == [new]


def test_bake_events():
    bus = EventBus()
    world = create_world(bus)
    created = _capture(bus, EVENT_SHAPE_CREATED)
    baked = _capture(bus, EVENT_SHAPES_BAKED)

    world.level_system.load(TWIN_SQUARES)

    assert len(created) == 2
    assert {event["shape"].signature for event in created} == {(0, 2, 10, 12), (2, 4, 12, 14)}
    assert baked == [{"count": 2}]


def test_fill_list_receives_rectangles():
    _, world = build_level(L_SHAPE)
    shape = world.shape_system.shapes()[0]
    fill_list = []
    shape.set_fill_list(fill_list)

    world.level_system.consume_dot(0)

    assert fill_list == [(0, 12), (10, 24)]
    assert shape.get_fill_list() is fill_list


def test_add_point_is_idempotent():
    _, world = build_level(OPEN_GRID)
    registry = world.shape_system.registry()
    marker = registry.markers[0]

    world.shape_system.add_point(0)

    assert registry.markers[0] is marker
    assert len(registry.markers) == 1


def test_operations_without_level_are_noops():
    bus = EventBus()
    world = create_world(bus)

    world.shape_system.add_point(3)
    world.shape_system.remove_at(3)

    assert world.shape_system.bake() == 0
    assert world.shape_system.registry() is None
    assert world.shape_system.shapes() == []


@pytest.mark.parametrize("lines", [OPEN_GRID, TWIN_SQUARES, SQUARE_THREE_DOTS, L_SHAPE, U_SHAPE])
def test_rectangles_partition_enclosed_area(lines):
    bus, world = build_level(lines)
    filled = _capture(bus, EVENT_SHAPE_FILLED)
    board = _board(world)
    level = world.level_system.level()

    for tile in sorted(level.dots):
        world.level_system.consume_dot(tile)

    assert filled
    for event in filled:
        shape = event["shape"]
        counts = covered_cells(board, event["rects"])
        assert set(counts.values()) == {1}
        assert set(counts) == enclosed_cells(board, shape.exits)
        for tile in shape.tiles:
            col, row = board.cell(tile)
            assert any(
                board.cell(ul)[0] <= col <= board.cell(lr)[0] and board.cell(ul)[1] <= row <= board.cell(lr)[1]
                for ul, lr in event["rects"]
            )


def test_explored_direction_is_shared_by_every_dot_on_the_shape(monkeypatch):
    traced = []
    real_trace = shape_module.trace_loop

    def recording_trace(board, flags_for, markers, tile, facing, preferred, alternate):
        traced.append((tile, facing, preferred))
        return real_trace(board, flags_for, markers, tile, facing, preferred, alternate)

    monkeypatch.setattr(shape_module, "trace_loop", recording_trace)
    _, world = build_level(SQUARE_THREE_DOTS)

    registry = world.shape_system.registry()
    assert {tile: marker.explored for tile, marker in registry.markers.items()} == {
        0: {Direction.RIGHT},
        2: {Direction.RIGHT},
        6: {Direction.RIGHT},
    }
    # The first bias closes the square heading right; nobody traces right again.
    assert [entry for entry in traced if entry[1] is Direction.RIGHT] == [
        (0, Direction.RIGHT, Turn.TO_LEFT),
    ]
    assert traced == [
        (0, Direction.RIGHT, Turn.TO_LEFT),
        (0, Direction.DOWN, Turn.TO_LEFT),
        (0, Direction.DOWN, Turn.TO_RIGHT),
        (2, Direction.DOWN, Turn.TO_LEFT),
        (2, Direction.DOWN, Turn.TO_RIGHT),
        (6, Direction.UP, Turn.TO_LEFT),
        (6, Direction.UP, Turn.TO_RIGHT),
    ]
    assert len(world.shape_system.shapes()) == 1
