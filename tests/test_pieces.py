import random

import pytest

from boxdrop.pieces import (
    SHAPE_COLORS,
    SHAPE_OFFSETS,
    STEP,
    Box,
    BoxGroup,
    BoxShape,
    Key,
)


class _FixedRng:
    def __init__(self, value):
        self.value = value

    def randrange(self, stop):
        assert stop == 7
        return self.value


def _bounded(min_x=-1000, max_x=1000, max_y=1000, blocked=()):
    blocked = set(blocked)

    def collides(cells):
        return any(
            x < min_x or x > max_x or y > max_y or (x, y) in blocked for x, y in cells
        )

    return collides


@pytest.mark.parametrize("shape", [s for s in BoxShape if s is not BoxShape.RANDOM])
def test_create_box_at_origin_uses_shape_offsets(shape):
    group = BoxGroup()
    group.create_box((0, 0), shape)
    assert group.cells() == [tuple(p) for p in SHAPE_OFFSETS[shape]]
    assert group.current_shape is shape
    assert {box.color for box in group.boxes} == {SHAPE_COLORS[shape]}


def test_i_shape_color_from_table():
    group = BoxGroup()
    group.create_box((0, 0), BoxShape.I)
    assert group.boxes[0].color == (200, 0, 0, 100)


def test_random_shape_uses_rng():
    group = BoxGroup(rng=_FixedRng(3))
    group.create_box((0, 0))
    assert group.current_shape is BoxShape.O


def test_random_shape_never_stays_random():
    group = BoxGroup(rng=random.Random(1))
    for _ in range(20):
        group.clear_box_group(destroy_box=True)
        group.create_box((0, 0), BoxShape.RANDOM)
        assert group.current_shape is not BoxShape.RANDOM
        assert len(group.boxes) == 4


def test_initial_shape_is_random():
    assert BoxGroup().current_shape is BoxShape.RANDOM


def test_create_box_positions_boxes_at_point():
    group = BoxGroup()
    group.create_box((300, 70), BoxShape.T)
    expected = [(300 + x, 70 + y) for x, y in SHAPE_OFFSETS[BoxShape.T]]
    assert group.cells() == expected
    assert [box.pos for box in group.boxes] == expected


def test_move_by_translates_all_boxes():
    group = BoxGroup()
    group.create_box((0, 0), BoxShape.S)
    before = group.cells()
    group.move_by(STEP, 2 * STEP)
    assert group.cells() == [(x + STEP, y + 2 * STEP) for x, y in before]


def test_four_quarter_turns_restore_cells():
    group = BoxGroup()
    group.create_box((100, 100), BoxShape.L)
    before = group.cells()
    for _ in range(4):
        group.rotate(90)
    assert group.cells() == before
    assert group.rotation == 0


def test_o_shape_rotation_keeps_same_cells():
    group = BoxGroup()
    group.create_box((0, 0), BoxShape.O)
    before = set(group.cells())
    group.rotate(90)
    assert set(group.cells()) == before


def test_rotation_keeps_cells_distinct_and_on_grid():
    group = BoxGroup()
    group.create_box((0, 0), BoxShape.Z)
    group.rotate(90)
    cells = group.cells()
    assert len(set(cells)) == 4
    assert all((x - 10) % STEP == 0 and (y - 10) % STEP == 0 for x, y in cells)


def test_rotate_rejects_non_right_angle():
    group = BoxGroup()
    group.create_box((0, 0), BoxShape.I)
    with pytest.raises(ValueError):
        group.rotate(45)


def test_left_blocked_by_wall_reverts():
    group = BoxGroup(collides=_bounded(min_x=-30))
    group.create_box((0, 0), BoxShape.I)
    before = group.cells()
    group.key_press(Key.LEFT)
    assert group.cells() == before


def test_right_moves_when_free():
    group = BoxGroup(collides=_bounded())
    group.create_box((0, 0), BoxShape.I)
    group.key_press(Key.RIGHT)
    assert group.pos == (STEP, 0)


def test_up_rotation_reverted_on_collision():
    group = BoxGroup(collides=_bounded(max_y=-10))
    group.create_box((0, 0), BoxShape.I)
    before = group.cells()
    group.key_press(Key.UP)
    assert group.cells() == before
    assert group.rotation == 0


def test_up_rotates_when_free():
    group = BoxGroup(collides=_bounded())
    group.create_box((0, 0), BoxShape.I)
    group.key_press(Key.UP)
    assert group.rotation == 90
    assert len({x for x, _ in group.cells()}) == 1


def test_down_landing_releases_boxes_and_requests_new_piece():
    received = []
    group = BoxGroup(collides=_bounded(max_y=-10))
    group.on_need_new_box.append(received.append)
    group.create_box((0, 0), BoxShape.I)
    before = group.cells()
    group.key_press(Key.DOWN)
    assert len(received) == 1
    assert [box.pos for box in received[0]] == before
    assert group.boxes == []


def test_move_one_step_moves_when_free():
    group = BoxGroup(collides=_bounded())
    group.create_box((0, 0), BoxShape.O)
    assert group.move_one_step() is True
    assert group.pos == (0, STEP)


def test_space_drops_to_floor():
    received = []
    group = BoxGroup(collides=_bounded(max_y=200))
    group.on_need_new_box.append(received.append)
    group.create_box((0, 0), BoxShape.O)
    group.key_press(Key.SPACE)
    landed = [box.pos for box in received[0]]
    assert max(y for _, y in landed) <= 200
    assert max(y for _, y in landed) + STEP > 200


def test_space_stops_on_blocked_cell():
    received = []
    group = BoxGroup(collides=_bounded(blocked={(-10, 90)}))
    group.on_need_new_box.append(received.append)
    group.create_box((0, 0), BoxShape.O)
    group.key_press(Key.SPACE)
    landed = {box.pos for box in received[0]}
    assert (-10, 70) in landed
    assert (-10, 90) not in landed


def test_create_box_colliding_finishes_game():
    finished = []
    group = BoxGroup(collides=lambda cells: True)
    group.on_game_finished.append(lambda: finished.append(True))
    group.start_timer(500)
    group.create_box((0, 0), BoxShape.J)
    assert finished == [True]
    assert group.timer_running is False


def test_clear_box_group_destroy_returns_nothing():
    group = BoxGroup()
    group.create_box((0, 0), BoxShape.T)
    assert group.clear_box_group(destroy_box=True) == []
    assert group.boxes == []


def test_clear_box_group_keeps_scene_positions():
    group = BoxGroup()
    group.create_box((40, 60), BoxShape.Z)
    group.rotate(90)
    expected = group.cells()
    released = group.clear_box_group()
    assert [box.pos for box in released] == expected


def test_timer_start_and_stop():
    group = BoxGroup()
    group.start_timer(500)
    assert (group.interval, group.timer_running) == (500, True)
    group.stop_timer()
    assert group.timer_running is False


def test_box_move_by():
    box = Box(10, 10)
    box.move_by(0, STEP)
    assert box.pos == (10, 10 + STEP)