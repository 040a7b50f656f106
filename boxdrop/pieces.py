"""Falling pieces: single boxes and the four-box group the player steers."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Iterable, Optional

STEP = 20
"""Distance, in scene units, of one move and the width of one box."""

Point = tuple[float, float]
Color = tuple[int, int, int, int]


class BoxShape(IntEnum):
    """The seven tetromino shapes, plus a request for a random one."""

    I = 0
    J = 1
    L = 2
    O = 3
    S = 4
    T = 5
    Z = 6
    RANDOM = 7


class Key(Enum):
    """Keys the piece responds to."""

    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    SPACE = "space"


SHAPE_COLORS: dict[BoxShape, Color] = {
    BoxShape.I: (200, 0, 0, 100),
    BoxShape.J: (255, 200, 0, 100),
    BoxShape.L: (0, 0, 200, 100),
    BoxShape.O: (0, 200, 0, 100),
    BoxShape.S: (0, 200, 255, 100),
    BoxShape.T: (200, 0, 255, 100),
    BoxShape.Z: (150, 100, 100, 100),
}

SHAPE_OFFSETS: dict[BoxShape, tuple[Point, Point, Point, Point]] = {
    BoxShape.I: ((-30, -10), (-10, -10), (10, -10), (30, -10)),
    BoxShape.J: ((10, -10), (10, 10), (-10, 30), (10, 30)),
    BoxShape.L: ((-10, -10), (-10, 10), (-10, 30), (10, 30)),
    BoxShape.O: ((-10, -10), (10, -10), (-10, 10), (10, 10)),
    BoxShape.S: ((10, -10), (30, -10), (-10, 10), (10, 10)),
    BoxShape.T: ((-10, -10), (10, -10), (30, -10), (10, 10)),
    BoxShape.Z: ((-10, -10), (10, -10), (10, 10), (30, 10)),
}


@dataclass(eq=False)
class Box:
    """One square of a piece, positioned by its centre in scene coordinates."""

    x: float
    y: float
    color: Color = (255, 0, 0, 255)

    @property
    def pos(self) -> Point:
        return (self.x, self.y)

    def move_by(self, dx: float, dy: float) -> None:
        self.x += dx
        self.y += dy


def _turn(offset: Point, quarter_turns: int) -> Point:
    x, y = offset
    for _ in range(quarter_turns % 4):
        x, y = -y, x
    return (x, y)


class BoxGroup:
    """A piece of four boxes that moves, rotates and falls as one.

    ``collides`` is called with the scene centres of the group's boxes and
    returns True when any of them overlaps something outside the group.
    Listeners in ``on_need_new_box`` receive the boxes released when the
    piece lands; listeners in ``on_game_finished`` are called with no
    arguments when a new piece collides as soon as it appears.
    """

    def __init__(
        self,
        collides: Optional[Callable[[list[Point]], bool]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._collides = collides if collides is not None else (lambda cells: False)
        self._rng = rng if rng is not None else random.Random()
        self.x: float = 0
        self.y: float = 0
        self.rotation: int = 0
        self._members: list[tuple[Box, Point]] = []
        self.current_shape = BoxShape.RANDOM
        self.interval: Optional[int] = None
        self.timer_running = False
        self.on_need_new_box: list[Callable[[list[Box]], None]] = []
        self.on_game_finished: list[Callable[[], None]] = []

    @property
    def boxes(self) -> list[Box]:
        return [box for box, _ in self._members]

    @property
    def pos(self) -> Point:
        return (self.x, self.y)

    def _scene_point(self, offset: Point) -> Point:
        ox, oy = _turn(offset, self.rotation // 90)
        return (self.x + ox, self.y + oy)

    def _sync(self) -> None:
        for box, offset in self._members:
            box.x, box.y = self._scene_point(offset)

    def cells(self) -> list[Point]:
        """Scene centres of the boxes, in the order they were added."""
        return [self._scene_point(offset) for _, offset in self._members]

    def is_colliding(self) -> bool:
        return bool(self._members) and bool(self._collides(self.cells()))

    def create_box(self, point: Point = (0, 0), shape: BoxShape = BoxShape.RANDOM) -> None:
        """Build a new piece of ``shape`` centred at ``point``."""
        shape = BoxShape(shape)
        if shape is BoxShape.RANDOM:
            shape = BoxShape(self._rng.randrange(7))
        color = SHAPE_COLORS[shape]
        self.rotation = 0
        for offset in SHAPE_OFFSETS[shape]:
            self._members.append((Box(0, 0, color), offset))
        self.current_shape = shape
        self.x, self.y = point
        self._sync()
        if self.is_colliding():
            self.stop_timer()
            self._emit_game_finished()

    def clear_box_group(self, destroy_box: bool = False) -> list[Box]:
        """Detach every box; return them unless they are destroyed."""
        self._sync()
        released = self.boxes
        self._members.clear()
        return [] if destroy_box else released

    def move_by(self, dx: float, dy: float) -> None:
        self.x += dx
        self.y += dy
        self._sync()

    def rotate(self, degrees: int) -> None:
        """Turn the piece by a multiple of 90 degrees about its centre."""
        if degrees % 90:
            raise ValueError(f"rotation must be a multiple of 90 degrees, got {degrees}")
        self.rotation = (self.rotation + degrees) % 360
        self._sync()

    def _try(self, move: Callable[[], None], undo: Callable[[], None]) -> bool:
        move()
        if self.is_colliding():
            undo()
            return False
        return True

    def _land(self) -> None:
        released = self.clear_box_group()
        for listener in list(self.on_need_new_box):
            listener(released)

    def _emit_game_finished(self) -> None:
        for listener in list(self.on_game_finished):
            listener()

    def move_one_step(self) -> bool:
        """Drop one row; land the piece if it cannot. Return True if it moved."""
        if self._try(lambda: self.move_by(0, STEP), lambda: self.move_by(0, -STEP)):
            return True
        self._land()
        return False

    def key_press(self, key: Key) -> None:
        key = Key(key)
        if key is Key.DOWN:
            self.move_one_step()
        elif key is Key.LEFT:
            self._try(lambda: self.move_by(-STEP, 0), lambda: self.move_by(STEP, 0))
        elif key is Key.RIGHT:
            self._try(lambda: self.move_by(STEP, 0), lambda: self.move_by(-STEP, 0))
        elif key is Key.UP:
            self._try(lambda: self.rotate(90), lambda: self.rotate(-90))
        elif key is Key.SPACE:
            if not self._members:
                return
            self.move_by(0, STEP)
            while not self.is_colliding():
                self.move_by(0, STEP)
            self.move_by(0, -STEP)
            self._land()

    def start_timer(self, interval: int) -> None:
        self.interval = interval
        self.timer_running = True

    def stop_timer(self) -> None:
        self.timer_running = False


def cells_of(boxes: Iterable[Box]) -> set[Point]:
    """The set of centres occupied by ``boxes``."""
    return {box.pos for box in boxes}