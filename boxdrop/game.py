"""The playing field: a walled well, the settled boxes and row clearing."""

from __future__ import annotations

import random
from typing import Callable, Optional

from .pieces import STEP, Box, BoxGroup, Key, Point, cells_of

SCENE_RECT = (5, 5, 800, 500)
"""Left, top, width and height of the visible scene."""

WELL_LINES: tuple[tuple[Point, Point], ...] = (
    ((197, 47), (403, 47)),
    ((197, 453), (403, 453)),
    ((197, 47), (197, 453)),
    ((403, 47), (403, 453)),
)
"""The four border lines of the well, as pairs of end points."""

SPAWN_POINT: Point = (300, 70)
PREVIEW_POINT: Point = (500, 70)
INIT_SPEED = 500
"""Milliseconds between automatic drops at the start of a game."""
ROW_CLEAR_DELAY = 400
"""Milliseconds between removing full rows and shifting the rows above."""
ROW_WIDTH = 10

COLUMN_CENTRES = tuple(range(210, 391, STEP))
ROW_CENTRES = tuple(range(60, 441, STEP))

_HALF = 9.5
_ROW_QUERY_LEFT = 199
_ROW_QUERY_WIDTH = 202
_ROW_QUERY_HEIGHT = 22
_ROW_QUERY_TOPS = tuple(range(429, 50, -STEP))
_ABOVE_TOP = 49
_ABOVE_OFFSET = 47


def _overlaps(lo: float, hi: float, other_lo: float, other_hi: float) -> bool:
    return lo <= other_hi and other_lo <= hi


def _hits_wall(cell: Point) -> bool:
    cx, cy = cell
    for (x0, y0), (x1, y1) in WELL_LINES:
        if _overlaps(cx - _HALF, cx + _HALF, min(x0, x1), max(x0, x1)) and _overlaps(
            cy - _HALF, cy + _HALF, min(y0, y1), max(y0, y1)
        ):
            return True
    return False


class Game:
    """One game: the falling piece, the preview piece and the settled boxes.

    ``schedule`` is called with a delay in milliseconds and a callable when
    the game wants something done later; by default it runs it at once.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self.settled: list[Box] = []
        self.rows: list[int] = []
        self.game_speed: float = INIT_SPEED
        self.lines_cleared = 0
        self.over = False
        self.schedule: Callable[[int, Callable[[], None]], None] = (
            lambda delay, action: action()
        )
        self.box_group = BoxGroup(self._collides, self._rng)
        self.box_group.on_need_new_box.append(self._on_landed)
        self.box_group.on_game_finished.append(self.game_over)
        self.next_box_group = BoxGroup(self._collides, self._rng)
        self.start_game()

    def _collides(self, cells: list[Point]) -> bool:
        taken = cells_of(self.settled)
        return any(cell in taken or _hits_wall(cell) for cell in cells)

    def _contained(self, left: float, top: float, width: float, height: float) -> list[Box]:
        return [
            box
            for box in self.settled
            if left <= box.x - _HALF
            and box.x + _HALF <= left + width
            and top <= box.y - _HALF
            and box.y + _HALF <= top + height
        ]

    def _on_landed(self, released: list[Box]) -> None:
        self.settled.extend(released)
        self.clear_full_rows()

    def _spawn_next(self) -> None:
        self.box_group.create_box(SPAWN_POINT, self.next_box_group.current_shape)
        self.next_box_group.clear_box_group(True)
        self.next_box_group.create_box(PREVIEW_POINT)

    def start_game(self) -> None:
        """Empty the well and drop a fresh random piece."""
        self.box_group.clear_box_group(True)
        self.next_box_group.clear_box_group(True)
        self.settled.clear()
        self.rows.clear()
        self.lines_cleared = 0
        self.over = False
        self.box_group.create_box(SPAWN_POINT)
        self.box_group.start_timer(INIT_SPEED)
        self.game_speed = INIT_SPEED
        self.next_box_group.create_box(PREVIEW_POINT)

    def occupied(self, x: float, y: float) -> bool:
        """Whether a settled box is centred at ``(x, y)``."""
        return (x, y) in cells_of(self.settled)

    def row_boxes(self, y: float) -> list[Box]:
        """Settled boxes wholly inside the row band whose top edge is ``y``."""
        return self._contained(_ROW_QUERY_LEFT, y, _ROW_QUERY_WIDTH, _ROW_QUERY_HEIGHT)

    def clear_full_rows(self) -> None:
        """Remove full rows, then shift what lies above or bring in the next piece."""
        for top in _ROW_QUERY_TOPS:
            boxes = self.row_boxes(top)
            if len(boxes) == ROW_WIDTH:
                doomed = set(map(id, boxes))
                self.settled = [box for box in self.settled if id(box) not in doomed]
                self.rows.append(top)
        if self.rows:
            self.schedule(ROW_CLEAR_DELAY, self.move_box)
        else:
            self._spawn_next()

    def move_box(self) -> None:
        """Shift boxes above each cleared row down, topmost row first."""
        for row in reversed(self.rows):
            for box in self._contained(
                _ROW_QUERY_LEFT, _ABOVE_TOP, _ROW_QUERY_WIDTH, row - _ABOVE_OFFSET
            ):
                box.move_by(0, STEP)
        self.update_score(len(self.rows))
        self.rows.clear()
        self._spawn_next()

    def update_score(self, full_row_num: int = 0) -> None:
        self.lines_cleared += full_row_num

    def game_over(self) -> None:
        self.over = True
        self.box_group.stop_timer()

    def tick(self) -> bool:
        """Advance the falling piece by one timer step. Return True if it moved."""
        if self.over or not self.box_group.timer_running:
            return False
        return self.box_group.move_one_step()

    def key_press(self, key: Key) -> None:
        if self.over:
            return
        self.box_group.key_press(key)