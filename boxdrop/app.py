"""Tk front end: draws the well and feeds keys and timer ticks to the game."""

from __future__ import annotations

import argparse
import random
from typing import Callable, Optional, Sequence

from .game import INIT_SPEED, SCENE_RECT, WELL_LINES, Game
from .pieces import Box, Color, Key

TITLE = "MyBox"
BACKGROUND = (24, 28, 40)
LINE_COLOR = "#d0d0d0"
_HALF_BOX = 10

_KEYS = {
    "Down": Key.DOWN,
    "Left": Key.LEFT,
    "Right": Key.RIGHT,
    "Up": Key.UP,
    "space": Key.SPACE,
}


def key_for_event(keysym: str) -> Optional[Key]:
    """The game key for a Tk keysym, or None if the game ignores it."""
    return _KEYS.get(keysym)


def blend(color: Color, background: Sequence[int]) -> str:
    """Composite an RGBA colour over an RGB background as a Tk colour string."""
    r, g, b, a = color
    alpha = a / 255
    channels = (
        round(channel * alpha + behind * (1 - alpha))
        for channel, behind in zip((r, g, b), background)
    )
    return "#" + "".join(f"{channel:02x}" for channel in channels)


class GameWindow:
    """A fixed-size canvas showing one game and driving its timer."""

    def __init__(self, root, game: Game) -> None:
        import tkinter as tk

        self.root = root
        self.game = game
        left, top, width, height = SCENE_RECT
        self._origin = (left, top)
        self._background = blend((*BACKGROUND, 255), BACKGROUND)
        root.title(TITLE)
        root.resizable(False, False)
        self.canvas = tk.Canvas(
            root,
            width=width,
            height=height,
            highlightthickness=0,
            background=self._background,
        )
        self.canvas.pack()
        game.schedule = self._schedule
        root.bind("<Key>", self._on_key)
        root.after(self._interval(), self._on_timer)
        self.redraw()

    def _interval(self) -> int:
        return int(self.game.box_group.interval or INIT_SPEED)

    def _schedule(self, delay: int, action: Callable[[], None]) -> None:
        def run() -> None:
            action()
            self.redraw()

        self.root.after(delay, run)

    def _on_key(self, event) -> None:
        key = key_for_event(event.keysym)
        if key is None:
            return
        self.game.key_press(key)
        self.redraw()

    def _on_timer(self) -> None:
        if self.game.tick():
            self.redraw()
        elif not self.game.over:
            self.redraw()
        self.root.after(self._interval(), self._on_timer)

    def _visible_boxes(self) -> list[Box]:
        return [
            *self.game.settled,
            *self.game.box_group.boxes,
            *self.game.next_box_group.boxes,
        ]

    def redraw(self) -> None:
        """Repaint the border lines and every box."""
        canvas = self.canvas
        ox, oy = self._origin
        canvas.delete("all")
        for (x0, y0), (x1, y1) in WELL_LINES:
            canvas.create_line(x0 - ox, y0 - oy, x1 - ox, y1 - oy, fill=LINE_COLOR)
        for box in self._visible_boxes():
            fill = blend(box.color, BACKGROUND)
            outline = blend((*box.color[:3], 200), BACKGROUND)
            canvas.create_rectangle(
                box.x - _HALF_BOX - ox,
                box.y - _HALF_BOX - oy,
                box.x + _HALF_BOX - ox,
                box.y + _HALF_BOX - oy,
                fill=fill,
                outline=outline,
            )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="boxdrop", description="A falling-blocks game.")
    parser.add_argument("--seed", type=int, default=None, help="seed for the piece sequence")
    args = parser.parse_args(argv)

    import tkinter as tk

    root = tk.Tk()
    GameWindow(root, Game(random.Random(args.seed)))
    root.mainloop()
    return 0