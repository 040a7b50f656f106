# boxdrop

A small falling-block puzzle game. Pieces of four boxes drop into a well
ten boxes wide. You move and turn them as they fall. A full row is cleared
and everything above it moves down one row. The game ends when a new piece
has no room to appear.

The window uses Tkinter from the standard library. The package has no other
runtime dependencies.

## Install

```
pip install .
```

## Play

```
boxdrop
```

To get the same sequence of pieces on every run, pass a seed:

```
boxdrop --seed 42
```

Controls:

| Key         | Action                               |
|-------------|--------------------------------------|
| Left/Right  | move the piece sideways              |
| Up          | rotate the piece by 90 degrees       |
| Down        | move the piece down one step         |
| Space       | drop the piece straight to the floor |

The falling piece moves down one step every 500 ms. The next piece is shown
to the right of the well. When a row is full it disappears at once. The rows
above it move down 400 ms later.

## Using the game logic

The game model works without the window, so you can drive it from your own code:

```python
import random

from boxdrop.game import Game
from boxdrop.pieces import Key

game = Game(random.Random(1))   # the first piece is already falling
game.key_press(Key.LEFT)
game.key_press(Key.SPACE)       # drop the piece; the next one appears
moved = game.tick()             # one timer step; True if the piece moved down
print(game.lines_cleared, game.over)
```

- `boxdrop.pieces` holds the `BoxShape` and `Key` enums, the `Box` cell and
  the `BoxGroup` piece. `BoxGroup` moves the piece, rotates it, drops it and
  checks it for collisions through a callback you supply.
- `boxdrop.game.Game` holds the well and the settled boxes (`settled`). It
  also holds the falling piece (`box_group`) and the preview piece
  (`next_box_group`).
  - `occupied` and `row_boxes` query the well.
  - `clear_full_rows` removes full rows, and `move_box` moves the boxes
    above them down.
  - `start_game` empties the well and starts over.
  - Work that has to wait goes through `Game.schedule`, which is called with
    a delay in milliseconds and a callable. By default it runs the callable
    at once.
- `boxdrop.app.GameWindow` draws a `Game` on a Tk canvas and passes it keys
  and timer ticks. `key_for_event` maps Tk keysyms to `Key` values.

## What it does not do

- The game counts cleared lines in `Game.lines_cleared`, but the window does
  not show a score.
- The game does not get faster as it goes on.
- When the game ends, the window stops moving the piece and stops taking
  keys. It shows no game-over message. The window has no way to start a new
  game, so close it and run `boxdrop` again.
- Scores are not saved.

## Tests

```
pip install .[test]
pytest
```