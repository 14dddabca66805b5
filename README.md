# efmgames

Small games and sound toys for a 320×240 RGB565 LCD and an eight-button
gamepad on a Linux board.

The package holds two things:

* **Tetris**: a falling-block puzzle game that draws straight into the
  Linux framebuffer (`/dev/fb0`) and reads button presses from a
  gamepad character device (`/dev/gamepad`) that sends `SIGIO` when a
  button is pressed.
* **Melody synthesizers**: models of a two-channel (treble and bass)
  square-wave player driven by a 44100 Hz timer tick, with a set of
  short built-in tunes, in an interrupt-driven and a polling flavour.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Playing Tetris

```
efmgames-tetris
```

By default the command opens `/dev/fb0` and `/dev/gamepad`; other
device paths can be given with `--framebuffer PATH` and `--gamepad
PATH`. It must be run with permission to read and write both devices.
If a device cannot be opened, the command prints the error and exits
with status 1. On quitting it prints `Exiting tetris. Goodbye!` and
exits with status 0.

The board is 10 tiles wide and fills the height of the screen. The
score, the level and the lines left to the next level are drawn on the
right, together with the queue of the next four pieces.

The gamepad button values do the following:

| Button value | Action                                   |
|-------------:|------------------------------------------|
| 1            | move left                                |
| 2            | rotate (turning further until it fits)   |
| 4            | move right                               |
| 8            | drop the piece all the way down          |
| 16           | clear the screen and quit                |
| 32           | restart the game                         |
| 128          | move one step down                       |

A piece falls one row per tick, and each tick is followed by a wait of
`1000 - 100 × level` milliseconds. The level is the number of cleared
lines divided by ten, up to level 9. Clearing 1, 2, 3 or 4 lines at once
scores 40, 100, 300 or 1200 points; the score stops at 999999. When a
new piece cannot be placed, the game restarts.

Button presses that arrive while a tick is running are held back and
handled right after it (`Gamepad.deferred()`).

### Using the pieces from Python

The game logic is in `efmgames.tetris.Tetris`, which draws on any
`efmgames.framebuffer.Framebuffer`. A framebuffer wraps a writable
buffer of 320×240 16-bit pixels and a function that pushes a `Region`
of it to the screen, so the game can be driven without real hardware:

```python
import random

from efmgames.framebuffer import Framebuffer
from efmgames.tetris import Tetris

pixels = bytearray(320 * 240 * 2)
screen = Framebuffer(pixels, blit=lambda region: None)

game = Tetris(screen, random.Random(1))
game.start()
game.handle_gamepad(4)   # move right
game.tick_and_blit()     # let the piece fall one row
```

Pressing quit (`handle_gamepad(16)`) raises `efmgames.tetris.QuitGame`.
`efmgames.game.run(tetris, gamepad, sleep)` is the main loop; it returns
the number of ticks played once the player quits.

The other modules:

* `efmgames.framebuffer`: `Framebuffer` (`paint_region`, `paint_screen`,
  `clear`, `get_pixel`, `update_region`, `update_screen`) and
  `open_framebuffer(path)`, a context manager that memory-maps a
  framebuffer device.
* `efmgames.gamepad`: `Gamepad`, which reads one byte of button state
  and passes non-zero states to its handler, and `open_gamepad(path)`.
* `efmgames.sigio`: `register_sigio(fd, handler)` installs a `SIGIO`
  handler and asks the descriptor to signal this process.
* `efmgames.util`: `rgb888_to_rgb565`, `number_to_digits`, `sleep_ms`
  and `sleep_seconds`.

## The synthesizers

`efmgames.melodies` defines `Pitch`, `Note` and `Melody` and the
built-in tunes, which `all_melodies()` returns: a startup chime, a
game-over theme, a 1-up jingle, a power-up jingle, a laser shot and an
explosion. Note lengths are in milliseconds at 120 beats per minute; a
frequency of 0 is a pause.

`efmgames.synth.Synthesizer` plays a two-voice melody one timer tick at
a time. Each `on_timer()` call is one sample at 44100 Hz: every 441
ticks (10 ms) it counts down the current note, it toggles the treble
and bass square waves each half period, and it stores the two channel
values (0 or 15) in `dac`. `handle_buttons(buttons)` takes the raw,
active-low button value; the first call after start-up is ignored,
buttons 1 to 6 switch tunes, and buttons 7 and 8 stop playback and turn
the timer and DAC off. When a melody ends, the peripherals are turned
off as well.

`efmgames.polling.PollingSynthesizer` is the single-channel variant
that polls the timer overflow flag: pass the flag to `tick(overflow)` on
every pass of the main loop and report button presses with
`on_gpio(buttons)`; the next tick acts on them. It also flips `leds`
once every 44100 ticks. Its tunes are built with
`create_melody(notes, lengths)` into a `SequenceMelody`.

## What this package does not do

The synthesizers only compute sample values; nothing in the package
plays them through a sound card, and there is no command that starts
them. The Tetris command needs a framebuffer device and a gamepad
device that delivers `SIGIO`; the package does not provide the gamepad
device itself.