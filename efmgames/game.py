"""The Tetris main loop and the command that starts it."""

import argparse
import signal
import sys
from collections.abc import Callable

from efmgames.framebuffer import DEFAULT_DEVICE as FRAMEBUFFER_DEVICE
from efmgames.framebuffer import open_framebuffer
from efmgames.gamepad import DEFAULT_DEVICE as GAMEPAD_DEVICE
from efmgames.gamepad import Gamepad, open_gamepad
from efmgames.sigio import register_sigio
from efmgames.tetris import QuitGame, Tetris
from efmgames.util import sleep_ms

BASE_INTERVAL_MS = 1000
LEVEL_SPEEDUP_MS = 100
GOODBYE = "Exiting tetris. Goodbye!"


def _interval(level: int) -> int:
    return BASE_INTERVAL_MS - LEVEL_SPEEDUP_MS * level


def run(tetris: Tetris, gamepad: Gamepad,
        sleep: Callable[[int], None] = sleep_ms) -> int:
    """Play until the player quits; return the number of ticks played.

    Button handling is held back while a tick runs, so that a press in
    the middle of a move cannot leave the board half drawn.
    """
    gamepad.handler = tetris.handle_gamepad
    ticks = 0
    try:
        tetris.start()
        while True:
            with gamepad.deferred():
                tetris.tick_and_blit()
            ticks += 1
            sleep(_interval(tetris.player.level))
    except QuitGame:
        return ticks


def main(argv=None) -> int:
    """Start Tetris on the framebuffer and gamepad devices."""
    parser = argparse.ArgumentParser(prog="efmgames", description="Play Tetris.")
    parser.add_argument("--framebuffer", default=FRAMEBUFFER_DEVICE,
                        help="framebuffer device to draw on")
    parser.add_argument("--gamepad", default=GAMEPAD_DEVICE,
                        help="gamepad device to read buttons from")
    args = parser.parse_args(argv)

    try:
        with open_framebuffer(args.framebuffer) as framebuffer, \
                open_gamepad(args.gamepad) as gamepad:
            previous = register_sigio(gamepad.device, gamepad.on_signal)
            try:
                run(Tetris(framebuffer), gamepad)
            finally:
                if previous is not None:
                    signal.signal(signal.SIGIO, previous)
    except OSError as exc:
        print(f"could not run tetris: {exc}", file=sys.stderr)
        return 1

    print(GOODBYE)
    return 0


if __name__ == "__main__":
    sys.exit(main())