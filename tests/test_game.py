import io
import random

from efmgames.framebuffer import FBSIZE, Framebuffer
from efmgames.game import main, run
from efmgames.gamepad import Gamepad
from efmgames.tetris import PLAYER_INIT_X, Tetris, BUTTON_QUIT, BUTTON_RIGHT
from efmgames.util import WHITE


def _setup(presses):
    regions = []
    fb = Framebuffer(bytearray(FBSIZE), regions.append)
    tetris = Tetris(fb, random.Random(1))
    gamepad = Gamepad(io.BytesIO(bytes(presses)))
    return fb, tetris, gamepad, regions


def test_run_quits_and_counts_ticks():
    fb, tetris, gamepad, _ = _setup([BUTTON_QUIT])
    slept = []

    def sleep(msec):
        slept.append(msec)
        gamepad.on_signal()

    ticks = run(tetris, gamepad, sleep)
    assert ticks == 1
    assert slept == [1000]


def test_run_moves_player_before_quitting():
    fb, tetris, gamepad, _ = _setup([BUTTON_RIGHT, BUTTON_QUIT])
    slept = []

    def sleep(msec):
        slept.append(msec)
        gamepad.on_signal()

    ticks = run(tetris, gamepad, sleep)
    assert ticks == 2
    assert slept == [1000, 1000]
    assert tetris.player.x == PLAYER_INIT_X + 1


def test_run_connects_gamepad_to_game():
    fb, tetris, gamepad, _ = _setup([BUTTON_QUIT])

    def sleep(msec):
        gamepad.on_signal()

    run(tetris, gamepad, sleep)
    assert gamepad.handler == tetris.handle_gamepad


def test_quit_blackens_screen():
    fb, tetris, gamepad, regions = _setup([BUTTON_QUIT])
    border_seen = []

    def sleep(msec):
        border_seen.append(fb.get_pixel(101, 1))
        gamepad.on_signal()

    run(tetris, gamepad, sleep)
    assert border_seen == [WHITE]
    assert fb.get_pixel(101, 1) == 0
    assert regions


def test_main_fails_without_framebuffer(tmp_path, capsys):
    missing = tmp_path / "nofb"
    code = main(["--framebuffer", str(missing), "--gamepad", str(tmp_path / "nogp")])
    assert code == 1
    assert "could not run tetris" in capsys.readouterr().err


def test_main_fails_without_gamepad(tmp_path, capsys):
    fb_file = tmp_path / "fb"
    fb_file.write_bytes(bytes(FBSIZE))
    missing = tmp_path / "nogp"
    code = main(["--framebuffer", str(fb_file), "--gamepad", str(missing)])
    assert code == 1
    assert str(missing) in capsys.readouterr().err