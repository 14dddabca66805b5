import struct

import pytest

from efmgames.framebuffer import (
    FBSIZE,
    HEIGHT,
    WIDTH,
    Framebuffer,
    Region,
    open_framebuffer,
)


@pytest.fixture
def blits():
    return []


@pytest.fixture
def fb(blits):
    return Framebuffer(bytearray(FBSIZE), blits.append)


def test_paint_region_fills_only_the_rectangle(fb, blits):
    fb.paint_region(0x1234, 5, 6, 3, 2)
    assert fb.get_pixel(5, 6) == 0x1234
    assert fb.get_pixel(7, 7) == 0x1234
    assert fb.get_pixel(8, 6) == 0
    assert fb.get_pixel(5, 8) == 0
    assert fb.get_pixel(4, 6) == 0
    assert blits == []


def test_paint_region_up_to_the_edge(fb):
    fb.paint_region(0x00FF, WIDTH - 2, HEIGHT - 2, 2, 2)
    assert fb.get_pixel(WIDTH - 1, HEIGHT - 1) == 0x00FF


@pytest.mark.parametrize("args", [(WIDTH - 1, 0, 2, 1), (0, HEIGHT, 1, 1), (-1, 0, 1, 1)])
def test_paint_region_outside_raises_and_leaves_pixels(fb, args):
    with pytest.raises(ValueError):
        fb.paint_region(0xFFFF, *args)
    assert fb.get_pixel(WIDTH - 1, 0) == 0


def test_invalid_color_raises(fb):
    with pytest.raises(ValueError):
        fb.paint_region(0x10000, 0, 0, 1, 1)


def test_paint_screen_fills_and_refreshes_everything(fb, blits):
    fb.paint_screen(0xBEEF)
    assert fb.get_pixel(0, 0) == 0xBEEF
    assert fb.get_pixel(WIDTH - 1, HEIGHT - 1) == 0xBEEF
    assert blits == [Region(0, 0, WIDTH, HEIGHT)]


def test_clear_zeroes_pixels(fb):
    fb.paint_screen(0xBEEF)
    fb.clear()
    assert fb.get_pixel(100, 100) == 0


def test_update_region_inside_passes_through(fb, blits):
    fb.update_region(10, 20, 40, 40)
    assert blits == [Region(10, 20, 40, 40)]


def test_update_region_too_low_is_cut(fb, blits):
    fb.update_region(10, 230, 20, 20)
    assert blits == [Region(10, 230, WIDTH - 10, HEIGHT - 230)]


def test_update_region_too_wide_is_cut(fb, blits):
    fb.update_region(300, 0, 40, 40)
    assert blits == [Region(300, 0, WIDTH - 300, 40)]


def test_update_screen_refreshes_whole_screen(fb, blits):
    fb.update_screen()
    assert blits == [Region(0, 0, WIDTH, HEIGHT)]


def test_get_pixel_outside_raises(fb):
    with pytest.raises(IndexError):
        fb.get_pixel(WIDTH, 0)


def test_wrong_buffer_size_raises():
    with pytest.raises(ValueError):
        Framebuffer(bytearray(FBSIZE - 2), lambda region: None)


def test_open_framebuffer_writes_through_to_file(tmp_path):
    device = tmp_path / "fb0"
    device.write_bytes(bytes(FBSIZE))
    with open_framebuffer(str(device)) as fb:
        fb.paint_region(0xABCD, 1, 2, 3, 4)
        assert fb.get_pixel(3, 5) == 0xABCD
    data = device.read_bytes()
    offset = (2 * WIDTH + 1) * 2
    assert struct.unpack_from("H", data, offset)[0] == 0xABCD
    assert struct.unpack_from("H", data, 0)[0] == 0


def test_open_framebuffer_missing_device_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        with open_framebuffer(str(tmp_path / "missing")):
            pass