"""A 320x240 16-bit framebuffer with region painting and screen refresh."""

import fcntl
import mmap
import os
import struct
from array import array
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from functools import partial

WIDTH = 320
HEIGHT = 240
FBSIZE = WIDTH * HEIGHT * 2

DEFAULT_DEVICE = "/dev/fb0"
FB_REFRESH_IOCTL = 0x4680


@dataclass(frozen=True)
class Region:
    """A rectangle of the screen to refresh."""

    x: int
    y: int
    width: int
    height: int


def _check_color(color: int) -> None:
    if not 0 <= color <= 0xFFFF:
        raise ValueError(f"color must be a 16-bit value, got {color}")


class Framebuffer:
    """Pixels stored in a writable buffer, refreshed to a display through `blit`."""

    def __init__(self, buffer, blit: Callable[[Region], None]):
        view = memoryview(buffer)
        if view.nbytes != FBSIZE:
            view.release()
            raise ValueError(f"framebuffer must be {FBSIZE} bytes, got {len(buffer)}")
        self._bytes = view
        self._pixels = view.cast("B").cast("H")
        self.blit = blit

    def _release(self) -> None:
        self._pixels.release()
        self._bytes.release()

    def update_screen(self) -> None:
        """Refresh the whole screen."""
        self.blit(Region(0, 0, WIDTH, HEIGHT))

    def update_region(self, x: int, y: int, width: int, height: int) -> None:
        """Refresh a region, cut off at the edge of the screen."""
        if x + width > WIDTH or y + height > HEIGHT:
            width = max(WIDTH - x, 0)
        if y + height > HEIGHT:
            height = max(HEIGHT - y, 0)
        self.blit(Region(x, y, width, height))

    def clear(self) -> None:
        """Set every pixel to zero without refreshing."""
        self._bytes[:] = bytes(FBSIZE)

    def paint_screen(self, color: int) -> None:
        """Fill the whole screen with a colour and refresh it."""
        _check_color(color)
        self._pixels[:] = array("H", [color]) * (WIDTH * HEIGHT)
        self.update_screen()

    def paint_region(self, color: int, x: int, y: int, width: int, height: int) -> None:
        """Fill a rectangle with a colour without refreshing the screen."""
        _check_color(color)
        if x < 0 or y < 0 or width < 0 or height < 0:
            raise ValueError(f"could not paint region x: {x}, y: {y}")
        if x + width > WIDTH or y + height > HEIGHT:
            raise ValueError(f"could not paint region x: {x}, y: {y}")
        row = array("H", [color]) * width
        for line in range(y, y + height):
            start = line * WIDTH + x
            self._pixels[start:start + width] = row

    def get_pixel(self, x: int, y: int) -> int:
        """Return the colour of one pixel."""
        if not (0 <= x < WIDTH and 0 <= y < HEIGHT):
            raise IndexError(f"pixel ({x}, {y}) is outside the screen")
        return self._pixels[y * WIDTH + x]


def _refresh(fd: int, region: Region) -> None:
    area = struct.pack("6I", region.x, region.y, region.width, region.height, 0, 0)
    fcntl.ioctl(fd, FB_REFRESH_IOCTL, area)


@contextmanager
def open_framebuffer(path: str = DEFAULT_DEVICE) -> Iterator[Framebuffer]:
    """Map a framebuffer device into memory for the duration of the block."""
    fd = os.open(path, os.O_RDWR)
    try:
        with mmap.mmap(fd, FBSIZE, mmap.MAP_SHARED,
                       mmap.PROT_READ | mmap.PROT_WRITE) as mapped:
            framebuffer = Framebuffer(mapped, partial(_refresh, fd))
            try:
                yield framebuffer
            finally:
                framebuffer._release()
    finally:
        os.close(fd)