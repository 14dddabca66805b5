"""Colour conversion, decimal digit splitting and sleeping helpers."""

import time

BLACK = 0x0000
WHITE = 0xFFFF
RED = 0xF000
GREEN = 0x0FF0
BLUE = 0x000F

MAX_DIGITS = 6


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be in 0..255, got {value}")


def rgb888_to_rgb565(r: int, g: int, b: int) -> int:
    """Pack an 8-bit-per-channel colour into a 16-bit pixel value."""
    _check_byte("r", r)
    _check_byte("g", g)
    _check_byte("b", b)
    return ((r << 11) | (g << 5) | b) & 0xFFFF


def number_to_digits(number: int) -> tuple[int, ...]:
    """Split a non-negative number of at most six digits into its decimal digits."""
    if number < 0:
        raise ValueError(f"number must not be negative, got {number}")
    digits = tuple(int(ch) for ch in str(number))
    if len(digits) > MAX_DIGITS:
        raise ValueError(f"number has more than {MAX_DIGITS} digits: {number}")
    return digits


def sleep_ms(msec: int) -> None:
    """Sleep for the given number of milliseconds, resuming after interruptions."""
    if msec < 0:
        raise ValueError(f"cannot sleep a negative time: {msec} ms")
    time.sleep(msec / 1000)


def sleep_seconds(sec: int) -> None:
    """Sleep for the given number of seconds, resuming after interruptions."""
    if sec < 0:
        raise ValueError(f"cannot sleep a negative time: {sec} s")
    time.sleep(sec)