"""Framebuffer Tetris with gamepad input, and square-wave melody synthesizers."""

__version__ = "1.0.0"