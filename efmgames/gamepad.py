"""Reading gamepad button state, with deferral while the game is busy."""

import signal
from collections.abc import Callable, Iterator
from contextlib import contextmanager

DEFAULT_DEVICE = "/dev/gamepad"
GPBUF_SIZE = 1


class Gamepad:
    """A gamepad device that passes button states to a handler."""

    def __init__(self, device, handler: Callable[[int], None] | None = None):
        self.device = device
        self.handler = handler
        self.state = 0
        self.locked = False
        self.exec_deferred = False
        self.deferred_state = 0

    def __enter__(self) -> "Gamepad":
        return self

    def __exit__(self, *exc_info) -> None:
        self.device.close()

    def read_state(self) -> int:
        """Read one byte of active-high button state from the device."""
        data = self.device.read(GPBUF_SIZE)
        self.state = data[0] if data else 0
        return self.state

    def on_signal(self, signum=None, frame=None) -> None:
        """Handle a notification that the buttons changed."""
        state = self.read_state()
        # Notifications sometimes arrive without any button pressed.
        if not state:
            return
        if self.locked:
            self.exec_deferred = True
            self.deferred_state = state
            return
        if self.deferred_state:
            state = self.deferred_state
            self.state = state
            self.deferred_state = 0
        if self.handler is not None:
            self.handler(state)

    @contextmanager
    def deferred(self) -> Iterator["Gamepad"]:
        """Hold back button handling inside the block, then run what was held back."""
        self.locked = True
        try:
            yield self
        finally:
            self.locked = False
        if self.exec_deferred:
            self.exec_deferred = False
            self.on_signal(signal.SIGIO, None)


def open_gamepad(path: str = DEFAULT_DEVICE) -> Gamepad:
    """Open the gamepad device for reading and writing."""
    return Gamepad(open(path, "r+b", buffering=0))