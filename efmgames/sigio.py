"""Asking for SIGIO notifications from a file descriptor."""

import fcntl
import os
import signal


def register_sigio(fd, handler):
    """Install `handler` for SIGIO and have `fd` send it to this process.

    `fd` may be a descriptor or an object with a fileno() method.
    Returns the previously installed SIGIO handler.
    """
    if hasattr(fd, "fileno"):
        fd = fd.fileno()
    previous = signal.signal(signal.SIGIO, handler)
    fcntl.fcntl(fd, fcntl.F_SETOWN, os.getpid())
    flags = fcntl.fcntl(fd, fcntl.F_GETFL)
    fcntl.fcntl(fd, fcntl.F_SETFL, flags | os.O_ASYNC)
    return previous