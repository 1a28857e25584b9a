"""Hold Ctrl+C until the task in progress has finished."""

import signal
import threading
from contextlib import contextmanager
from typing import Iterator


class InterruptFlag:
    """Records a SIGINT received while a task was running."""

    def __init__(self):
        self.requested = False

    def _handler(self, signum, frame):
        self.requested = True


@contextmanager
def defer_interrupts(flag: InterruptFlag) -> Iterator[InterruptFlag]:
    """Replace the SIGINT handler for the duration of the block.

    Signal handlers can only be installed from the main thread; elsewhere the
    block runs unguarded.
    """
    if threading.current_thread() is not threading.main_thread():
        yield flag
        return

    previous = signal.signal(signal.SIGINT, flag._handler)
    try:
        yield flag
    finally:
        signal.signal(signal.SIGINT, previous)
