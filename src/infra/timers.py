from __future__ import annotations

import threading
from collections.abc import Callable


class ThreadingScheduler:
    """Runs callbacks on a daemon ``threading.Timer``; the timer is the cancel handle."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer
