"""Leading-edge debouncing for background trims."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from functools import partial
from typing import Any

logger = logging.getLogger(__name__)

TimerFactory = Callable[[float, Callable[[], None]], threading.Timer]


class Debouncer:
    """Call a function at most once per burst of events.

    The first call in a burst runs `callback` immediately and starts a
    cooldown of `delay` seconds. Calls made during the cooldown are dropped.
    With `reset_timer`, each dropped call restarts the cooldown, so the
    callback can only run again after `delay` seconds without any call.

    Args:
        callback: Function to run.
        delay: Cooldown length in seconds.
        reset_timer: Restart the cooldown on every suppressed call.
        timer_factory: Builds the cooldown timer; `threading.Timer` by default.

    Examples:
        debounced = Debouncer(plugin.auto_trim, 2.5)
        editor.on_change(debounced)
    """

    def __init__(
        self,
        callback: Callable[..., Any],
        delay: float,
        reset_timer: bool = True,
        timer_factory: TimerFactory = threading.Timer,
    ):
        self.callback = callback
        self.delay = delay
        self.reset_timer = reset_timer
        self._timer_factory = timer_factory
        self._timer: threading.Timer | None = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        """True while a cooldown is running."""
        with self._lock:
            return self._timer is not None

    def __call__(self, *args: Any, **kwargs: Any) -> bool:
        """Run the callback unless a cooldown is running.

        Returns:
            bool: True when the callback ran, False when the call was dropped.
        """
        with self._lock:
            cooling_down = self._timer is not None
            if cooling_down and not self.reset_timer:
                return False
            self._restart_timer()

        if cooling_down:
            logger.debug("debounced call suppressed; cooldown restarted (%.2fs)", self.delay)
            return False

        self.callback(*args, **kwargs)
        return True

    def _restart_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._generation += 1
        timer = self._timer_factory(self.delay, partial(self._finish_cooldown, self._generation))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _finish_cooldown(self, generation: int) -> None:
        with self._lock:
            # A cancelled timer may still fire once it has started running.
            if generation == self._generation:
                self._timer = None

    def cancel(self) -> None:
        """Discard the running cooldown, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
                self._generation += 1
                logger.debug("debounce cooldown cancelled")
