"""Single-slot refresh scheduler that coalesces bursts of events."""

import logging
import threading

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Runs `on_fire` once, `delay` seconds after the first notify() of a burst.

    Further notify() calls while a refresh is pending are ignored, so the quiet
    period counts from the first event. The pending flag is cleared when the
    timer fires, before `on_fire` runs, so events arriving during a refresh
    schedule the next one, which waits for the running refresh to finish.
    `on_fire` runs on the timer thread.
    """

    def __init__(self, delay: float, on_fire):
        self._delay = delay
        self._on_fire = on_fire
        self._lock = threading.Lock()
        # held while on_fire runs so refreshes never overlap
        self._run_lock = threading.Lock()
        self._pending = False
        self._timer: threading.Timer | None = None
        self._fire_count = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending

    @property
    def fire_count(self) -> int:
        with self._lock:
            return self._fire_count

    def notify(self) -> bool:
        """Request a refresh. Returns True if this call scheduled one."""
        with self._lock:
            if self._pending:
                return False
            logger.info("Triggering refresh in %s seconds", self._delay)
            self._pending = True
            self._timer = threading.Timer(self._delay, self._fire)
            self._timer.daemon = True
            self._timer.start()
            return True

    def cancel(self):
        """Drop a pending refresh. A refresh already running is not interrupted."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._pending = False

    def _fire(self):
        with self._lock:
            self._pending = False
            self._timer = None
            self._fire_count += 1
        with self._run_lock:
            try:
                self._on_fire()
            except Exception:
                logger.exception("Refresh failed")
