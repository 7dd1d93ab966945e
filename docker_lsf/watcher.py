"""Consumes docker lifecycle events and asks the scheduler for a refresh."""

import logging
import threading

from docker_lsf.debouncer import RefreshScheduler

logger = logging.getLogger(__name__)

TRIGGER_STATUSES = frozenset({"start", "stop", "die"})


class EventWatcher:
    def __init__(self, runtime, scheduler: RefreshScheduler):
        self._runtime = runtime
        self._scheduler = scheduler
        # reentrant: stop() may run from a signal handler while run() holds it
        self._lock = threading.RLock()
        self._subscription = None
        self._stopped = False
        self._events_seen = 0

    @property
    def events_seen(self) -> int:
        return self._events_seen

    def run(self):
        """Block on the event stream until stop() is called or the stream ends."""
        with self._lock:
            if self._stopped:
                return
        # subscribing blocks on the daemon; a signal handler may call stop() meanwhile
        subscription = self._runtime.subscribe_events()
        with self._lock:
            self._subscription = subscription
            stopped = self._stopped
        if stopped:
            subscription.close()
            return

        logger.info("Listening to docker events...")
        try:
            for event in self._subscription:
                self.handle(event)
        finally:
            self._subscription.close()
        logger.info("Stopped listening to docker events")

    def handle(self, event):
        if event.status not in TRIGGER_STATUSES:
            return
        self._events_seen += 1
        logger.info("Received event %s for container %s", event.status, event.container_id[:12])
        self._scheduler.notify()

    def stop(self):
        with self._lock:
            self._stopped = True
            subscription = self._subscription
        if subscription is not None:
            subscription.close()
