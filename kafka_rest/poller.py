"""
Background polling loop.

A Poller fetches a batch of messages every interval and hands it to a
handler, until it is cancelled or a fetch fails.
"""

import threading
from typing import Callable, List, Optional

from kafka_rest.logger import ClientLogger
from kafka_rest.models import Message

Handler = Callable[[Optional[Exception], Optional[List[Message]]], None]


class Poller(threading.Thread):
    """Fixed-interval fetch loop running on its own daemon thread.

    The handler runs on the poller thread, so calls to it never overlap.
    A fetch error is delivered once as ``handler(error, None)`` and ends
    the loop; nothing is retried. Calling the poller (or ``cancel()``)
    stops it before its next tick. A fetch already in flight is not
    interrupted and its result is still delivered. Cancellation is
    single-use: cancelling twice raises RuntimeError.
    """

    def __init__(
        self,
        interval: float,
        fetch: Callable[[], List[Message]],
        handler: Handler,
        logger: ClientLogger,
    ):
        """Initialize the poller.

        Args:
            interval: Seconds between fetches, must be positive
            fetch: Zero-argument callable returning one batch
            handler: Receives (error, messages) after every fetch
            logger: Logger instance
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")

        super().__init__(name="kafka-rest-poller", daemon=True)
        self.interval = interval
        self.fetch = fetch
        self.handler = handler
        self.logger = logger

        self._stop_event = threading.Event()
        self._cancel_lock = threading.Lock()
        self._cancel_called = False

    def run(self) -> None:
        self.logger.info("Polling started", interval=self.interval)

        while not self._stop_event.wait(self.interval):
            try:
                messages = self.fetch()
            except Exception as e:
                self.logger.error("Fetch failed, polling stopped", error=str(e))
                self._deliver(e, None)
                break

            if not self._deliver(None, messages):
                break

        self.logger.info("Polling stopped", cancelled=self.cancelled)

    def _deliver(self, error: Optional[Exception], messages: Optional[List[Message]]) -> bool:
        """Invoke the handler; False means the loop must stop."""
        try:
            self.handler(error, messages)
        except Exception as e:
            self.logger.exception("Poll handler raised, polling stopped", error=str(e))
            return False
        return True

    def cancel(self) -> None:
        """Signal the loop to stop before its next fetch."""
        with self._cancel_lock:
            if self._cancel_called:
                raise RuntimeError("Poller already cancelled")
            self._cancel_called = True
        self._stop_event.set()

    __call__ = cancel

    @property
    def cancelled(self) -> bool:
        return self._stop_event.is_set()
