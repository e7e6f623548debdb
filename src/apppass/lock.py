"""Inactivity auto-lock for interactive sessions."""

import logging
import threading
from typing import Callable, Optional

from .config import Config

logger = logging.getLogger(__name__)


class AutoLock:
    """Flips to locked after timeout_seconds without activity."""

    def __init__(
        self,
        timeout_seconds: float = Config.DEFAULT_LOCK_TIMEOUT,
        on_lock: Optional[Callable[[], None]] = None,
    ):
        if timeout_seconds <= 0:
            raise ValueError("Lock timeout must be positive.")
        self.timeout_seconds = timeout_seconds
        self.on_lock = on_lock
        self._locked = threading.Event()
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    @property
    def locked(self) -> bool:
        return self._locked.is_set()

    def _fire(self) -> None:
        self._locked.set()
        logger.info("Session locked after %s seconds of inactivity", self.timeout_seconds)
        if self.on_lock:
            self.on_lock()

    def start(self) -> None:
        """Begin (or restart) the countdown."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.timeout_seconds, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def touch(self) -> None:
        """Register activity. Has no effect once locked."""
        if not self.locked:
            self.start()

    def stop(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
