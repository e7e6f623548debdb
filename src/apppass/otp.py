"""Time-boxed one-time passwords with scheduled and startup expiry."""

import logging
import threading
import time
from enum import Enum
from typing import Callable, Dict, List, Optional

from .store import AppPassError, EntryNotFoundError
from .vault import Vault

logger = logging.getLogger(__name__)


class OtpStatus(str, Enum):
    """Three-valued view of an entry's expiry."""

    NOT_OTP = "not_otp"
    ACTIVE = "active"
    EXPIRED = "expired"


class OtpScheduler:
    """Registry of pending deletion timers, one per entry name.

    Timers run on daemon threads and die with the process; the startup
    sweep picks up whatever they never got to.
    """

    def __init__(self) -> None:
        self._timers: Dict[str, threading.Timer] = {}
        self._lock = threading.Lock()

    def schedule(
        self, name: str, delay: float, callback: Callable[[str], None]
    ) -> None:
        """Run callback(name) after delay seconds, replacing any earlier timer."""

        def fire() -> None:
            try:
                callback(name)
            finally:
                with self._lock:
                    if self._timers.get(name) is timer:
                        del self._timers[name]

        timer = threading.Timer(max(delay, 0), fire)
        timer.daemon = True
        with self._lock:
            previous = self._timers.pop(name, None)
            self._timers[name] = timer
        if previous is not None:
            previous.cancel()
        timer.start()

    def cancel(self, name: str) -> bool:
        """Cancel the pending timer for name. Returns False if none was pending."""
        with self._lock:
            timer = self._timers.pop(name, None)
        if timer is None:
            return False
        timer.cancel()
        return True

    def cancel_all(self) -> None:
        with self._lock:
            timers = list(self._timers.values())
            self._timers.clear()
        for timer in timers:
            timer.cancel()

    def pending(self) -> List[str]:
        """Names with a deletion still scheduled."""
        with self._lock:
            return sorted(self._timers)

    def wait(self, name: str, timeout: Optional[float] = None) -> None:
        """Block until the timer for name has fired or been cancelled."""
        with self._lock:
            timer = self._timers.get(name)
        if timer is not None:
            timer.join(timeout)


class OtpManager:
    """Creates OTP entries and expires them."""

    def __init__(
        self,
        vault: Vault,
        scheduler: Optional[OtpScheduler] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.vault = vault
        self.scheduler = scheduler or OtpScheduler()
        self.clock = clock

    def _now(self) -> int:
        return int(self.clock())

    def generate(self, name: str, ttl_seconds: int, length: Optional[int] = None) -> str:
        """Create an OTP entry that expires ttl_seconds from now.

        Name collisions are rejected like any other create.
        """
        if ttl_seconds < 0:
            raise ValueError("OTP time-to-live cannot be negative.")

        expiry = self._now() + ttl_seconds
        otp = self.vault.create_auto(name, length)
        self.vault.metadata.set_otp_expiry(name, expiry)
        self.scheduler.schedule(name, ttl_seconds, self._expire)
        logger.info("Generated OTP for '%s' expiring at %d", name, expiry)
        return otp

    def _expire(self, name: str) -> None:
        """Deferred deletion. Failures are logged, never raised."""
        if self.vault.metadata.get_otp_expiry(name) is None:
            logger.info("'%s' is no longer an OTP, skipping auto-delete", name)
            return
        try:
            self.vault.delete(name)
        except EntryNotFoundError:
            logger.warning("OTP '%s' was already removed", name)
        except AppPassError as e:
            logger.warning("Failed to auto-delete OTP for '%s': %s", name, e)
        else:
            logger.info("OTP '%s' expired and was deleted", name)

    def delete(self, name: str) -> None:
        """Delete an OTP, its metadata and any pending timer."""
        self.scheduler.cancel(name)
        self.vault.delete(name)

    def is_expired(self, name: str) -> bool:
        """True once the expiry has passed.

        Entries without an expiry record are reported as not expired.
        """
        expiry = self.vault.metadata.get_otp_expiry(name)
        if expiry is None:
            return False
        return self._now() >= expiry

    def status(self, name: str) -> OtpStatus:
        expiry = self.vault.metadata.get_otp_expiry(name)
        if expiry is None:
            return OtpStatus.NOT_OTP
        if self._now() >= expiry:
            return OtpStatus.EXPIRED
        return OtpStatus.ACTIVE

    def remaining_seconds(self, name: str) -> Optional[int]:
        """Seconds left before expiry, or None for non-OTP entries."""
        expiry = self.vault.metadata.get_otp_expiry(name)
        if expiry is None:
            return None
        return max(expiry - self._now(), 0)

    def cleanup_expired(self) -> List[str]:
        """Delete every indexed OTP whose expiry has passed."""
        now = self._now()
        removed = []
        for name in self.vault.index.names():
            expiry = self.vault.metadata.get_otp_expiry(name)
            if expiry is None or expiry > now:
                continue
            try:
                self.delete(name)
            except EntryNotFoundError:
                # Entry already gone; its leftovers were cleared by delete()
                removed.append(name)
            except AppPassError as e:
                logger.warning("Failed to cleanup expired OTP '%s': %s", name, e)
            else:
                removed.append(name)
        if removed:
            logger.info("Removed %d expired OTP(s)", len(removed))
        return removed


def startup_maintenance(vault: Vault, manager: Optional[OtpManager] = None) -> List[str]:
    """Self-heal the keyring before serving any command.

    Drops an index that lists nothing readable, then sweeps OTPs whose
    timers did not survive the previous process.
    """
    vault.cleanup_orphaned_index()
    return (manager or OtpManager(vault)).cleanup_expired()
