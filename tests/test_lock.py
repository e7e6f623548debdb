"""Tests for the inactivity auto-lock."""

import threading
import time

import pytest

from apppass.lock import AutoLock


def test_rejects_non_positive_timeout():
    with pytest.raises(ValueError):
        AutoLock(0)


def test_default_timeout():
    assert AutoLock().timeout_seconds == 60


def test_locks_after_timeout():
    fired = threading.Event()
    lock = AutoLock(0.05, on_lock=fired.set)
    lock.start()
    try:
        assert fired.wait(2)
        assert lock.locked
    finally:
        lock.stop()


def test_touch_postpones_lock():
    lock = AutoLock(0.3)
    lock.start()
    try:
        for _ in range(3):
            time.sleep(0.1)
            lock.touch()
        assert not lock.locked
    finally:
        lock.stop()


def test_stop_prevents_lock():
    lock = AutoLock(0.05)
    lock.start()
    lock.stop()
    time.sleep(0.15)
    assert not lock.locked
