"""Shared pytest fixtures for all tests."""

from typing import Dict, Optional, Tuple

import keyring
import pytest
from keyring.backend import KeyringBackend
from keyring.errors import KeyringError, PasswordDeleteError

from apppass.otp import OtpManager, OtpScheduler
from apppass.store import KeyringStore
from apppass.vault import Vault

SERVICE = "apppass-test"

# ============================================================================
# Keyring Backends
# ============================================================================


class MemoryKeyring(KeyringBackend):
    """Process-local keyring so tests never touch the real OS store."""

    priority = 1  # type: ignore[assignment]

    def __init__(self) -> None:
        super().__init__()
        self.values: Dict[Tuple[str, str], str] = {}

    def get_password(self, service: str, username: str) -> Optional[str]:
        return self.values.get((service, username))

    def set_password(self, service: str, username: str, password: str) -> None:
        self.values[(service, username)] = password

    def delete_password(self, service: str, username: str) -> None:
        try:
            del self.values[(service, username)]
        except KeyError:
            raise PasswordDeleteError("Password not found") from None


class BrokenKeyring(MemoryKeyring):
    """Backend that fails every read of the keys in `broken`."""

    def __init__(self) -> None:
        super().__init__()
        self.broken: set = set()

    def get_password(self, service: str, username: str) -> Optional[str]:
        if username in self.broken:
            raise KeyringError(f"backend locked for {username}")
        return super().get_password(service, username)


class FakeClock:
    """Settable replacement for time.time."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def memory_keyring() -> MemoryKeyring:
    """Install a fresh in-memory keyring for every test."""
    backend = MemoryKeyring()
    keyring.set_keyring(backend)
    return backend


@pytest.fixture
def broken_keyring() -> BrokenKeyring:
    backend = BrokenKeyring()
    keyring.set_keyring(backend)
    return backend


@pytest.fixture
def store() -> KeyringStore:
    return KeyringStore(SERVICE)


@pytest.fixture
def vault(store: KeyringStore) -> Vault:
    """Provide an empty vault bound to the test service."""
    return Vault(store)


@pytest.fixture
def populated_vault(vault: Vault) -> Vault:
    """Provide a vault with one auto and one custom entry."""
    vault.create_auto("gmail", 16)
    vault.create_custom("github", "gh-secret")
    return vault


# ============================================================================
# OTP Fixtures
# ============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler():
    scheduler = OtpScheduler()
    yield scheduler
    scheduler.cancel_all()


@pytest.fixture
def manager(vault: Vault, scheduler: OtpScheduler, clock: FakeClock) -> OtpManager:
    """OTP manager with a controllable clock."""
    return OtpManager(vault, scheduler=scheduler, clock=clock)


# ============================================================================
# CLI State
# ============================================================================


@pytest.fixture(autouse=True)
def reset_cli_state():
    """Drop the CLI's cached vault so each test sees its own keyring."""
    from apppass import cli
    from apppass.config import config

    cli.reset_state()
    service = config.service
    yield
    cli.reset_state()
    config.service = service
