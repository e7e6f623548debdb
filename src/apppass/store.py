"""Secret store adapter over the OS keyring."""

import logging
from typing import Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from .config import config
from .models import StorageKey

logger = logging.getLogger(__name__)


class AppPassError(Exception):
    """Base exception for AppPass errors."""

    pass


class StoreError(AppPassError):
    """Raised when the keyring backend fails for a reason other than absence."""

    pass


class EntryNotFoundError(AppPassError):
    """Raised when a requested record does not exist."""

    def __init__(self, name: str):
        super().__init__(f"No password found for '{name}'.")
        self.name = name


class KeyringStore:
    """Single-key set/get/delete against one keyring service.

    Each call is atomic on its own; nothing here spans more than one key.
    """

    def __init__(self, service: Optional[str] = None):
        self.service = service or config.service

    def set(self, key: StorageKey, value: str) -> None:
        """Store a value, overwriting any previous one."""
        try:
            keyring.set_password(self.service, key.storage_key, value)
        except KeyringError as e:
            raise StoreError(f"Failed to write '{key.storage_key}': {e}") from e
        logger.debug("Stored %s", key.storage_key)

    def get(self, key: StorageKey) -> str:
        """Fetch a value or raise EntryNotFoundError."""
        try:
            value = keyring.get_password(self.service, key.storage_key)
        except KeyringError as e:
            raise StoreError(f"Failed to read '{key.storage_key}': {e}") from e
        if value is None:
            raise EntryNotFoundError(key.storage_key)
        return value

    def delete(self, key: StorageKey) -> None:
        """Delete a value or raise EntryNotFoundError."""
        try:
            keyring.delete_password(self.service, key.storage_key)
        except PasswordDeleteError as e:
            raise EntryNotFoundError(key.storage_key) from e
        except KeyringError as e:
            raise StoreError(f"Failed to delete '{key.storage_key}': {e}") from e
        logger.debug("Deleted %s", key.storage_key)

    def discard(self, key: StorageKey) -> bool:
        """Delete a value if present. Returns True if something was removed."""
        try:
            self.delete(key)
        except EntryNotFoundError:
            return False
        return True

    def exists(self, key: StorageKey) -> bool:
        """Check whether a value is stored under key."""
        try:
            self.get(key)
        except EntryNotFoundError:
            return False
        return True
