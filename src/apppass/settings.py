"""Persistent user settings stored next to the entries."""

import logging

from .config import Config
from .models import SettingsKey
from .store import EntryNotFoundError, KeyringStore

logger = logging.getLogger(__name__)


def validate_password_length(length: int) -> int:
    """Check length against the range offered by the settings screen."""
    if not Config.MIN_PASSWORD_LENGTH <= length <= Config.MAX_PASSWORD_LENGTH:
        raise ValueError(
            f"Password length must be between {Config.MIN_PASSWORD_LENGTH} "
            f"and {Config.MAX_PASSWORD_LENGTH} characters."
        )
    return length


def load_password_length(store: KeyringStore) -> int:
    """Preferred generation length, falling back to the default."""
    try:
        raw = store.get(SettingsKey())
    except EntryNotFoundError:
        return Config.DEFAULT_PASSWORD_LENGTH

    try:
        return validate_password_length(int(raw))
    except ValueError:
        logger.warning("Ignoring invalid stored password length %r", raw)
        return Config.DEFAULT_PASSWORD_LENGTH


def save_password_length(store: KeyringStore, length: int) -> None:
    """Persist the preferred generation length (never indexed)."""
    validate_password_length(length)
    store.set(SettingsKey(), str(length))


def reset_password_length(store: KeyringStore) -> bool:
    """Forget the preferred length so the default applies again."""
    return store.discard(SettingsKey())
