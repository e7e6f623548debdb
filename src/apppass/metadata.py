"""Per-entry metadata records: password type and OTP expiry."""

import logging
from typing import Optional, Union

from .models import ExpiryKey, PasswordType, TypeKey
from .store import EntryNotFoundError, KeyringStore

logger = logging.getLogger(__name__)


class MetadataStore:
    """Accessors for the type and expiry records attached to an entry."""

    def __init__(self, store: KeyringStore):
        self.store = store

    def set_type(self, name: str, password_type: Union[PasswordType, str]) -> None:
        """Overwrite the type marker for name."""
        value = PasswordType(password_type)
        self.store.set(TypeKey(name), value.value)

    def get_type(self, name: str) -> Optional[PasswordType]:
        """Return the stored type, or None when no marker exists."""
        try:
            raw = self.store.get(TypeKey(name))
        except EntryNotFoundError:
            return None
        try:
            return PasswordType(raw)
        except ValueError:
            logger.warning("Ignoring unknown password type %r for %s", raw, name)
            return None

    def resolve_type(self, name: str) -> PasswordType:
        """Type used for classification. Entries without a marker are auto."""
        return self.get_type(name) or PasswordType.AUTO

    def set_otp_expiry(self, name: str, expiry: int) -> None:
        """Store the Unix timestamp at which the OTP for name expires."""
        self.store.set(ExpiryKey(name), str(int(expiry)))

    def get_otp_expiry(self, name: str) -> Optional[int]:
        """Return the expiry timestamp, or None if name is not an OTP."""
        try:
            raw = self.store.get(ExpiryKey(name))
        except EntryNotFoundError:
            return None
        try:
            return int(raw)
        except ValueError:
            logger.warning("Ignoring unparsable OTP expiry %r for %s", raw, name)
            return None

    def delete_otp_expiry(self, name: str) -> bool:
        """Remove the expiry record. Missing records are not an error."""
        return self.store.discard(ExpiryKey(name))

    def purge(self, name: str) -> None:
        """Cascade-delete every metadata record belonging to name."""
        self.store.discard(TypeKey(name))
        self.store.discard(ExpiryKey(name))
