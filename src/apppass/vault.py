"""Vault management - password lifecycle on top of the keyring store."""

import logging
from typing import List, Optional

from .config import Config
from .index import EntryIndex
from .metadata import MetadataStore
from .models import EntryKey, PasswordRecord, PasswordType, is_reserved_name
from .passwordgen import generate_alphanumeric, generate_memorizable
from .settings import load_password_length
from .store import (
    AppPassError,
    EntryNotFoundError,
    KeyringStore,
    StoreError,
)

logger = logging.getLogger(__name__)


class EntryExistsError(AppPassError):
    """Raised when a create-style operation targets an existing entry."""

    def __init__(self, name: str):
        super().__init__(
            f"Password already exists for '{name}'. Use update to change it."
        )
        self.name = name


class ReservedNameError(AppPassError, ValueError):
    """Raised when an entry name collides with an internal key."""

    def __init__(self, name: str):
        super().__init__(f"'{name}' is reserved and cannot be used as a name.")
        self.name = name


class InvalidNameError(AppPassError, ValueError):
    """Raised when an entry name contains the index delimiter."""

    def __init__(self, name: str):
        super().__init__(
            f"'{name}' cannot contain '{Config.INDEX_DELIMITER}'."
        )
        self.name = name


class Vault:
    """Password entries stored in the OS keyring.

    Every operation touches several single-key records (entry, index,
    metadata). They are written in sequence, not as a transaction; a crash
    in between is repaired by the reconciliation methods below.
    """

    def __init__(self, store: Optional[KeyringStore] = None):
        self.store = store or KeyringStore()
        self.index = EntryIndex(self.store)
        self.metadata = MetadataStore(self.store)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _ensure_absent(self, name: str) -> None:
        if Config.INDEX_DELIMITER in name:
            raise InvalidNameError(name)
        if is_reserved_name(name):
            raise ReservedNameError(name)
        if self.store.exists(EntryKey(name)):
            raise EntryExistsError(name)

    def _ensure_present(self, name: str) -> None:
        if is_reserved_name(name) or not self.store.exists(EntryKey(name)):
            raise EntryNotFoundError(name)

    def _write(self, name: str, secret: str, password_type: PasswordType) -> None:
        self.store.set(EntryKey(name), secret)
        self.index.add(name)
        self.metadata.set_type(name, password_type)

    def _is_readable(self, name: str) -> bool:
        try:
            return self.store.exists(EntryKey(name))
        except StoreError as e:
            logger.warning("Skipping '%s': %s", name, e)
            return False

    def default_length(self) -> int:
        """Generation length used when the caller gives none."""
        return load_password_length(self.store)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create_auto(self, name: str, length: Optional[int] = None) -> str:
        """Generate and store a new alphanumeric password."""
        self._ensure_absent(name)
        password = generate_alphanumeric(
            length if length is not None else self.default_length()
        )
        self._write(name, password, PasswordType.AUTO)
        logger.info("Created auto password for '%s'", name)
        return password

    def create_custom(self, name: str, value: str) -> None:
        """Store a caller-supplied password verbatim."""
        self._ensure_absent(name)
        self._write(name, value, PasswordType.CUSTOM)
        logger.info("Created custom password for '%s'", name)

    def get(self, name: str) -> str:
        """Read the secret for name."""
        if is_reserved_name(name):
            raise EntryNotFoundError(name)
        return self.store.get(EntryKey(name))

    def update_regenerate(self, name: str, length: Optional[int] = None) -> str:
        """Replace an existing password with a fresh generated one.

        The result is always marked auto, whatever the previous type was.
        """
        self._ensure_present(name)
        password = generate_alphanumeric(
            length if length is not None else self.default_length()
        )
        self._write(name, password, PasswordType.AUTO)
        logger.info("Regenerated password for '%s'", name)
        return password

    def update_custom(self, name: str, value: str) -> None:
        """Replace an existing password with a caller-supplied one."""
        self._ensure_present(name)
        self._write(name, value, PasswordType.CUSTOM)
        logger.info("Updated custom password for '%s'", name)

    def delete(self, name: str) -> None:
        """Delete an entry along with its metadata and index slot.

        Raises EntryNotFoundError when the entry is already gone, after
        clearing any leftovers for that name.
        """
        if is_reserved_name(name):
            raise EntryNotFoundError(name)
        try:
            self.store.delete(EntryKey(name))
        except EntryNotFoundError:
            self.metadata.purge(name)
            self.index.remove(name)
            raise
        self.metadata.purge(name)
        self.index.remove(name)
        logger.info("Deleted '%s'", name)

    def generate_memorizable(self, name: str) -> str:
        """Store a Word-NN-Word password for a new entry."""
        self._ensure_absent(name)
        password = generate_memorizable()
        self._write(name, password, PasswordType.AUTO)
        return password

    # ------------------------------------------------------------------
    # Enumeration and reconciliation
    # ------------------------------------------------------------------

    def list_entries(self) -> List[PasswordRecord]:
        """Read every indexed entry, pruning names that no longer resolve."""
        records = []
        for name in self.index.names():
            try:
                secret = self.store.get(EntryKey(name))
            except EntryNotFoundError:
                logger.info("Removing orphaned index entry '%s'", name)
                self.index.remove(name)
                continue
            except StoreError as e:
                logger.warning("Failed to retrieve password for '%s': %s", name, e)
                continue
            records.append(
                PasswordRecord(
                    name=name,
                    secret=secret,
                    password_type=self.metadata.resolve_type(name),
                    otp_expiry=self.metadata.get_otp_expiry(name),
                )
            )
        return records

    def names(self) -> List[str]:
        """Indexed names that currently resolve, without mutating the index."""
        return [name for name in self.index.names() if self._is_readable(name)]

    def has_any_passwords(self) -> bool:
        return bool(self.names())

    def has_auto_passwords(self) -> bool:
        return any(
            self.metadata.resolve_type(name) is PasswordType.AUTO
            for name in self.names()
        )

    def has_custom_passwords(self) -> bool:
        return any(
            self.metadata.resolve_type(name) is PasswordType.CUSTOM
            for name in self.names()
        )

    def cleanup_orphaned_index(self) -> bool:
        """Delete the index if none of its names resolve to an entry."""
        if not self.index.exists():
            return False
        if any(self._is_readable(name) for name in self.index.names()):
            return False
        self.index.drop()
        logger.info("Removed stale index with no readable entries")
        return True

    # ------------------------------------------------------------------
    # Export / import
    # ------------------------------------------------------------------

    def export_all(self, path: str) -> int:
        """Write name,secret lines for every readable entry."""
        lines = []
        for name in self.index.names():
            try:
                secret = self.store.get(EntryKey(name))
            except (EntryNotFoundError, StoreError):
                continue
            lines.append(PasswordRecord(name=name, secret=secret).to_line())

        try:
            with open(path, "w", encoding="utf-8") as f:
                for line in lines:
                    f.write(line + "\n")
        except OSError as e:
            raise StoreError(f"Failed to export passwords to '{path}': {e}") from e
        return len(lines)

    def import_all(self, path: str) -> int:
        """Load name,secret lines, overwriting entries and marking them custom.

        Lines without exactly two fields, or naming a reserved key, are skipped.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StoreError(f"Failed to import passwords from '{path}': {e}") from e

        imported = 0
        for line in content.splitlines():
            fields = [field.strip() for field in line.split(",")]
            if len(fields) != 2:
                continue
            name, secret = fields
            if is_reserved_name(name):
                logger.warning("Skipping reserved name '%s' during import", name)
                continue
            self._write(name, secret, PasswordType.CUSTOM)
            self.metadata.delete_otp_expiry(name)
            imported += 1
        return imported


def get_vault_stats(vault: Vault) -> dict:
    """
    Get vault statistics.

    Returns:
        Dictionary with statistics:
        - total: Number of readable entries
        - auto: Entries with generated secrets
        - custom: Entries with user-chosen secrets
        - otp: Entries with an expiry
    """
    records = vault.list_entries()
    return {
        "total": len(records),
        "auto": sum(1 for r in records if r.password_type is PasswordType.AUTO),
        "custom": sum(1 for r in records if r.password_type is PasswordType.CUSTOM),
        "otp": sum(1 for r in records if r.is_otp),
    }
