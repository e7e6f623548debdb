"""Enumerable index of entry names kept in a single keyring record.

The keyring cannot list its keys, so every real entry name is also recorded
in one reserved record as a sorted, comma-joined list. The index is a
convenience for enumeration only; whether an entry exists is always decided
by reading the entry itself.

Read-modify-write of the index is not atomic across processes or OTP timers.
Last writer wins.
"""

import logging
from typing import List, Set

from .config import Config
from .models import IndexKey, is_reserved_name
from .store import EntryNotFoundError, KeyringStore

logger = logging.getLogger(__name__)


def parse_index(raw: str) -> Set[str]:
    """Split a stored index value into the set of real entry names."""
    return {
        token
        for token in raw.split(Config.INDEX_DELIMITER)
        if not is_reserved_name(token)
    }


def format_index(names: Set[str]) -> str:
    """Join names in sorted order so unchanged sets serialize identically."""
    return Config.INDEX_DELIMITER.join(sorted(names))


class EntryIndex:
    """Maintains the set of entry names in the index record."""

    def __init__(self, store: KeyringStore):
        self.store = store
        self._key = IndexKey()

    def _load(self) -> Set[str]:
        try:
            raw = self.store.get(self._key)
        except EntryNotFoundError:
            return set()
        return parse_index(raw)

    def _write(self, names: Set[str]) -> None:
        if not names:
            # An empty index is represented by its absence
            self.store.discard(self._key)
            return
        self.store.set(self._key, format_index(names))

    def add(self, name: str) -> None:
        """Record name in the index. Reserved names are ignored."""
        if is_reserved_name(name):
            logger.debug("Refusing to index reserved name %r", name)
            return
        names = self._load()
        names.add(name)
        self._write(names)

    def remove(self, name: str) -> None:
        """Drop name from the index, deleting the record once empty."""
        names = self._load()
        names.discard(name)
        self._write(names)

    def names(self) -> List[str]:
        """List indexed names in sorted order."""
        return sorted(self._load())

    def exists(self) -> bool:
        """Check whether the index record is present at all."""
        return self.store.exists(self._key)

    def drop(self) -> bool:
        """Delete the index record outright."""
        return self.store.discard(self._key)

    def __contains__(self, name: str) -> bool:
        return name in self._load()

    def __len__(self) -> int:
        return len(self._load())
