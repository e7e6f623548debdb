"""Data models: tagged storage keys and password records."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .config import Config


class PasswordType(str, Enum):
    """How an entry's secret was produced."""

    AUTO = "auto"
    CUSTOM = "custom"


@dataclass(frozen=True)
class EntryKey:
    """Key of the secret value for one entry."""

    name: str

    @property
    def storage_key(self) -> str:
        return self.name


@dataclass(frozen=True)
class TypeKey:
    """Key of the auto/custom marker for one entry."""

    name: str

    @property
    def storage_key(self) -> str:
        return f"{self.name}{Config.TYPE_SUFFIX}"


@dataclass(frozen=True)
class ExpiryKey:
    """Key of the OTP expiry timestamp for one entry."""

    name: str

    @property
    def storage_key(self) -> str:
        return f"{self.name}{Config.OTP_EXPIRY_SUFFIX}"


@dataclass(frozen=True)
class IndexKey:
    """Key of the record enumerating every entry name."""

    @property
    def storage_key(self) -> str:
        return Config.INDEX_KEY


@dataclass(frozen=True)
class SettingsKey:
    """Key of the preferred generation length."""

    @property
    def storage_key(self) -> str:
        return Config.PASSWORD_LENGTH_KEY


StorageKey = Union[EntryKey, TypeKey, ExpiryKey, IndexKey, SettingsKey]


def is_reserved_name(name: str) -> bool:
    """Return True if name can never be a real entry.

    Reserved names are the index and settings keys plus anything that looks
    like a metadata key. Those must stay out of enumeration. A name holding
    the index delimiter could not survive a round trip through the index.
    """
    if not name or Config.INDEX_DELIMITER in name:
        return True
    if name in (Config.INDEX_KEY, Config.PASSWORD_LENGTH_KEY):
        return True
    return name.endswith(Config.TYPE_SUFFIX) or name.endswith(
        Config.OTP_EXPIRY_SUFFIX
    )


@dataclass
class PasswordRecord:
    """One readable entry as shown in listings."""

    name: str
    secret: str
    password_type: PasswordType = PasswordType.AUTO
    otp_expiry: Optional[int] = None

    @property
    def is_otp(self) -> bool:
        """Presence of an expiry classifies the entry as an OTP."""
        return self.otp_expiry is not None

    def to_line(self) -> str:
        """Render as an export line (no escaping)."""
        return f"{self.name},{self.secret}"
