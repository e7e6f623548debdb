"""AppPass password manager backed by the OS keyring."""

# Version constant (must be defined before imports to avoid circular dependencies)
__version__ = "0.5.0"

# ruff: noqa: E402
from .config import config
from .index import EntryIndex
from .metadata import MetadataStore
from .models import PasswordRecord, PasswordType
from .otp import OtpManager, OtpScheduler, OtpStatus, startup_maintenance
from .store import AppPassError, EntryNotFoundError, KeyringStore, StoreError
from .vault import (
    EntryExistsError,
    InvalidNameError,
    ReservedNameError,
    Vault,
    get_vault_stats,
)

__all__ = [
    "config",
    "EntryIndex",
    "MetadataStore",
    "PasswordRecord",
    "PasswordType",
    "OtpManager",
    "OtpScheduler",
    "OtpStatus",
    "startup_maintenance",
    "KeyringStore",
    "Vault",
    "get_vault_stats",
    "AppPassError",
    "StoreError",
    "EntryNotFoundError",
    "EntryExistsError",
    "ReservedNameError",
    "InvalidNameError",
]
