"""Operations shared by the CLI and the interactive console.

Each function performs one vault operation and renders its outcome. Expected
failures (missing entry, duplicate name, keyring errors) are reported, not
raised, so a session keeps running.
"""

from typing import Optional

from . import ui
from .messages import (
    ERROR_GENERIC,
    ERROR_NOT_FOUND,
    ERROR_NOT_FOUND_UPDATE,
    INFO_NO_ENTRIES,
    INFO_OTP_AUTODELETE,
    INFO_OTP_EXPIRES,
    SUCCESS_CREATED,
    SUCCESS_CUSTOM_CREATED,
    SUCCESS_DELETED,
    SUCCESS_EXPORTED,
    SUCCESS_IMPORTED,
    SUCCESS_LENGTH_RESET,
    SUCCESS_LENGTH_SAVED,
    SUCCESS_MEMORIZABLE,
    SUCCESS_OTP,
    SUCCESS_UPDATED,
)
from .otp import OtpManager
from .settings import load_password_length, reset_password_length, save_password_length
from .store import AppPassError, EntryNotFoundError
from .vault import EntryExistsError, Vault


def create_password(vault: Vault, name: str, length: Optional[int] = None) -> bool:
    """Generate and save a password for a new application."""
    try:
        password = vault.create_auto(name, length)
    except (AppPassError, ValueError) as e:
        ui.error(str(e))
        return False
    ui.success(SUCCESS_CREATED.format(name=name))
    ui.show_password_generated(name, password)
    return True


def create_custom_password(vault: Vault, name: str, value: str) -> bool:
    """Save a user-chosen password for a new application."""
    try:
        vault.create_custom(name, value)
    except AppPassError as e:
        ui.error(str(e))
        return False
    ui.success(SUCCESS_CUSTOM_CREATED.format(name=name))
    return True


def list_passwords(vault: Vault, reveal: bool = False) -> bool:
    """List stored applications, dropping stale index names on the way."""
    try:
        records = vault.list_entries()
    except AppPassError as e:
        ui.error(ERROR_GENERIC.format(error=e))
        return False
    if not records:
        ui.info(INFO_NO_ENTRIES)
        return True
    ui.show_entries_table(records, reveal=reveal)
    return True


def get_password(
    vault: Vault,
    name: str,
    copy: bool = False,
    manager: Optional[OtpManager] = None,
) -> bool:
    """Show (and optionally copy) the password for one application."""
    try:
        secret = vault.get(name)
    except EntryNotFoundError:
        ui.warning(ERROR_NOT_FOUND.format(name=name))
        return False
    except AppPassError as e:
        ui.error(f"Failed to retrieve password for '{name}': {e}")
        return False

    remaining = manager.remaining_seconds(name) if manager else None
    ui.show_secret_panel(
        name, secret, vault.metadata.resolve_type(name), otp_remaining=remaining
    )
    if copy:
        ui.copy_with_feedback(secret)
    return True


def delete_password(vault: Vault, name: str, manager: Optional[OtpManager] = None) -> bool:
    """Delete one application's password and its metadata."""
    try:
        if manager is not None:
            manager.delete(name)
        else:
            vault.delete(name)
    except EntryNotFoundError:
        ui.warning(ERROR_NOT_FOUND.format(name=name))
        return False
    except AppPassError as e:
        ui.error(f"Failed to delete password for '{name}': {e}")
        return False
    ui.success(SUCCESS_DELETED.format(name=name))
    return True


def update_password(vault: Vault, name: str, length: Optional[int] = None) -> bool:
    """Regenerate an existing application's password."""
    try:
        password = vault.update_regenerate(name, length)
    except EntryNotFoundError:
        ui.error(ERROR_NOT_FOUND_UPDATE.format(name=name))
        return False
    except (AppPassError, ValueError) as e:
        ui.error(str(e))
        return False
    ui.success(SUCCESS_UPDATED.format(name=name))
    ui.show_password_generated(name, password)
    return True


def update_custom_password(vault: Vault, name: str, value: str) -> bool:
    """Replace an existing application's password with a chosen one."""
    try:
        vault.update_custom(name, value)
    except EntryNotFoundError:
        ui.error(ERROR_NOT_FOUND_UPDATE.format(name=name))
        return False
    except AppPassError as e:
        ui.error(str(e))
        return False
    ui.success(SUCCESS_UPDATED.format(name=name))
    return True


def generate_memorizable_password(vault: Vault, name: str) -> bool:
    """Save a Word-NN-Word password for a new application."""
    try:
        password = vault.generate_memorizable(name)
    except AppPassError as e:
        ui.error(str(e))
        return False
    ui.success(SUCCESS_MEMORIZABLE.format(name=name))
    ui.show_password_generated(name, password, title="Memorizable Password")
    return True


def generate_otp(
    manager: OtpManager, name: str, ttl: int, length: Optional[int] = None
) -> bool:
    """Create an OTP that deletes itself after ttl seconds."""
    try:
        otp = manager.generate(name, ttl, length)
    except EntryExistsError as e:
        ui.error(str(e))
        return False
    except (AppPassError, ValueError) as e:
        ui.error(f"Failed to generate OTP: {e}")
        return False
    ui.success(SUCCESS_OTP.format(name=name))
    ui.show_password_generated(name, otp, title="Temporary Password")
    ui.info(INFO_OTP_EXPIRES.format(ttl=ttl))
    ui.info(INFO_OTP_AUTODELETE.format(ttl=ttl))
    return True


def export_passwords(vault: Vault, path: str) -> bool:
    try:
        count = vault.export_all(path)
    except AppPassError as e:
        ui.error(str(e))
        return False
    ui.success(SUCCESS_EXPORTED.format(count=count, path=path))
    return True


def import_passwords(vault: Vault, path: str) -> bool:
    try:
        count = vault.import_all(path)
    except AppPassError as e:
        ui.error(str(e))
        return False
    ui.success(SUCCESS_IMPORTED.format(count=count, path=path))
    return True


def set_default_length(vault: Vault, length: Optional[int], reset: bool = False) -> bool:
    """Show, change or reset the persisted default generation length."""
    try:
        if reset:
            reset_password_length(vault.store)
            ui.success(SUCCESS_LENGTH_RESET.format(length=load_password_length(vault.store)))
        elif length is None:
            ui.info(f"Default password length: {load_password_length(vault.store)}")
        else:
            save_password_length(vault.store, length)
            ui.success(SUCCESS_LENGTH_SAVED.format(length=length))
    except (AppPassError, ValueError) as e:
        ui.error(str(e))
        return False
    return True
