"""@brief Action handlers for the AppPass TUI panels.

Handlers take the shared vault, the OTP manager and the values typed into
the panel inputs, and return a single status line. Lines starting with a
check mark are successes; the app styles anything else as an error.
"""

from __future__ import annotations

from typing import Mapping, Optional

from apppass.config import Config
from apppass.messages import (
    ERROR_EMPTY_NAME,
    ERROR_EMPTY_PASSWORD,
    ERROR_NOT_FOUND,
    ERROR_NOT_FOUND_UPDATE,
    INFO_NO_ENTRIES,
    SUCCESS_CUSTOM_CREATED,
    SUCCESS_DELETED,
    SUCCESS_EXPORTED,
    SUCCESS_IMPORTED,
    SUCCESS_LENGTH_SAVED,
    SUCCESS_UPDATED,
)
from apppass.otp import OtpManager
from apppass.settings import load_password_length, save_password_length
from apppass.store import AppPassError, EntryNotFoundError
from apppass.ui import humanize_expiry
from apppass.vault import Vault

OK = "✓"
FAIL = "✗"


def _ok(message: str) -> str:
    return f"{OK} {message}"


def _fail(message: str) -> str:
    return f"{FAIL} {message}"


class _InputError(ValueError):
    pass


def _name(values: Mapping[str, str]) -> str:
    name = values.get("name", "").strip()
    if not name:
        raise _InputError(ERROR_EMPTY_NAME)
    return name


def _secret(values: Mapping[str, str]) -> str:
    secret = values.get("value", "")
    if not secret:
        raise _InputError(ERROR_EMPTY_PASSWORD)
    return secret


def _number(values: Mapping[str, str]) -> Optional[int]:
    raw = values.get("number", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise _InputError(f"'{raw}' is not a number") from None


def list_entries(vault: Vault, manager: OtpManager, values: Mapping[str, str]) -> str:
    """@brief Summarise stored applications without revealing secrets."""

    try:
        records = vault.list_entries()
    except AppPassError as e:
        return _fail(str(e))
    if not records:
        return _ok(INFO_NO_ENTRIES)
    lines = [f"{len(records)} application(s):"]
    for record in records:
        kind = "otp" if record.is_otp else record.password_type.value
        line = f"  {record.name} [{kind}]"
        if record.is_otp:
            line += f" expires {humanize_expiry(record.otp_expiry)}"
        lines.append(line)
    return _ok("\n".join(lines))


def view_entry(vault: Vault, manager: OtpManager, values: Mapping[str, str]) -> str:
    try:
        name = _name(values)
        secret = vault.get(name)
    except _InputError as e:
        return _fail(str(e))
    except EntryNotFoundError:
        return _fail(ERROR_NOT_FOUND.format(name=values.get("name", "").strip()))
    except AppPassError as e:
        return _fail(str(e))

    message = f"{name}: {secret} ({vault.metadata.resolve_type(name).value})"
    remaining = manager.remaining_seconds(name)
    if remaining is not None:
        message += f", OTP expires in {remaining}s"
    return _ok(message)


def create_auto(vault: Vault, manager: OtpManager, values: Mapping[str, str]) -> str:
    try:
        name = _name(values)
        password = vault.create_auto(name, _number(values))
    except (AppPassError, ValueError) as e:
        return _fail(str(e))
    return _ok(f"Password saved for '{name}': {password}")


def create_custom(vault: Vault, manager: OtpManager, values: Mapping[str, str]) -> str:
    try:
        name = _name(values)
        vault.create_custom(name, _secret(values))
    except (AppPassError, ValueError) as e:
        return _fail(str(e))
    return _ok(SUCCESS_CUSTOM_CREATED.format(name=name))


def update_auto(vault: Vault, manager: OtpManager, values: Mapping[str, str]) -> str:
    try:
        name = _name(values)
        password = vault.update_regenerate(name, _number(values))
    except EntryNotFoundError:
        return _fail(ERROR_NOT_FOUND_UPDATE.format(name=values.get("name", "").strip()))
    except (AppPassError, ValueError) as e:
        return _fail(str(e))
    return _ok(f"{SUCCESS_UPDATED.format(name=name)} New password: {password}")


def update_custom(vault: Vault, manager: OtpManager, values: Mapping[str, str]) -> str:
    try:
        name = _name(values)
        vault.update_custom(name, _secret(values))
    except EntryNotFoundError:
        return _fail(ERROR_NOT_FOUND_UPDATE.format(name=values.get("name", "").strip()))
    except (AppPassError, ValueError) as e:
        return _fail(str(e))
    return _ok(SUCCESS_UPDATED.format(name=name))


def delete_entry(vault: Vault, manager: OtpManager, values: Mapping[str, str]) -> str:
    """@brief Delete through the OTP manager so pending timers are cancelled."""

    try:
        name = _name(values)
        manager.delete(name)
    except EntryNotFoundError:
        return _fail(ERROR_NOT_FOUND.format(name=values.get("name", "").strip()))
    except (AppPassError, ValueError) as e:
        return _fail(str(e))
    return _ok(SUCCESS_DELETED.format(name=name))


def generate_otp(vault: Vault, manager: OtpManager, values: Mapping[str, str]) -> str:
    try:
        name = _name(values)
        ttl = _number(values)
        ttl = Config.DEFAULT_OTP_TTL if ttl is None else ttl
        otp = manager.generate(name, ttl)
    except (AppPassError, ValueError) as e:
        return _fail(str(e))
    return _ok(f"OTP for '{name}': {otp} (expires in {ttl}s)")


def memorizable(vault: Vault, manager: OtpManager, values: Mapping[str, str]) -> str:
    try:
        name = _name(values)
        password = vault.generate_memorizable(name)
    except (AppPassError, ValueError) as e:
        return _fail(str(e))
    return _ok(f"Memorizable password saved for '{name}': {password}")


def export_entries(vault: Vault, manager: OtpManager, values: Mapping[str, str]) -> str:
    path = values.get("value", "").strip()
    if not path:
        return _fail("File path cannot be empty")
    try:
        count = vault.export_all(path)
    except AppPassError as e:
        return _fail(str(e))
    return _ok(SUCCESS_EXPORTED.format(count=count, path=path))


def import_entries(vault: Vault, manager: OtpManager, values: Mapping[str, str]) -> str:
    path = values.get("value", "").strip()
    if not path:
        return _fail("File path cannot be empty")
    try:
        count = vault.import_all(path)
    except AppPassError as e:
        return _fail(str(e))
    return _ok(SUCCESS_IMPORTED.format(count=count, path=path))


def settings(vault: Vault, manager: OtpManager, values: Mapping[str, str]) -> str:
    """@brief Show the default length, or save a new one when given."""

    try:
        length = _number(values)
        if length is None:
            return _ok(f"Default password length: {load_password_length(vault.store)}")
        save_password_length(vault.store, length)
    except (AppPassError, ValueError) as e:
        return _fail(str(e))
    return _ok(SUCCESS_LENGTH_SAVED.format(length=length))
