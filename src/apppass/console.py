"""Interactive console menu for AppPass."""

from enum import Enum
from typing import List, Optional

import questionary

from . import __version__, operations, ui
from .config import Config
from .lock import AutoLock
from .messages import (
    ERROR_EMPTY_NAME,
    ERROR_EMPTY_PASSWORD,
    INFO_CANCELLED,
    INFO_GOODBYE,
    INFO_LOCK_SET,
    INFO_LOCKED,
    INFO_NO_AUTO,
    INFO_NO_CUSTOM,
)
from .otp import OtpManager
from .ui import select_style
from .vault import Vault, get_vault_stats


class MainMenu(str, Enum):
    """Main menu choices."""

    CREATE_AUTO = "Create Password (Auto-generated)"
    CREATE_CUSTOM = "Create Password (Custom)"
    LIST = "List All Passwords"
    GET = "Get Password"
    UPDATE_AUTO = "Update Password (Regenerate)"
    UPDATE_CUSTOM = "Update Password (Custom)"
    DELETE = "Delete Password"
    OTP = "Generate OTP"
    MEMORIZABLE = "Generate Memorizable Password"
    EXPORT = "Export to CSV"
    IMPORT = "Import from CSV"
    SETTINGS = "Default Password Length"
    EXIT = "Exit"


def build_menu_choices(vault: Vault) -> List[questionary.Choice]:
    """Menu entries, annotated when the keyring has nothing to act on."""
    has_passwords = vault.has_any_passwords()
    has_auto = vault.has_auto_passwords()
    has_custom = vault.has_custom_passwords()

    notes = {
        MainMenu.LIST: None if has_passwords else "No passwords",
        MainMenu.UPDATE_AUTO: None if has_auto else "No auto",
        MainMenu.UPDATE_CUSTOM: None if has_custom else "No custom",
        MainMenu.DELETE: None if has_passwords else "No passwords",
        MainMenu.EXPORT: None if has_passwords else "No passwords",
    }

    choices = []
    for item in MainMenu:
        note = notes.get(item)
        title = f"{item.value} ({note})" if note else item.value
        choices.append(questionary.Choice(title=title, value=item))
    return choices


def _ask_name(message: str = "Application name") -> Optional[str]:
    name = ui.prompt(message).strip()
    if not name:
        ui.error(ERROR_EMPTY_NAME)
        return None
    return name


def _ask_length(message: str, default: int) -> Optional[int]:
    raw = ui.prompt(f"{message} [{default}]").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        ui.error(f"'{raw}' is not a number")
        return None


def _ask_secret(message: str) -> Optional[str]:
    password = questionary.password(message, style=select_style).ask()
    if not password:
        ui.error(ERROR_EMPTY_PASSWORD)
        return None
    return password


def handle_choice(vault: Vault, manager: OtpManager, choice: MainMenu) -> bool:
    """Run one menu action. Returns False when the session should end."""
    if choice == MainMenu.EXIT:
        return False

    if choice == MainMenu.CREATE_AUTO:
        name = _ask_name()
        if name:
            length = _ask_length("Password length", vault.default_length())
            if length is not None:
                operations.create_password(vault, name, length)

    elif choice == MainMenu.CREATE_CUSTOM:
        name = _ask_name()
        password = _ask_secret("Custom password:") if name else None
        if name and password:
            operations.create_custom_password(vault, name, password)

    elif choice == MainMenu.LIST:
        if not vault.has_any_passwords():
            ui.error("No passwords to list")
        else:
            operations.list_passwords(vault, reveal=ui.confirm("Show passwords?"))

    elif choice == MainMenu.GET:
        name = _ask_name()
        if name:
            operations.get_password(vault, name, copy=True, manager=manager)

    elif choice == MainMenu.UPDATE_AUTO:
        if not vault.has_auto_passwords():
            ui.error(INFO_NO_AUTO)
        else:
            name = _ask_name()
            length = (
                _ask_length("New password length", vault.default_length())
                if name
                else None
            )
            if name and length is not None:
                operations.update_password(vault, name, length)

    elif choice == MainMenu.UPDATE_CUSTOM:
        if not vault.has_custom_passwords():
            ui.error(INFO_NO_CUSTOM)
        else:
            name = _ask_name()
            password = _ask_secret("New password:") if name else None
            if name and password:
                operations.update_custom_password(vault, name, password)

    elif choice == MainMenu.DELETE:
        if not vault.has_any_passwords():
            ui.error("No passwords to delete")
        else:
            name = _ask_name("Application name to delete")
            if name and ui.confirm(f"Delete '{name}'?", default=False):
                operations.delete_password(vault, name, manager=manager)
            elif name:
                ui.info(INFO_CANCELLED)

    elif choice == MainMenu.OTP:
        name = _ask_name("OTP application name")
        if name:
            ttl = _ask_length("TTL in seconds", Config.DEFAULT_OTP_TTL)
            if ttl is not None:
                operations.generate_otp(manager, name, ttl)

    elif choice == MainMenu.MEMORIZABLE:
        name = _ask_name()
        if name:
            operations.generate_memorizable_password(vault, name)

    elif choice == MainMenu.EXPORT:
        if not vault.has_any_passwords():
            ui.error("No passwords to export")
        else:
            path = ui.prompt("Export file path").strip()
            if path:
                operations.export_passwords(vault, path)

    elif choice == MainMenu.IMPORT:
        path = ui.prompt("Import file path").strip()
        if path:
            operations.import_passwords(vault, path)

    elif choice == MainMenu.SETTINGS:
        length = _ask_length(
            f"Default password length ({Config.MIN_PASSWORD_LENGTH}-"
            f"{Config.MAX_PASSWORD_LENGTH})",
            vault.default_length(),
        )
        if length is not None:
            operations.set_default_length(vault, length)

    return True


def display_welcome_banner(vault: Vault) -> None:
    """Display welcome banner with keyring namespace and entry counts."""
    from rich.panel import Panel
    from rich.table import Table

    table = Table(show_header=False, box=None, padding=(0, 2), expand=True)
    table.add_column(style="dim", ratio=1)
    table.add_column(ratio=1)
    table.add_column(style="dim", ratio=1)
    table.add_column(ratio=1)
    table.add_row("AppPass", f"v{__version__}", "Keyring service", vault.store.service)
    stats = get_vault_stats(vault)
    table.add_row(
        "Entries",
        str(stats["total"]),
        "Auto / Custom / OTP",
        f"{stats['auto']} / {stats['custom']} / {stats['otp']}",
    )

    panel = Panel(
        table,
        title="[bold cyan]APPPASS - Password Manager[/bold cyan]",
        subtitle="Interactive Console Mode",
        border_style="cyan",
        expand=True,
        padding=(1, 2),
    )
    ui.console.print(panel)


def run_interactive_console(
    vault: Vault, manager: OtpManager, lock_timeout: Optional[int] = None
) -> None:
    """Menu loop until Exit, Ctrl+C or the inactivity lock."""
    auto_lock = None
    if lock_timeout:
        auto_lock = AutoLock(lock_timeout)
        auto_lock.start()
        ui.info(INFO_LOCK_SET.format(timeout=lock_timeout))

    display_welcome_banner(vault)

    try:
        while True:
            ui.console.print()
            choice = questionary.select(
                "Select option:",
                choices=build_menu_choices(vault),
                style=select_style,
            ).ask()

            if auto_lock is not None and auto_lock.locked:
                ui.warning(INFO_LOCKED)
                break

            if choice is None or not handle_choice(vault, manager, choice):
                ui.info(INFO_GOODBYE)
                break

            if auto_lock is not None:
                if auto_lock.locked:
                    ui.warning(INFO_LOCKED)
                    break
                auto_lock.touch()
    except (KeyboardInterrupt, EOFError):
        ui.info(f"\n{INFO_CANCELLED}")
    finally:
        if auto_lock is not None:
            auto_lock.stop()
