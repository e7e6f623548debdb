"""@brief Panel definitions and registry helpers for the AppPass TUI."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from typing import Callable, Mapping, Sequence

from apppass.otp import OtpManager
from apppass.vault import Vault

ActionHandler = Callable[[Vault, OtpManager, Mapping[str, str]], str]


@dataclass(frozen=True)
class PanelField:
    """@brief One input the panel collects before running its handler."""

    key: str
    label: str
    password: bool = False


@dataclass(frozen=True)
class PanelDefinition:
    """@brief Capture panel intent so the UI can stay declarative."""

    identifier: str
    title: str
    summary: str
    description: str
    handler: str
    fields: tuple[PanelField, ...] = ()


class PanelRegistry:
    """@brief Lookup helpers so panels evolve without touching the UI."""

    def __init__(self, panels: Sequence[PanelDefinition]) -> None:
        self._panels: Mapping[str, PanelDefinition] = {
            panel.identifier: panel for panel in panels
        }

    def identifiers(self) -> tuple[str, ...]:
        """@brief Preserve author-defined ordering for the navigation list."""

        return tuple(self._panels.keys())

    def get(self, identifier: str) -> PanelDefinition:
        return self._panels[identifier]

    def run(
        self,
        identifier: str,
        vault: Vault,
        manager: OtpManager,
        values: Mapping[str, str],
    ) -> str:
        """@brief Resolve and execute the panel handler with the collected values."""

        panel = self.get(identifier)
        handler = _load_callable(panel.handler)
        return handler(vault, manager, values)


_NAME = PanelField("name", "Application name")
_SECRET = PanelField("value", "Password", password=True)


def _panel(
    identifier: str,
    title: str,
    summary: str,
    description: str,
    fields: tuple[PanelField, ...] = (),
) -> PanelDefinition:
    return PanelDefinition(
        identifier=identifier,
        title=title,
        summary=summary,
        description=description,
        handler=f"apppass.tui.actions.{identifier}",
        fields=fields,
    )


def build_default_registry() -> PanelRegistry:
    """@brief Construct the default registry used by the AppPass TUI."""

    panels: list[PanelDefinition] = [
        _panel(
            "list_entries",
            "List",
            "Every stored application",
            "Shows application names, types and OTP expiry. Secrets stay hidden.",
        ),
        _panel(
            "view_entry",
            "Get",
            "Reveal one password",
            "Type the application name and press Enter.",
            (_NAME,),
        ),
        _panel(
            "create_auto",
            "Create",
            "Generate a random password",
            "Leave the length empty to use the saved default.",
            (_NAME, PanelField("number", "Length (optional)")),
        ),
        _panel(
            "create_custom",
            "Create custom",
            "Store a password you choose",
            "The password is saved as-is in the OS keyring.",
            (_NAME, _SECRET),
        ),
        _panel(
            "update_auto",
            "Update",
            "Regenerate an existing password",
            "The entry becomes auto-generated even if it was custom.",
            (_NAME, PanelField("number", "Length (optional)")),
        ),
        _panel(
            "update_custom",
            "Update custom",
            "Replace a password with your own",
            "The application must already exist.",
            (_NAME, PanelField("value", "New password", password=True)),
        ),
        _panel(
            "delete_entry",
            "Delete",
            "Remove an application",
            "Deletes the password and its type and OTP records.",
            (_NAME,),
        ),
        _panel(
            "generate_otp",
            "OTP",
            "One-time password with a time-to-live",
            "The entry is removed when the TTL runs out, or on the next start.",
            (_NAME, PanelField("number", "TTL in seconds (default 300)")),
        ),
        _panel(
            "memorizable",
            "Memorizable",
            "Word-NN-Word password",
            "Easy to type, weaker than a generated password.",
            (_NAME,),
        ),
        _panel(
            "export_entries",
            "Export",
            "Write name,password lines to a file",
            "The file is plaintext. Keep it somewhere safe.",
            (PanelField("value", "Export file path"),),
        ),
        _panel(
            "import_entries",
            "Import",
            "Read name,password lines from a file",
            "Existing applications with the same name are overwritten.",
            (PanelField("value", "Import file path"),),
        ),
        _panel(
            "settings",
            "Settings",
            "Default password length",
            "Enter a length between 8 and 128, or leave empty to show the current one.",
            (PanelField("number", "Default length"),),
        ),
    ]

    return PanelRegistry(panels)


def _load_callable(dotted_path: str) -> ActionHandler:
    """@brief Import and return the callable designated by dotted_path."""

    module_path, _, attr = dotted_path.rpartition(".")
    module = import_module(module_path)
    return getattr(module, attr)
