"""@brief Textual application wiring for the AppPass TUI."""

from __future__ import annotations

from typing import Dict, Optional

from textual import on
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header, Input, ListItem, ListView, Static

from apppass.otp import OtpManager
from apppass.tui.actions import FAIL, OK
from apppass.tui.panels import PanelDefinition, PanelRegistry, build_default_registry
from apppass.tui.theme import MONOKAI_THEME, build_css
from apppass.vault import Vault

FIELD_KEYS = ("name", "value", "number")


class AppPassApp(App[None]):
    """@brief Split view: panel list on the left, inputs and status on the right."""

    CSS = build_css(MONOKAI_THEME)

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+r", "run_panel", "Run"),
        ("escape", "focus_panels", "Panels"),
    ]

    def __init__(
        self,
        vault: Vault,
        manager: OtpManager,
        registry: Optional[PanelRegistry] = None,
    ) -> None:
        super().__init__()
        self.vault = vault
        self.manager = manager
        self._panel_registry: PanelRegistry = registry or build_default_registry()
        self.active_panel: Optional[str] = None
        self.status_message: str = ""

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        with Horizontal(id="body"):
            with Vertical(id="nav-pane"):
                yield Static("AppPass", classes="panel-title")
                yield ListView(
                    *[
                        ListItem(
                            Static(self._panel_registry.get(identifier).title),
                            id=identifier,
                        )
                        for identifier in self._panel_registry.identifiers()
                    ],
                    id="panel-list",
                )
            with Vertical(id="detail-pane"):
                yield Static("", id="detail-title", classes="panel-title")
                yield Static("", id="detail-summary", classes="panel-summary")
                yield Static("", id="detail-description")
                for key in FIELD_KEYS:
                    yield Input(id=f"field-{key}")
                yield Static(
                    "Enter runs the panel. Esc goes back to the list.",
                    id="detail-hint",
                    classes="hint",
                )
                yield Static("", id="status", classes="status")
        yield Footer()

    def on_mount(self) -> None:
        """@brief Select the first panel so the detail pane is never empty."""

        self.title = "AppPass"
        self.sub_title = self.vault.store.service
        list_view = self.query_one("#panel-list", ListView)
        if not list_view.children:
            return
        list_view.index = 0
        self._select_panel(self._panel_registry.identifiers()[0])
        self.set_focus(list_view)

    @on(ListView.Highlighted, "#panel-list")
    def handle_panel_highlight(self, event: ListView.Highlighted) -> None:
        item = event.item
        if item is None or item.id is None:
            return
        self._select_panel(item.id)

    @on(ListView.Selected, "#panel-list")
    def handle_panel_selected(self, event: ListView.Selected) -> None:
        """@brief Run field-less panels at once, otherwise move to the first input."""

        if event.item.id is not None:
            self._select_panel(event.item.id)
        panel = self._current_panel()
        if panel is None:
            return
        if panel.fields:
            self.query_one(f"#field-{panel.fields[0].key}", Input).focus()
        else:
            self.run_panel_action()

    @on(Input.Submitted)
    def handle_input_submitted(self, event: Input.Submitted) -> None:
        """@brief Enter in an input advances to the next field, then runs."""

        panel = self._current_panel()
        if panel is None:
            return
        keys = [field.key for field in panel.fields]
        current = (event.input.id or "").replace("field-", "", 1)
        if current in keys and keys.index(current) < len(keys) - 1:
            next_key = keys[keys.index(current) + 1]
            self.query_one(f"#field-{next_key}", Input).focus()
            return
        self.run_panel_action()

    def action_run_panel(self) -> None:
        self.run_panel_action()

    def action_focus_panels(self) -> None:
        self.query_one("#panel-list", ListView).focus()

    def run_panel_action(self) -> str:
        """@brief Execute the active panel with the current input values."""

        panel = self._current_panel()
        if panel is None:
            self._set_status("Select a panel first.")
            return self.status_message

        values: Dict[str, str] = {
            field.key: self.query_one(f"#field-{field.key}", Input).value
            for field in panel.fields
        }
        result = self._panel_registry.run(
            panel.identifier, self.vault, self.manager, values
        )
        for field in panel.fields:
            if field.password:
                self.query_one(f"#field-{field.key}", Input).value = ""
        self._set_status(result)
        return result

    def _current_panel(self) -> Optional[PanelDefinition]:
        if self.active_panel is None:
            return None
        return self._panel_registry.get(self.active_panel)

    def _select_panel(self, identifier: str) -> None:
        """@brief Show the inputs the newly active panel asks for."""

        if identifier == self.active_panel:
            return

        panel = self._panel_registry.get(identifier)
        self.active_panel = identifier

        self.query_one("#detail-title", Static).update(panel.title)
        self.query_one("#detail-summary", Static).update(panel.summary)
        self.query_one("#detail-description", Static).update(panel.description)

        fields = {field.key: field for field in panel.fields}
        for key in FIELD_KEYS:
            widget = self.query_one(f"#field-{key}", Input)
            field = fields.get(key)
            widget.value = ""
            widget.display = field is not None
            if field is not None:
                widget.placeholder = field.label
                widget.password = field.password
        self._set_status("Ready.")

    def _set_status(self, message: str) -> None:
        self.status_message = message
        status = self.query_one("#status", Static)
        status.update(message)
        status.set_class(message.startswith(OK), "success")
        status.set_class(message.startswith(FAIL), "error")

    def action_quit(self) -> None:
        self.exit()


def run(vault: Vault, manager: OtpManager) -> None:
    """@brief Launch the Textual application."""

    AppPassApp(vault, manager).run()
