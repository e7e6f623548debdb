"""@brief Theme definitions and helpers for the AppPass TUI."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    """@brief Palette values shared by every AppPass screen."""

    screen_background: str
    body_background: str
    nav_background: str
    detail_background: str
    border_nav: str
    border_detail: str
    border_input: str
    text_default: str
    text_title: str
    text_summary: str
    text_hint: str
    text_success: str
    text_error: str
    list_item_highlight: str


MONOKAI_THEME = Theme(
    screen_background="#272822",
    body_background="#1e1f1c",
    nav_background="#3e3d32",
    detail_background="#2d2e27",
    border_nav="#66d9ef",
    border_detail="#a6e22e",
    border_input="#fd971f",
    text_default="#f8f8f2",
    text_title="#a6e22e",
    text_summary="#fd971f",
    text_hint="#75715e",
    text_success="#a6e22e",
    text_error="#f92672",
    list_item_highlight="#49483e",
)


def build_css(theme: Theme) -> str:
    """@brief Generate the Textual CSS for the list and detail split view."""

    return f"""
    Screen {{
        background: {theme.screen_background};
        color: {theme.text_default};
    }}

    #body {{
        height: 1fr;
        padding: 1 2;
        background: {theme.body_background};
    }}

    #nav-pane {{
        width: 36;
        min-width: 30;
        max-width: 42;
        padding: 1 1;
        margin-right: 1;
        background: {theme.nav_background};
        border: round {theme.border_nav};
    }}

    #panel-list {{
        height: 1fr;
        background: transparent;
    }}

    #panel-list > ListItem.--highlight {{
        background: {theme.list_item_highlight};
        text-style: bold;
    }}

    #detail-pane {{
        width: 1fr;
        padding: 1 2;
        background: {theme.detail_background};
        border: round {theme.border_detail};
    }}

    .panel-title {{
        text-style: bold;
        color: {theme.text_title};
    }}

    #detail-title {{
        margin-bottom: 1;
    }}

    .panel-summary {{
        color: {theme.text_summary};
    }}

    #detail-description {{
        margin: 1 0;
    }}

    #detail-pane Input {{
        margin-top: 1;
        border: tall {theme.text_hint};
    }}

    #detail-pane Input:focus {{
        border: tall {theme.border_input};
    }}

    .hint {{
        color: {theme.text_hint};
        margin-top: 1;
    }}

    #status {{
        margin-top: 1;
        height: auto;
    }}

    #status.success {{
        color: {theme.text_success};
    }}

    #status.error {{
        color: {theme.text_error};
        text-style: bold;
    }}
    """
