"""UI utilities."""

from datetime import datetime, timezone
from typing import List, Optional

import questionary
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import Config
from .models import PasswordRecord, PasswordType

console = Console()

# Clean questionary style - minimal highlighting for select/autocomplete
select_style = questionary.Style(
    [
        ("qmark", "fg:#5f87af bold"),
        ("question", "bold"),
        ("pointer", "fg:#5f87af bold"),
        ("highlighted", "fg:#ffffff bg:#5f87af"),
        ("selected", ""),
        ("separator", "fg:#6c6c6c"),
        ("instruction", "fg:#6c6c6c"),
        ("text", ""),
        ("answer", "fg:#5f87af bold"),
    ]
)


def success(message: str) -> None:
    """Display success message."""
    console.print(f"[green]✓[/green] {message}")


def error(message: str) -> None:
    """Display error message."""
    console.print(f"[red]✗[/red] {message}")


def info(message: str) -> None:
    """Display info message."""
    console.print(f"[blue]i[/blue] {message}")


def warning(message: str) -> None:
    """Display warning message."""
    console.print(f"[yellow]![/yellow] {message}")


def confirm(message: str, default: bool = False) -> bool:
    """Ask for confirmation."""
    result = questionary.confirm(message, default=default, style=select_style).ask()
    return result if result is not None else False


def prompt(message: str, default: str = "") -> str:
    """Prompt for input with optional default."""
    try:
        result = questionary.text(message, default=default, style=select_style).ask()
        return result if result is not None else ""
    except (KeyboardInterrupt, EOFError):
        return ""


def humanize_expiry(expiry: Optional[int]) -> str:
    """Format an OTP expiry timestamp as local time."""
    if expiry is None:
        return "—"
    local_dt = datetime.fromtimestamp(expiry, tz=timezone.utc).astimezone()
    return local_dt.strftime("%Y-%m-%d %H:%M:%S")


def copy_with_feedback(text: str, label: str = "Password") -> bool:
    """Copy text to clipboard and show feedback message."""
    from .passwordgen import copy_to_clipboard_with_autoclear

    if copy_to_clipboard_with_autoclear(text):
        success(f"{label} copied (clears in {Config.CLIPBOARD_TIMEOUT_SECONDS}s)")
        return True
    else:
        warning("Clipboard unavailable")
        return False


def show_entries_table(
    records: List[PasswordRecord], reveal: bool = False, title: str = "AppPass"
) -> None:
    """Display entries table."""
    if not records:
        info("No applications stored.")
        return

    table = Table(title=title, show_lines=False, expand=True)
    table.add_column("Application", style="cyan bold", no_wrap=True)
    table.add_column("Password", style="yellow")
    table.add_column("Type", style="magenta")
    table.add_column("OTP expires", style="dim", justify="right")

    for record in sorted(records, key=lambda r: r.name.lower()):
        secret = record.secret if reveal else "•" * 12
        kind = "otp" if record.is_otp else record.password_type.value
        table.add_row(record.name, secret, kind, humanize_expiry(record.otp_expiry))

    console.print(table)
    console.print(f"[dim]Total: {len(records)} entries[/dim]")


def show_secret_panel(
    name: str,
    secret: str,
    password_type: Optional[PasswordType] = None,
    otp_remaining: Optional[int] = None,
) -> None:
    """Display a single application's password."""
    content = [f"[green]Application Name:[/green] {name}"]
    content.append(f"[yellow]Password:[/yellow] {secret}")
    if password_type is not None:
        content.append(f"[magenta]Type:[/magenta] {password_type.value}")
    if otp_remaining is not None:
        content.append(f"[dim]OTP expires in {otp_remaining}s[/dim]")

    panel = Panel(
        "\n".join(content),
        title=name,
        border_style="cyan",
        expand=False,
    )
    console.print(panel)


def show_password_generated(name: str, password: str, title: str = "New Password") -> None:
    """Display a freshly generated password."""
    panel = Panel(
        f"[yellow bold]{password}[/yellow bold]",
        title=f"{title} for {name}",
        border_style="yellow",
        expand=False,
    )
    console.print(panel)
