"""CLI using Typer."""

import logging
import sys
from typing import Optional, Tuple

import typer
from typing_extensions import Annotated

from . import __version__, operations, ui
from .config import Config, config, configure_logging
from .messages import INFO_OTP_WAITING
from .otp import OtpManager, startup_maintenance
from .store import AppPassError
from .vault import Vault

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="apppass",
    help="Generate and keep secure passwords in your OS keyring",
    add_completion=True,
    no_args_is_help=False,
    context_settings={"help_option_names": ["-h", "--help"]},
    rich_markup_mode="rich",
)

_vault: Optional[Vault] = None
_manager: Optional[OtpManager] = None


def _initialize() -> Tuple[Vault, OtpManager]:
    """Create the shared vault and OTP manager, running startup maintenance once."""
    global _vault, _manager
    if _vault is None or _manager is None:
        vault = Vault()
        manager = OtpManager(vault)
        try:
            startup_maintenance(vault, manager)
        except AppPassError as e:
            ui.warning(f"Startup maintenance skipped: {e}")
        _vault, _manager = vault, manager
    return _vault, _manager


def get_vault() -> Vault:
    """Get or initialize the vault."""
    return _initialize()[0]


def get_otp_manager() -> OtpManager:
    """OTP manager bound to the shared vault."""
    return _initialize()[1]


def reset_state() -> None:
    """Forget the cached vault (used between CLI invocations in tests)."""
    global _vault, _manager
    if _manager is not None:
        _manager.scheduler.cancel_all()
    _vault = None
    _manager = None


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"apppass {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    service: Annotated[
        Optional[str],
        typer.Option("--service", "-s", help="Keyring service namespace"),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Log keyring activity to stderr")
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
):
    """Runs the interactive console if no command given."""
    configure_logging("DEBUG" if verbose else None)
    if service:
        config.service = service

    if ctx.invoked_subcommand is None:
        from .console import run_interactive_console

        run_interactive_console(get_vault(), get_otp_manager())
        raise typer.Exit(0)


@app.command(
    "create",
    help="Generate a password for an application (a)",
    rich_help_panel="Passwords",
)
def create(
    name: Annotated[str, typer.Argument(help="Application name")],
    length: Annotated[
        Optional[int], typer.Option("--length", "-n", help="Password length")
    ] = None,
):
    operations.create_password(get_vault(), name, length)


@app.command(
    "create-custom",
    help="Save your own password for an application",
    rich_help_panel="Passwords",
)
def create_custom(
    name: Annotated[str, typer.Argument(help="Application name")],
    password: Annotated[
        str,
        typer.Option(
            "--password", "-p", prompt=True, hide_input=True, help="Password to save"
        ),
    ],
):
    operations.create_custom_password(get_vault(), name, password)


@app.command(
    "list",
    help="List all applications (ls)",
    rich_help_panel="Passwords",
)
def list_entries(
    reveal: Annotated[
        bool, typer.Option("--reveal", "-r", help="Show passwords in the table")
    ] = False,
):
    operations.list_passwords(get_vault(), reveal=reveal)


@app.command(
    "get",
    help="Get the password for an application (g)",
    rich_help_panel="Passwords",
)
def get(
    name: Annotated[str, typer.Argument(help="Application name")],
    copy: Annotated[
        bool, typer.Option("--copy", "-c", help="Copy the password to the clipboard")
    ] = False,
):
    operations.get_password(get_vault(), name, copy=copy, manager=get_otp_manager())


@app.command(
    "delete",
    help="Delete an application (d)",
    rich_help_panel="Passwords",
)
def delete(
    name: Annotated[str, typer.Argument(help="Application name")],
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Skip confirmation prompt")
    ] = False,
):
    if not force and not ui.confirm(f"Delete '{name}'?", default=False):
        ui.info("Cancelled")
        return
    operations.delete_password(get_vault(), name, manager=get_otp_manager())


@app.command(
    "update",
    help="Regenerate the password for an application (u)",
    rich_help_panel="Passwords",
)
def update(
    name: Annotated[str, typer.Argument(help="Application name")],
    length: Annotated[
        Optional[int], typer.Option("--length", "-n", help="Password length")
    ] = None,
):
    operations.update_password(get_vault(), name, length)


@app.command(
    "update-custom",
    help="Replace the password with your own",
    rich_help_panel="Passwords",
)
def update_custom(
    name: Annotated[str, typer.Argument(help="Application name")],
    password: Annotated[
        str,
        typer.Option(
            "--password", "-p", prompt=True, hide_input=True, help="New password"
        ),
    ],
):
    operations.update_custom_password(get_vault(), name, password)


@app.command(
    "memorizable",
    help="Generate a memorizable password",
    rich_help_panel="Passwords",
)
def memorizable(name: Annotated[str, typer.Argument(help="Application name")]):
    operations.generate_memorizable_password(get_vault(), name)


@app.command(
    "otp",
    help="Generate a one-time password",
    rich_help_panel="Passwords",
)
def otp(
    name: Annotated[str, typer.Argument(help="Application name")],
    ttl: Annotated[
        int,
        typer.Option("--ttl", "-t", help="Time-to-live in seconds"),
    ] = Config.DEFAULT_OTP_TTL,
    length: Annotated[
        Optional[int], typer.Option("--length", "-n", help="OTP length")
    ] = None,
    wait: Annotated[
        bool, typer.Option("--wait", "-w", help="Stay running until the OTP is deleted")
    ] = False,
):
    manager = get_otp_manager()
    if not operations.generate_otp(manager, name, ttl, length):
        return
    if wait:
        ui.info(INFO_OTP_WAITING)
        try:
            manager.scheduler.wait(name)
        except KeyboardInterrupt:
            ui.info("Stopped waiting; the OTP will be removed on next start.")


@app.command(
    "export",
    help="Export passwords to CSV",
    rich_help_panel="Backup",
)
def export(path: Annotated[str, typer.Argument(help="Output file path")]):
    operations.export_passwords(get_vault(), path)


@app.command(
    "import",
    help="Import passwords from CSV",
    rich_help_panel="Backup",
)
def import_(path: Annotated[str, typer.Argument(help="Input file path")]):
    operations.import_passwords(get_vault(), path)


@app.command(
    "length",
    help="Show or set the default password length",
    rich_help_panel="Settings",
)
def length(
    value: Annotated[
        Optional[int],
        typer.Argument(
            help=f"New length ({Config.MIN_PASSWORD_LENGTH}-{Config.MAX_PASSWORD_LENGTH})"
        ),
    ] = None,
    reset: Annotated[
        bool, typer.Option("--reset", help="Go back to the built-in default")
    ] = False,
):
    operations.set_default_length(get_vault(), value, reset=reset)


@app.command(
    "interactive",
    help="Launch the interactive console menu (i)",
    rich_help_panel="Modes",
)
def interactive(
    lock: Annotated[
        Optional[int],
        typer.Option("--lock", "-l", help="Auto-lock after this many idle seconds"),
    ] = None,
):
    from .console import run_interactive_console

    run_interactive_console(get_vault(), get_otp_manager(), lock_timeout=lock)


@app.command(
    "tui",
    help="Launch the full-screen UI",
    rich_help_panel="Modes",
)
def tui():
    try:
        from .tui.app import run
    except ImportError as e:
        ui.error(f"Error running UI: {e}")
        raise typer.Exit(1)

    try:
        run(get_vault(), get_otp_manager())
    except Exception as e:
        ui.error(f"Error running UI: {e}")
        raise typer.Exit(1)


# Short aliases, hidden from help
_ALIASES = {
    "a": create,
    "ls": list_entries,
    "g": get,
    "d": delete,
    "u": update,
    "i": interactive,
}

for alias, handler in _ALIASES.items():
    app.command(alias, hidden=True)(handler)


def main() -> None:
    """Main entry point."""
    try:
        app()
    except KeyboardInterrupt:
        ui.error("Operation cancelled")
        sys.exit(1)
    except typer.Exit:
        raise


if __name__ == "__main__":
    main()
