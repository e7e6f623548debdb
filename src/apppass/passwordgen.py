"""Secret generators and clipboard utilities."""

import logging
import secrets
import string
import subprocess
import sys
import threading
import time
from typing import Any, List, Optional

from .config import Config

try:
    import pyperclip as _pyperclip

    pyperclip: Optional[Any] = _pyperclip
except Exception:
    pyperclip = None

logger = logging.getLogger(__name__)

ALPHANUMERIC = string.ascii_letters + string.digits
WORDS = ("Tiger", "Orange", "Mountain", "River", "Cloud", "Sky", "Sun", "Moon")
MEMORIZABLE_MIN = 10
MEMORIZABLE_MAX = 99

# Command-line clipboard writers, tried in order when pyperclip is unusable
CLIPBOARD_COMMANDS = {
    "darwin": [["pbcopy"]],
    "linux": [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ],
    "win": [["clip"]],
}


def generate_alphanumeric(length: int) -> str:
    """Random string of exactly length characters from [A-Za-z0-9]."""
    if length < 1:
        raise ValueError("Password length must be at least 1.")
    return "".join(secrets.choice(ALPHANUMERIC) for _ in range(length))


def generate_memorizable() -> str:
    """Word-NN-Word, NN drawn from 10..99 inclusive."""
    number = MEMORIZABLE_MIN + secrets.randbelow(MEMORIZABLE_MAX - MEMORIZABLE_MIN + 1)
    return f"{secrets.choice(WORDS)}-{number}-{secrets.choice(WORDS)}"


def _clipboard_commands() -> List[List[str]]:
    platform = sys.platform
    if platform.startswith("freebsd"):
        platform = "linux"
    for prefix, commands in CLIPBOARD_COMMANDS.items():
        if platform.startswith(prefix):
            return commands
    return []


def _pipe_to(cmd: List[str], text: str) -> bool:
    """Feed text to a clipboard command. False if it is missing or fails."""
    try:
        proc = subprocess.Popen(cmd, stdin=subprocess.PIPE, stderr=subprocess.DEVNULL)
    except (FileNotFoundError, OSError):
        return False
    try:
        proc.communicate(input=text.encode("utf-8"), timeout=5)
    except subprocess.TimeoutExpired:
        proc.kill()
        proc.wait()
        return False
    return proc.returncode == 0


def copy_to_clipboard(text: str) -> bool:
    """Copy text to the system clipboard. Returns True on success."""
    if pyperclip:
        try:
            pyperclip.copy(text)
            return True
        except Exception as e:
            logger.debug("pyperclip unavailable: %s", e)

    for cmd in _clipboard_commands():
        if _pipe_to(cmd, text):
            return True
    return False


def _clipboard_clear_worker(timeout: int, clipboard_content: str) -> None:
    """Clear the clipboard after timeout if it still holds our secret."""
    time.sleep(timeout)
    try:
        still_ours = bool(pyperclip) and pyperclip.paste() == clipboard_content
    except Exception as e:
        logger.debug("Could not read clipboard back: %s", e)
        return
    if still_ours:
        copy_to_clipboard("")


def copy_to_clipboard_with_autoclear(
    text: str, timeout: int = Config.CLIPBOARD_TIMEOUT_SECONDS
) -> bool:
    """Copy text and clear it again after timeout seconds."""
    copied = copy_to_clipboard(text)

    if copied and timeout > 0:
        threading.Thread(
            target=_clipboard_clear_worker,
            args=(timeout, text),
            daemon=True,
        ).start()

    return copied
