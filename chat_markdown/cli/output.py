"""Terminal output helpers for the chat-markdown CLI.

ANSI styling is dropped when stdout is not a TTY or ``NO_COLOR`` is set.
Errors go to stderr so converted file listings can be piped.
"""

from __future__ import annotations

import os
import sys

_STYLES = {
    "bold": "1",
    "dim": "2",
    "red": "31",
    "green": "32",
    "yellow": "33",
}


def _supports_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


_COLOR = _supports_color()


def style(name: str, text: str) -> str:
    if not _COLOR:
        return text
    return f"\033[{_STYLES[name]}m{text}\033[0m"


# ── Structured output ───────────────────────────────────────────────


def header(title: str) -> None:
    print(f"\n{style('bold', title)}")


def success(msg: str) -> None:
    print(f"  {style('green', '✓')} {msg}")


def warn(msg: str) -> None:
    print(f"  {style('yellow', '!')} {msg}")


def error(msg: str) -> None:
    print(f"  {style('red', '✗')} {msg}", file=sys.stderr)


def info(msg: str) -> None:
    print(f"  {msg}")


def kv(key: str, value: object, indent: int = 2) -> None:
    """Print an aligned ``key:  value`` line."""
    print(f"{' ' * indent}{style('dim', f'{key}:')}  {value}")


def written(path: object) -> None:
    """Print one line per output file."""
    print(f"    {style('dim', '→')} {path}")
