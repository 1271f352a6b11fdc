"""
Console utilities for tracebuild.

Provides:
- UTF-8 encoding fix for Windows console (the banners use box-drawing
  characters and emoji)
- Coloured status printing: progress to stdout, errors to stderr

Colour is only emitted when the target stream is a terminal, so piped or
captured output stays plain text.

Usage:
    from tracebuild.utils.console import setup_console, print_success

    setup_console()
    print_success("✅ Done")
"""
import io
import sys
from typing import Optional, TextIO

from colorama import Fore, Style, just_fix_windows_console


def ensure_utf8_console() -> None:
    """
    Ensure stdout and stderr use UTF-8 encoding.

    Safe to call multiple times - streams that are already UTF-8 are left
    untouched.
    """
    sys.stdout = _utf8_stream(sys.stdout)
    sys.stderr = _utf8_stream(sys.stderr)


def _utf8_stream(stream: Optional[TextIO]) -> Optional[TextIO]:
    if stream is None:
        return stream

    try:
        encoding = getattr(stream, "encoding", None)
        if encoding and encoding.lower() in ("utf-8", "utf8"):
            return stream
    except (AttributeError, TypeError):
        return stream

    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        return stream

    try:
        return io.TextIOWrapper(
            buffer,
            encoding="utf-8",
            errors="replace",  # Replace unencodable chars instead of crashing
            line_buffering=True,
        )
    except (AttributeError, OSError, ValueError):
        return stream


def setup_console() -> None:
    """
    Complete console setup. Call at the start of the entry point, before
    any output.
    """
    ensure_utf8_console()
    # Enables ANSI handling on legacy Windows consoles; no-op elsewhere
    just_fix_windows_console()


def _emit(message: str, color: str, stream: TextIO) -> None:
    if color and _is_tty(stream):
        message = f"{color}{message}{Style.RESET_ALL}"
    print(message, file=stream)


def _is_tty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # Closed stream
        return False


def print_line(message: str = "") -> None:
    """Plain line on stdout."""
    _emit(message, "", sys.stdout)


def print_banner(message: str) -> None:
    _emit(message, Fore.CYAN, sys.stdout)


def print_success(message: str) -> None:
    _emit(message, Fore.GREEN, sys.stdout)


def print_hint(message: str) -> None:
    _emit(message, Fore.YELLOW, sys.stdout)


def print_error(message: str = "") -> None:
    """Line on stderr, red when stderr is a terminal."""
    _emit(message, Fore.RED if message else "", sys.stderr)


def print_error_detail(message: str = "") -> None:
    """Uncoloured line on stderr (remediation steps)."""
    _emit(message, "", sys.stderr)


__all__ = [
    "ensure_utf8_console",
    "setup_console",
    "print_line",
    "print_banner",
    "print_success",
    "print_hint",
    "print_error",
    "print_error_detail",
]
