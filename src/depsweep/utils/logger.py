"""Logging setup and Windows-safe output handling.

Routes the standard logging module through Rich, and provides ASCII
fallbacks for Unicode glyphs on terminals that don't support UTF-8.
"""
import locale
import logging
import sys

from rich.logging import RichHandler


# Glyphs used in console output, with ASCII stand-ins for non-UTF-8 terminals
ICON_MAP = {
    '✓': '[OK]',
    '⚠': '[WARN]',
    '…': '...',
}


def detect_terminal_encoding() -> str:
    """Detect the terminal's encoding capability.

    Returns:
        str: Terminal encoding ('utf-8', 'cp1252', 'ascii', etc.)
    """
    if getattr(sys.stdout, 'encoding', None):
        return sys.stdout.encoding.lower()

    try:
        return locale.getpreferredencoding().lower()
    except (LookupError, ValueError):
        return 'ascii'


def is_utf8_capable() -> bool:
    return detect_terminal_encoding().replace('_', '-') in ('utf-8', 'utf8')


def sanitize_for_terminal(text: str, force: bool = False) -> str:
    """Replace Unicode glyphs with ASCII equivalents if the terminal can't show them.

    Args:
        text: Text potentially containing Unicode glyphs
        force: Sanitize even on a UTF-8 terminal

    Returns:
        str: Sanitized text safe for current terminal
    """
    if not force and is_utf8_capable():
        return text

    sanitized = text
    for glyph, replacement in ICON_MAP.items():
        sanitized = sanitized.replace(glyph, replacement)
    return sanitized


def configure_logging(verbose: bool = False, console=None) -> None:
    """Install a Rich handler on the depsweep logger.

    Args:
        verbose: Log DEBUG messages instead of WARNING and above
        console: Console to log to (defaults to a SafeConsole on stderr)
    """
    if console is None:
        from .safe_console import SafeConsole
        console = SafeConsole(stderr=True)

    root = logging.getLogger('depsweep')
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = RichHandler(console=console, show_time=False, show_path=verbose, markup=False)
    handler.setFormatter(logging.Formatter('%(message)s'))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
