"""Terminal Output Formatting Package"""

import sys
import os


class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'
    BG_RED = '\033[41m'
    BG_BLUE = '\033[44m'


def _supports_color() -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not hasattr(sys.stdout, 'isatty') or not sys.stdout.isatty():
        return False
    if sys.platform == 'win32':
        try:
            import ctypes
            kernel32 = ctypes.windll.kernel32
            kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7)
            return True
        except Exception:
            return False
    return True


def _supports_unicode() -> bool:
    if sys.platform == 'win32':
        try:
            '✓'.encode(sys.stdout.encoding or 'utf-8')
            return True
        except (UnicodeEncodeError, LookupError):
            return False
    return True


COLORS_ENABLED = _supports_color()
UNICODE_ENABLED = _supports_unicode()

CHECK = '✓' if UNICODE_ENABLED else '[OK]'
CROSS = '✗' if UNICODE_ENABLED else '[X]'
WARN = '⚠' if UNICODE_ENABLED else '[!]'


def _colorize(text: str, *codes: str) -> str:
    if not COLORS_ENABLED:
        return text
    return f"{''.join(codes)}{text}{Colors.RESET}"


def success(text: str) -> str:
    return _colorize(text, Colors.GREEN)


def error(text: str) -> str:
    return _colorize(text, Colors.RED)


def warning(text: str) -> str:
    return _colorize(text, Colors.YELLOW)


def info(text: str) -> str:
    return _colorize(text, Colors.CYAN)


def dim(text: str) -> str:
    return _colorize(text, Colors.DIM)


def bold(text: str) -> str:
    return _colorize(text, Colors.BOLD)


def highlight(text: str) -> str:
    return _colorize(text, Colors.MAGENTA)


def heading(text: str) -> str:
    return _colorize(text, Colors.BOLD, Colors.YELLOW)


def badge(text: str, background: str = Colors.BG_BLUE) -> str:
    """White bold text on a colored background, e.g. the report banner."""
    return _colorize(text, background, Colors.WHITE, Colors.BOLD)


def print_success(message: str) -> None:
    print(f"{success(CHECK)} {message}")


def print_error(message: str) -> None:
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)


def print_warning(message: str) -> None:
    # stderr keeps --json output parseable
    print(f"{warning(WARN)} {warning(message)}", file=sys.stderr)


def log_debug(message: str) -> None:
    """--verbose diagnostics."""
    print(dim(f"  {message}"), file=sys.stderr)


STATUS_COLORS = {
    'A': Colors.GREEN,
    'D': Colors.RED,
}


def colorize_status(letter: str, text: str) -> str:
    """Added green, Deleted red, everything else yellow."""
    return _colorize(text, STATUS_COLORS.get(letter, Colors.YELLOW))


__all__ = [
    "Colors", "COLORS_ENABLED", "UNICODE_ENABLED",
    "CHECK", "CROSS", "WARN",
    "success", "error", "warning", "info", "dim", "bold", "highlight",
    "heading", "badge",
    "print_success", "print_error", "print_warning", "log_debug",
    "colorize_status", "STATUS_COLORS",
]
