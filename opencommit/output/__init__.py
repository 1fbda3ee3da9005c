"""Terminal Output Package"""

import os
import re
import sys
import threading


class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    CYAN = '\033[36m'
    MAGENTA = '\033[35m'
    GREY = '\033[90m'


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
            '✖'.encode(sys.stdout.encoding or 'utf-8')
            return True
        except (UnicodeEncodeError, LookupError):
            return False
    return True


COLORS_ENABLED = _supports_color()
UNICODE_ENABLED = _supports_unicode()

CHECK = '✓' if UNICODE_ENABLED else '[OK]'
CROSS = '✖' if UNICODE_ENABLED else '[X]'
STEP = '◇' if UNICODE_ENABLED else 'o'
SEPARATOR = '—' * 18 if UNICODE_ENABLED else '-' * 18

_verbose = False


def set_verbose(enabled: bool) -> None:
    global _verbose
    _verbose = enabled


def is_verbose() -> bool:
    return _verbose


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


def grey(text: str) -> str:
    return _colorize(text, Colors.GREY)


def bold(text: str) -> str:
    return _colorize(text, Colors.BOLD)


def print_success(message: str) -> None:
    print(f"{success(CHECK)} {message}")


def print_error(message: str) -> None:
    """Print the marked error line every failed run ends with."""
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)


def print_warning(message: str) -> None:
    print(f"{warning('⚠')} {warning(message)}" if UNICODE_ENABLED else f"[!] {message}")


def debug(message: str) -> None:
    """Diagnostic line, only shown with --verbose."""
    if _verbose:
        print(dim(f"  {message}"), file=sys.stderr)


def intro(title: str) -> None:
    print(f"{dim('┌' if UNICODE_ENABLED else '+')}  {bold(title)}")


def outro(message: str) -> None:
    print(f"{dim('└' if UNICODE_ENABLED else '+')}  {message}")


COMMIT_TYPE_COLORS = {
    'feat': Colors.GREEN,
    'fix': Colors.RED,
    'refactor': Colors.YELLOW,
    'docs': Colors.CYAN,
    'test': Colors.MAGENTA,
    'perf': Colors.GREEN,
    'chore': Colors.DIM,
    'style': Colors.DIM,
    'ci': Colors.CYAN,
    'build': Colors.CYAN,
}


def colorize_commit_type(message: str) -> str:
    """Color the commit type prefix on the first line of a commit message."""
    if not COLORS_ENABLED:
        return message
    lines = message.split('\n')
    match = re.match(r'^(\w+)(\([^)]*\))?(!?:)', lines[0])
    if match:
        color = COMMIT_TYPE_COLORS.get(match.group(1))
        if color:
            prefix = match.group(0)
            lines[0] = _colorize(prefix, Colors.BOLD, color) + lines[0][len(prefix):]
    return '\n'.join(lines)


class Spinner:
    """Animated spinner for long operations.

    Use start(label)/stop(label) around a step, or as a context manager.
    Animation only runs on a terminal; a label passed to stop() is printed either way.
    """
    FRAMES_UNICODE = ['⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏']
    FRAMES_ASCII = ['-', '\\', '|', '/']

    def __init__(self):
        self._thread = None
        self._label = ""
        self._stop_event = threading.Event()
        self._frames = self.FRAMES_UNICODE if UNICODE_ENABLED else self.FRAMES_ASCII

    def _spin(self):
        idx = 0
        while not self._stop_event.is_set():
            frame = self._frames[idx % len(self._frames)]
            print(f'\r\033[K{info(frame)} {self._label}', end='', flush=True)
            idx += 1
            self._stop_event.wait(0.08)

    def start(self, label: str = "") -> None:
        self._label = label
        if sys.stdout.isatty():
            self._stop_event.clear()
            self._thread = threading.Thread(target=self._spin, daemon=True)
            self._thread.start()

    def stop(self, label: str | None = None) -> None:
        self._stop_event.set()
        if self._thread:
            self._thread.join()
            self._thread = None
        if sys.stdout.isatty():
            print('\r\033[K', end='', flush=True)
        if label is not None:
            print(f"{success(STEP)}  {label}")

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *args):
        self.stop()


__all__ = [
    "Colors", "COLORS_ENABLED", "UNICODE_ENABLED",
    "CHECK", "CROSS", "STEP", "SEPARATOR",
    "success", "error", "warning", "info", "dim", "grey", "bold",
    "print_success", "print_error", "print_warning",
    "debug", "set_verbose", "is_verbose", "intro", "outro",
    "colorize_commit_type", "Spinner", "COMMIT_TYPE_COLORS",
]
