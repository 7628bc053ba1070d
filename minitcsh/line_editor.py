"""Interactive line input with history browsing, without readline."""

import os
import sys
import termios
from collections.abc import Callable

from .history import History

PROMPT = "$> "
_CLEAR_LINE = "\r\033[2K"
_ESCAPE = "\x1b"
_BACKSPACES = frozenset({"\x7f", "\b"})
_NEWLINES = frozenset({"\n", "\r"})


def _printable(ch: str) -> bool:
    return ch == "\t" or " " <= ch <= "~"


class LineEditor:
    """Edit one input line from single characters, redrawing the prompt as it goes.

    ``read_char`` returns the next character, or an empty string at end of
    input; ``write`` sends text to the terminal.
    """

    def __init__(self, history: History | None, read_char: Callable[[], str],
                 write: Callable[[str], object]) -> None:
        self.history = history
        self._read_char = read_char
        self._write = write
        self._buffer = ""
        self._saved: str | None = None
        self._browse_index = self._history_size()

    def _history_size(self) -> int:
        return 0 if self.history is None else len(self.history)

    @property
    def buffer(self) -> str:
        """The text typed so far."""
        return self._buffer

    def _reset(self) -> None:
        self._buffer = ""
        self._saved = None
        self._browse_index = self._history_size()

    def _redraw(self) -> None:
        self._write(_CLEAR_LINE + PROMPT + self._buffer)

    def _navigate(self, up: bool) -> None:
        size = self._history_size()
        if size == 0:
            return
        if self._saved is None:
            self._saved = self._buffer
        if up and self._browse_index > 0:
            self._browse_index -= 1
        if not up and self._browse_index < size:
            self._browse_index += 1
        if self._browse_index >= size:
            self._buffer = self._saved
        else:
            self._buffer = self.history.entry(self._browse_index + 1) or ""

    def _handle_escape(self) -> None:
        first = self._read_char()
        if not first:
            return
        second = self._read_char()
        if not second or first != "[":
            return
        if second == "A":
            self._navigate(up=True)
        elif second == "B":
            self._navigate(up=False)
        if self._browse_index >= self._history_size() and self._saved is not None:
            self._saved = None
        self._redraw()

    def feed(self, ch: str) -> bool:
        """Process one character; return True when it ends the line."""
        if ch in _NEWLINES:
            return True
        if ch in _BACKSPACES:
            if self._buffer:
                self._buffer = self._buffer[:-1]
                self._redraw()
            return False
        if ch == _ESCAPE:
            self._handle_escape()
            return False
        if not _printable(ch):
            return False
        self._buffer += ch
        self._redraw()
        return False

    def read_line(self) -> str | None:
        """Read one line after showing the prompt.

        Returns the line, or None when it is empty or reading was interrupted.
        Raises EOFError at end of input.
        """
        self._reset()
        self._redraw()
        while True:
            try:
                ch = self._read_char()
            except InterruptedError:
                return None
            if not ch:
                raise EOFError("end of input")
            if self.feed(ch):
                break
        self._write("\n")
        return self._buffer or None


def _read_stdin_char() -> str:
    return os.read(sys.stdin.fileno(), 1).decode("latin-1")


def _write_stdout(text: str) -> None:
    os.write(sys.stdout.fileno(), text.encode("latin-1", errors="replace"))


def interactive_getline(history: History | None) -> str | None:
    """Read a line from the terminal in non-canonical mode, with history browsing.

    Returns the line, or None when it is empty or reading was interrupted.
    Raises EOFError at end of input and OSError when the terminal cannot be set up.
    """
    fd = sys.stdin.fileno()
    try:
        old_mode = termios.tcgetattr(fd)
    except termios.error as exc:
        raise OSError(f"cannot read terminal mode: {exc}") from exc
    raw_mode = list(old_mode)
    raw_mode[3] &= ~(termios.ICANON | termios.ECHO)
    raw_mode[6] = list(old_mode[6])
    raw_mode[6][termios.VMIN] = 1
    raw_mode[6][termios.VTIME] = 0
    try:
        termios.tcsetattr(fd, termios.TCSANOW, raw_mode)
    except termios.error as exc:
        raise OSError(f"cannot set terminal mode: {exc}") from exc
    editor = LineEditor(history, _read_stdin_char, _write_stdout)
    try:
        return editor.read_line()
    finally:
        termios.tcsetattr(fd, termios.TCSANOW, old_mode)


def handle_sigint(sig, frame) -> None:
    """Show a fresh prompt when the user presses Ctrl-C."""
    os.write(1, b"\n" + PROMPT.encode())