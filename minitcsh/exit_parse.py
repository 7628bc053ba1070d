"""Parsing of ``exit`` arguments and bare ``exit`` lines."""

import re

from .strutils import write_err

_SYNTAX_MESSAGE = "exit: Expression Syntax."
_CODE_RE = re.compile(r"[+-]?[0-9]+")
_OPERATORS = frozenset("|;<>&")
_BLANKS = " \t"


class ExitSyntaxError(ValueError):
    """An ``exit`` argument or line is malformed."""

    def __init__(self, message: str = _SYNTAX_MESSAGE) -> None:
        super().__init__(message)


def parse_exit_code(text: str) -> int:
    """Parse a signed decimal exit code, reduced to 0..255."""
    if not _CODE_RE.fullmatch(text):
        raise ExitSyntaxError()
    return int(text) % 256


def exit_code_from_args(args) -> int:
    """Return the exit code for an ``exit`` argument vector."""
    if args is None:
        raise ExitSyntaxError()
    if len(args) == 1:
        return 0
    if len(args) == 2:
        return parse_exit_code(args[1])
    raise ExitSyntaxError()


def _syntax_error() -> ExitSyntaxError:
    write_err(_SYNTAX_MESSAGE + "\n")
    return ExitSyntaxError()


def parse_exit_line(line: str) -> int | None:
    """Recognise a plain ``exit [code]`` line.

    Returns None when the line is not such a command, the exit code when it is,
    and reports and raises ExitSyntaxError when its argument is malformed.
    """
    if any(ch in _OPERATORS for ch in line):
        return None
    rest = line.lstrip(_BLANKS)
    if not rest.startswith("exit"):
        return None
    rest = rest[4:]
    if rest and rest[0] not in _BLANKS:
        return None
    rest = rest.lstrip(_BLANKS)
    if not rest:
        return 0
    word = re.match(r"[^ \t]*", rest).group()
    if word != rest:
        raise _syntax_error()
    try:
        return parse_exit_code(word)
    except ExitSyntaxError:
        raise _syntax_error() from None