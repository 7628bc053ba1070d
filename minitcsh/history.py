"""Command history and ``!`` event expansion."""

import re
from collections.abc import Iterator

_BLANKS = " \t"
_DIGITS = "0123456789"
_NUMBER_RE = re.compile(r"[0-9]+")
_WORD_RE = re.compile(r"[^ \t]*")


class EventNotFound(LookupError):
    """A ``!`` history reference matched no entry."""


def _only_blanks(text: str) -> bool:
    return not text.strip(_BLANKS)


class History:
    """The list of lines entered so far, numbered from 1."""

    def __init__(self) -> None:
        self._entries: list[str] = []

    def add(self, line: str | None) -> None:
        """Record ``line``; empty lines are ignored."""
        if line:
            self._entries.append(line)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def entry(self, index: int) -> str | None:
        """Return entry number ``index`` (1-based), or None if there is none."""
        if 0 < index <= len(self._entries):
            return self._entries[index - 1]
        return None

    def _expand_number(self, rest: str) -> str | None:
        digits = _NUMBER_RE.match(rest).group()
        if not _only_blanks(rest[len(digits):]):
            return None
        number = int(digits)
        if number <= 0:
            return None
        return self.entry(number)

    def _expand_prefix(self, rest: str) -> str | None:
        prefix = _WORD_RE.match(rest).group()
        if not prefix or not _only_blanks(rest[len(prefix):]):
            return None
        return next(
            (entry for entry in reversed(self._entries) if entry.startswith(prefix)),
            None,
        )

    def resolve_bang(self, line: str, idx: int) -> str | None:
        """Resolve the ``!`` reference at ``line[idx]``, or return None."""
        rest = line[idx + 1:]
        if rest.startswith("!") and _only_blanks(rest[1:]):
            return self.entry(len(self._entries))
        if rest and rest[0] in _DIGITS:
            return self._expand_number(rest)
        return self._expand_prefix(rest)

    def expand_line(self, line: str) -> str:
        """Return ``line`` with a leading ``!`` reference replaced by its entry."""
        idx = len(line) - len(line.lstrip(_BLANKS))
        if line[idx:idx + 1] != "!":
            return line
        expanded = self.resolve_bang(line, idx)
        if expanded is not None:
            return expanded
        event = line[idx + 1:]
        if event:
            raise EventNotFound(f"{event}: event not found")
        raise EventNotFound("history: event not found")