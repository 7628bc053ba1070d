"""Small string helpers shared by the shell."""

import sys


def _is_sep(ch: str, delim: str) -> bool:
    return ch == delim or (delim == " " and ch == "\t")


def split_words(text: str, delim: str) -> list[str]:
    """Split ``text`` into the non-empty words between ``delim`` characters.

    A space delimiter also splits on tabs.
    """
    words: list[str] = []
    current: list[str] = []
    for ch in text:
        if _is_sep(ch, delim):
            if current:
                words.append("".join(current))
                current = []
        else:
            current.append(ch)
    if current:
        words.append("".join(current))
    return words


def _code_at(text: str, index: int) -> int:
    return ord(text[index]) if index < len(text) else 0


def compare(s1: str, s2: str) -> int:
    """Compare two strings; negative, zero or positive like a C string compare."""
    for a, b in zip(s1, s2):
        if a != b:
            return ord(a) - ord(b)
    end = min(len(s1), len(s2))
    return _code_at(s1, end) - _code_at(s2, end)


def compare_prefix(s1: str, s2: str, n: int) -> int:
    """Compare at most ``n`` leading characters (always at least the first)."""
    limit = max(n, 1)
    return compare(s1[:limit], s2[:limit])


def write_err(text: str) -> None:
    """Write ``text`` to standard error."""
    sys.stderr.write(text)
    sys.stderr.flush()