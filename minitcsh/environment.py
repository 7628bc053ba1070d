"""The shell's ordered list of ``KEY=VALUE`` environment entries."""

from collections.abc import Iterable, Iterator


class Environment:
    """Ordered ``KEY=VALUE`` entries with shell-style lookup and update."""

    def __init__(self, entries: Iterable[str]) -> None:
        self._entries: list[str] = list(entries)

    @staticmethod
    def _names(entry: str, key: str) -> bool:
        return bool(key) and entry.startswith(key + "=")

    def get(self, key: str) -> str | None:
        """Return the value of the first entry named ``key``, or None."""
        for entry in self._entries:
            if self._names(entry, key):
                return entry[len(key) + 1:]
        return None

    def _assign(self, key_with_equal: str, value: str) -> None:
        new_entry = key_with_equal + value
        for position, entry in enumerate(self._entries):
            if entry.startswith(key_with_equal):
                self._entries[position] = new_entry
                return
        self._entries.append(new_entry)

    def set(self, key: str, value: str) -> None:
        """Replace the first entry for ``key`` in place, or append one."""
        self._assign(key + "=", value)

    def set_from_arg(self, arg: str) -> None:
        """Set from a single ``KEY=VALUE`` argument; a bare ``KEY`` gets an empty value."""
        equal_pos = arg.find("=")
        if equal_pos <= 0:
            self._assign(arg + "=", "")
            return
        self._assign(arg[:equal_pos + 1], arg[equal_pos + 1:])

    def unset(self, name: str) -> None:
        """Remove the first entry named ``name``; do nothing if there is none."""
        for position, entry in enumerate(self._entries):
            if self._names(entry, name):
                del self._entries[position]
                return

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def to_dict(self) -> dict[str, str]:
        """Return a mapping for child processes; the first entry of a name wins."""
        result: dict[str, str] = {}
        for entry in self._entries:
            key, sep, value = entry.partition("=")
            if sep:
                result.setdefault(key, value)
        return result