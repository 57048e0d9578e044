"""Named event counters used for processing statistics."""

from __future__ import annotations

from collections.abc import Mapping


class Stat:
    """A named group of counters, each identified by an integer key."""

    def __init__(self, name: str = "", names: Mapping[int, str] | None = None) -> None:
        self.name = name
        self._names: dict[int, str] = dict(names or {})
        self._values: dict[int, int] = {key: 0 for key in self._names}

    def clear(self) -> None:
        """Reset every counter to zero."""
        for key in self._values:
            self._values[key] = 0

    def increment(self, key: int) -> None:
        """Add one to the counter for ``key``; unknown keys raise KeyError."""
        if key not in self._values:
            raise KeyError(f"unknown stat key {key!r}")
        self._values[key] += 1

    def param_name(self, key: int) -> str:
        """Return the display name of the counter for ``key``."""
        try:
            return self._names[key]
        except KeyError:
            raise KeyError(f"unknown stat key {key!r}") from None

    def values(self) -> dict[int, int]:
        """Return a snapshot of all counters."""
        return dict(self._values)

    def __repr__(self) -> str:
        return f"Stat(name={self.name!r}, values={self._values!r})"