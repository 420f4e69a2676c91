"""IdentityRegistry — the visited set of one dump, keyed by object identity."""

from __future__ import annotations

from typing import Any

from .options import IdentityMode


class IdentityRegistry:
    """Tracks composite objects already expanded during a single dump.

    Keys are ``id(obj)``, never equality, so two equal but distinct objects
    are both expanded.  The registry keeps a reference to every object it
    has seen; while it is alive no registered id can be recycled.
    """

    def __init__(self, mode: IdentityMode = IdentityMode.MEMORY) -> None:
        self.mode = mode
        self._seen: dict[int, tuple[Any, int]] = {}

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, obj: Any) -> bool:
        return id(obj) in self._seen

    def register(self, obj: Any) -> int:
        """Record *obj* as visited and return its identity number.

        Registering an object twice returns the number issued the first time.
        """
        key = id(obj)
        entry = self._seen.get(key)
        if entry is not None:
            return entry[1]
        if self.mode is IdentityMode.SEQUENTIAL:
            number = len(self._seen) + 1
        else:
            number = key
        self._seen[key] = (obj, number)
        return number

    def number(self, obj: Any) -> int:
        """Identity number of an already registered object."""
        return self._seen[id(obj)][1]
