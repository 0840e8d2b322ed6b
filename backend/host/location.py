from __future__ import annotations

from typing import Callable

from host.types import HistoryWriteError


class MemoryLocation:
    """
    In-memory address fragment with browser-like semantics.

    - `navigate()` is a user edit / back-forward: fragment changes, listeners fire
    - `replace_state()` is a programmatic rewrite: fragment changes, listeners don't
    """

    def __init__(self, fragment: str = "", *, read_only: bool = False) -> None:
        self._hash = _normalize(fragment)
        self.read_only = read_only
        # Fragments in the order they were replaced; useful for debugging and tests.
        self.replaced: list[str] = []
        self._listeners: list[Callable[[str], None]] = []

    @property
    def hash(self) -> str:
        return self._hash

    def replace_state(self, fragment: str) -> None:
        if self.read_only:
            raise HistoryWriteError("replaceState is not allowed on this location")
        self._hash = _normalize(fragment)
        self.replaced.append(self._hash)

    def add_hashchange_listener(self, callback: Callable[[str], None]) -> None:
        self._listeners.append(callback)

    def navigate(self, fragment: str) -> None:
        new = _normalize(fragment)
        if new == self._hash:
            return
        self._hash = new
        for cb in list(self._listeners):
            cb(new)


def _normalize(fragment: str) -> str:
    f = (fragment or "").strip()
    if not f or f == "#":
        return ""
    return f if f.startswith("#") else "#" + f
