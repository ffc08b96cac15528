"""Back/forward history of visited paths."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

Listener = Callable[[str, Any], None]

_MAX_KEPT = 100


class NavigationModel:
    """Browser-like navigation history.

    Listeners are called as ``listener(name, value)`` whenever one of the
    properties ``current_path``, ``can_back`` or ``can_forward`` changes.
    """

    def __init__(self) -> None:
        self._current_path = ""
        self._can_back = False
        self._can_forward = False
        self._index = 0
        self._paths: list[str] = []
        self.listeners: list[Listener] = []

    @property
    def current_path(self) -> str:
        return self._current_path

    @property
    def can_back(self) -> bool:
        return self._can_back

    @property
    def can_forward(self) -> bool:
        return self._can_forward

    @property
    def paths(self) -> tuple[str, ...]:
        """The remembered paths, oldest first."""
        return tuple(self._paths)

    def _set(self, name: str, value: Any) -> None:
        attribute = "_" + name
        if getattr(self, attribute) != value:
            setattr(self, attribute, value)
            for listener in list(self.listeners):
                listener(name, value)

    def clear(self) -> None:
        """Forget the whole history."""
        self._paths.clear()
        self._index = 0
        self._set("current_path", "")
        self._set("can_back", False)
        self._set("can_forward", False)

    def set_path(self, path: str) -> None:
        """Visit ``path``, dropping any forward history. Empty paths are ignored."""
        if not path:
            return

        del self._paths[self._index + 1:]
        while len(self._paths) > _MAX_KEPT:
            self._paths.pop(0)

        self._paths.append(path)
        self._index = len(self._paths) - 1

        self._set("current_path", path)
        self._set("can_back", self._index > 0)
        self._set("can_forward", False)

    def back(self) -> None:
        """Step back one entry, if possible."""
        if self._index > 0:
            self._index -= 1
            self._set("current_path", self._paths[self._index])
            self._set("can_back", self._index > 0)
            self._set("can_forward", True)

    def forward(self) -> None:
        """Step forward one entry, if possible."""
        if self._index + 1 < len(self._paths):
            self._index += 1
            self._set("current_path", self._paths[self._index])
            self._set("can_back", True)
            self._set("can_forward", self._index + 1 < len(self._paths))