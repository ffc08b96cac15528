"""Labels placed on images and their draggable handles."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from annolabel.label_definition import LabelCategory, LabelDefinition

Point = tuple[float, float]

_SELECTED_ALPHA = 150


class PenStyle(enum.Enum):
    SOLID = "solid"
    DOT = "dot"


@dataclass(frozen=True)
class OutlinePen:
    """How a label outline is drawn.

    ``cosmetic`` pens have a width in screen pixels rather than image pixels.
    """

    color: tuple[int, int, int]
    alpha: int
    width: int
    cosmetic: bool
    style: PenStyle


class LabelHandle:
    """A control point of a label."""

    def __init__(self, position: Point = (0.0, 0.0), parent: Label | None = None) -> None:
        self._position: Point = (float(position[0]), float(position[1]))
        self._parent = parent
        self.enabled = True

    @property
    def position(self) -> Point:
        return self._position

    @property
    def parent(self) -> Label | None:
        return self._parent

    def set_position(self, pos: Point, notify_parent: bool = True) -> None:
        """Move the handle; the parent label is told the offset if asked."""
        x, y = float(pos[0]), float(pos[1])
        delta = (x - self._position[0], y - self._position[1])
        self._position = (x, y)
        if notify_parent and self._parent is not None:
            self._parent.handle_position_changed(self, delta)

    def clear_parent(self) -> None:
        """Detach the handle from its label."""
        self._parent = None

    def __repr__(self) -> str:
        return f"LabelHandle({self._position!r})"


def _format_number(value: float) -> str:
    return f"{value:g}"


class Label:
    """Base class of all label kinds.

    The base keeps handles, category, free text and custom properties and
    serialises its handles as ``"x0 y0 x1 y1 ..."``.
    """

    DEFAULT_DIMENSION = 100

    def __init__(self) -> None:
        self.handles: list[LabelHandle] = []
        self._category: LabelCategory | None = None
        self.text = ""
        self.shared_label_index = 0
        self.compute_visualisation_data = False
        self.custom_properties: dict[str, Any] = {}

    @property
    def category(self) -> LabelCategory | None:
        return self._category

    @category.setter
    def category(self, category: LabelCategory) -> None:
        if category is None:
            raise ValueError("a label needs a category")
        self._category = category

    @property
    def definition(self) -> LabelDefinition | None:
        """Definition of the label's category, if there is one."""
        return self._category.definition if self._category is not None else None

    @property
    def is_proxy_label(self) -> bool:
        return False

    def handle_position_changed(self, handle: LabelHandle, offset: Point) -> None:
        """Called by a handle after it moved by ``offset``.

        The base label only checks that the handle belongs to it; label kinds
        with dependent geometry extend this.
        """
        if handle.parent is not self:
            raise ValueError(f"{handle!r} does not belong to this label")

    @staticmethod
    def handles_to_string(handles: Iterable[LabelHandle]) -> str:
        """Serialise handle positions as space separated coordinates."""
        return " ".join(
            f"{_format_number(h.position[0])} {_format_number(h.position[1])}" for h in handles
        )

    def parse_handles(self, string: str) -> list[LabelHandle]:
        """Parse coordinates into new handles owned by this label."""
        tokens = string.split()
        if len(tokens) % 2:
            raise ValueError(f"odd number of coordinates in {string!r}")
        values = [float(token) for token in tokens]
        return [LabelHandle((x, y), self) for x, y in zip(values[::2], values[1::2])]

    def to_strings(self) -> list[str]:
        """Serialise the label data."""
        return [self.handles_to_string(self.handles)]

    def from_strings(self, strings: Sequence[str]) -> None:
        """Replace the label data with serialised data."""
        handles = self.parse_handles(strings[0])
        self.delete_handles()
        self.handles = handles

    def delete_handle(self, handle: LabelHandle | None) -> None:
        """Remove a handle from the label and detach it."""
        if handle is None:
            return
        if handle in self.handles:
            self.handles.remove(handle)
        handle.clear_parent()

    def delete_handles(self) -> None:
        """Remove and detach all handles."""
        for handle in self.handles:
            handle.clear_parent()
        self.handles.clear()

    def read(self, prop_id: str, default: Any = None) -> Any:
        """Value of a custom property, or ``default`` when unset."""
        return self.custom_properties.get(prop_id, default)

    def write(self, prop_id: str, value: Any) -> None:
        """Set a custom property."""
        self.custom_properties[prop_id] = value

    def outline_pen(self, is_selected: bool = False, is_highlighted: bool = False) -> OutlinePen | None:
        """Pen for drawing the outline, or ``None`` without a definition."""
        definition = self.definition
        if definition is None:
            return None
        line_width = definition.line_width
        return OutlinePen(
            color=self._category.color,
            alpha=_SELECTED_ALPHA if is_selected else 255,
            width=abs(line_width),
            cosmetic=line_width < 0,
            style=PenStyle.DOT if is_highlighted else PenStyle.SOLID,
        )

    def copy_from(self, other: Label) -> None:
        """Take over text, category and geometry of another label."""
        self.text = other.text
        self.category = other.category
        self.from_strings(other.to_strings())

    def clone(self) -> Label:
        """Return an independent copy of this label."""
        copy = type(self)()
        copy.copy_from(self)
        return copy