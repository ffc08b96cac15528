"""Label definitions (marker types) and their categories."""

from __future__ import annotations

import enum
import re
import weakref
from collections.abc import Callable, Iterable
from typing import Any

Color = tuple[int, int, int]
Listener = Callable[[str, Any], None]

_STANDARD_COLORS: dict[int, Color] = {
    0: (255, 0, 0),
    1: (0, 255, 0),
    2: (0, 0, 255),
    3: (255, 55, 0),
    4: (255, 0, 255),
    5: (0, 255, 255),
    6: (55, 55, 55),
    7: (255, 100, 100),
    8: (155, 0, 155),
    9: (0, 100, 255),
}


class LabelType(enum.Enum):
    """Geometric kind of a label; the value is the name used in files."""

    CIRCLE = "circle"
    ORIENTED_CIRCLE = "oriented_circle"
    ORIENTED_POINT = "oriented_point"
    ORIENTED_RECT = "oriented_rect"
    POINT = "point"
    POLYGON = "polygon"
    POLYLINE = "polyline"
    RECT = "rect"
    TOOL = "tool"


def standard_color(index: int) -> Color:
    """Return one of ten standard category colours, cycling by ``index``.

    Negative indexes that are not multiples of ten fall back to red.
    """
    remainder = index % 10 if index >= 0 else -((-index) % 10)
    return _STANDARD_COLORS.get(remainder, _STANDARD_COLORS[0])


class _Observable:
    """Mixin for attributes that notify listeners when their value changes."""

    listeners: list[Listener]

    def _set(self, name: str, value: Any) -> None:
        attribute = "_" + name
        if getattr(self, attribute) != value:
            setattr(self, attribute, value)
            for listener in list(self.listeners):
                listener(name, value)


class LabelCategory(_Observable):
    """A category of a label definition: numeric value, name and colour."""

    def __init__(
        self,
        definition: LabelDefinition | None,
        value: int,
        name: str,
        color: Color,
    ) -> None:
        self._definition = weakref.ref(definition) if definition is not None else None
        self._value = value
        self._name = name
        self._color = tuple(color)
        self.listeners: list[Listener] = []

    @property
    def definition(self) -> LabelDefinition | None:
        """The owning definition, or ``None`` once it is gone."""
        return self._definition() if self._definition is not None else None

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, value: int) -> None:
        self._set("value", value)

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._set("name", value)

    @property
    def color(self) -> Color:
        return self._color

    @color.setter
    def color(self, value: Color) -> None:
        self._set("color", tuple(value))

    def __repr__(self) -> str:
        return f"LabelCategory(value={self._value!r}, name={self._name!r}, color={self._color!r})"


class LabelDefinition(_Observable):
    """A marker type of the project: how labels of one kind look and behave.

    Property changes are reported to ``listeners`` as ``(name, value)``;
    afterwards every callable in ``change_listeners`` is called.
    """

    DEFAULT_LINE_WIDTH = -3

    def __init__(self, value_type: LabelType) -> None:
        self.value_type = LabelType(value_type)
        self.categories: list[LabelCategory] = []
        self.axis_length: list[int] = []
        self.stamp_parameters: dict[str, Any] = {}
        self.shared_labels: list[Any] = []
        self.filename_filter: list[str] = []
        self.shared_properties: dict[str, Any] = {}
        self.custom_properties: list[Any] = []

        self._description = ""
        self._is_stamp = False
        self._line_width = self.DEFAULT_LINE_WIDTH
        self._rendering_script = ""
        self._type_name = ""

        self.listeners: list[Listener] = []
        self.change_listeners: list[Callable[[], None]] = []

    def _set(self, name: str, value: Any) -> None:
        if getattr(self, "_" + name) != value:
            super()._set(name, value)
            self.notify_changed()

    def notify_changed(self) -> None:
        """Tell change listeners that the definition was modified."""
        for listener in list(self.change_listeners):
            listener()

    @property
    def description(self) -> str:
        return self._description

    @description.setter
    def description(self, value: str) -> None:
        self._set("description", value)

    @property
    def is_stamp(self) -> bool:
        return self._is_stamp

    @is_stamp.setter
    def is_stamp(self, value: bool) -> None:
        self._set("is_stamp", value)

    @property
    def line_width(self) -> int:
        """Positive: width in picture pixels; negative: in screen pixels."""
        return self._line_width

    @line_width.setter
    def line_width(self, value: int) -> None:
        self._set("line_width", value)

    @property
    def rendering_script(self) -> str:
        return self._rendering_script

    @rendering_script.setter
    def rendering_script(self, value: str) -> None:
        self._set("rendering_script", value)

    @property
    def type_name(self) -> str:
        return self._type_name

    @type_name.setter
    def type_name(self, value: str) -> None:
        self._set("type_name", value)

    @property
    def is_shared(self) -> bool:
        return len(self.shared_labels) > 0

    def create_category(self, value: int, name: str, color: Color) -> LabelCategory:
        """Create a category owned by this definition and append it."""
        category = LabelCategory(self, value, name, color)
        self.categories.append(category)
        return category

    def get_category(self, value: int) -> LabelCategory | None:
        """Return the first category with the given value, if any."""
        return next((c for c in self.categories if c.value == value), None)

    def missing_indexes(self, existing_indexes: Iterable[int]) -> set[int]:
        """Shared label indexes that are not among ``existing_indexes``."""
        existing = set(existing_indexes)
        return {i for i in range(len(self.shared_labels)) if i not in existing}

    def allowed_for_filename(self, filename: str, shared_index: int = -1) -> bool:
        """Whether labels of this definition may be placed on ``filename``.

        Without a filter every file is allowed. A negative ``shared_index``
        accepts a match of any filter; otherwise the filter with that index
        (or the last one) must match.
        """
        if not self.filename_filter:
            return True
        if shared_index < 0:
            return any(self._filter_matches(pattern, filename) for pattern in self.filename_filter)
        pattern = self.filename_filter[min(shared_index, len(self.filename_filter) - 1)]
        return self._filter_matches(pattern, filename)

    @staticmethod
    def _filter_matches(pattern: str, filename: str) -> bool:
        try:
            return re.search(pattern, filename) is not None
        except re.error:
            return False

    def __repr__(self) -> str:
        return f"LabelDefinition({self.value_type!r}, type_name={self._type_name!r})"