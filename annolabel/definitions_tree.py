"""The project's list of label definitions, with naming and editing rules."""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable

from annolabel.label_definition import (
    LabelCategory,
    LabelDefinition,
    LabelType,
    standard_color,
)

_FIRST_CATEGORY_COLOR = (255, 0, 0)


class DuplicateNameError(ValueError):
    """Raised when a marker type would get a name that is already in use."""


def _display_name(value_type: LabelType) -> str:
    words = [word for word in value_type.value.split("_") if word]
    return " ".join(word[0].upper() + word[1:] for word in words)


class DefinitionsTree:
    """Ordered collection of label definitions and their categories.

    Every callable in ``change_listeners`` is called when a definition is
    added, copied or modified.
    """

    def __init__(self, definitions: Iterable[LabelDefinition] = ()) -> None:
        self._definitions: list[LabelDefinition] = list(definitions)
        self.change_listeners: list[Callable[[], None]] = []
        for definition in self._definitions:
            self._watch(definition)

    @property
    def definitions(self) -> tuple[LabelDefinition, ...]:
        return tuple(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self):
        return iter(self._definitions)

    def __contains__(self, definition: object) -> bool:
        return any(d is definition for d in self._definitions)

    def _watch(self, definition: LabelDefinition) -> None:
        if self._notify not in definition.change_listeners:
            definition.change_listeners.append(self._notify)

    def _unwatch(self, definition: LabelDefinition) -> None:
        if self._notify in definition.change_listeners:
            definition.change_listeners.remove(self._notify)

    def _notify(self) -> None:
        for listener in list(self.change_listeners):
            listener()

    def _position(self, definition: LabelDefinition) -> int:
        for position, candidate in enumerate(self._definitions):
            if candidate is definition:
                return position
        return -1

    def _name_taken(self, name: str) -> bool:
        return any(d.type_name == name for d in self._definitions)

    def find_definition(self, type_name: str) -> LabelDefinition | None:
        """Return the definition with the given type name, if any."""
        return next((d for d in self._definitions if d.type_name == type_name), None)

    def rename_definition(self, definition: LabelDefinition, new_name: str) -> None:
        """Rename a marker type; names must stay unique."""
        if definition.type_name == new_name:
            return
        for other in self._definitions:
            if other is not definition and other.type_name == new_name:
                raise DuplicateNameError(
                    f"Cannot rename marker to {new_name}, marker with this name already exists"
                )
        definition.type_name = new_name

    def create_marker_type(self, value_type: LabelType) -> LabelDefinition:
        """Append a new marker type with a free name and one category."""
        value_type = LabelType(value_type)
        base = _display_name(value_type)
        number = 0
        while self._name_taken(f"{base} {number}"):
            number += 1

        definition = LabelDefinition(value_type)
        definition.type_name = f"{base} {number}"
        self._watch(definition)
        definition.create_category(0, "Category 0", _FIRST_CATEGORY_COLOR)

        self._definitions.append(definition)
        self._notify()
        return definition

    def create_category(self, definition: LabelDefinition) -> LabelCategory:
        """Add a category with the next free value to ``definition``."""
        value = max((c.value + 1 for c in definition.categories), default=0)
        value = max(value, 0)
        category = definition.create_category(value, f"Category {value}", standard_color(value))
        self._notify()
        return category

    def delete_definition(self, definition: LabelDefinition) -> None:
        """Remove a marker type from the tree, if it is there."""
        position = self._position(definition)
        if position >= 0:
            del self._definitions[position]
            self._unwatch(definition)

    def delete_category(self, category: LabelCategory) -> None:
        """Remove a category from its definition, if both are in the tree."""
        definition = category.definition
        if definition is None or definition not in self:
            return
        for position, candidate in enumerate(definition.categories):
            if candidate is category:
                del definition.categories[position]
                return

    def copy_name(self, base_name: str) -> str:
        """A name derived from ``base_name`` that no definition uses yet."""
        name = base_name
        copy_index = 0
        while self._name_taken(name):
            copy_index += 1
            name = f"{base_name} copy" if copy_index == 1 else f"{base_name} copy({copy_index})"
        return name

    def clone_definition(self, definition: LabelDefinition) -> LabelDefinition | None:
        """Insert a copy of ``definition`` right after it; ``None`` if absent."""
        position = self._position(definition)
        if position < 0:
            return None

        clone = LabelDefinition(definition.value_type)
        clone.description = definition.description
        clone.is_stamp = definition.is_stamp
        clone.line_width = definition.line_width
        clone.rendering_script = definition.rendering_script
        clone.axis_length = list(definition.axis_length)
        clone.stamp_parameters = copy.deepcopy(definition.stamp_parameters)
        clone.filename_filter = list(definition.filename_filter)
        clone.shared_properties = dict(definition.shared_properties)
        clone.custom_properties = copy.deepcopy(definition.custom_properties)
        for category in definition.categories:
            clone.create_category(category.value, category.name, category.color)
        for shared in definition.shared_labels:
            label = shared.clone()
            old_category = getattr(shared, "category", None)
            if old_category is not None:
                new_category = clone.get_category(old_category.value)
                if new_category is not None:
                    label.category = new_category
            clone.shared_labels.append(label)

        clone.type_name = self.copy_name(definition.type_name)
        self._watch(clone)
        self._definitions.insert(position + 1, clone)
        self._notify()
        return clone

    def insert_new_definition(self, base_name: str, definition: LabelDefinition) -> LabelDefinition:
        """Insert ``definition`` under a free name derived from ``base_name``.

        It goes after the leading run of definitions whose names sort before it.
        """
        name = self.copy_name(base_name)
        definition.type_name = name

        position = 0
        for index, existing in enumerate(self._definitions):
            if existing.type_name < name:
                position = index + 1
            else:
                break

        self._watch(definition)
        self._definitions.insert(position, definition)
        self._notify()
        return definition