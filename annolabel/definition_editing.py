"""Editing rules for marker type properties and category values."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from annolabel.definitions_tree import DefinitionsTree
from annolabel.label_definition import LabelCategory, LabelDefinition, LabelType

_TYPES_WITH_AXIS = frozenset({LabelType.ORIENTED_POINT, LabelType.ORIENTED_CIRCLE})

MAKE_SHARED_MESSAGE = (
    "You want to make marker shared, but there are existing labels which might be "
    "deleted or modified via this change. Dou you want to continue?"
)
DISABLE_SHARING_MESSAGE = "Do you want to disable labels sharing?"
DECREASE_SHARED_MESSAGE = (
    "You want to decrease number of shared instances of the marker. Some labels "
    "will be deleted. Do you want to continue?"
)


class DefinitionEditError(ValueError):
    """Raised when requested changes to a definition cannot be applied."""


@dataclass
class DefinitionProperties:
    """Editable main properties of a marker type.

    ``axis_length_x`` and ``axis_length_y`` are ``None`` for label types
    without coordinate axes; a negative length means the axis is unset.
    """

    type_name: str = ""
    description: str = ""
    line_width: int = LabelDefinition.DEFAULT_LINE_WIDTH
    value_type: LabelType = LabelType.POINT
    axis_length_x: int | None = None
    axis_length_y: int | None = None

    @property
    def has_axis(self) -> bool:
        return self.axis_length_x is not None or self.axis_length_y is not None


def properties_from_definition(definition: LabelDefinition) -> DefinitionProperties:
    """Collect the editable properties of ``definition``."""
    properties = DefinitionProperties(
        type_name=definition.type_name,
        description=definition.description,
        line_width=definition.line_width,
        value_type=definition.value_type,
    )
    if definition.value_type in _TYPES_WITH_AXIS:
        axis = definition.axis_length
        properties.axis_length_x = axis[0] if len(axis) > 0 else 0
        properties.axis_length_y = axis[1] if len(axis) > 1 else 0
    return properties


def shared_count_notification(
    definition: LabelDefinition,
    new_count: int,
    existing_indexes: Iterable[int],
    existing_labels_count: int,
) -> str | None:
    """Warning to confirm before changing the number of shared instances.

    Returns ``None`` when the change affects no existing labels.
    """
    indexes = set(existing_indexes) if definition.is_shared else set()
    if not indexes and not existing_labels_count:
        return None

    if not definition.is_shared:
        if new_count > 0:
            return MAKE_SHARED_MESSAGE
        return None

    if new_count == 0:
        return DISABLE_SHARING_MESSAGE
    if any(index >= new_count for index in indexes):
        return DECREASE_SHARED_MESSAGE
    return None


def parse_filename_filter(text: str) -> list[str]:
    """Split filter text into lines, dropping blank ones."""
    return [line for line in text.split("\n") if line.strip()]


def axis_lengths(x: int, y: int) -> list[int]:
    """Axis lengths to store; negative trailing values are left out."""
    result = []
    if x >= 0 or y >= 0:
        result.append(x)
    if y >= 0:
        result.append(y)
    return result


def apply_properties(
    definition: LabelDefinition,
    properties: DefinitionProperties,
    tree: DefinitionsTree | None,
    is_stamp: bool,
    filename_text: str,
) -> None:
    """Write edited properties back into ``definition``.

    Raises ``DefinitionEditError`` if the name is used by another marker
    type in ``tree`` or if the value type would change.
    """
    if tree is not None:
        existing = tree.find_definition(properties.type_name)
        if existing is not None and existing is not definition:
            raise DefinitionEditError(
                f"Marker named {properties.type_name} already exists. Please use another name."
            )

    if LabelType(properties.value_type) != definition.value_type:
        raise DefinitionEditError("Changing of the value type is not yet supported.")

    definition.type_name = properties.type_name
    definition.line_width = properties.line_width
    definition.description = properties.description
    definition.is_stamp = is_stamp
    definition.filename_filter = parse_filename_filter(filename_text)

    if properties.has_axis:
        x = properties.axis_length_x if properties.axis_length_x is not None else -1
        y = properties.axis_length_y if properties.axis_length_y is not None else -1
        definition.axis_length = axis_lengths(x, y)


def change_category_value(category: LabelCategory, value: int) -> bool:
    """Give ``category`` a new value unique within its definition.

    Returns ``False`` if the value is unchanged, ``True`` after a change.
    """
    if value == category.value:
        return False

    definition = category.definition
    if definition is None:
        raise DefinitionEditError("category does not belong to a marker type")

    for other in definition.categories:
        if other.value == value:
            raise DefinitionEditError(
                f"Value {value} is already used by category {other.name}"
            )

    category.value = value
    definition.notify_changed()
    return True