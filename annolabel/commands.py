"""Undoable edits of a single label: text, geometry and category."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from annolabel.label import Label


class UpdateNotifier(Protocol):
    """Anything that wants to know when a label was modified."""

    def notify_update(self, label: Label) -> None: ...


class ModifyLabelTextCommand:
    """Swap the text of a label with a stored text."""

    def __init__(self, file: UpdateNotifier, label: Label, text: str) -> None:
        self.file = file
        self.label = label
        self._text = text

    def _exchange(self) -> None:
        self._text, self.label.text = self.label.text, self._text

    def undo(self) -> None:
        self._exchange()
        self.file.notify_update(self.label)

    def redo(self) -> None:
        self._exchange()
        self.file.notify_update(self.label)


class ModifyLabelGeometryCommand:
    """Swap the serialised geometry of a label with a stored one.

    The label is expected to already hold the new geometry when the command
    is created, so the first ``redo`` changes nothing; ``data`` is the
    geometry to return to on ``undo`` and defaults to the current one.
    """

    def __init__(self, file: UpdateNotifier, label: Label, data: Sequence[str] | None = None) -> None:
        self.file = file
        self.label = label
        self._data = list(data) if data else label.to_strings()
        self._just_created = True

    def _exchange(self) -> None:
        current = self.label.to_strings()
        self.label.from_strings(self._data)
        self._data = current

    def undo(self) -> None:
        self._exchange()
        self.file.notify_update(self.label)

    def redo(self) -> None:
        if self._just_created:
            self._just_created = False
        else:
            self._exchange()
        self.file.notify_update(self.label)


class ModifyLabelCategoryCommand:
    """Swap the category of a label with the category of a stored value.

    Nothing changes if the label has no definition or the definition has
    no category with the stored value.
    """

    def __init__(self, file: UpdateNotifier, label: Label, category: int) -> None:
        self.file = file
        self.label = label
        self._category = category

    def _exchange(self) -> None:
        category = self.label.category
        definition = self.label.definition
        if category is None or definition is None:
            return
        new_category = definition.get_category(self._category)
        if new_category is None:
            return
        self._category = category.value
        self.label.category = new_category

    def undo(self) -> None:
        self._exchange()
        self.file.notify_update(self.label)

    def redo(self) -> None:
        self._exchange()
        self.file.notify_update(self.label)