# annolabel

The model layer of an image labeling tool. It has no GUI and no command-line entry point. It is a library to build a labeling application on.

## What is in it

- **`annolabel.label_definition`**: marker types and their categories.
  - `LabelType` lists the geometric kinds, such as `RECT`, `POLYGON` and `ORIENTED_POINT`.
  - `LabelDefinition` holds a marker type's name, description, line width, rendering script, stamp flag, categories, shared labels and filename filters. Use `allowed_for_filename` to test whether a file is permitted and `missing_indexes` to find shared label indexes that are not present.
  - `LabelCategory` holds a value, a name and a colour.
  - `standard_color` returns one of ten default category colours.
- **`annolabel.label`**: labels and their handles.
  - `Label` keeps `LabelHandle` control points, a category, free text and custom properties.
  - A label's geometry is written as a space-separated coordinate string with `to_strings` and read back with `from_strings`.
  - `clone` and `copy_from` copy labels.
  - `outline_pen` returns an `OutlinePen`: colour, alpha, width, whether the width is cosmetic, and a `PenStyle`.
- **`annolabel.definitions_tree`**: `DefinitionsTree`, an ordered collection of definitions.
  - It creates marker types with free names such as "Rect 0" and adds categories with the next free value.
  - It renames definitions and raises `DuplicateNameError` when a name is already used.
  - It clones definitions under "... copy" names, inserts new definitions and deletes definitions and categories.
- **`annolabel.definition_editing`**: checks and applies edits to a marker type.
  - `DefinitionProperties` and `properties_from_definition` collect the editable properties.
  - `apply_properties` raises `DefinitionEditError` when the name is taken or the value type would change.
  - `shared_count_notification` returns the warning to show before the number of shared instances changes.
  - Also included: `parse_filename_filter`, `axis_lengths` and `change_category_value`.
- **`annolabel.commands`**: undoable edits of one label.
  - `ModifyLabelTextCommand`, `ModifyLabelGeometryCommand` and `ModifyLabelCategoryCommand` each provide `undo` and `redo`.
  - After every change they call `notify_update(label)` on the object you pass in.
- **`annolabel.image_loader`**: decodes images with Pillow.
  - `load_image` returns a `LoadedImage` with the image, an error text and a list of `ImageProperty` entries: size, width, height and the image's text entries.
  - `ImageLoader` does the same work in a background thread. Call `start_loading` to begin and `wait` to get the result.
- **`annolabel.image_model`**: `ImageModel` prepares a background image for display as a NumPy array.
  - It takes an array in BGR channel order or a PIL image.
  - It applies grayscale, brightness, contrast and gamma to produce a `uint8` RGB `pixmap`.
  - It can also return `pixel_values` at a point and `crop` a rectangle, with zero padding outside the image.
  - `slider_to_value` and `value_to_slider` map between slider ticks and setting values.
- **Utilities**:
  - `annolabel.geometry`: `wrap_angle`, `deg2rad`, `rad2deg`, and `intersection` of two lines, which returns an `IntersectionType` and the point.
  - `annolabel.navigation`: `NavigationModel`, a back/forward path history that keeps at most about 100 entries.
  - `annolabel.highlighter`: `Highlighter` produces `Span`s of `HighlightKind` for JSON or JavaScript rendering scripts. It carries the state of `/* */` comments and `{{ }}` code blocks from one line to the next.
  - `annolabel.filename_lines`: `number_filename_lines` numbers the non-blank lines of a filename-filter text and flags the lines beyond a limit. `line_number_digits` returns how many digits the line numbers need.

## What it does not do

- **Storage:** no project file format, and no access to a project's folders. `load_image` and `ImageLoader` read bytes through any object you supply that has a `load_file(filename) -> bytes` method.
- **Interface:** no windows, widgets or painting.

## Installation

```
pip install .
```

To also install the test tools:

```
pip install .[test]
```

## Example

```python
from annolabel.label_definition import LabelType
from annolabel.definitions_tree import DefinitionsTree
from annolabel.navigation import NavigationModel

tree = DefinitionsTree([])
definition = tree.create_marker_type(LabelType.RECT)
print(definition.type_name)  # Rect 0
category = tree.create_category(definition)
print(category.name)  # Category 1

history = NavigationModel()
history.set_path("images/a.png")
history.set_path("images/b.png")
history.back()
print(history.current_path)  # images/a.png
```

## Running the tests

```
pytest
```