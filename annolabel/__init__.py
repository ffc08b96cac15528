"""Model layer of an image labeling tool: label definitions, labels, undoable edits, image loading and display."""

__version__ = "0.1.0"