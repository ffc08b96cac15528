"""Numbering of non-empty lines in a list of filename filters."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NumberedLine:
    """One line of the text.

    ``number`` counts non-empty lines from 1 and is ``None`` for blank lines;
    ``exceeds_limit`` marks numbered lines beyond the allowed count.
    """

    index: int
    text: str
    number: int | None
    exceeds_limit: bool


def number_filename_lines(text: str, max_filenames: int) -> list[NumberedLine]:
    """Number the non-blank lines of ``text`` and flag those over the limit."""
    result = []
    count = 0
    for index, line in enumerate(text.split("\n")):
        if line.strip():
            count += 1
            result.append(NumberedLine(index, line, count, count > max_filenames))
        else:
            result.append(NumberedLine(index, line, None, False))
    return result


def line_number_digits(block_count: int) -> int:
    """Digits needed to show line numbers for ``block_count`` lines."""
    return len(str(max(1, block_count)))