"""Line-by-line syntax highlighting for JSON and rendering scripts."""

from __future__ import annotations

import enum
import re
from collections.abc import Iterable
from dataclasses import dataclass

STATE_NORMAL = 0
STATE_IN_COMMENT = 1
STATE_IN_CODE = 2

_JS_KEYWORDS = (
    "abstract arguments await boolean break byte case catch char class const "
    "continue debugger default delete do double else enum eval export extends "
    "false final finally float for function goto if implements import in "
    "instanceof int interface let long native new null package private "
    "protected public return short static super switch synchronized this "
    "throw throws transient true try typeof var void volatile while with yield"
).split()


class HighlightKind(enum.Enum):
    KEYWORD = "keyword"
    CLASS = "class"
    QUOTATION = "quotation"
    FUNCTION = "function"
    NUMBER = "number"
    SINGLE_LINE_COMMENT = "single_line_comment"
    MULTI_LINE_COMMENT = "multi_line_comment"
    SCRIPT = "script"


@dataclass(frozen=True)
class Span:
    """A highlighted range of a line; later spans override earlier ones."""

    start: int
    length: int
    kind: HighlightKind


class Highlighter:
    """Highlights one line at a time, carrying comment/code state across lines.

    ``language`` is ``"json"`` or ``"javascript"``; ``dark`` selects colours
    suited to a dark background. ``formats`` maps each kind to a
    ``(colour name, bold)`` pair.
    """

    def __init__(self, language: str = "json", dark: bool = False) -> None:
        if language not in ("json", "javascript"):
            raise ValueError(f"unknown language: {language!r}")
        self.language = language
        self.dark = dark

        self.formats: dict[HighlightKind, tuple[str, bool]] = {
            HighlightKind.KEYWORD: ("cyan" if dark else "darkBlue", True),
            HighlightKind.CLASS: ("magenta" if dark else "darkMagenta", True),
            HighlightKind.QUOTATION: ("red" if dark else "darkRed", False),
            HighlightKind.FUNCTION: ("blue", False),
            HighlightKind.NUMBER: ("green" if dark else "red", False),
            HighlightKind.SCRIPT: ("yellow" if dark else "darkYellow", False),
            HighlightKind.SINGLE_LINE_COMMENT: ("gray" if dark else "darkGreen", False),
            HighlightKind.MULTI_LINE_COMMENT: ("gray", False),
        }

        keywords = _JS_KEYWORDS if language == "javascript" else []
        self._rules: list[tuple[re.Pattern[str], HighlightKind]] = [
            (re.compile(rf"\b{word}\b"), HighlightKind.KEYWORD) for word in keywords
        ]
        self._rules += [
            (re.compile(r"\bQ[A-Za-z]+\b"), HighlightKind.CLASS),
            (re.compile(r'".*"'), HighlightKind.QUOTATION),
            (re.compile(r"\b[A-Za-z0-9_]+(?=\()"), HighlightKind.FUNCTION),
            (
                re.compile(r"[\+\-]?\b[0-9]+\.?[0-9]*|\btrue\b|\bfalse\b"),
                HighlightKind.NUMBER,
            ),
            (re.compile(r"//[^\n]*"), HighlightKind.SINGLE_LINE_COMMENT),
        ]

        self._comment_start = re.compile(re.escape("/*"))
        self._comment_end = re.compile(re.escape("*/"))
        self._code_start = re.compile(re.escape("{{"))
        self._code_end = re.compile(re.escape("}}"))

    @staticmethod
    def _find(pattern: re.Pattern[str], text: str, pos: int = 0) -> int:
        match = pattern.search(text, pos)
        return match.start() if match else -1

    def highlight_block(self, text: str, previous_state: int = STATE_NORMAL) -> tuple[list[Span], int]:
        """Highlight one line given the state left by the previous line.

        Returns the spans in the order they apply and the state this line
        leaves behind.
        """
        spans: list[Span] = []
        for pattern, kind in self._rules:
            for match in pattern.finditer(text):
                if match.end() > match.start():
                    spans.append(Span(match.start(), match.end() - match.start(), kind))

        state = STATE_NORMAL
        code = False
        if previous_state not in (STATE_IN_COMMENT, STATE_IN_CODE):
            start = self._find(self._comment_start, text)
            if start == -1:
                start = self._find(self._code_start, text)
                code = True
        else:
            start = 0
            code = previous_state == STATE_IN_CODE

        while start >= 0:
            end_pattern = self._code_end if code else self._comment_end
            match = end_pattern.search(text, start)
            if match is None:
                state = STATE_IN_CODE if code else STATE_IN_COMMENT
                length = len(text) - start
            else:
                length = match.end() - start

            if length > 0:
                kind = HighlightKind.SCRIPT if code else HighlightKind.MULTI_LINE_COMMENT
                spans.append(Span(start, length, kind))

            next_pos = start + length
            start = self._find(self._comment_start, text, next_pos)
            if start >= 0:
                code = False
            else:
                code = True
                start = self._find(self._code_start, text, next_pos)

        return spans, state

    def highlight_lines(self, lines: Iterable[str]) -> list[list[Span]]:
        """Highlight consecutive lines of a document."""
        state = STATE_NORMAL
        result = []
        for line in lines:
            spans, state = self.highlight_block(line, state)
            result.append(spans)
        return result