"""
Line Scanner for Base view definition files.

Classifies each line of a ``.base`` document by its structural role
relative to one target view, using only indentation and prefix matching.
The document is never parsed into a tree: callers walk the lines, feed them
to a :class:`ViewScanner` one at a time, and copy or rewrite them based on
the returned :class:`LineRole` and the scanner's current :class:`ScanState`.

Block rules:
  - Every ``- type: <kind>`` line opens a view block; only ``table`` is eligible.
  - The first ``name:`` field inside an eligible block decides the target.
  - A ``columnSize:`` header inside the target view opens the size section,
    which ends at a shallower (or equally indented) line, a ``rowHeight:``
    line, or the next view marker.
  - Blank and comment lines never change state.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Iterable, List, Optional


logger = logging.getLogger(__name__)

VIEW_MARKER = "- type:"
TABLE_KIND = "table"
NAME_FIELD = "name:"
SIZE_HEADER = "columnSize:"
SIBLING_FIELDS = ("rowHeight:",)


class LineRole(Enum):
    VIEW_START = "view_start"
    NAME_FIELD = "name_field"
    SIZE_HEADER = "size_header"
    SIZE_ENTRY = "size_entry"
    SIBLING_FIELD = "sibling_field"
    TRIVIA = "trivia"
    OTHER = "other"


class ScanState(Enum):
    SCANNING = "scanning"
    IN_TABLE_BLOCK = "in_table_block"
    IN_TARGET_VIEW = "in_target_view"
    IN_SIZE_SECTION = "in_size_section"
    PAST_TARGET = "past_target"


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------
def split_lines(text: str) -> List[str]:
    # Only '\n' is a separator; '\r' stays part of the line.
    return text.split("\n")


def join_lines(lines: Iterable[str]) -> str:
    return "\n".join(lines)


def indent_of(line: str) -> int:
    return len(line) - len(line.lstrip())


def leading_whitespace(line: str) -> str:
    return line[: indent_of(line)]


def is_trivia(stripped: str) -> bool:
    return not stripped or stripped.startswith("#")


def unquote(value: str) -> str:
    """Strip surrounding whitespace and one pair of matching quotes."""
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        if value[0] == '"':
            try:
                return json.loads(value)
            except ValueError:
                pass
        return value[1:-1]
    return value


def field_value(stripped: str, prefix: str) -> str:
    return unquote(stripped[len(prefix):])


def is_sibling_field(stripped: str) -> bool:
    return stripped.startswith(SIBLING_FIELDS)


# ----------------------------------------------------------------------
# Scanner
# ----------------------------------------------------------------------
class ViewScanner:
    """
    Finite-state line classifier for one target view.

    ``advance(line)`` consumes exactly one line and returns its role. After
    the first matching view has ended the scanner stays in PAST_TARGET, so
    duplicated view names resolve to the first occurrence.
    """

    def __init__(self, view_name: Optional[str]):
        self.view_name = view_name
        self.state = ScanState.SCANNING
        self.view_indent = 0
        self.key_prefix = ""
        self.size_indent = 0
        self.last_name: Optional[str] = None

    @property
    def in_target(self) -> bool:
        return self.state in (ScanState.IN_TARGET_VIEW, ScanState.IN_SIZE_SECTION)

    def advance(self, line: str) -> LineRole:
        stripped = line.strip()
        if is_trivia(stripped):
            return LineRole.TRIVIA

        indent = indent_of(line)

        if self.state is ScanState.IN_SIZE_SECTION:
            if not self._ends_size_section(stripped, indent):
                return LineRole.SIZE_ENTRY
            # The terminating line belongs to the enclosing view.
            self.state = ScanState.IN_TARGET_VIEW

        if self.state is ScanState.IN_TARGET_VIEW:
            return self._advance_in_target(line, stripped, indent)

        if stripped.startswith(VIEW_MARKER):
            return self._open_block(stripped, indent)

        if self.state is ScanState.IN_TABLE_BLOCK:
            return self._advance_in_table_block(line, stripped, indent)

        return LineRole.OTHER

    # ---- transitions -------------------------------------------------
    def _open_block(self, stripped: str, indent: int) -> LineRole:
        if self.state is ScanState.PAST_TARGET:
            return LineRole.VIEW_START

        kind = field_value(stripped, VIEW_MARKER)
        self.view_indent = indent
        if kind == TABLE_KIND:
            self.state = ScanState.IN_TABLE_BLOCK
        else:
            self.state = ScanState.SCANNING
        return LineRole.VIEW_START

    def _advance_in_table_block(self, line: str, stripped: str, indent: int) -> LineRole:
        if indent <= self.view_indent:
            self.state = ScanState.SCANNING
            return LineRole.OTHER

        if not stripped.startswith(NAME_FIELD):
            return LineRole.OTHER

        self.last_name = field_value(stripped, NAME_FIELD)
        if self.view_name is not None and self.last_name == self.view_name:
            self.state = ScanState.IN_TARGET_VIEW
            self.key_prefix = leading_whitespace(line)
            logger.debug(f"Target view '{self.view_name}' found")
        else:
            self.state = ScanState.SCANNING
        return LineRole.NAME_FIELD

    def _advance_in_target(self, line: str, stripped: str, indent: int) -> LineRole:
        if stripped.startswith(VIEW_MARKER):
            self.state = ScanState.PAST_TARGET
            return LineRole.VIEW_START

        if indent <= self.view_indent:
            self.state = ScanState.PAST_TARGET
            return LineRole.OTHER

        if stripped.startswith(SIZE_HEADER):
            self.state = ScanState.IN_SIZE_SECTION
            self.size_indent = indent
            return LineRole.SIZE_HEADER

        if is_sibling_field(stripped):
            return LineRole.SIBLING_FIELD

        return LineRole.OTHER

    def _ends_size_section(self, stripped: str, indent: int) -> bool:
        return (
            indent <= self.size_indent
            or stripped.startswith(VIEW_MARKER)
            or is_sibling_field(stripped)
        )


# ----------------------------------------------------------------------
# Whole-document helpers
# ----------------------------------------------------------------------
def classify_lines(lines: Iterable[str], view_name: Optional[str]) -> List[LineRole]:
    """Tag every line with its role relative to ``view_name``."""
    scanner = ViewScanner(view_name)
    return [scanner.advance(line) for line in lines]


def list_table_views(document: str) -> List[str]:
    """Names of all table views, in document order."""
    scanner = ViewScanner(None)
    names: List[str] = []
    for line in split_lines(document):
        if scanner.advance(line) is LineRole.NAME_FIELD and scanner.last_name is not None:
            names.append(scanner.last_name)
    return names
