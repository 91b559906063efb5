"""
Column Size Engine.

Reads and rewrites the ``columnSize`` mapping of one table view inside a
``.base`` document. Both operations are pure: they take the whole document
as a string and return a new string (or a mapping), leaving file I/O to the
workspace layer.

The rewrite is surgical. Every line outside the target view's size section
is copied through verbatim and in order, so formatting, comments and other
views survive. The section is replaced in place when it exists; otherwise it
is inserted, in this order of preference:

  1. before the view's ``rowHeight:`` field,
  2. before the next view marker (or the first line that leaves the view),
  3. after the view's last line when it ends the document.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from basecolumns.core.line_scanner import (
    SIZE_HEADER,
    LineRole,
    ScanState,
    ViewScanner,
    indent_of,
    is_trivia,
    join_lines,
    leading_whitespace,
    list_table_views,
    split_lines,
    unquote,
)


logger = logging.getLogger(__name__)

ENTRY_INDENT = "  "

_ENTRY_RE = re.compile(r"""^(?P<key>"(?:[^"\\]|\\.)*"|'[^']*'|[^:]+?)\s*:(?:\s+(?P<value>.*))?$""")
_INT_RE = re.compile(r"^[-+]?\d+$")
_PLAIN_KEY_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.\- ]*$")


class PatchPolicy(Enum):
    REPLACED = "replaced"
    BEFORE_SIBLING = "inserted_before_sibling"
    BEFORE_VIEW_END = "inserted_before_view_end"
    AT_END_OF_FILE = "appended_at_end_of_file"
    NONE = "none"


@dataclass
class PatchResult:
    """Structured result for a single column size patch."""

    content: str
    summary: str
    policy: PatchPolicy = PatchPolicy.NONE
    original: str = ""
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return bool(self.details.get("changed"))


# ----------------------------------------------------------------------
# Entry parsing / formatting
# ----------------------------------------------------------------------
def parse_size_entry(text: str) -> Optional[Tuple[str, int]]:
    """
    Parse one ``key: width`` entry.

    Returns None for anything that is not a key with an integer value,
    including trailing-comment-only or nested values.
    """
    m = _ENTRY_RE.match(text.strip())
    if not m or m.group("value") is None:
        return None

    value = m.group("value")
    if " #" in value:
        value = value.split(" #", 1)[0]
    value = value.strip()
    if not _INT_RE.match(value):
        return None

    return unquote(m.group("key")), int(value)


def _parse_flow_mapping(text: str) -> Dict[str, int]:
    # columnSize: {a: 100, b: 200}
    text = text.strip()
    if not (text.startswith("{") and text.endswith("}")):
        return {}
    sizes: Dict[str, int] = {}
    for item in text[1:-1].split(","):
        entry = parse_size_entry(item)
        if entry:
            sizes[entry[0]] = entry[1]
    return sizes


def format_key(key: str) -> str:
    if _PLAIN_KEY_RE.match(key) and key == key.strip():
        return key
    return json.dumps(key, ensure_ascii=False)


def _section_lines(prefix: str, sizes: Mapping[str, int]) -> List[str]:
    entry_prefix = prefix + ENTRY_INDENT
    return [f"{entry_prefix}{format_key(key)}: {int(width)}" for key, width in sizes.items()]


def _header_line(line: str) -> str:
    rest = line.strip()[len(SIZE_HEADER):].strip()
    if not rest or rest.startswith("#"):
        return line
    # Inline flow value; rewritten as a block header.
    return leading_whitespace(line) + SIZE_HEADER


# ----------------------------------------------------------------------
# Extraction
# ----------------------------------------------------------------------
def extract_column_sizes(document: str, view_name: str) -> Dict[str, int]:
    """
    Return the ``columnSize`` mapping of the named table view.

    Missing view, missing section and malformed entries all degrade to an
    empty (or partial) mapping; this never raises for document content.
    """
    scanner = ViewScanner(view_name)
    sizes: Dict[str, int] = {}
    seen_header = False

    for line in split_lines(document):
        role = scanner.advance(line)
        if role is LineRole.SIZE_HEADER:
            seen_header = True
            sizes.update(_parse_flow_mapping(line.strip()[len(SIZE_HEADER):]))
        elif role is LineRole.SIZE_ENTRY:
            entry = parse_size_entry(line)
            if entry:
                sizes[entry[0]] = entry[1]
        elif seen_header and scanner.state is not ScanState.IN_SIZE_SECTION:
            break

    return sizes


def extract_view_order(document: str, view_name: str) -> List[str]:
    """Return the column keys listed under the view's ``order:`` field."""
    scanner = ViewScanner(view_name)
    columns: List[str] = []
    order_indent: Optional[int] = None

    for line in split_lines(document):
        role = scanner.advance(line)
        stripped = line.strip()
        if is_trivia(stripped):
            continue

        if order_indent is not None:
            if indent_of(line) > order_indent and stripped.startswith("- "):
                columns.append(unquote(stripped[2:]))
                continue
            break

        if not scanner.in_target:
            if scanner.state is ScanState.PAST_TARGET:
                break
            continue

        if role is LineRole.OTHER and stripped.startswith("order:"):
            rest = stripped[len("order:"):].strip()
            if rest.startswith("[") and rest.endswith("]"):
                return [unquote(item) for item in rest[1:-1].split(",") if item.strip()]
            order_indent = indent_of(line)

    return columns


# ----------------------------------------------------------------------
# Patching
# ----------------------------------------------------------------------
def _has_size_header(lines: List[str], view_name: str) -> bool:
    scanner = ViewScanner(view_name)
    for line in lines:
        if scanner.advance(line) is LineRole.SIZE_HEADER:
            return True
        if scanner.state is ScanState.PAST_TARGET:
            return False
    return False


def _patch_lines(
    lines: List[str], view_name: str, new_sizes: Mapping[str, int]
) -> Tuple[List[str], PatchPolicy]:
    scanner = ViewScanner(view_name)
    output: List[str] = []
    # Trivia held back while the insertion point inside the view is undecided.
    pending: List[str] = []
    policy = PatchPolicy.NONE
    replacing = False
    # A header anywhere in the view wins over inserting before rowHeight.
    has_header = _has_size_header(lines, view_name)

    for idx, line in enumerate(lines):
        if policy is not PatchPolicy.NONE and not replacing:
            output.extend(lines[idx:])
            return output, policy

        role = scanner.advance(line)

        if replacing:
            if role is LineRole.SIZE_ENTRY:
                pending.clear()
                continue
            if role is LineRole.TRIVIA:
                pending.append(line)
                continue
            output.extend(pending)
            pending.clear()
            output.append(line)
            replacing = False
            continue

        if role is LineRole.TRIVIA and scanner.state is ScanState.IN_TARGET_VIEW:
            pending.append(line)
            continue

        if role is LineRole.SIZE_HEADER:
            output.extend(pending)
            pending.clear()
            output.append(_header_line(line))
            output.extend(_section_lines(leading_whitespace(line), new_sizes))
            policy = PatchPolicy.REPLACED
            replacing = True
            continue

        if (
            (role is LineRole.SIBLING_FIELD and not has_header)
            or scanner.state is ScanState.PAST_TARGET
        ):
            output.append(scanner.key_prefix + SIZE_HEADER)
            output.extend(_section_lines(scanner.key_prefix, new_sizes))
            policy = (
                PatchPolicy.BEFORE_SIBLING
                if role is LineRole.SIBLING_FIELD
                else PatchPolicy.BEFORE_VIEW_END
            )

        output.extend(pending)
        pending.clear()
        output.append(line)

    if policy is PatchPolicy.NONE and scanner.state is ScanState.IN_TARGET_VIEW:
        output.append(scanner.key_prefix + SIZE_HEADER)
        output.extend(_section_lines(scanner.key_prefix, new_sizes))
        policy = PatchPolicy.AT_END_OF_FILE

    output.extend(pending)
    return output, policy


def patch_column_sizes(document: str, view_name: str, new_sizes: Mapping[str, int]) -> str:
    """
    Return ``document`` with the named view's ``columnSize`` section set to
    ``new_sizes``. Unknown views and an empty mapping leave it unchanged.
    """
    if not new_sizes:
        return document
    lines, _ = _patch_lines(split_lines(document), view_name, new_sizes)
    return join_lines(lines)


class ColumnSizeEngine:
    """
    Pure in-memory column size editor.

    Thin object wrapper over the module functions that also reports which
    insertion policy fired, for logging and dry-run output.
    """

    def extract(self, content: str, view_name: str) -> Dict[str, int]:
        return extract_column_sizes(content, view_name)

    def view_order(self, content: str, view_name: str) -> List[str]:
        return extract_view_order(content, view_name)

    def table_views(self, content: str) -> List[str]:
        return list_table_views(content)

    def patch(self, content: str, view_name: str, new_sizes: Mapping[str, int]) -> PatchResult:
        if view_name not in list_table_views(content):
            logger.info(f"Table view '{view_name}' not found; nothing patched")
            return PatchResult(
                content=content,
                summary=f"Table view '{view_name}' not found",
                original=content,
                details={"view": view_name, "entries": 0, "changed": False},
            )
        if not new_sizes:
            return PatchResult(
                content=content,
                summary="No column sizes given; document left unchanged",
                original=content,
                details={"view": view_name, "entries": 0, "changed": False},
            )

        lines, policy = _patch_lines(split_lines(content), view_name, new_sizes)
        new_content = join_lines(lines)
        logger.debug(f"Patched columnSize of '{view_name}' ({policy.value})")

        return PatchResult(
            content=new_content,
            summary=f"Set {len(new_sizes)} column size(s) for '{view_name}'",
            policy=policy,
            original=content,
            details={
                "view": view_name,
                "entries": len(new_sizes),
                "changed": new_content != content,
            },
        )
