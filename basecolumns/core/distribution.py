"""
Width distribution policies.

Pure helpers that turn a list of column keys plus a number into the
``{column: width}`` mapping consumed by the column size patcher.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional


class WidthBehavior(Enum):
    DISABLED = "disabled"
    MIN_WIDTH = "min-width"
    MAX_WIDTH = "max-width"
    FIT_CONTENT = "fit-content"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, raw: Any) -> "WidthBehavior":
        """Accept enum values, member names, or the legacy "0"-"4" codes."""
        if isinstance(raw, cls):
            return raw
        text = str(raw).strip().lower()
        legacy = {
            "0": cls.DISABLED,
            "1": cls.MIN_WIDTH,
            "2": cls.MAX_WIDTH,
            "3": cls.FIT_CONTENT,
            "4": cls.CUSTOM,
        }
        if text in legacy:
            return legacy[text]
        for member in cls:
            if text in (member.value, member.name.lower()):
                return member
        raise ValueError(f"Unknown column width behavior: {raw!r}")


def distribute_even(total_width: int, columns: Iterable[str]) -> Dict[str, int]:
    """
    Split ``total_width`` evenly across ``columns``.

    Each column gets ``floor(total_width / n)``; the remainder is dropped.
    No columns yields an empty mapping.
    """
    keys = list(dict.fromkeys(columns))
    if not keys:
        return {}
    width = max(0, int(total_width)) // len(keys)
    return {key: width for key in keys}


def apply_uniform_width(columns: Iterable[str], width: int) -> Dict[str, int]:
    """Give every column the same ``width``."""
    return {key: int(width) for key in columns}


def resolve_default_width(behavior: Any, settings: Mapping[str, Any]) -> Optional[int]:
    """Width a newly sized column receives, or None to leave it unsized."""
    behavior = WidthBehavior.parse(behavior)
    if behavior is WidthBehavior.MIN_WIDTH:
        return int(settings["min_column_width"])
    if behavior is WidthBehavior.MAX_WIDTH:
        return int(settings["max_column_width"])
    if behavior is WidthBehavior.CUSTOM:
        return int(settings["custom_column_width"])
    # DISABLED and FIT_CONTENT: let the table size the column itself.
    return None


def initial_sizes(
    columns: Iterable[str], behavior: Any, settings: Mapping[str, Any]
) -> Dict[str, int]:
    width = resolve_default_width(behavior, settings)
    if width is None:
        return {}
    return apply_uniform_width(columns, width)
