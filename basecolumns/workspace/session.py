"""
Column size editing session.

Glue between a Workspace and the pure column size engine. Every mutation
is one read, one patch and one write of the whole document; nothing is
cached between calls, so two sessions editing the same file concurrently
follow last-writer-wins.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from basecolumns.core.column_size_engine import ColumnSizeEngine, PatchPolicy, PatchResult
from basecolumns.core.distribution import (
    apply_uniform_width,
    distribute_even,
    initial_sizes,
)
from basecolumns.services.config_service import DEFAULT_SETTINGS
from basecolumns.services.validation_service import ValidationService
from basecolumns.workspace.base import BaseColumnsError, PatchValidationError, Workspace

logger = logging.getLogger(__name__)


class ViewNotFoundError(BaseColumnsError):
    """No view name was given and the document has no table view."""


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n")


class ColumnSizeSession:
    """
    Reads, edits and saves the column sizes of table views.

    Args:
        workspace: Host collaborator for I/O, active view and window width
        settings: Plugin settings; missing keys fall back to defaults
    """

    def __init__(
        self,
        workspace: Workspace,
        settings: Optional[Mapping[str, Any]] = None,
        engine: Optional[ColumnSizeEngine] = None,
        validator: Optional[ValidationService] = None,
    ):
        self.workspace = workspace
        self.settings: Dict[str, Any] = {**DEFAULT_SETTINGS, **(settings or {})}
        self.engine = engine or ColumnSizeEngine()
        self.validator = validator or ValidationService(self.settings)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------
    def _read(self, path: str) -> str:
        return _normalize_newlines(self.workspace.read(path))

    def _resolve_view(self, document: str, view_name: Optional[str]) -> str:
        name = view_name or self.workspace.active_view_name(document)
        if not name:
            raise ViewNotFoundError("No table view found; pass a view name explicitly")
        return name

    def table_views(self, path: str) -> List[str]:
        return self.engine.table_views(self._read(path))

    def load_sizes(self, path: str, view_name: Optional[str] = None) -> Dict[str, int]:
        """Current ``columnSize`` mapping; empty when the view has none."""
        document = self._read(path)
        return self.engine.extract(document, self._resolve_view(document, view_name))

    def columns(self, path: str, view_name: Optional[str] = None) -> List[str]:
        """Sized columns first, then any ordered column not sized yet."""
        document = self._read(path)
        name = self._resolve_view(document, view_name)
        keys = list(self.engine.extract(document, name))
        for key in self.engine.view_order(document, name):
            if key not in keys:
                keys.append(key)
        return keys

    def initial_sizes(self, path: str, view_name: Optional[str] = None) -> Dict[str, int]:
        """
        Sizes to seed an editor with.

        Existing sizes win; otherwise the view's ordered columns get the
        default width behaviour from settings.
        """
        sizes = self.load_sizes(path, view_name)
        if sizes:
            return sizes
        return initial_sizes(
            self.columns(path, view_name),
            self.settings["default_width_behavior"],
            self.settings,
        )

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------
    def save_sizes(
        self,
        path: str,
        sizes: Mapping[str, int],
        view_name: Optional[str] = None,
        dry_run: bool = False,
    ) -> PatchResult:
        """Replace the view's size section with ``sizes`` and write the file."""
        raw = self.workspace.read(path)
        # Only a pure CRLF file is normalized; mixed endings pass through as read.
        crlf = "\r\n" in raw and "\n" not in raw.replace("\r\n", "")
        document = _normalize_newlines(raw) if crlf else raw
        name = self._resolve_view(document, view_name)

        result = self.engine.patch(document, name, sizes)
        if result.policy is PatchPolicy.NONE or not result.changed:
            logger.info(result.summary)
            return result

        if self.validator.is_well_formed(document) and not self.validator.is_well_formed(result.content):
            raise PatchValidationError(
                f"Patched document for view '{name}' is no longer valid YAML; not written"
            )

        if dry_run:
            logger.info(f"Dry run: {result.summary}")
            return result

        content = result.content.replace("\n", "\r\n") if crlf else result.content
        self.workspace.write(path, content)
        logger.info(result.summary)
        return result

    def update_sizes(
        self,
        path: str,
        edits: Mapping[str, int],
        view_name: Optional[str] = None,
        dry_run: bool = False,
    ) -> PatchResult:
        """Merge ``edits`` into the current sizes and save."""
        sizes = self.load_sizes(path, view_name)
        sizes.update(edits)
        return self.save_sizes(path, sizes, view_name, dry_run)

    def distribute_to_width(
        self,
        path: str,
        total_width: Optional[int] = None,
        view_name: Optional[str] = None,
        dry_run: bool = False,
    ) -> PatchResult:
        """Split ``total_width`` (default: the window width) evenly across columns."""
        if total_width is None:
            total_width = self.workspace.window_width()
        sizes = distribute_even(total_width, self.columns(path, view_name))
        return self.save_sizes(path, sizes, view_name, dry_run)

    def apply_uniform(
        self,
        path: str,
        width: Optional[int] = None,
        view_name: Optional[str] = None,
        dry_run: bool = False,
    ) -> PatchResult:
        """Give every column ``width`` (default: the custom width setting)."""
        if width is None:
            width = int(self.settings["custom_column_width"])
        sizes = apply_uniform_width(self.columns(path, view_name), width)
        return self.save_sizes(path, sizes, view_name, dry_run)

    def initialize(
        self, path: str, view_name: Optional[str] = None, dry_run: bool = False
    ) -> PatchResult:
        """Write the default sizes for a view that has none yet."""
        return self.save_sizes(path, self.initial_sizes(path, view_name), view_name, dry_run)
