"""
File-backed workspace used by the CLI.
"""

import logging
from typing import Optional

from basecolumns.core.line_scanner import list_table_views
from basecolumns.services.file_service import FileService
from basecolumns.workspace.base import Workspace, WorkspaceError

logger = logging.getLogger(__name__)


class FileWorkspace(Workspace):
    """
    Workspace over plain files.

    The active view is the explicitly chosen one, or else the first table
    view in the document.
    """

    def __init__(
        self,
        file_service: Optional[FileService] = None,
        view_name: Optional[str] = None,
        window_width: int = 1200,
        create_backups: bool = True,
    ):
        self.files = file_service or FileService()
        self.view_name = view_name
        self._window_width = window_width
        self.create_backups = create_backups

    def read(self, path: str) -> str:
        content = self.files.read(path)
        if content is None:
            raise WorkspaceError(f"Could not read {path}")
        return content

    def write(self, path: str, text: str) -> None:
        if self.create_backups and self.files.backup(path) is None and self.files.exists(path):
            raise WorkspaceError(f"Could not back up {path}; refusing to overwrite")
        if not self.files.write(path, text):
            raise WorkspaceError(f"Could not write {path}")
        logger.info(f"Saved {path}")

    def active_view_name(self, document: str) -> Optional[str]:
        if self.view_name:
            return self.view_name
        views = list_table_views(document)
        return views[0] if views else None

    def window_width(self) -> int:
        return self._window_width
