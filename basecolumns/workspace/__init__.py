"""
Host-side workspace layer.
Document I/O and the column size editing session.
"""

from .base import BaseColumnsError, PatchValidationError, Workspace, WorkspaceError
from .file_workspace import FileWorkspace
from .session import ColumnSizeSession, ViewNotFoundError

__all__ = [
    "BaseColumnsError",
    "PatchValidationError",
    "Workspace",
    "WorkspaceError",
    "FileWorkspace",
    "ColumnSizeSession",
    "ViewNotFoundError",
]
