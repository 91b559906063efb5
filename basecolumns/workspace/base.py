"""
Base Workspace Interface

The host collaborator the column size session talks to. It owns reading and
writing whole documents and knows which view is active and how wide the
window is; the core engine never sees it.
"""

from abc import ABC, abstractmethod
from typing import Optional


class BaseColumnsError(Exception):
    """Base error for host-side failures."""


class WorkspaceError(BaseColumnsError):
    """A document could not be read or written."""


class PatchValidationError(BaseColumnsError):
    """A patched document failed validation and was not written."""


class Workspace(ABC):
    """Narrow host interface: document I/O plus the active view and window width."""

    @abstractmethod
    def read(self, path: str) -> str:
        """Return the whole document. Raises WorkspaceError on failure."""

    @abstractmethod
    def write(self, path: str, text: str) -> None:
        """Replace the whole document. Raises WorkspaceError on failure."""

    @abstractmethod
    def active_view_name(self, document: str) -> Optional[str]:
        """Name of the view being edited, or None if there is none."""

    @abstractmethod
    def window_width(self) -> int:
        """Total width available to the table, in pixels."""
