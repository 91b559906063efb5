"""
Validation Service

Checks applied by the workspace layer around a column size edit.
None of these are used by the core engine itself.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

logger = logging.getLogger("BaseColumns.ValidationService")

BASE_EXTENSION = ".base"


class ValidationService:
    """
    Service class for validation operations.

    Provides:
    - File extension validation
    - Column width bounds
    - YAML well-formedness of whole documents
    """

    def __init__(self, settings: Optional[Mapping[str, Any]] = None):
        """
        Initialize validation service.

        Args:
            settings: Plugin settings (min/max column widths)
        """
        self.settings: Mapping[str, Any] = settings or {}

    def validate_file_extension(self, path: str, allowed: Optional[List[str]] = None) -> bool:
        """
        Validate file extension.

        Args:
            path: File path
            allowed: Allowed extensions (defaults to .base)

        Returns:
            True if extension is allowed
        """
        allowed = allowed or [BASE_EXTENSION]
        ext = Path(path).suffix.lower()
        return ext in [e.lower() if e.startswith(".") else "." + e.lower() for e in allowed]

    def validate_width(self, width: int) -> bool:
        """True when ``width`` lies within the configured min/max bounds."""
        low = self.settings.get("min_column_width")
        high = self.settings.get("max_column_width")
        if width < 0:
            return False
        if low is not None and width < int(low):
            return False
        if high is not None and width > int(high):
            return False
        return True

    def invalid_widths(self, sizes: Mapping[str, int]) -> Dict[str, int]:
        """Entries of ``sizes`` that fall outside the configured bounds."""
        return {key: width for key, width in sizes.items() if not self.validate_width(width)}

    def is_well_formed(self, document: str) -> bool:
        """
        True when ``document`` loads as YAML.

        Only used as a safety net around a patch; documents are never
        rewritten through the YAML library.
        """
        try:
            yaml.safe_load(document)
            return True
        except yaml.YAMLError as e:
            logger.debug(f"Document is not well-formed YAML: {e}")
            return False
