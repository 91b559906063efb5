"""
File Service

Service class for whole-document file operations.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

logger = logging.getLogger("BaseColumns.FileService")


class FileService:
    """
    Service class for file operations.

    Provides:
    - Whole-file reads and writes (UTF-8)
    - Optional backup before overwrite
    - Logging instead of raising on I/O failure
    """

    def __init__(self, base_dir: Optional[Path] = None, backup_dir: Optional[Path] = None):
        """
        Initialize file service.

        Args:
            base_dir: Base directory for relative paths (optional)
            backup_dir: Directory for timestamped backups (optional)
        """
        self.base_dir = Path(base_dir).resolve() if base_dir else None
        self.backup_dir = Path(backup_dir) if backup_dir else None
        logger.debug(f"FileService initialized (base_dir: {self.base_dir})")

    def _resolve_path(self, path: str) -> Path:
        p = Path(path).expanduser()
        if self.base_dir and not p.is_absolute():
            p = self.base_dir / p
        return p.resolve()

    def read(self, path: str, encoding: str = "utf-8") -> Optional[str]:
        """
        Read file content.

        Args:
            path: File path
            encoding: File encoding

        Returns:
            File content or None if error
        """
        try:
            p = self._resolve_path(path)
            if not p.exists():
                logger.warning(f"File not found: {path}")
                return None
            # newline="" keeps line endings exactly as stored.
            with p.open("r", encoding=encoding, newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {path}: {e}")
            return None

    def write(self, path: str, content: str, encoding: str = "utf-8") -> bool:
        """
        Replace the file's full contents.

        Args:
            path: File path
            content: Content to write
            encoding: File encoding

        Returns:
            True if successful
        """
        try:
            p = self._resolve_path(path)
            p.parent.mkdir(parents=True, exist_ok=True)
            with p.open("w", encoding=encoding, newline="") as f:
                f.write(content)
            logger.debug(f"File written: {path}")
            return True
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            return False

    def backup(self, path: str) -> Optional[Path]:
        """
        Copy the file aside before it is overwritten.

        Returns:
            Backup path, or None if there was nothing to back up or copying failed
        """
        p = self._resolve_path(path)
        if not p.exists():
            return None

        backup_path = p.with_suffix(p.suffix + ".bak")
        if self.backup_dir:
            timestamp = int(os.path.getmtime(p))
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            backup_path = self.backup_dir / f"{p.name}_{timestamp}.bak"

        try:
            shutil.copy2(p, backup_path)
            logger.debug(f"Backup created: {backup_path}")
            return backup_path
        except OSError as e:
            logger.error(f"Backup failed: {e}")
            return None

    def exists(self, path: str) -> bool:
        return self._resolve_path(path).exists()
