"""
Settings access

Module-level access to a shared ConfigService instance.
"""

import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union

from basecolumns.services.config_service import ConfigService

logger = logging.getLogger(__name__)

# Global config service instance
_config_service: Optional[ConfigService] = None


def _get_config_service(config_path: Optional[Union[str, Path]] = None) -> ConfigService:
    """Get or create global config service instance."""
    global _config_service
    if config_path is not None:
        _config_service = ConfigService(config_path=Path(config_path))
    elif _config_service is None:
        _config_service = ConfigService()
    return _config_service


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load settings, falling back to defaults for anything not stored.

    Raises ValueError if the config file exists but is not valid JSON.
    """
    service = _get_config_service(config_path)
    return service.load()

