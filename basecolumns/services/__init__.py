"""
Service Layer

Service classes for host-side operations (files, settings, validation).
"""

from basecolumns.services.file_service import FileService
from basecolumns.services.config_service import ConfigService, DEFAULT_SETTINGS
from basecolumns.services.validation_service import ValidationService

__all__ = [
    "FileService",
    "ConfigService",
    "DEFAULT_SETTINGS",
    "ValidationService",
]
