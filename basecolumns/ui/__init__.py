# basecolumns/ui/__init__.py
"""
basecolumns UI Module
Terminal color helpers for CLI output.
"""

from . import colors
