# basecolumns/ui/colors.py
"""
Terminal colors for CLI output.
ANSI codes are dropped when the stream is not a TTY or NO_COLOR is set.
"""

import os
import sys
from typing import TextIO, Optional

# ═══════════════════════════════════════════════════════════════
# PALETTE
# ═══════════════════════════════════════════════════════════════

ELECTRIC_CYAN = "\033[38;5;51m"    # Headings / view names
NEON_PURPLE = "\033[38;5;165m"     # Column keys
MID_GRAY = "\033[38;5;250m"        # Muted labels
GLITCH_RED = "\033[38;5;196m"      # Errors
GLITCH_GREEN = "\033[38;5;46m"     # Success
NEON_YELLOW = "\033[38;5;226m"     # Warnings

BOLD = "\033[1m"
DIM = "\033[2m"
RESET = "\033[0m"

# ═══════════════════════════════════════════════════════════════
# SEMANTIC COLOR ROLES
# ═══════════════════════════════════════════════════════════════

ACCENT_FG = ELECTRIC_CYAN
KEY_FG = NEON_PURPLE
MUTED_FG = MID_GRAY
ERROR_FG = GLITCH_RED
SUCCESS_FG = GLITCH_GREEN
WARNING_FG = NEON_YELLOW

# Diff lines (dry-run output)
DIFF_ADD_FG = GLITCH_GREEN
DIFF_REMOVE_FG = GLITCH_RED
DIFF_HUNK_FG = ELECTRIC_CYAN


def color_enabled(stream: Optional[TextIO] = None) -> bool:
    """True when ANSI colors should be written to ``stream``."""
    if os.environ.get("NO_COLOR"):
        return False
    stream = stream or sys.stdout
    return bool(getattr(stream, "isatty", lambda: False)())


def colorize(text: str, color: str, style: str = "", enabled: bool = True) -> str:
    """Apply color and optional style to text"""
    if not enabled:
        return text
    return f"{style}{color}{text}{RESET}"
