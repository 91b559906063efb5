"""
basecolumns: column size editor for Base view files.

Entry point: reads a .base file, shows or rewrites the columnSize mapping of
one table view, and writes the file back.
"""

import argparse
import difflib
import logging
import sys
from typing import Dict, Optional, Sequence, Tuple

from basecolumns.config.settings import load_config
from basecolumns.core.column_size_engine import PatchPolicy, PatchResult
from basecolumns.services.file_service import FileService
from basecolumns.services.validation_service import ValidationService
from basecolumns.ui.colors import (
    ACCENT_FG,
    BOLD,
    DIFF_ADD_FG,
    DIFF_HUNK_FG,
    DIFF_REMOVE_FG,
    ERROR_FG,
    KEY_FG,
    MUTED_FG,
    SUCCESS_FG,
    WARNING_FG,
    color_enabled,
    colorize,
)
from basecolumns.workspace import BaseColumnsError, ColumnSizeSession, FileWorkspace

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


# =====================================================================
#  OUTPUT HELPERS
# =====================================================================

def _c(text: str, color: str, style: str = "") -> str:
    return colorize(text, color, style, enabled=color_enabled(sys.stdout))


def _error(message: str) -> None:
    enabled = color_enabled(sys.stderr)
    print(colorize(f"Error: {message}", ERROR_FG, enabled=enabled), file=sys.stderr)


def _print_sizes(view: str, sizes: Dict[str, int]) -> None:
    print(_c(view, ACCENT_FG, BOLD))
    if not sizes:
        print(_c("  (no column sizes set)", MUTED_FG))
        return
    width = max(len(key) for key in sizes)
    for key, value in sizes.items():
        print(f"  {_c(key.ljust(width), KEY_FG)}  {value}")


def _print_diff(path: str, result: PatchResult) -> None:
    diff = difflib.unified_diff(
        result.original.split("\n"),
        result.content.split("\n"),
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
        lineterm="",
    )
    for line in diff:
        if line.startswith("@@"):
            print(_c(line, DIFF_HUNK_FG))
        elif line.startswith("+") and not line.startswith("+++"):
            print(_c(line, DIFF_ADD_FG))
        elif line.startswith("-") and not line.startswith("---"):
            print(_c(line, DIFF_REMOVE_FG))
        else:
            print(line)


def _report(args: argparse.Namespace, result: PatchResult) -> int:
    if result.policy is PatchPolicy.NONE:
        print(_c(result.summary, WARNING_FG))
        return 0
    if args.dry_run:
        _print_diff(args.file, result)
        return 0
    if not result.changed:
        print(_c("Column sizes already up to date", MUTED_FG))
        return 0
    print(_c(result.summary, SUCCESS_FG))
    return 0


def _parse_assignment(raw: str) -> Tuple[str, int]:
    key, sep, value = raw.rpartition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Expected COLUMN=WIDTH, got {raw!r}")
    try:
        return key, int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Width for {key!r} is not an integer: {value!r}")


# =====================================================================
#  COMMANDS
# =====================================================================

def _build_session(args: argparse.Namespace) -> ColumnSizeSession:
    settings = load_config(args.config)
    workspace = FileWorkspace(
        file_service=FileService(),
        view_name=args.view,
        window_width=int(settings["window_width"]),
        create_backups=bool(settings["create_backups"]) and not args.no_backup,
    )
    if not ValidationService(settings).validate_file_extension(args.file):
        logger.warning(f"{args.file} does not have a .base extension")
    return ColumnSizeSession(workspace, settings)


def cmd_views(args: argparse.Namespace) -> int:
    views = _build_session(args).table_views(args.file)
    if not views:
        print(_c("No table views found", WARNING_FG))
        return 0
    for name in views:
        print(_c(name, ACCENT_FG))
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    session = _build_session(args)
    document = session.workspace.read(args.file)
    view = args.view or session.workspace.active_view_name(document)
    sizes = session.load_sizes(args.file, view)
    _print_sizes(view or "", sizes)
    return 0


def cmd_set(args: argparse.Namespace) -> int:
    session = _build_session(args)
    edits = dict(args.assignments)
    if not args.force:
        invalid = session.validator.invalid_widths(edits)
        if invalid:
            low = session.settings["min_column_width"]
            high = session.settings["max_column_width"]
            for key, width in invalid.items():
                _error(f"{key}={width} is outside {low}-{high} (use --force to override)")
            return 1
    return _report(args, session.update_sizes(args.file, edits, args.view, args.dry_run))


def cmd_distribute(args: argparse.Namespace) -> int:
    session = _build_session(args)
    result = session.distribute_to_width(args.file, args.total, args.view, args.dry_run)
    return _report(args, result)


def cmd_uniform(args: argparse.Namespace) -> int:
    session = _build_session(args)
    result = session.apply_uniform(args.file, args.width, args.view, args.dry_run)
    return _report(args, result)


def cmd_init(args: argparse.Namespace) -> int:
    session = _build_session(args)
    if session.load_sizes(args.file, args.view):
        print(_c("View already has column sizes; nothing to initialize", MUTED_FG))
        return 0
    return _report(args, session.initialize(args.file, args.view, args.dry_run))


# =====================================================================
#  CLI ENTRY WITH SUBCOMMANDS
# =====================================================================

def _create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="basecolumns",
        description="Edit the column sizes of table views in .base files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  basecolumns views notes.base                       # List table views
  basecolumns show notes.base --view "Table 1"       # Show column sizes
  basecolumns set notes.base file.name=240 note.tags=120
  basecolumns distribute notes.base --total 1200     # Even split
  basecolumns uniform notes.base --width 150         # Same width everywhere
  basecolumns --dry-run init notes.base              # Preview default sizes
        """
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"basecolumns {__version__}"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to the settings file (default: ~/.basecolumns/config.json)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print a diff instead of writing the file"
    )
    parser.add_argument(
        "--no-backup",
        action="store_true",
        help="Do not keep a .bak copy of the file before writing"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    # Shared by every subcommand
    target = argparse.ArgumentParser(add_help=False)
    target.add_argument("file", help="Path to the .base file")
    target.add_argument(
        "--view",
        type=str,
        help="Table view name (default: first table view in the file)"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands"
    )

    subparsers.add_parser(
        "views",
        parents=[target],
        help="List table views in the file"
    )

    subparsers.add_parser(
        "show",
        parents=[target],
        help="Show the column sizes of a view"
    )

    parser_set = subparsers.add_parser(
        "set",
        parents=[target],
        help="Set one or more column widths"
    )
    parser_set.add_argument(
        "assignments",
        nargs="+",
        type=_parse_assignment,
        metavar="COLUMN=WIDTH",
        help="Column key and width in pixels"
    )
    parser_set.add_argument(
        "--force",
        action="store_true",
        help="Allow widths outside the configured min/max"
    )

    parser_distribute = subparsers.add_parser(
        "distribute",
        parents=[target],
        help="Split a total width evenly across the view's columns"
    )
    parser_distribute.add_argument(
        "--total",
        type=int,
        help="Total width in pixels (default: window_width setting)"
    )

    parser_uniform = subparsers.add_parser(
        "uniform",
        parents=[target],
        help="Give every column the same width"
    )
    parser_uniform.add_argument(
        "--width",
        type=int,
        help="Width in pixels (default: custom_column_width setting)"
    )

    subparsers.add_parser(
        "init",
        parents=[target],
        help="Seed column sizes from the default width behavior"
    )

    return parser


COMMANDS = {
    "views": cmd_views,
    "show": cmd_show,
    "set": cmd_set,
    "distribute": cmd_distribute,
    "uniform": cmd_uniform,
    "init": cmd_init,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point with subcommand routing."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except (BaseColumnsError, ValueError) as e:
        _error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
