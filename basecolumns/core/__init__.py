# Core modules
from .line_scanner import (
    LineRole,
    ScanState,
    ViewScanner,
    classify_lines,
    list_table_views,
)
from .column_size_engine import (
    ColumnSizeEngine,
    PatchPolicy,
    PatchResult,
    extract_column_sizes,
    extract_view_order,
    patch_column_sizes,
)
from .distribution import (
    WidthBehavior,
    apply_uniform_width,
    distribute_even,
    initial_sizes,
    resolve_default_width,
)

__all__ = [
    "LineRole",
    "ScanState",
    "ViewScanner",
    "classify_lines",
    "list_table_views",
    "ColumnSizeEngine",
    "PatchPolicy",
    "PatchResult",
    "extract_column_sizes",
    "extract_view_order",
    "patch_column_sizes",
    "WidthBehavior",
    "apply_uniform_width",
    "distribute_even",
    "initial_sizes",
    "resolve_default_width",
]
