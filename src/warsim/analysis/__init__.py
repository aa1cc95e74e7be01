"""Batch statistics and result export."""

from warsim.analysis.summary import (
    BatchSummary,
    FieldSummary,
    describe,
    print_summary,
    save_json,
    summarize,
)
from warsim.analysis.export import (
    CSV_HEADERS,
    results_filename,
    stats_to_row,
    write_results_csv,
)

__all__ = [
    # Summary
    "BatchSummary",
    "FieldSummary",
    "describe",
    "print_summary",
    "save_json",
    "summarize",
    # Export
    "CSV_HEADERS",
    "results_filename",
    "stats_to_row",
    "write_results_csv",
]
