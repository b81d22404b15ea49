"""Excel-focused utilities for reporting."""

from .common import cell_address, clone_template, insert_row, open_workbook, output_path, resolve_sheet
from .writer import populate, write_report, write_rows, write_totalizations, write_variables

__all__ = [
    "cell_address",
    "clone_template",
    "insert_row",
    "open_workbook",
    "output_path",
    "populate",
    "resolve_sheet",
    "write_report",
    "write_rows",
    "write_totalizations",
    "write_variables",
]
