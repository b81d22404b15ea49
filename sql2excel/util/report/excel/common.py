"""Common Excel helpers (openpyxl).

These helpers work on a *copy* of the template so the styles, merged cells
and column widths of the original workbook carry over to every report.
"""

from __future__ import annotations

import shutil
from copy import copy
from pathlib import Path

from openpyxl import load_workbook
from openpyxl.cell.cell import Cell
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from sql2excel.util.constants import FILENAME_SANITIZE_PATTERN, OUTPUT_EXTENSION
from sql2excel.util.errors import TemplateIOError


def cell_address(row: int, col: int) -> str:
    """Return the A1-style address of 1-based *row*/*col* (``cell_address(10, 28) == "AB10"``)."""
    return f"{get_column_letter(col)}{row}"


def sanitize_filename(name: str) -> str:
    text = FILENAME_SANITIZE_PATTERN.sub("_", str(name)).strip()
    return text.rstrip(". ")


def output_path(name: str, directory: str | Path = ".") -> Path:
    """Return the report path for a resolved output *name* inside *directory*."""
    filename = sanitize_filename(name)
    if not filename:
        raise TemplateIOError(f"output name {name!r} is empty after sanitizing")
    return Path(directory) / f"{filename}{OUTPUT_EXTENSION}"


def clone_template(template: str | Path, destination: str | Path) -> Path:
    destination = Path(destination)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(Path(template), destination)
    except OSError as exc:
        raise TemplateIOError(f"cannot copy template {template} to {destination}: {exc}") from exc
    return destination


def open_workbook(path: str | Path):
    try:
        return load_workbook(Path(path))
    except Exception as exc:
        # openpyxl raises zipfile, KeyError and InvalidFileException alike.
        raise TemplateIOError(f"cannot open workbook {path}: {exc}") from exc


def resolve_sheet(workbook, sheet_name: str | None = None) -> Worksheet:
    if not sheet_name:
        return workbook.active
    try:
        return workbook[sheet_name]
    except KeyError as exc:
        raise TemplateIOError(
            f"sheet {sheet_name!r} not found; available: {workbook.sheetnames}"
        ) from exc


def save_workbook(workbook, path: str | Path) -> None:
    try:
        workbook.save(Path(path))
    except OSError as exc:
        raise TemplateIOError(f"cannot save workbook {path}: {exc}") from exc


def copy_cell_style(source: Cell, target: Cell) -> None:
    """Give *target* the exact style (font, fill, border, number format...) of *source*."""
    target._style = copy(source._style)


def insert_row(ws: Worksheet, row: int) -> None:
    """Insert a blank row at *row*, moving values, merges and row heights below it down by one.

    ``Worksheet.insert_rows`` only moves cells; merged ranges and row
    dimensions are shifted here.
    """
    ws.insert_rows(row)

    moved = [merged for merged in ws.merged_cells.ranges if merged.min_row >= row]
    for merged in moved:
        ws.merged_cells.remove(merged)
    for merged in moved:
        merged.shift(row_shift=1)
        ws.merged_cells.add(merged)

    heights = {
        idx: (dim.height, dim.hidden)
        for idx, dim in list(ws.row_dimensions.items())
        if idx >= row
    }
    for idx in heights:
        ws.row_dimensions[idx].height = None
        ws.row_dimensions[idx].hidden = False
    for idx, (height, hidden) in heights.items():
        ws.row_dimensions[idx + 1].height = height
        ws.row_dimensions[idx + 1].hidden = hidden
