"""Populate a cloned template with one partition's query result.

Layout of a populated sheet::

    row 6        <variable>                    (fixed cells, any position)
    row 10..12   <data rows from the query>    (grid at start-row/start-col)
    row 13       <totalization formulas>       (inserted row, style of row 12)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Sequence

from openpyxl.cell.cell import Cell
from openpyxl.utils.exceptions import IllegalCharacterError
from openpyxl.worksheet.worksheet import Worksheet

from sql2excel.tools.config_loader import Totalization, Variable
from sql2excel.tools.placeholder import PlaceholderContext, resolve
from sql2excel.util.errors import CellWriteError
from sql2excel.util.report.excel.common import (
    cell_address,
    copy_cell_style,
    insert_row,
    open_workbook,
    resolve_sheet,
    save_workbook,
)

LOGGER = logging.getLogger(__name__)

_CELL_ERRORS = (AttributeError, TypeError, ValueError, IllegalCharacterError)


def _set_text(cell: Cell, text: str) -> None:
    cell.value = text
    # openpyxl turns "=..." strings into formulas; keep them as literal text.
    if isinstance(text, str) and text.startswith("="):
        cell.data_type = "s"


def _set_value(cell: Cell, value: Any) -> None:
    if isinstance(value, str):
        _set_text(cell, value)
    else:
        cell.value = value


def write_rows(ws: Worksheet, rows: Iterable[Sequence[Any]], *, start_row: int, start_col: int) -> int:
    """Write *rows* as a grid anchored at ``(start_row, start_col)``.

    Scalar types are kept as returned by the database driver.  Returns the
    first row after the grid.

    Raises:
        CellWriteError: a value cannot be stored in its cell.
    """
    row_idx = start_row
    for values in rows:
        for offset, value in enumerate(values):
            col_idx = start_col + offset
            try:
                _set_value(ws.cell(row=row_idx, column=col_idx), value)
            except _CELL_ERRORS as exc:
                raise CellWriteError(cell_address(row_idx, col_idx), str(exc)) from exc
        row_idx += 1
    return row_idx


def _lenient(error: CellWriteError, strict: bool) -> None:
    if strict:
        raise error
    LOGGER.warning("Skipped %s", error)


def write_variables(
    ws: Worksheet,
    variables: Sequence[Variable],
    context: PlaceholderContext,
    *,
    strict: bool = False,
) -> int:
    """Write header variables as text cells; returns how many were written."""
    written = 0
    for variable in variables:
        text = resolve(variable.value, context)
        try:
            _set_text(ws.cell(row=variable.row, column=variable.col), text)
        except _CELL_ERRORS as exc:
            _lenient(CellWriteError(cell_address(variable.row, variable.col), str(exc)), strict)
            continue
        written += 1
    return written


def write_totalizations(
    ws: Worksheet,
    totalizations: Sequence[Totalization],
    total_row: int,
    context: PlaceholderContext,
    *,
    strict: bool = False,
) -> int:
    """Insert a row at *total_row* and write one formula per totalization.

    ``{rows.last}`` resolves to the row just above *total_row*.  Each formula
    cell takes the style of that row's cell in the same column.
    """
    if not totalizations:
        return 0
    last_row = total_row - 1
    insert_row(ws, total_row)
    total_context = context.with_last_row(last_row)

    written = 0
    for total in totalizations:
        formula = resolve(total.formula, total_context)
        if not formula.startswith("="):
            formula = f"={formula}"
        target = ws.cell(row=total_row, column=total.col)
        try:
            target.value = formula
            if last_row >= 1:
                copy_cell_style(ws.cell(row=last_row, column=total.col), target)
        except _CELL_ERRORS as exc:
            _lenient(CellWriteError(cell_address(total_row, total.col), str(exc)), strict)
            continue
        written += 1
    return written


def populate(
    ws: Worksheet,
    rows: Iterable[Sequence[Any]],
    *,
    start_row: int,
    start_col: int,
    variables: Sequence[Variable] = (),
    totalizations: Sequence[Totalization] = (),
    context: PlaceholderContext = PlaceholderContext(),
    strict: bool = False,
) -> int:
    """Fill *ws* with data rows, header variables and totals.

    Returns the row after the data grid, which holds the totals when any
    totalization is configured.
    """
    next_row = write_rows(ws, rows, start_row=start_row, start_col=start_col)
    if next_row == start_row:
        LOGGER.info("No rows returned; totals will reference row %d", start_row - 1)
    write_variables(ws, variables, context, strict=strict)
    write_totalizations(ws, totalizations, next_row, context, strict=strict)
    return next_row


def write_report(
    path: str | Path,
    rows: Sequence[Sequence[Any]],
    *,
    sheet_name: str | None,
    start_row: int,
    start_col: int,
    variables: Sequence[Variable] = (),
    totalizations: Sequence[Totalization] = (),
    context: PlaceholderContext = PlaceholderContext(),
    strict: bool = False,
) -> Path:
    """Open the cloned template at *path*, populate it and save it in place."""
    path = Path(path)
    workbook = open_workbook(path)
    try:
        ws = resolve_sheet(workbook, sheet_name)
        populate(
            ws,
            rows,
            start_row=start_row,
            start_col=start_col,
            variables=variables,
            totalizations=totalizations,
            context=context,
            strict=strict,
        )
        save_workbook(workbook, path)
    finally:
        workbook.close()
    return path
