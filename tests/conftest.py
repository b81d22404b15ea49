from __future__ import annotations

import sqlite3
import sys
from pathlib import Path

import pytest
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

SHEET = "example"
START_ROW = 10
START_COL = 2

ROWS = [
    (1, "2022-01-05", 10.5),
    (2, "2022-01-20", 4.0),
    (3, "2022-02-11", 7.25),
    (4, "2022-03-01", 1.0),
    (5, "2022-03-31", 2.5),
]


def build_template(path: Path) -> Path:
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET
    ws["B2"] = "Monthly report"
    ws["B9"] = "Id"
    ws["C9"] = "Date"
    ws["D9"] = "Value"
    ws["E9"] = "Double"
    for col in range(START_COL, START_COL + 4):
        cell = ws.cell(row=START_ROW, column=col)
        cell.font = Font(name="Arial", bold=True)
        cell.fill = PatternFill("solid", fgColor="FFF2CC")
        cell.number_format = "0.00"
    ws["B15"] = "Footer"
    ws.merge_cells("B15:C15")
    ws.row_dimensions[15].height = 40
    ws.merge_cells("G6:H6")
    wb.save(path)
    return path


@pytest.fixture
def template_path(tmp_path: Path) -> Path:
    return build_template(tmp_path / "template.xlsx")


@pytest.fixture
def sqlite_db(tmp_path: Path) -> Path:
    path = tmp_path / "data.sqlite3"
    conn = sqlite3.connect(path)
    try:
        conn.execute("create table mytable (id integer, date text, value real)")
        conn.executemany("insert into mytable values (?, ?, ?)", ROWS)
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture
def config_data(tmp_path: Path, template_path: Path, sqlite_db: Path) -> dict:
    return {
        "input": {
            "type": "sqlite3",
            "sources": [
                {
                    "name": str(sqlite_db),
                    "partition": {"type": "monthly", "begin": "2022-01-01", "end": "2022-03-31"},
                }
            ],
            "time-format": "2006-01-02",
            "query": (
                "select id, date, value, value * 2 as double from mytable "
                "where date between '{part.beg}' and '{part.end}' order by id asc"
            ),
        },
        "output": {
            "name": "report {num} - {part.beg}",
            "directory": str(tmp_path / "out"),
            "variables": [{"row": 6, "col": 2, "value": "partition {part.beg} to {part.end}"}],
            "totalizations": [
                {"col": 4, "formula": "=SUM(D10:D{rows.last})"},
                {"col": 5, "formula": "=SUM(E10:E{rows.last})"},
            ],
        },
        "template": {
            "path": str(template_path),
            "sheet": SHEET,
            "start-row": START_ROW,
            "start-col": START_COL,
        },
    }
