import copy
import sqlite3
from datetime import datetime
from pathlib import Path

import pytest
from openpyxl import load_workbook

from sql2excel.tools.config_loader import parse_config
from sql2excel.tools.db_tool import SqliteClient
from sql2excel.tools.reporting import process_source, run_report
from sql2excel.util.errors import QueryError, UnsupportedGranularity


def _load(path: Path):
    return load_workbook(path)["example"]


def test_one_workbook_per_monthly_partition(config_data, tmp_path):
    outputs = run_report(parse_config(config_data))

    out_dir = tmp_path / "out"
    assert [p.name for p in outputs] == [
        "report 1 - 2022-01-01.xlsx",
        "report 2 - 2022-02-01.xlsx",
        "report 3 - 2022-03-01.xlsx",
    ]
    assert all(p.parent == out_dir and p.exists() for p in outputs)

    january = _load(outputs[0])
    assert january["B6"].value == "partition 2022-01-01 to 2022-01-31"
    assert [january.cell(row=r, column=2).value for r in (10, 11)] == [1, 2]
    assert january["D10"].value == 10.5
    assert january["E11"].value == 8.0
    assert january["D12"].value == "=SUM(D10:D11)"
    assert january["E12"].value == "=SUM(E10:E11)"

    february = _load(outputs[1])
    assert february["B6"].value == "partition 2022-02-01 to 2022-02-28"
    assert february["B10"].value == 3
    assert february["D11"].value == "=SUM(D10:D10)"

    # last partition includes the final day of the range
    march = _load(outputs[2])
    assert [march.cell(row=r, column=2).value for r in (10, 11)] == [4, 5]
    assert march["D12"].value == "=SUM(D10:D11)"


def test_partition_counter_continues_across_sources(config_data, sqlite_db, tmp_path):
    data = copy.deepcopy(config_data)
    second = tmp_path / "second.sqlite3"
    conn = sqlite3.connect(second)
    conn.execute("create table mytable (id integer, date text, value real)")
    conn.execute("insert into mytable values (9, '2023-01-10', 1.0)")
    conn.commit()
    conn.close()
    data["input"]["sources"].append(
        {"name": str(second), "partition": {"type": "yearly", "begin": "2023-01-01", "end": "2024-06-30"}}
    )

    outputs = run_report(parse_config(data))

    assert [p.name.split(" - ")[0] for p in outputs] == ["report 1", "report 2", "report 3", "report 4", "report 5"]
    assert outputs[3].name == "report 4 - 2023-01-01.xlsx"
    assert _load(outputs[3])["B10"].value == 9
    assert _load(outputs[4])["B6"].value == "partition 2024-01-01 to 2024-06-30"


def test_process_source_returns_next_counter(config_data, sqlite_db):
    config = parse_config(config_data)
    boundaries = [datetime(2022, 1, 1), datetime(2022, 1, 2), datetime(2022, 1, 3, 23, 59, 59)]
    with SqliteClient(sqlite_db) as client:
        result = process_source(config, client, boundaries, 10)
    assert result.next_num == 12
    assert [p.name for p in result.outputs] == ["report 10 - 2022-01-01.xlsx", "report 11 - 2022-01-02.xlsx"]


def test_output_dir_override(config_data, tmp_path):
    target = tmp_path / "elsewhere"
    outputs = run_report(parse_config(config_data), output_dir=target)
    assert {p.parent for p in outputs} == {target}


def test_unsupported_granularity_writes_nothing(config_data, tmp_path):
    data = copy.deepcopy(config_data)
    data["input"]["sources"][0]["partition"]["type"] = "weekly"
    with pytest.raises(UnsupportedGranularity):
        run_report(parse_config(data))
    assert not (tmp_path / "out").exists()


def test_query_error_stops_the_run(config_data, tmp_path):
    data = copy.deepcopy(config_data)
    data["input"]["query"] = "select * from missing_table where d = '{part.beg}'"
    with pytest.raises(QueryError):
        run_report(parse_config(data))
    # the clone of the failing partition is left behind, nothing after it
    assert sorted(p.name for p in (tmp_path / "out").iterdir()) == ["report 1 - 2022-01-01.xlsx"]


def test_client_factory_receives_type_and_name(config_data):
    calls = []

    class FakeClient:
        def __init__(self, db_type, name):
            calls.append((db_type, name))

        def query_rows(self, sql):
            assert "'2022-" in sql
            return [(1, "x", 2.0, 4.0)]

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            calls.append("closed")

    outputs = run_report(parse_config(config_data), client_factory=FakeClient)
    assert len(outputs) == 3
    assert calls == [("sqlite3", config_data["input"]["sources"][0]["name"]), "closed"]
