"""Partitioned SQL to Excel report runner."""

from .sql_report import SourceResult, process_partition, process_source, run_report, run_source

__all__ = ["SourceResult", "process_partition", "process_source", "run_report", "run_source"]
