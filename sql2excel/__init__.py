"""sql2excel - export partitioned SQL query results into Excel templates."""

from sql2excel.tools.reporting import run_report

__version__ = "1.0.0"

__all__ = ["run_report", "__version__"]
