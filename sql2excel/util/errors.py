"""Exception hierarchy shared by every sql2excel module.

Library errors (PyYAML, sqlite3, PyMySQL, openpyxl) are wrapped into one of
these types with ``raise ... from exc`` so callers only need to catch
:class:`Sql2ExcelError`.
"""

from __future__ import annotations


class Sql2ExcelError(Exception):
    """Base class for all errors raised by sql2excel."""


class ConfigError(Sql2ExcelError):
    """Configuration file is missing, unreadable or has invalid fields."""


class PartitionError(Sql2ExcelError):
    """A partition descriptor cannot be turned into boundaries."""


class UnsupportedGranularity(PartitionError):
    """The partition type is not daily, monthly or yearly."""


class InvalidDateRange(PartitionError):
    """Begin/end cannot be parsed or end is before begin."""


class QueryError(Sql2ExcelError):
    """Connecting to the database or executing the query failed."""


class TemplateIOError(Sql2ExcelError):
    """Cloning, opening or saving the template workbook failed."""


class CellWriteError(Sql2ExcelError):
    """A value could not be written into the worksheet."""

    def __init__(self, address: str, reason: str) -> None:
        super().__init__(f"cannot write cell {address}: {reason}")
        self.address = address
        self.reason = reason
