from .errors import (
    CellWriteError,
    ConfigError,
    InvalidDateRange,
    PartitionError,
    QueryError,
    Sql2ExcelError,
    TemplateIOError,
    UnsupportedGranularity,
)

__all__ = [
    "CellWriteError",
    "ConfigError",
    "InvalidDateRange",
    "PartitionError",
    "QueryError",
    "Sql2ExcelError",
    "TemplateIOError",
    "UnsupportedGranularity",
]
