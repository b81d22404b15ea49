import re
from typing import Final

# Banner printed once per run.
APP_NAME: Final[str] = "sql2excel"
APP_DESCRIPTION: Final[str] = (
    "Exports partitioned SQL query results to Microsoft Excel using a template"
)

DEFAULT_DB_TYPE: Final[str] = "sqlite3"
DEFAULT_TIME_FORMAT: Final[str] = "%Y-%m-%d"
DEFAULT_MYSQL_PORT: Final[int] = 3306
DEFAULT_MYSQL_CHARSET: Final[str] = "utf8mb4"

OUTPUT_EXTENSION: Final[str] = ".xlsx"

# Excel hard limit (column XFD).
MAX_EXCEL_COLUMN: Final[int] = 16384
MAX_EXCEL_ROW: Final[int] = 1048576

# Characters that are not allowed in file names on Windows or POSIX.
FILENAME_SANITIZE_PATTERN: Final[re.Pattern[str]] = re.compile(r'[\\/:*?"<>|\x00-\x1f]+')

LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)s | %(filename)s:%(funcName)s(line:%(lineno)d) |  %(message)s"
LOG_DATEFMT: Final[str] = "%Y-%m-%d %H:%M:%S"
