from .client import MySqlClient, SqliteClient, open_client
from .config import normalize_db_type, parse_mysql_dsn

__all__ = [
    "MySqlClient",
    "SqliteClient",
    "normalize_db_type",
    "open_client",
    "parse_mysql_dsn",
]
