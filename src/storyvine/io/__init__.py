"""I/O layer - Data access to the relational backend."""

from .client_factory import create_table_client
from .database_manager import DatabaseManager
from .rest_table_client import RestTableClient
from .sqlite_table_client import SqliteTableClient
from .table_client import Filter, Order, Row, TableClient, eq, in_

__all__ = [
    "TableClient",
    "Filter",
    "Order",
    "Row",
    "eq",
    "in_",
    "DatabaseManager",
    "SqliteTableClient",
    "RestTableClient",
    "create_table_client",
]
