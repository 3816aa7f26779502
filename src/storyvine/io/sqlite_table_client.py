"""SQLite implementation of the table client."""

import re
import sqlite3
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

from storyvine.core import BackendError
from storyvine.io.table_client import EQ, IN, Filter, Order, Row, TableClient

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class SqliteTableClient(TableClient):
    """Executes table operations against a local SQLite database.

    Mirrors the hosted backend's semantics closely enough for development
    and tests: ids and timestamps are assigned by column defaults, and
    inserts/updates/deletes return the affected rows.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        """Initialize client with a database connection.

        Args:
            connection: SQLite connection with the schema already created.

        Raises:
            RuntimeError: If connection is None.
        """
        if connection is None:
            raise RuntimeError("Database connection required")
        self.connection = connection
        self.connection.row_factory = sqlite3.Row

    def select(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        filters: Sequence[Filter] = (),
        order: Optional[Order] = None,
        limit: Optional[int] = None,
    ) -> List[Row]:
        column_sql = ", ".join(_quote(c) for c in columns) if columns else "*"
        where_sql, params = _where(filters)
        sql = f"SELECT {column_sql} FROM {_quote(table)}{where_sql}"
        if order is not None:
            sql += f" ORDER BY {_quote(order.column)} {'DESC' if order.descending else 'ASC'}"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(int(limit))
        return self._execute(sql, params, f"select from {table}", commit=False)

    def insert(self, table: str, rows: Sequence[Row]) -> List[Row]:
        if any(not row for row in rows):
            raise BackendError(f"Cannot insert an empty row into {table}")
        table_sql = _quote(table)
        statements = [
            f"INSERT INTO {table_sql} ({', '.join(_quote(c) for c in row)}) "
            f"VALUES ({', '.join('?' for _ in row)}) RETURNING *"
            for row in rows
        ]
        inserted: List[Row] = []
        try:
            cur = self.connection.cursor()
            for sql, row in zip(statements, rows):
                cur.execute(sql, [_adapt(v) for v in row.values()])
                inserted.extend(dict(r) for r in cur.fetchall())
            self.connection.commit()
        except sqlite3.Error as e:
            self.connection.rollback()
            raise BackendError(f"Failed to insert into {table}: {e}") from e
        return inserted

    def update(self, table: str, values: Row, filters: Sequence[Filter]) -> List[Row]:
        if not filters:
            raise BackendError(f"Refusing to update {table} without a filter")
        if not values:
            raise BackendError(f"No values given to update in {table}")
        set_sql = ", ".join(f"{_quote(c)} = ?" for c in values)
        where_sql, params = _where(filters)
        sql = f"UPDATE {_quote(table)} SET {set_sql}{where_sql} RETURNING *"
        return self._execute(
            sql, [_adapt(v) for v in values.values()] + params, f"update {table}"
        )

    def delete(self, table: str, filters: Sequence[Filter]) -> List[Row]:
        if not filters:
            raise BackendError(f"Refusing to delete from {table} without a filter")
        where_sql, params = _where(filters)
        sql = f"DELETE FROM {_quote(table)}{where_sql} RETURNING *"
        return self._execute(sql, params, f"delete from {table}")

    def _execute(
        self, sql: str, params: List[Any], action: str, commit: bool = True
    ) -> List[Row]:
        try:
            cur = self.connection.cursor()
            cur.execute(sql, params)
            rows = [dict(r) for r in cur.fetchall()]
            if commit:
                self.connection.commit()
            return rows
        except sqlite3.Error as e:
            if commit:
                self.connection.rollback()
            raise BackendError(f"Failed to {action}: {e}") from e


def _quote(identifier: str) -> str:
    if not _IDENTIFIER.match(identifier or ""):
        raise BackendError(f"Invalid identifier: {identifier!r}")
    return f'"{identifier}"'


def _adapt(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def _where(filters: Sequence[Filter]) -> Tuple[str, List[Any]]:
    clauses: List[str] = []
    params: List[Any] = []
    for f in filters:
        column = _quote(f.column)
        if f.op == EQ:
            if f.value is None:
                clauses.append(f"{column} IS NULL")
            else:
                clauses.append(f"{column} = ?")
                params.append(_adapt(f.value))
        elif f.op == IN:
            if not f.value:
                clauses.append("0")
            else:
                clauses.append(f"{column} IN ({', '.join('?' for _ in f.value)})")
                params.extend(_adapt(v) for v in f.value)
        else:
            raise BackendError(f"Unsupported filter operator: {f.op}")
    if not clauses:
        return "", params
    return " WHERE " + " AND ".join(clauses), params
