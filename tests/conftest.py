"""Shared fixtures: headless Qt, an in-memory backend and a failure-injecting client."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402

from storyvine.core import BackendError  # noqa: E402
from storyvine.io import DatabaseManager, SqliteTableClient, TableClient  # noqa: E402


def ensure_qt_app():
    if QApplication.instance() is None:
        QApplication([])


@pytest.fixture(autouse=True, scope="session")
def qt_app():
    ensure_qt_app()
    yield QApplication.instance()


@pytest.fixture
def database():
    """Create an in-memory database with the full schema."""
    db = DatabaseManager(":memory:")
    db.ensure_schema()
    yield db
    db.close()


@pytest.fixture
def client(database):
    """Create a SqliteTableClient over the in-memory database."""
    return SqliteTableClient(database.connection)


@pytest.fixture
def seed(client):
    """Insert rows directly through the client and return the stored rows."""

    def _seed(table, *rows):
        return client.insert(table, list(rows))

    return _seed


class FlakyClient(TableClient):
    """Delegates to a real client, failing chosen (operation, table) pairs."""

    def __init__(self, inner: TableClient):
        self.inner = inner
        self.failures = set()
        self.calls = []

    def _check(self, operation, table):
        self.calls.append((operation, table))
        if (operation, table) in self.failures:
            raise BackendError(f"{operation} on {table} unavailable")

    def select(self, table, columns=None, filters=(), order=None, limit=None):
        self._check("select", table)
        return self.inner.select(table, columns=columns, filters=filters, order=order, limit=limit)

    def insert(self, table, rows):
        self._check("insert", table)
        return self.inner.insert(table, rows)

    def update(self, table, values, filters):
        self._check("update", table)
        return self.inner.update(table, values, filters)

    def delete(self, table, filters):
        self._check("delete", table)
        return self.inner.delete(table, filters)


@pytest.fixture
def flaky(client):
    """A client whose calls can be made to fail per operation and table."""
    return FlakyClient(client)
