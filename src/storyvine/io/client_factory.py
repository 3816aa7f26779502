"""Builds the configured table client."""

import logging

from storyvine.io.database_manager import DatabaseManager
from storyvine.io.rest_table_client import RestTableClient
from storyvine.io.sqlite_table_client import SqliteTableClient
from storyvine.io.table_client import TableClient

logger = logging.getLogger(__name__)

SQLITE = "sqlite"
REST = "rest"


def create_table_client(settings) -> TableClient:
    """Create the table client selected by settings.

    Args:
        settings: SettingsManager providing backend selection and credentials.

    Returns:
        A ready-to-use TableClient. The SQLite backend has its schema ensured.

    Raises:
        RuntimeError: If the backend is unknown or the REST backend lacks
            its URL or API key.
    """
    backend = settings.get_backend()
    if backend == SQLITE:
        db_path = settings.get_database_path()
        logger.info(f"Using local SQLite backend at {db_path}")
        db = DatabaseManager(db_path)
        db.ensure_schema()
        return SqliteTableClient(db.connection)
    if backend == REST:
        url = settings.get_api_url()
        key = settings.get_api_key()
        if not url or not key:
            raise RuntimeError(
                "STORYVINE_API_URL and STORYVINE_API_KEY must be set for the rest backend"
            )
        logger.info(f"Using hosted backend at {url}")
        return RestTableClient(base_url=url, api_key=key)
    raise RuntimeError(f"Unknown backend: {backend!r}")
