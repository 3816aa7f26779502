from unittest.mock import MagicMock

import pytest

from storyvine.io import RestTableClient, SqliteTableClient, create_table_client


def _settings(**values):
    settings = MagicMock()
    settings.get_backend.return_value = values.get("backend", "sqlite")
    settings.get_database_path.return_value = values.get("db_path")
    settings.get_api_url.return_value = values.get("url")
    settings.get_api_key.return_value = values.get("key")
    return settings


def test_sqlite_backend_creates_schema(tmp_path):
    client = create_table_client(_settings(db_path=tmp_path / "local.db"))

    assert isinstance(client, SqliteTableClient)
    assert client.select("stories") == []
    client.connection.close()


def test_rest_backend():
    client = create_table_client(
        _settings(backend="rest", url="https://project.example.co", key="anon")
    )

    assert isinstance(client, RestTableClient)
    assert client.base_url == "https://project.example.co/rest/v1"


def test_rest_backend_requires_credentials():
    with pytest.raises(RuntimeError, match="STORYVINE_API_URL and STORYVINE_API_KEY"):
        create_table_client(_settings(backend="rest", url="https://project.example.co"))


def test_unknown_backend():
    with pytest.raises(RuntimeError, match="Unknown backend"):
        create_table_client(_settings(backend="mongo"))
