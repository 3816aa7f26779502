"""
Hosted backend client
Table operations over the backend's PostgREST-style HTTP interface.
"""
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests

from storyvine.core import BackendError
from storyvine.io.table_client import EQ, IN, Filter, Order, Row, TableClient

logger = logging.getLogger(__name__)


class RestTableClient(TableClient):
    """Client for the hosted relational backend's REST table endpoints."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ):
        if not base_url:
            raise RuntimeError("Backend URL required")
        if not api_key:
            raise RuntimeError("Backend API key required")
        self.base_url = f"{base_url.rstrip('/')}/rest/v1"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    def select(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        filters: Sequence[Filter] = (),
        order: Optional[Order] = None,
        limit: Optional[int] = None,
    ) -> List[Row]:
        params = [("select", ",".join(columns) if columns else "*")]
        params.extend(_filter_params(filters))
        if order is not None:
            params.append(("order", f"{order.column}.{'desc' if order.descending else 'asc'}"))
        if limit is not None:
            params.append(("limit", str(int(limit))))
        return self._request("GET", table, params=params)

    def insert(self, table: str, rows: Sequence[Row]) -> List[Row]:
        if not rows:
            return []
        payload = [{k: _encode(v) for k, v in row.items()} for row in rows]
        return self._request("POST", table, json=payload, returning=True)

    def update(self, table: str, values: Row, filters: Sequence[Filter]) -> List[Row]:
        if not filters:
            raise BackendError(f"Refusing to update {table} without a filter")
        payload = {k: _encode(v) for k, v in values.items()}
        return self._request(
            "PATCH", table, params=_filter_params(filters), json=payload, returning=True
        )

    def delete(self, table: str, filters: Sequence[Filter]) -> List[Row]:
        if not filters:
            raise BackendError(f"Refusing to delete from {table} without a filter")
        return self._request("DELETE", table, params=_filter_params(filters), returning=True)

    def _request(
        self,
        method: str,
        table: str,
        params: Optional[List[Tuple[str, str]]] = None,
        json: Any = None,
        returning: bool = False,
    ) -> List[Row]:
        """Make a request to a table endpoint and return the decoded rows."""
        url = f"{self.base_url}/{table}"
        headers = dict(self.headers)
        if returning:
            headers["Prefer"] = "return=representation"

        try:
            response = self.session.request(
                method, url, headers=headers, params=params, json=json, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise BackendError(f"{method} {table} failed: {e}") from e

        if not response.ok:
            raise BackendError(
                f"{method} {table} failed ({response.status_code}): {_error_message(response)}"
            )
        if response.status_code == 204 or not response.content:
            return []
        try:
            data = response.json()
        except ValueError as e:
            raise BackendError(f"{method} {table} returned invalid JSON: {e}") from e
        logger.debug(f"{method} {table} returned {len(data) if isinstance(data, list) else 1} rows")
        return data if isinstance(data, list) else [data]


def _encode(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def _literal(value: Any) -> str:
    value = _encode(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _quoted(value: Any) -> str:
    text = _literal(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


def _filter_params(filters: Sequence[Filter]) -> List[Tuple[str, str]]:
    params = []
    for f in filters:
        if f.op == EQ:
            if f.value is None:
                params.append((f.column, "is.null"))
            else:
                params.append((f.column, f"eq.{_literal(f.value)}"))
        elif f.op == IN:
            params.append((f.column, f"in.({','.join(_quoted(v) for v in f.value)})"))
        else:
            raise BackendError(f"Unsupported filter operator: {f.op}")
    return params


def _error_message(response: requests.Response) -> str:
    try:
        body: Dict[str, Any] = response.json()
    except ValueError:
        return response.text or response.reason or "unknown error"
    if isinstance(body, dict):
        return body.get("message") or body.get("error") or str(body)
    return str(body)
