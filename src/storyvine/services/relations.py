"""Related-row loading - batch join by foreign key, merged in memory."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from storyvine.core import BackendError
from storyvine.io import Row, TableClient, in_

logger = logging.getLogger(__name__)


def join_related(
    client: TableClient,
    rows: Sequence[Row],
    *,
    foreign_key: str,
    table: str,
    key_column: str,
    into: str,
    columns: Optional[Sequence[str]] = None,
    many: bool = False,
) -> List[Row]:
    """Attach related rows from another table to each row.

    Loads every related row in a single ``in`` query keyed by the distinct
    values of ``foreign_key``, then merges by equality on ``key_column``.
    A failure of the related query is logged and treated as "no related
    rows": the primary rows are still returned.

    Args:
        client: Table client used for the related query.
        rows: Primary rows (not modified).
        foreign_key: Column of the primary rows holding the reference.
        table: Related table name.
        key_column: Column of the related table matched against foreign_key.
        into: Key under which the related value is stored on each row.
        columns: Related columns to load (all when None). Must include
            key_column when given.
        many: Attach a list of all matches instead of the first match.

    Returns:
        New row dictionaries with ``into`` set to the related row, None, or
        a (possibly empty) list when ``many`` is True.
    """
    keys = list(dict.fromkeys(r[foreign_key] for r in rows if r.get(foreign_key) is not None))

    related: Dict[Any, List[Row]] = {}
    if keys:
        try:
            for match in client.select(table, columns=columns, filters=[in_(key_column, keys)]):
                related.setdefault(match[key_column], []).append(match)
        except BackendError as e:
            logger.warning(f"Could not load {table} for {len(keys)} keys: {e}")
            related = {}

    joined = []
    for row in rows:
        matches = related.get(row.get(foreign_key), [])
        if many:
            value: Any = matches
        else:
            value = matches[0] if matches else None
        joined.append({**row, into: value})
    return joined
