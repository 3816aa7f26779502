"""Table client abstraction - generic interface to the relational backend."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

Row = Dict[str, Any]

EQ = "eq"
IN = "in"


@dataclass(frozen=True)
class Filter:
    """A single column predicate. Filters passed together are AND-ed."""

    column: str
    op: str
    value: Any


@dataclass(frozen=True)
class Order:
    """Sort order for a select."""

    column: str
    descending: bool = False


def eq(column: str, value: Any) -> Filter:
    """Match rows whose column equals value."""
    return Filter(column, EQ, value)


def in_(column: str, values: Sequence[Any]) -> Filter:
    """Match rows whose column is one of values."""
    return Filter(column, IN, tuple(values))


class TableClient(ABC):
    """
    Abstract interface for the backend's table operations.

    Implementations (SqliteTableClient, RestTableClient) handle transport
    details. Stores depend on this abstraction, never on a concrete backend.
    Every method raises BackendError on failure; there is no error return value.
    """

    @abstractmethod
    def select(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        filters: Sequence[Filter] = (),
        order: Optional[Order] = None,
        limit: Optional[int] = None,
    ) -> List[Row]:
        """
        Read rows from a table.

        Args:
            table: Table name.
            columns: Columns to return (all columns when None).
            filters: Predicates that every returned row satisfies.
            order: Optional sort order.
            limit: Optional maximum number of rows.

        Returns:
            List of rows as dictionaries (empty when nothing matches).
        """
        pass

    @abstractmethod
    def insert(self, table: str, rows: Sequence[Row]) -> List[Row]:
        """
        Insert rows and return them as stored (with backend-assigned ids).
        """
        pass

    @abstractmethod
    def update(self, table: str, values: Row, filters: Sequence[Filter]) -> List[Row]:
        """
        Apply values to every row matching filters and return updated rows.

        At least one filter is required.
        """
        pass

    @abstractmethod
    def delete(self, table: str, filters: Sequence[Filter]) -> List[Row]:
        """
        Delete every row matching filters and return the deleted rows.

        At least one filter is required.
        """
        pass
