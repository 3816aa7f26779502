"""Entity store base - one table's cached collection with fetch-after-mutate."""

import logging
from typing import Any, Callable, List, Optional, TypeVar

from PySide6.QtCore import QObject, Signal

from storyvine.core import BackendError, OperationError
from storyvine.io import TableClient

logger = logging.getLogger(__name__)

R = TypeVar("R")


class EntityStore(QObject):
    """Owns the in-memory collection for one backend entity.

    The collection is only ever replaced by a full fetch of the store's
    active scope. Every successful mutation is followed by that fetch, so
    once a mutation returns the collection reflects backend truth; nothing
    is applied optimistically.

    Signals:
        items_changed: Emitted with the new collection after a successful fetch.
        loading_changed: Emitted when the loading flag flips.
        error_changed: Emitted with the new error message (None when cleared).
    """

    items_changed = Signal(object)
    loading_changed = Signal(bool)
    error_changed = Signal(object)

    fetch_error_message = "Failed to fetch data"

    def __init__(self, client: TableClient):
        super().__init__()
        if client is None:
            raise ValueError("TableClient must not be None")
        self.client = client
        self._items: List[Any] = []
        self._loading = True
        self._error: Optional[str] = None

    @property
    def items(self) -> List[Any]:
        return list(self._items)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> Optional[str]:
        return self._error

    def refresh(self) -> bool:
        """Replace the collection with a fresh snapshot of the active scope.

        Read failures, including rows that cannot be mapped to entities, are
        recorded on ``error`` and logged; the previous collection is kept and
        nothing is raised.

        Returns:
            True if the fetch succeeded.
        """
        self._set_loading(True)
        try:
            items = self._load_items()
        except (BackendError, ValueError) as e:
            logger.error(f"{self.fetch_error_message}: {e}")
            self._set_error(str(e) or self.fetch_error_message)
            return False
        finally:
            self._set_loading(False)

        self._items = items
        self._set_error(None)
        logger.debug(f"{type(self).__name__} loaded {len(items)} items")
        self.items_changed.emit(list(items))
        return True

    def _replace_with_empty(self) -> None:
        """Reset to an empty collection without a remote call."""
        self._items = []
        self._set_loading(False)
        self._set_error(None)
        self.items_changed.emit([])

    def _mutate(self, action: Callable[[], R], failure_message: str) -> R:
        """Run a remote write, then refresh.

        Raises:
            OperationError: If the write fails. The BackendError is chained.
        """
        try:
            result = action()
        except BackendError as e:
            logger.error(f"{failure_message}: {e}")
            self._set_error(failure_message)
            raise OperationError(failure_message) from e

        self.refresh()
        return result

    def _load_items(self) -> List[Any]:
        """Fetch the active scope from the backend.

        Subclasses must override this. Raises BackendError on a failed call
        and ValueError on a malformed row.
        """
        raise NotImplementedError

    def _set_loading(self, loading: bool) -> None:
        if loading != self._loading:
            self._loading = loading
            self.loading_changed.emit(loading)

    def _set_error(self, message: Optional[str]) -> None:
        if message != self._error:
            self._error = message
            self.error_changed.emit(message)
