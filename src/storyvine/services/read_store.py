"""Read store - a reader's progress rows."""

import logging
from numbers import Real
from typing import List, Optional

from storyvine.core import ReadProgress, parse_timestamp
from storyvine.core.read_progress import COMPLETE
from storyvine.io import Order, Row, TableClient, eq
from storyvine.services.entity_store import EntityStore
from storyvine.services.reading_stats import find_progress

logger = logging.getLogger(__name__)

READS_TABLE = "reads"


class ReadStore(EntityStore):
    """Reading progress of one reader, most recently updated first."""

    fetch_error_message = "Failed to fetch reading progress"

    def __init__(self, client: TableClient):
        super().__init__(client)
        self._user_id: Optional[str] = None

    @property
    def reads(self) -> List[ReadProgress]:
        return self.items

    def fetch(self, user_id: Optional[str]) -> bool:
        """Load progress rows of user_id (empty collection when None)."""
        self._user_id = user_id
        if user_id is None:
            self._replace_with_empty()
            return True
        return self.refresh()

    def find_progress(
        self, story_id: str, chapter_id: Optional[str] = None
    ) -> Optional[ReadProgress]:
        return find_progress(self._items, story_id, chapter_id)

    def record_progress(
        self,
        user_id: str,
        story_id: str,
        progress: float,
        chapter_id: Optional[str] = None,
    ) -> None:
        """Store progress for a story (or chapter), then re-fetch.

        Updates the existing row for (user, story, chapter) or inserts one.

        Raises:
            ValueError: If progress is not a number between 0 and 100.
            OperationError: If the write fails.
        """
        if isinstance(progress, bool) or not isinstance(progress, Real):
            raise ValueError(f"Progress must be a number, got {progress!r}")
        if not 0 <= progress <= COMPLETE:
            raise ValueError(f"Progress must be between 0 and {COMPLETE}, got {progress}")

        key = [eq("user_id", user_id), eq("story_id", story_id), eq("chapter_id", chapter_id)]

        def write() -> List[Row]:
            existing = self.client.select(READS_TABLE, columns=("id",), filters=key, limit=1)
            if existing:
                return self.client.update(
                    READS_TABLE, {"progress": progress}, [eq("id", existing[0]["id"])]
                )
            return self.client.insert(
                READS_TABLE,
                [
                    {
                        "user_id": user_id,
                        "story_id": story_id,
                        "chapter_id": chapter_id,
                        "progress": progress,
                    }
                ],
            )

        self._mutate(write, "Failed to save reading progress")

    def _load_items(self) -> List[ReadProgress]:
        if self._user_id is None:
            return []
        rows = self.client.select(
            READS_TABLE,
            filters=[eq("user_id", self._user_id)],
            order=Order("updated_at", descending=True),
        )
        return [self._row_to_read_progress(row) for row in rows]

    @staticmethod
    def _row_to_read_progress(row: Row) -> ReadProgress:
        return ReadProgress(
            id=row["id"],
            user_id=row["user_id"],
            story_id=row["story_id"],
            chapter_id=row.get("chapter_id"),
            progress=float(row.get("progress") or 0),
            updated_at=parse_timestamp(row["updated_at"]),
        )
