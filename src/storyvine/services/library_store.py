"""Library store - a reader's saved stories joined to the stories table."""

import logging
from typing import List, Optional

from storyvine.core import LibraryItem, parse_timestamp
from storyvine.io import Order, Row, TableClient, eq
from storyvine.services.entity_store import EntityStore
from storyvine.services.relations import join_related
from storyvine.services.story_store import STORIES_TABLE, attach_authors, row_to_story

logger = logging.getLogger(__name__)

LIBRARY_TABLE = "library"


class LibraryStore(EntityStore):
    """Saved stories of one reader, most recently saved first.

    Without a reader the collection is empty and no remote call is made.
    """

    fetch_error_message = "Failed to fetch library"

    def __init__(self, client: TableClient):
        super().__init__(client)
        self._user_id: Optional[str] = None

    @property
    def library(self) -> List[LibraryItem]:
        return self.items

    def fetch(self, user_id: Optional[str]) -> bool:
        """Load the library of user_id (empty collection when None)."""
        self._user_id = user_id
        if user_id is None:
            self._replace_with_empty()
            return True
        return self.refresh()

    def contains(self, story_id: str) -> bool:
        return any(item.story_id == story_id for item in self._items)

    def add(self, story_id: str, user_id: str) -> None:
        """Save a story to a reader's library, then re-fetch.

        Raises:
            OperationError: If the insert fails (including a duplicate save).
        """
        self._mutate(
            lambda: self.client.insert(LIBRARY_TABLE, [{"user_id": user_id, "story_id": story_id}]),
            "Failed to add to library",
        )

    def remove(self, story_id: str, user_id: str) -> None:
        """Remove a story from a reader's library, then re-fetch.

        Raises:
            OperationError: If the delete fails.
        """
        self._mutate(
            lambda: self.client.delete(
                LIBRARY_TABLE, [eq("story_id", story_id), eq("user_id", user_id)]
            ),
            "Failed to remove from library",
        )
        logger.info(f"Removed story {story_id} from library of {user_id}")

    def _load_items(self) -> List[LibraryItem]:
        if self._user_id is None:
            return []
        rows = self.client.select(
            LIBRARY_TABLE,
            filters=[eq("user_id", self._user_id)],
            order=Order("created_at", descending=True),
        )
        rows = join_related(
            self.client,
            rows,
            foreign_key="story_id",
            table=STORIES_TABLE,
            key_column="id",
            into="story",
        )
        story_rows = attach_authors(self.client, [r["story"] for r in rows if r["story"]])
        stories = {s["id"]: s for s in story_rows}
        return [self._row_to_library_item(row, stories.get(row["story_id"])) for row in rows]

    @staticmethod
    def _row_to_library_item(row: Row, story_row: Optional[Row]) -> LibraryItem:
        """Convert a library row and its joined story row to a LibraryItem."""
        return LibraryItem(
            id=row["id"],
            user_id=row["user_id"],
            story_id=row["story_id"],
            created_at=parse_timestamp(row["created_at"]),
            story=row_to_story(story_row) if story_row else None,
        )
