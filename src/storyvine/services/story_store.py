"""Story store - cached stories with their authors and tags."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from storyvine.core import AuthorProfile, BackendError, Story, StoryStatus, parse_timestamp
from storyvine.io import Order, Row, TableClient, eq
from storyvine.services.entity_store import EntityStore
from storyvine.services.relations import join_related

logger = logging.getLogger(__name__)

STORIES_TABLE = "stories"
PROFILES_TABLE = "profiles"
TAGS_TABLE = "story_tags"

PROFILE_COLUMNS = ("user_id", "display_name", "username")
TAG_COLUMNS = ("story_id", "tag")

UPDATABLE_FIELDS = frozenset({"title", "description", "genre", "cover_image_url", "status"})
COUNTER_FIELDS = frozenset({"view_count", "like_count", "comment_count"})


class StoryStore(EntityStore):
    """Stories for either the public feed or a single author's workspace.

    The public scope (``fetch``) loads published stories only. The author
    scope (``fetch_user_stories``) loads every story of one author,
    drafts included. Mutations re-fetch whichever scope was requested last.
    """

    fetch_error_message = "Failed to fetch stories"

    def __init__(self, client: TableClient):
        super().__init__(client)
        self._author_id: Optional[str] = None

    @property
    def stories(self) -> List[Story]:
        return self.items

    @property
    def author_scope(self) -> Optional[str]:
        """Author whose stories are loaded, or None for the public feed."""
        return self._author_id

    def fetch(self) -> bool:
        """Load the published feed, newest first."""
        self._author_id = None
        return self.refresh()

    def fetch_user_stories(self, author_id: str) -> bool:
        """Load every story written by author_id, drafts included."""
        if not author_id:
            raise ValueError("Author id must not be empty")
        self._author_id = author_id
        return self.refresh()

    def get(self, story_id: str) -> Optional[Story]:
        """Look up a story in the cached collection."""
        return next((s for s in self._items if s.id == story_id), None)

    def create(
        self,
        title: str,
        description: str,
        genre: str,
        author_id: str,
        tags: Optional[Iterable[str]] = None,
        cover_image_url: Optional[str] = None,
    ) -> Story:
        """Create a new draft story, attach its tags, then re-fetch.

        Returns:
            Story: The created story with its backend-assigned id.

        Raises:
            ValueError: If title or author_id is empty.
            OperationError: If the story insert fails.
        """
        if not title or not title.strip():
            raise ValueError("Story title cannot be empty")
        if not author_id:
            raise ValueError("Author id must not be empty")

        tag_list = list(dict.fromkeys(t.strip() for t in (tags or []) if t and t.strip()))

        def insert_story() -> Row:
            created = self.client.insert(
                STORIES_TABLE,
                [
                    {
                        "title": title.strip(),
                        "description": description,
                        "genre": genre,
                        "author_id": author_id,
                        "cover_image_url": cover_image_url,
                        "status": StoryStatus.DRAFT.value,
                    }
                ],
            )
            if not created:
                raise BackendError("Story insert returned no row")
            row = created[0]
            stored_tags = self._attach_tags(row["id"], tag_list) if tag_list else []
            return {**row, "tags": stored_tags}

        row = self._mutate(insert_story, "Failed to create story")
        story = row_to_story(row)
        logger.info(f"Created story {story.id} for author {author_id}")
        return story

    def update(self, story_id: str, fields: Dict[str, Any]) -> None:
        """Apply a partial update to a story, then re-fetch.

        Raises:
            ValueError: If fields name a counter, an unknown field, an
                invalid status, or an empty title.
            OperationError: If the update fails.
        """
        values = _validated_updates(fields)
        self._mutate(
            lambda: self.client.update(STORIES_TABLE, values, [eq("id", story_id)]),
            "Failed to update story",
        )

    def set_status(self, story_id: str, status: StoryStatus) -> None:
        self.update(story_id, {"status": status})

    def delete(self, story_id: str) -> None:
        """Delete a story, then re-fetch.

        Raises:
            OperationError: If the delete fails.
        """
        self._mutate(
            lambda: self.client.delete(STORIES_TABLE, [eq("id", story_id)]),
            "Failed to delete story",
        )
        logger.info(f"Deleted story {story_id}")

    def _load_items(self) -> List[Story]:
        if self._author_id is None:
            scope = eq("status", StoryStatus.PUBLISHED.value)
        else:
            scope = eq("author_id", self._author_id)
        rows = self.client.select(
            STORIES_TABLE, filters=[scope], order=Order("created_at", descending=True)
        )
        rows = attach_authors(self.client, rows)
        rows = join_related(
            self.client,
            rows,
            foreign_key="id",
            table=TAGS_TABLE,
            key_column="story_id",
            into="tags",
            columns=TAG_COLUMNS,
            many=True,
        )
        return [row_to_story(row) for row in rows]

    def _attach_tags(self, story_id: str, tags: List[str]) -> List[Row]:
        """Insert tag rows for a story. Returns the stored rows (none on failure)."""
        try:
            return self.client.insert(TAGS_TABLE, [{"story_id": story_id, "tag": t} for t in tags])
        except BackendError as e:
            logger.warning(f"Could not attach tags to story {story_id}: {e}")
            return []


def attach_authors(client: TableClient, rows: List[Row]) -> List[Row]:
    """Join author profiles onto story rows under the "author" key."""
    return join_related(
        client,
        rows,
        foreign_key="author_id",
        table=PROFILES_TABLE,
        key_column="user_id",
        into="author",
        columns=PROFILE_COLUMNS,
    )


def row_to_story(row: Row) -> Story:
    """Convert a (possibly joined) stories row to a Story entity."""
    author_row = row.get("author")
    author = None
    if author_row:
        author = AuthorProfile(
            user_id=author_row["user_id"],
            display_name=author_row.get("display_name"),
            username=author_row.get("username"),
        )
    return Story(
        id=row["id"],
        title=row["title"],
        description=row.get("description"),
        genre=row.get("genre"),
        cover_image_url=row.get("cover_image_url"),
        author_id=row["author_id"],
        status=StoryStatus(row["status"]),
        view_count=row.get("view_count") or 0,
        like_count=row.get("like_count") or 0,
        comment_count=row.get("comment_count") or 0,
        created_at=parse_timestamp(row["created_at"]),
        updated_at=parse_timestamp(row.get("updated_at") or row["created_at"]),
        author=author,
        tags=[t["tag"] for t in row.get("tags") or []],
    )


def _validated_updates(fields: Dict[str, Any]) -> Dict[str, Any]:
    if not fields:
        raise ValueError("No story fields to update")
    counters = sorted(COUNTER_FIELDS.intersection(fields))
    if counters:
        raise ValueError(f"Story counters are read-only: {', '.join(counters)}")
    unknown = sorted(set(fields) - UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"Story fields cannot be updated: {', '.join(unknown)}")

    values = dict(fields)
    if "status" in values:
        values["status"] = StoryStatus(values["status"]).value
    if "title" in values:
        if not values["title"] or not values["title"].strip():
            raise ValueError("Story title cannot be empty")
        values["title"] = values["title"].strip()
    return values
