"""Story entity - a writer-authored work and its joined author profile."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Union


class StoryStatus(str, Enum):
    """Lifecycle status of a story. Transitions are always caller-driven."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


@dataclass(frozen=True)
class AuthorProfile:
    """Public profile of a story's author."""

    user_id: str
    display_name: Optional[str] = None
    username: Optional[str] = None


@dataclass(frozen=True)
class Story:
    """Represents a story as stored in the ``stories`` table.

    Attributes:
        id: Backend-assigned identifier.
        title: Display title.
        description: Optional blurb.
        genre: Optional genre label.
        cover_image_url: Optional cover image location.
        author_id: Identifier of the owning user.
        status: Lifecycle status.
        view_count: Denormalized view counter (read-only here).
        like_count: Denormalized like counter (read-only here).
        comment_count: Denormalized comment counter (read-only here).
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
        author: Joined author profile, None when unavailable.
        tags: Joined tag list.
    """

    id: str
    title: str
    author_id: str
    status: StoryStatus
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    genre: Optional[str] = None
    cover_image_url: Optional[str] = None
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    author: Optional[AuthorProfile] = None
    tags: List[str] = field(default_factory=list)

    @property
    def author_name(self) -> str:
        """Returns the best available name for the author."""
        if self.author is not None:
            if self.author.display_name:
                return self.author.display_name
            if self.author.username:
                return self.author.username
        return "Anonymous"

    @property
    def is_published(self) -> bool:
        return self.status is StoryStatus.PUBLISHED


def parse_timestamp(value: Union[str, datetime, None]) -> datetime:
    """Parse an ISO-8601 timestamp coming from the backend.

    Raises:
        ValueError: if the value is missing or not ISO-8601.
    """
    if isinstance(value, datetime):
        return value
    if not value:
        raise ValueError("Timestamp value is missing")
    return datetime.fromisoformat(value)
