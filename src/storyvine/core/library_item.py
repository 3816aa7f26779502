"""Domain entity for a reader's saved story."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .story import Story


@dataclass(frozen=True)
class LibraryItem:
    """Represents a story saved to a reader's library.

    Attributes:
        id: Backend-assigned identifier.
        user_id: The reader who saved the story.
        story_id: The saved story's identifier.
        created_at: When the story was saved.
        story: Joined story, None when it no longer exists.
    """

    id: str
    user_id: str
    story_id: str
    created_at: datetime
    story: Optional[Story] = None
