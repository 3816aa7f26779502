"""ReadProgress entity - a reader's completion against a story or chapter."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

COMPLETE = 100


@dataclass(frozen=True)
class ReadProgress:
    """Progress percentage (0-100) of one reader on one story or chapter."""

    id: str
    user_id: str
    story_id: str
    progress: float
    updated_at: datetime
    chapter_id: Optional[str] = None

    @property
    def is_in_progress(self) -> bool:
        return 0 < self.progress < COMPLETE

    @property
    def is_completed(self) -> bool:
        return self.progress >= COMPLETE

    @property
    def display_percent(self) -> int:
        """Rounded percentage clamped to 100 for rendering."""
        return round(min(COMPLETE, self.progress))
