"""Domain layer - Pure entities representing stories, libraries and progress."""

from .errors import BackendError, OperationError
from .library_item import LibraryItem
from .read_progress import ReadProgress
from .story import AuthorProfile, Story, StoryStatus, parse_timestamp

__all__ = [
    "AuthorProfile",
    "Story",
    "StoryStatus",
    "LibraryItem",
    "ReadProgress",
    "BackendError",
    "OperationError",
    "parse_timestamp",
]
