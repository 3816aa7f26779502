"""Client-side filtering and sorting of story and library lists."""

from enum import Enum
from typing import List, Sequence

from storyvine.core import LibraryItem, Story, StoryStatus

ALL_STATUSES = "all"
STATUS_FILTERS = (ALL_STATUSES,) + tuple(s.value for s in StoryStatus)


class LibrarySort(str, Enum):
    RECENT = "recent"
    ALPHABETICAL = "alphabetical"


def filter_stories(stories: Sequence[Story], query: str = "", status: str = ALL_STATUSES) -> List[Story]:
    """Keep stories whose title contains query (case-insensitive) and whose status matches.

    Raises:
        ValueError: If status is not "all" or a story status.
    """
    if status not in STATUS_FILTERS:
        raise ValueError(f"Unknown status filter: {status!r}")
    needle = (query or "").casefold()
    return [
        story
        for story in stories
        if needle in story.title.casefold()
        and (status == ALL_STATUSES or story.status.value == status)
    ]


def filter_library(items: Sequence[LibraryItem], term: str = "") -> List[LibraryItem]:
    """Keep library items whose story title or description contains term.

    Items whose story is missing never match.
    """
    needle = (term or "").casefold()
    matches = []
    for item in items:
        story = item.story
        if story is None:
            continue
        if needle in story.title.casefold() or (
            story.description is not None and needle in story.description.casefold()
        ):
            matches.append(item)
    return matches


def sort_library(items: Sequence[LibraryItem], sort: LibrarySort = LibrarySort.RECENT) -> List[LibraryItem]:
    """Sort by save time (newest first) or by story title."""
    sort = LibrarySort(sort)
    if sort is LibrarySort.ALPHABETICAL:
        return sorted(items, key=lambda item: (item.story.title if item.story else "").casefold())
    return sorted(items, key=lambda item: item.created_at, reverse=True)
