"""Reading statistics over a reader's library and progress rows."""

from dataclasses import dataclass
from typing import Optional, Sequence

from storyvine.core import LibraryItem, ReadProgress


@dataclass(frozen=True)
class ReadingStats:
    """Aggregate counts shown on the library screen.

    Attributes:
        total_saved: Number of library entries.
        currently_reading: Progress rows strictly between 0 and 100.
        completed: Progress rows at or above 100.
        total_slides: Sum of all progress units.
    """

    total_saved: int
    currently_reading: int
    completed: int
    total_slides: float


def compute_reading_stats(
    library: Sequence[LibraryItem], reads: Sequence[ReadProgress]
) -> ReadingStats:
    """Compute stats from scratch.

    The two collections are counted independently: progress rows may refer to
    stories that are no longer saved, so currently_reading + completed can
    exceed total_saved.
    """
    return ReadingStats(
        total_saved=len(library),
        currently_reading=sum(1 for r in reads if r.is_in_progress),
        completed=sum(1 for r in reads if r.is_completed),
        total_slides=sum(r.progress for r in reads),
    )


def find_progress(
    reads: Sequence[ReadProgress], story_id: str, chapter_id: Optional[str] = None
) -> Optional[ReadProgress]:
    """Find progress for a chapter, or the first row for the story when no chapter is given."""
    if chapter_id is not None:
        return next(
            (r for r in reads if r.story_id == story_id and r.chapter_id == chapter_id), None
        )
    return next((r for r in reads if r.story_id == story_id), None)
