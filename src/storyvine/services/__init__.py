"""Services layer - entity stores, session and configuration."""

from storyvine.services.entity_store import EntityStore
from storyvine.services.library_store import LibraryStore
from storyvine.services.listing import LibrarySort, filter_library, filter_stories, sort_library
from storyvine.services.read_store import ReadStore
from storyvine.services.reading_stats import ReadingStats, compute_reading_stats, find_progress
from storyvine.services.relations import join_related
from storyvine.services.session import UserSession
from storyvine.services.settings_manager import SettingsManager
from storyvine.services.story_store import StoryStore

__all__ = [
    "EntityStore",
    "StoryStore",
    "LibraryStore",
    "ReadStore",
    "UserSession",
    "SettingsManager",
    "LibrarySort",
    "ReadingStats",
    "compute_reading_stats",
    "find_progress",
    "filter_stories",
    "filter_library",
    "sort_library",
    "join_related",
]
