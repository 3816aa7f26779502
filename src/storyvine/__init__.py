"""
StoryVine - reader and writer screens for a story-publishing platform.

This package provides the view-model layer of the application:
- Writer story management (create, edit, publish/unpublish, delete)
- Reader library with saved stories and reading progress
- Table client abstraction over the hosted backend (or local SQLite)
"""

__version__ = "0.1.0"

# Make key components available at package level
from storyvine.core import LibraryItem, ReadProgress, Story, StoryStatus
from storyvine.io import TableClient

__all__ = [
    "Story",
    "StoryStatus",
    "LibraryItem",
    "ReadProgress",
    "TableClient",
]
