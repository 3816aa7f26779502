"""Coordinators - View-models connecting screens with the entity stores."""

from .library_coordinator import LibraryCoordinator
from .manage_stories_coordinator import ManageStoriesCoordinator

__all__ = [
    "LibraryCoordinator",
    "ManageStoriesCoordinator",
]
