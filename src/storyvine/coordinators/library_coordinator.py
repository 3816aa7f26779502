"""Library Coordinator - Orchestrates the reader's saved stories and progress."""

import logging
from typing import Callable, List, Optional

from PySide6.QtCore import QObject, Signal, Slot

from storyvine.core import LibraryItem, OperationError, ReadProgress, Story
from storyvine.services import LibraryStore, ReadStore, UserSession
from storyvine.services.listing import LibrarySort, filter_library, sort_library
from storyvine.services.reading_stats import ReadingStats, compute_reading_stats

logger = logging.getLogger(__name__)


class LibraryCoordinator(QObject):
    """Manages the library screen's data and actions.

    Responsibilities:
    - Load the reader's library and reading progress
    - Prompt signed-out visitors to sign up instead of denying access
    - Derive the visible list from the search term and sort order
    - Compute reading statistics
    - Remove stories from the library (with confirmation)
    - Route reading and discovery actions to navigation

    Signals:
        visible_items_changed: Emitted with the filtered, sorted items.
        signup_prompt_requested: Emitted when the load settles with no user.
        remove_confirmation_requested: Emitted with the story id awaiting
            confirmation.
    """

    visible_items_changed = Signal(object)
    signup_prompt_requested = Signal()
    remove_confirmation_requested = Signal(str)

    def __init__(
        self,
        library_store: LibraryStore,
        read_store: ReadStore,
        session: UserSession,
        navigate: Callable[..., None],
        notifier,
    ):
        super().__init__()

        if library_store is None:
            raise ValueError("LibraryStore must not be None")
        if read_store is None:
            raise ValueError("ReadStore must not be None")
        if session is None:
            raise ValueError("UserSession must not be None")
        if navigate is None:
            raise ValueError("Navigation callback must not be None")
        if notifier is None:
            raise ValueError("Notifier must not be None")

        self.library_store = library_store
        self.read_store = read_store
        self.session = session
        self.navigate = navigate
        self.notifier = notifier

        self._search_term = ""
        self._sort = LibrarySort.RECENT
        self._pending_remove: Optional[str] = None
        self._signup_prompt_open = False
        self._mounted = False

        self.library_store.items_changed.connect(self._on_library_changed)
        self.session.user_changed.connect(self._on_user_changed)

    @property
    def search_term(self) -> str:
        return self._search_term

    @property
    def sort(self) -> LibrarySort:
        return self._sort

    @property
    def loading(self) -> bool:
        return self.library_store.loading

    @property
    def pending_remove(self) -> Optional[str]:
        return self._pending_remove

    @property
    def signup_prompt_open(self) -> bool:
        return self._signup_prompt_open

    @property
    def visible_items(self) -> List[LibraryItem]:
        return sort_library(filter_library(self.library_store.library, self._search_term), self._sort)

    @property
    def stats(self) -> ReadingStats:
        """Reading stats, recomputed from the current collections on every access."""
        return compute_reading_stats(self.library_store.library, self.read_store.reads)

    def mount(self):
        """Load library and progress for the current user.

        When the load settles without a user, asks for a sign-up instead.
        """
        self._mounted = True
        user_id = self.session.user_id
        self.library_store.fetch(user_id)
        self.read_store.fetch(user_id)
        if user_id is None and not self.library_store.loading:
            self._signup_prompt_open = True
            self.signup_prompt_requested.emit()

    def unmount(self):
        """The library page is no longer shown; session changes stop reloading it."""
        self._mounted = False
        self._pending_remove = None
        self._signup_prompt_open = False

    def set_search_term(self, term: str):
        self._search_term = term or ""
        self._emit_visible()

    def set_sort(self, sort: LibrarySort):
        self._sort = LibrarySort(sort)
        self._emit_visible()

    def progress_for(self, story_id: str, chapter_id: Optional[str] = None) -> Optional[ReadProgress]:
        return self.read_store.find_progress(story_id, chapter_id)

    def empty_state_message(self) -> str:
        if not self.library_store.library:
            return "Start building your library by saving stories you love"
        return "Try adjusting your search terms"

    def open_story(self, story: Story):
        self.navigate("reader", story)

    def discover(self):
        self.navigate("discover")

    def go_back(self):
        self.navigate("home")

    def accept_signup(self):
        """The visitor chose to sign up from the prompt."""
        self._signup_prompt_open = False
        self.navigate("home")

    def dismiss_signup_prompt(self):
        """The prompt was closed; signed-out visitors are sent to discovery."""
        self._signup_prompt_open = False
        if self.session.user_id is None:
            self.navigate("discover")

    def request_remove(self, story_id: str):
        """Ask for confirmation before removing a story. No remote call is made."""
        if self.session.user_id is None:
            return
        self._pending_remove = story_id
        self.remove_confirmation_requested.emit(story_id)

    def cancel_remove(self):
        self._pending_remove = None

    def confirm_remove(self):
        """Remove the story awaiting confirmation from the library."""
        story_id = self._pending_remove
        user_id = self.session.user_id
        self._pending_remove = None
        if story_id is None or user_id is None:
            return

        try:
            self.library_store.remove(story_id, user_id)
        except OperationError:
            self.notifier.notify_error("Failed to remove from library")
            return
        self.notifier.notify_success("Removed from library")

    @Slot(object)
    def _on_user_changed(self, user_id):
        self._pending_remove = None
        if self._mounted:
            self.mount()

    @Slot(object)
    def _on_library_changed(self, items):
        self._emit_visible()

    def _emit_visible(self):
        self.visible_items_changed.emit(self.visible_items)
