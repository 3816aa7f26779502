"""Manage Stories Coordinator - a writer's own stories, filters and actions."""

import logging
from typing import Callable, Iterable, List, Optional

from PySide6.QtCore import QObject, Signal, Slot

from storyvine.core import OperationError, Story, StoryStatus
from storyvine.services import StoryStore, UserSession
from storyvine.services.listing import ALL_STATUSES, STATUS_FILTERS, filter_stories

logger = logging.getLogger(__name__)


class ManageStoriesCoordinator(QObject):
    """View-model for the writer's story management screen.

    Responsibilities:
    - Load the signed-in writer's stories, drafts included
    - Derive the visible list from the search query and status filter
    - Publish/unpublish stories
    - Route edit, chapters, analytics and back actions to navigation
    - Delete stories behind a two-step confirmation

    Signals:
        visible_stories_changed: Emitted with the filtered list whenever the
            query, the filter or the underlying stories change.
        delete_confirmation_requested: Emitted with the story id awaiting
            confirmation.
    """

    visible_stories_changed = Signal(object)
    delete_confirmation_requested = Signal(str)

    def __init__(
        self,
        story_store: StoryStore,
        session: UserSession,
        navigate: Callable[..., None],
        notifier,
    ):
        super().__init__()

        if story_store is None:
            raise ValueError("StoryStore must not be None")
        if session is None:
            raise ValueError("UserSession must not be None")
        if navigate is None:
            raise ValueError("Navigation callback must not be None")
        if notifier is None:
            raise ValueError("Notifier must not be None")

        self.story_store = story_store
        self.session = session
        self.navigate = navigate
        self.notifier = notifier

        self._search_query = ""
        self._status_filter = ALL_STATUSES
        self._pending_delete: Optional[str] = None
        self._visible: List[Story] = []
        self._mounted = False

        self.story_store.items_changed.connect(self._on_stories_changed)
        self.session.user_changed.connect(self._on_user_changed)

    @property
    def search_query(self) -> str:
        return self._search_query

    @property
    def status_filter(self) -> str:
        return self._status_filter

    @property
    def visible_stories(self) -> List[Story]:
        return list(self._visible)

    @property
    def loading(self) -> bool:
        return self.story_store.loading

    @property
    def pending_delete(self) -> Optional[str]:
        return self._pending_delete

    def mount(self):
        """Load the current writer's stories (drafts included)."""
        self._mounted = True
        user_id = self.session.user_id
        if user_id is None:
            logger.info("Manage stories opened without a signed-in user")
            self._recompute()
            return
        self.story_store.fetch_user_stories(user_id)

    def unmount(self):
        """The page is no longer shown; session changes stop reloading it."""
        self._mounted = False
        self._pending_delete = None

    def set_search_query(self, query: str):
        self._search_query = query or ""
        self._recompute()

    def set_status_filter(self, status: str):
        """Show only stories with the given status ("all" shows every story).

        Raises:
            ValueError: If status is not a known filter.
        """
        if status not in STATUS_FILTERS:
            raise ValueError(f"Unknown status filter: {status!r}")
        self._status_filter = status
        self._recompute()

    def empty_state_message(self) -> str:
        if self._search_query or self._status_filter != ALL_STATUSES:
            return "Try adjusting your search or filters"
        return "Start your writing journey by creating your first story"

    def toggle_status(self, story_id: str):
        """Publish a draft (or archived) story, or unpublish a published one."""
        story = self.story_store.get(story_id)
        if story is None:
            self.notifier.notify_error("Failed to update story status")
            return

        new_status = StoryStatus.DRAFT if story.is_published else StoryStatus.PUBLISHED
        try:
            self.story_store.set_status(story_id, new_status)
        except OperationError:
            self.notifier.notify_error("Failed to update story status")
            return

        verb = "published" if new_status is StoryStatus.PUBLISHED else "unpublished"
        self.notifier.notify_success(f"Story {verb} successfully")

    def create_story(
        self,
        title: str,
        description: str = "",
        genre: str = "",
        tags: Optional[Iterable[str]] = None,
        cover_image_url: Optional[str] = None,
    ) -> Optional[Story]:
        """Create a draft for the current writer and open it.

        Returns:
            The created story, or None if creation failed.
        """
        user_id = self.session.user_id
        if user_id is None:
            self.notifier.notify_error("Sign in to create a story")
            return None
        try:
            story = self.story_store.create(
                title=title,
                description=description,
                genre=genre,
                author_id=user_id,
                tags=tags,
                cover_image_url=cover_image_url,
            )
        except (OperationError, ValueError) as e:
            self.notifier.notify_error(str(e))
            return None

        self.notifier.notify_success("Story created successfully")
        self.navigate("story-view", {"story": story})
        return story

    def edit_story(self, story: Story):
        self.navigate("edit-story", story)

    def manage_chapters(self, story: Story):
        self.navigate("manage-chapters", story)

    def view_analytics(self, story: Story):
        self.navigate("analytics", story)

    def go_back(self):
        self.navigate("dashboard")

    def request_delete(self, story_id: str):
        """Open the delete confirmation for a story. No remote call is made."""
        self._pending_delete = story_id
        self.delete_confirmation_requested.emit(story_id)

    def cancel_delete(self):
        self._pending_delete = None

    def confirm_delete(self):
        """Delete the story awaiting confirmation, if any."""
        story_id = self._pending_delete
        if story_id is None:
            return

        try:
            self.story_store.delete(story_id)
            self.notifier.notify_success("Story deleted successfully")
        except OperationError:
            self.notifier.notify_error("Failed to delete story")
        finally:
            self._pending_delete = None

    @Slot(object)
    def _on_user_changed(self, user_id):
        self._pending_delete = None
        if self._mounted:
            self.mount()

    @Slot(object)
    def _on_stories_changed(self, stories):
        self._recompute()

    def _recompute(self):
        user_id = self.session.user_id
        own = [s for s in self.story_store.stories if user_id is not None and s.author_id == user_id]
        self._visible = filter_stories(own, self._search_query, self._status_filter)
        self.visible_stories_changed.emit(list(self._visible))
