"""Main entry point for the StoryVine application."""

import logging
import sys

from PySide6.QtWidgets import QApplication

from storyvine.coordinators import LibraryCoordinator, ManageStoriesCoordinator
from storyvine.io import create_table_client
from storyvine.services import LibraryStore, ReadStore, SettingsManager, StoryStore, UserSession
from storyvine.ui import MainWindow

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    """
    Bootstrap the application following the Composition Root pattern.
    This is the only place that knows how to instantiate and wire all components.
    """
    # 1. Configuration and logging
    settings = SettingsManager()
    configure_logging(settings.get_log_level())

    # 2. Initialize Application
    app = QApplication(sys.argv)
    app.setApplicationName("StoryVine")
    app.setOrganizationName("StoryVine")

    # 3. Initialize Infrastructure
    client = create_table_client(settings)
    session = UserSession(settings.get_current_user_id())
    story_store = StoryStore(client)
    library_store = LibraryStore(client)
    read_store = ReadStore(client)

    # 4. Construct UI shell
    main_window = MainWindow()

    # 5. Instantiate Coordinators (Dependency Injection)
    manage_stories = ManageStoriesCoordinator(
        story_store=story_store,
        session=session,
        navigate=main_window.navigate,
        notifier=main_window,
    )
    library = LibraryCoordinator(
        library_store=library_store,
        read_store=read_store,
        session=session,
        navigate=main_window.navigate,
        notifier=main_window,
    )

    # 6. Signal Wiring (mount the shown screen's view-model, unmount the rest)
    screens = {
        "manage-stories": manage_stories,
        "library": library,
    }

    def on_page_requested(page, payload):
        for name, coordinator in screens.items():
            if name != page:
                coordinator.unmount()
        shown = screens.get(page)
        if shown is not None:
            shown.mount()

    main_window.page_requested.connect(on_page_requested)

    # 7. Show UI and start event loop
    main_window.show()
    main_window.navigate("library")

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
