"""Main Window - Application shell providing navigation and notifications."""

import logging
from typing import Any, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QLabel, QMainWindow, QVBoxLayout, QWidget

logger = logging.getLogger(__name__)

NOTIFICATION_TIMEOUT_MS = 4000


class MainWindow(QMainWindow):
    """Provides the application shell: page navigation and transient notifications.

    Screens never build routes themselves; they call ``navigate`` with a page
    identifier and an optional payload, and the shell emits ``page_requested``.
    """

    # Signal emitted with (page identifier, payload)
    page_requested = Signal(str, object)

    def __init__(self):
        super().__init__()
        self.setWindowTitle("StoryVine")
        self.setGeometry(100, 100, 1200, 800)

        self._current_page: Optional[str] = None
        self._current_payload: Any = None

        self._setup_ui()
        self._create_menu_bar()

    @property
    def current_page(self) -> Optional[str]:
        return self._current_page

    @property
    def current_payload(self) -> Any:
        return self._current_payload

    def _setup_ui(self):
        """Initialize the main UI layout."""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        self.main_layout = QVBoxLayout(central_widget)
        self.main_layout.setContentsMargins(0, 0, 0, 0)

        self.page_label = QLabel()
        self.page_label.setAlignment(Qt.AlignCenter)
        self.main_layout.addWidget(self.page_label)

    def _create_menu_bar(self):
        """Create the application menu bar."""
        menu_bar = self.menuBar()

        go_menu = menu_bar.addMenu("&Go")
        for label, page, shortcut in (
            ("&Library", "library", "Ctrl+L"),
            ("&Manage Stories", "manage-stories", "Ctrl+M"),
            ("&Discover", "discover", "Ctrl+D"),
        ):
            action = QAction(label, self)
            action.setShortcut(shortcut)
            action.triggered.connect(lambda checked=False, p=page: self.navigate(p))
            go_menu.addAction(action)

        go_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)
        go_menu.addAction(exit_action)

    def navigate(self, page: str, payload: Any = None):
        """Switch to a page. The only coupling between screens and routing."""
        self._current_page = page
        self._current_payload = payload
        self.page_label.setText(page)
        logger.debug(f"Navigate to {page}")
        self.page_requested.emit(page, payload)

    def notify_success(self, message: str):
        """Show a transient success message."""
        self.statusBar().showMessage(message, NOTIFICATION_TIMEOUT_MS)

    def notify_error(self, message: str):
        """Show a transient failure message."""
        logger.info(f"Notified user of failure: {message}")
        self.statusBar().showMessage(message, NOTIFICATION_TIMEOUT_MS)
