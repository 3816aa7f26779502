"""User session - the current authenticated user, read-only to view-models."""

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

logger = logging.getLogger(__name__)


class UserSession(QObject):
    """Holds the signed-in user's identifier.

    Signals:
        user_changed: Emitted with the new user id (None when signed out).
    """

    user_changed = Signal(object)

    def __init__(self, user_id: Optional[str] = None):
        super().__init__()
        self._user_id = user_id

    @property
    def user_id(self) -> Optional[str]:
        return self._user_id

    @property
    def is_authenticated(self) -> bool:
        return self._user_id is not None

    def sign_in(self, user_id: str) -> None:
        if not user_id:
            raise ValueError("User id must not be empty")
        if user_id == self._user_id:
            return
        self._user_id = user_id
        logger.info(f"Signed in as {user_id}")
        self.user_changed.emit(user_id)

    def sign_out(self) -> None:
        if self._user_id is None:
            return
        self._user_id = None
        logger.info("Signed out")
        self.user_changed.emit(None)
