"""Username-only identity: login, logout, session restore"""
import logging

from sqlalchemy.orm import Session

from breadcrumb.application.client_state import ClientState
from breadcrumb.domain.entities import User
from breadcrumb.errors import StoreError, ValidationError
from breadcrumb.infrastructure.db.row_store import RowStore
from breadcrumb.infrastructure.repository import UserRepository

logger = logging.getLogger(__name__)


class LoginUseCase:
    """Look the username up, create the user when absent, remember it client-side."""
    def __init__(self, db: Session):
        self.users = UserRepository(RowStore(db))

    def execute(self, username: str, state: ClientState) -> User:
        username = (username or "").strip()
        if not username:
            raise ValidationError("Username is required")

        user = self.users.get_user_by_username(username)
        if user is None:
            user = self.users.create_user(username)
            logger.info("Created user #%s (%s)", user.id, user.username)

        state.set_active_user(user)
        return user


class LogoutUseCase:
    def execute(self, state: ClientState) -> None:
        state.clear()


class RestoreSessionUseCase:
    """
    Re-validate a previously persisted identity against the store.

    The stored user is accepted only if the store still has that username
    with the same id; anything else clears it and forces a new login.
    """
    def __init__(self, db: Session):
        self.users = UserRepository(RowStore(db))

    def execute(self, state: ClientState) -> User | None:
        stored = state.active_user
        if stored is None:
            return None

        if not isinstance(stored, dict) or "username" not in stored or "id" not in stored:
            logger.warning("Malformed stored identity, clearing")
            state.clear_active_user()
            return None

        try:
            user = self.users.get_user_by_username(stored["username"])
        except StoreError:
            logger.error("Could not verify stored identity %r", stored.get("username"))
            state.clear_active_user()
            return None

        if user is None or user.id != stored["id"]:
            logger.info("Stored identity %r no longer valid, clearing", stored.get("username"))
            state.clear_active_user()
            return None
        return user
