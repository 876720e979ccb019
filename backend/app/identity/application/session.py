import logging
from typing import Optional

from app.identity.application.ports import SessionStore, UserDirectory
from app.identity.domain.models import User
from app.shared.domain.errors import PersistenceFailure

logger = logging.getLogger(__name__)


class SessionService:
    """Holds the one signed-in user of a running instance, or nobody."""

    def __init__(self, directory: UserDirectory, store: SessionStore) -> None:
        self._directory = directory
        self._store = store
        self._current_user: Optional[User] = None

    @property
    def current_user(self) -> Optional[User]:
        return self._current_user

    @property
    def is_authenticated(self) -> bool:
        return self._current_user is not None

    def restore(self) -> Optional[User]:
        try:
            saved = self._store.load()
        except PersistenceFailure as exc:
            logger.warning(f"Could not restore session: {exc.message}")
            return None
        if not saved:
            return None

        try:
            user = User.from_dict(saved)
        except (KeyError, ValueError) as e:
            logger.warning(f"Discarding malformed saved session: {e}")
            return None

        # the directory is authoritative; a user removed from it stays signed out
        known = self._directory.get(user.id)
        if known is None:
            logger.warning(f"Saved session refers to unknown user {user.id}")
            return None

        self._current_user = known
        logger.info(f"Session restored for {known.email}")
        return known

    def authenticate(self, email: str, secret: str) -> Optional[User]:
        """Checks credentials without changing the signed-in user."""
        user = self._directory.authenticate(email, secret)
        if user is None:
            logger.info(f"Failed sign-in attempt for {email}")
        return user

    def resolve(self, user_id: str) -> Optional[User]:
        return self._directory.get(user_id)

    def sign_in(self, email: str, secret: str) -> bool:
        user = self.authenticate(email, secret)
        if user is None:
            return False

        self._store.save(user)
        self._current_user = user
        logger.info(f"User {user.email} signed in as {user.role.value}")
        return True

    def sign_out(self) -> None:
        self._store.clear()
        if self._current_user is not None:
            logger.info(f"User {self._current_user.email} signed out")
        self._current_user = None
