from typing import Optional

from app.identity.domain.models import User
from app.shared.infrastructure.json_store import JsonFileStore

SESSION_KEY = "user"


class JsonFileSessionStore:
    """Keeps the signed-in user under the 'user' key of the local store."""

    def __init__(self, store: JsonFileStore) -> None:
        self._store = store

    def load(self) -> Optional[dict]:
        return self._store.get(SESSION_KEY)

    def save(self, user: User) -> None:
        self._store.set(SESSION_KEY, user.to_dict())

    def clear(self) -> None:
        self._store.remove(SESSION_KEY)


class InMemorySessionStore:
    def __init__(self, saved: Optional[dict] = None) -> None:
        self.saved = saved

    def load(self) -> Optional[dict]:
        return self.saved

    def save(self, user: User) -> None:
        self.saved = user.to_dict()

    def clear(self) -> None:
        self.saved = None
