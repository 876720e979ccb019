from typing import Optional, Protocol

from app.identity.domain.models import User


class UserDirectory(Protocol):
    def authenticate(self, email: str, secret: str) -> Optional[User]:
        ...

    def get(self, user_id: str) -> Optional[User]:
        ...


class SessionStore(Protocol):
    def load(self) -> Optional[dict]:
        ...

    def save(self, user: User) -> None:
        ...

    def clear(self) -> None:
        ...
