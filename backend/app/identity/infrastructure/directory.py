"""
Fixed, preloaded user directory.
Users are not registrable; secrets are kept only as passlib hashes.
"""
from typing import Dict, Iterable, Optional, Tuple

from passlib.context import CryptContext

from app.identity.domain.models import User, UserRole

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# (id, display name, email, secret, role)
DEFAULT_USERS: Tuple[Tuple[str, str, str, str, UserRole], ...] = (
    ("1", "João Silva", "joao@empresa.com", "123", UserRole.STAFF),
    ("2", "Maria Santos", "maria@empresa.com", "123", UserRole.STAFF),
    ("3", "Carlos Compras", "compras@empresa.com", "123", UserRole.PURCHASER),
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


class StaticUserDirectory:
    def __init__(
        self,
        entries: Iterable[Tuple[str, str, str, str, UserRole]] = DEFAULT_USERS,
    ) -> None:
        self._users: Dict[str, User] = {}
        self._hashes: Dict[str, str] = {}
        for user_id, display_name, email, secret, role in entries:
            user = User(id=user_id, display_name=display_name, email=email, role=role)
            self._users[user_id] = user
            self._hashes[email.lower()] = get_password_hash(secret)

    def authenticate(self, email: str, secret: str) -> Optional[User]:
        hashed = self._hashes.get(email.lower())
        if hashed is None or not verify_password(secret, hashed):
            return None
        for user in self._users.values():
            if user.email.lower() == email.lower():
                return user
        return None

    def get(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)
