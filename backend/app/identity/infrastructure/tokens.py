from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from app.identity.domain.models import User

ALGORITHM = "HS256"


def create_access_token(user: User, secret_key: str, expire_minutes: int) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expire_minutes)
    to_encode = {"sub": user.id, "role": user.role.value, "exp": expire}
    return jwt.encode(to_encode, secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str, secret_key: str) -> Optional[str]:
    """Returns the user id carried by a valid token, None otherwise."""
    try:
        payload = jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None
    return payload.get("sub")
