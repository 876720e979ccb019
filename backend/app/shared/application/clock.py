import uuid
from datetime import datetime, timezone
from typing import Callable

IdGenerator = Callable[[], str]
Clock = Callable[[], datetime]


def default_id_generator() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
