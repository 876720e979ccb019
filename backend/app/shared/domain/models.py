import enum
from typing import Optional, Union

from app.shared.domain.errors import InvalidArgument


class Category(str, enum.Enum):
    MECHANICAL = "mechanical"
    ELECTRICAL = "electrical"


def parse_category(value: Union[str, Category, None]) -> Category:
    """Category is required; an absent or unknown value is rejected, never defaulted."""
    if isinstance(value, Category):
        return value
    if not value:
        raise InvalidArgument("category is required")
    try:
        return Category(value)
    except ValueError:
        raise InvalidArgument(f"unknown category: {value}")


def require_text(value: Optional[str], field_name: str) -> str:
    if value is None or not value.strip():
        raise InvalidArgument(f"{field_name} is required")
    return value
