import enum
from dataclasses import dataclass


class UserRole(str, enum.Enum):
    STAFF = "staff"
    PURCHASER = "purchaser"


@dataclass(frozen=True)
class User:
    id: str
    display_name: str
    email: str
    role: UserRole

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "display_name": self.display_name,
            "email": self.email,
            "role": self.role.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=str(data["id"]),
            display_name=data["display_name"],
            email=data["email"],
            role=UserRole(data["role"]),
        )
