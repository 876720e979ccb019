import enum
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from app.shared.domain.errors import InvalidTransition
from app.shared.domain.models import Category


class RequestStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class PurchaseRequest:
    """A material or tool purchase asked for by an employee.

    Only pending requests can be edited, deleted, approved or rejected.
    Approval and rejection are terminal; afterwards only the delivered flag
    of an approved request may change, once.
    """

    id: str
    item: str
    quantity: int
    category: Category
    requester_name: str
    requester_id: str
    requested_at: date
    status: RequestStatus
    description: Optional[str] = None
    delivered: bool = False

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    @property
    def display_status(self) -> str:
        if self.status == RequestStatus.APPROVED and self.delivered:
            return "delivered"
        return self.status.value

    def ensure_pending(self, action: str) -> None:
        if not self.is_pending:
            raise InvalidTransition(
                f"cannot {action} request {self.id}: it is already {self.status.value}"
            )

    def edited(
        self,
        item: str,
        quantity: int,
        description: Optional[str],
        category: Category,
    ) -> "PurchaseRequest":
        self.ensure_pending("edit")
        return replace(
            self,
            item=item,
            quantity=quantity,
            description=description,
            category=category,
        )

    def approved(self) -> "PurchaseRequest":
        self.ensure_pending("approve")
        return replace(self, status=RequestStatus.APPROVED)

    def rejected(self) -> "PurchaseRequest":
        self.ensure_pending("reject")
        return replace(self, status=RequestStatus.REJECTED)

    def marked_delivered(self) -> "PurchaseRequest":
        if self.status != RequestStatus.APPROVED:
            raise InvalidTransition(
                f"cannot deliver request {self.id}: it is {self.status.value}, not approved"
            )
        if self.delivered:
            raise InvalidTransition(f"request {self.id} was already delivered")
        return replace(self, delivered=True)
