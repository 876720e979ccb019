import enum
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from app.shared.domain.errors import InvalidTransition
from app.shared.domain.models import Category


class LoanStatus(str, enum.Enum):
    PENDING = "pending"
    RETURNED = "returned"


@dataclass(frozen=True)
class Loan:
    """A tool or material checked out to an employee.

    The three return fields are set together, exactly once, when the loan
    moves from pending to returned.
    """

    id: str
    item: str
    category: Category
    loan_date: date
    borrower_name: str
    borrower_badge: str
    issued_by: str
    issued_by_id: str
    status: LoanStatus
    created_at: datetime
    returned_at: Optional[datetime] = None
    returned_by: Optional[str] = None
    returned_by_id: Optional[str] = None

    @property
    def is_returned(self) -> bool:
        return self.status == LoanStatus.RETURNED

    def mark_returned(self, returned_by: str, returned_by_id: str, at: datetime) -> "Loan":
        if self.is_returned:
            raise InvalidTransition(f"loan {self.id} was already returned")
        return replace(
            self,
            status=LoanStatus.RETURNED,
            returned_at=at,
            returned_by=returned_by,
            returned_by_id=returned_by_id,
        )
