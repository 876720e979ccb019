from datetime import date, datetime
from typing import Any, Dict, Optional

from app.loans.domain.models import Loan, LoanStatus
from app.shared.domain.models import Category


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def loan_to_record(loan: Loan) -> Dict[str, Any]:
    return {
        "id": loan.id,
        "item": loan.item,
        "category": loan.category.value,
        "loan_date": loan.loan_date.isoformat(),
        "borrower_name": loan.borrower_name,
        "borrower_badge": loan.borrower_badge,
        "issued_by": loan.issued_by,
        "issued_by_id": loan.issued_by_id,
        "status": loan.status.value,
        "created_at": _iso(loan.created_at),
        "returned_at": _iso(loan.returned_at),
        "returned_by": loan.returned_by,
        "returned_by_id": loan.returned_by_id,
    }


def loan_from_record(record: Dict[str, Any]) -> Loan:
    returned_at = record.get("returned_at")
    return Loan(
        id=str(record["id"]),
        item=record["item"],
        category=Category(record["category"]),
        loan_date=date.fromisoformat(record["loan_date"]),
        borrower_name=record["borrower_name"],
        borrower_badge=record["borrower_badge"],
        issued_by=record["issued_by"],
        issued_by_id=str(record["issued_by_id"]),
        status=LoanStatus(record["status"]),
        created_at=datetime.fromisoformat(record["created_at"]),
        returned_at=datetime.fromisoformat(returned_at) if returned_at else None,
        returned_by=record.get("returned_by"),
        returned_by_id=record.get("returned_by_id"),
    )
