from typing import Any, Dict

from app.loans.domain.models import Loan


def loan_to_response(loan: Loan) -> Dict[str, Any]:
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
        "created_at": loan.created_at.isoformat() if loan.created_at else None,
        "returned_at": loan.returned_at.isoformat() if loan.returned_at else None,
        "returned_by": loan.returned_by,
        "returned_by_id": loan.returned_by_id,
    }
