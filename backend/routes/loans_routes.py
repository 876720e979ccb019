"""
Loan Routes - tool and material checkouts, staff only
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.bootstrap import TrackerServices
from app.identity.domain.models import User, UserRole
from app.loans.application.ledger import CreateLoanCommand
from app.loans.presentation.response_mapper import loan_to_response
from app.shared.domain.errors import DomainError
from app.shared.domain.models import Category
from app.views.filters import LoanQuery, LoanTab, count_loan_tabs, loan_view, parse_tab
from routes.auth_routes import require_role
from routes.dependencies import get_services, to_http_exception

# Create router
loans_router = APIRouter(prefix="/api", tags=["Loans"])

staff_only = require_role(UserRole.STAFF)


# ==================== PYDANTIC MODELS ====================

class LoanCreate(BaseModel):
    item: str
    category: Category
    loan_date: date
    borrower_name: str
    borrower_badge: str


# ==================== LOAN ROUTES ====================

@loans_router.get("/loans")
async def get_loans(
    tab: str = "all",
    search: Optional[str] = None,
    loan_date: Optional[date] = None,
    category: Optional[Category] = None,
    current_user: User = Depends(staff_only),
    services: TrackerServices = Depends(get_services),
):
    """List loans with tab, text, date and category filters"""
    try:
        query = LoanQuery(
            tab=parse_tab(LoanTab, tab),
            search=search,
            loan_date=loan_date,
            category=category,
        )
    except DomainError as exc:
        raise to_http_exception(exc)

    loans = services.loans.list()
    view = loan_view(loans, query)
    return {
        "items": [loan_to_response(loan) for loan in view.items],
        "counts": count_loan_tabs(loans),
        "shown": view.shown,
        "tab_total": view.tab_total,
    }


@loans_router.get("/loans/{loan_id}")
async def get_loan(
    loan_id: str,
    current_user: User = Depends(staff_only),
    services: TrackerServices = Depends(get_services),
):
    try:
        loan = services.loans.get(loan_id)
    except DomainError as exc:
        raise to_http_exception(exc)
    return loan_to_response(loan)


@loans_router.post("/loans", status_code=201)
async def create_loan(
    loan_data: LoanCreate,
    current_user: User = Depends(staff_only),
    services: TrackerServices = Depends(get_services),
):
    """Issue a tool or material to an employee"""
    command = CreateLoanCommand(
        item=loan_data.item,
        category=loan_data.category,
        loan_date=loan_data.loan_date,
        borrower_name=loan_data.borrower_name,
        borrower_badge=loan_data.borrower_badge,
    )
    try:
        loan = await services.loans.create(command, current_user)
    except DomainError as exc:
        raise to_http_exception(exc)
    return loan_to_response(loan)


@loans_router.post("/loans/{loan_id}/return")
async def return_loan(
    loan_id: str,
    current_user: User = Depends(staff_only),
    services: TrackerServices = Depends(get_services),
):
    """Record the return of a loaned item"""
    try:
        loan = await services.loans.mark_returned(loan_id, current_user)
    except DomainError as exc:
        raise to_http_exception(exc)
    return loan_to_response(loan)
