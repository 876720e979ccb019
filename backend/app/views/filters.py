"""
Read-side projections of the ledgers for listing pages.

Filters are applied conjunctively in a fixed order: tab, free text, exact
date, category. An empty value for any dimension means no restriction.
Tab counts always partition the collection they are given by status only,
independent of the text, date and category filters.
"""
import enum
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, Generic, Iterable, List, Optional, Sequence, TypeVar, Union

from app.loans.domain.models import Loan, LoanStatus
from app.requests.domain.models import PurchaseRequest, RequestStatus
from app.shared.domain.errors import InvalidArgument
from app.shared.domain.models import Category

T = TypeVar("T")


class LoanTab(str, enum.Enum):
    ALL = "all"
    PENDING = "pending"
    RETURNED = "returned"


class RequestTab(str, enum.Enum):
    ALL = "all"
    PENDING = "pending"
    APPROVED = "approved"
    APPROVED_NOT_DELIVERED = "approved-not-delivered"
    DELIVERED = "delivered"
    REJECTED = "rejected"


def parse_tab(tab_type: type, value: Union[str, enum.Enum, None]):
    if value is None or value == "":
        return tab_type("all")
    if isinstance(value, tab_type):
        return value
    try:
        return tab_type(value)
    except ValueError:
        raise InvalidArgument(f"unknown tab: {value}")


@dataclass(frozen=True)
class LoanQuery:
    tab: LoanTab = LoanTab.ALL
    search: Optional[str] = None
    loan_date: Optional[date] = None
    category: Optional[Category] = None


@dataclass(frozen=True)
class RequestQuery:
    tab: RequestTab = RequestTab.ALL
    search: Optional[str] = None
    requested_at: Optional[date] = None
    category: Optional[Category] = None
    requester_id: Optional[str] = None


@dataclass(frozen=True)
class FilteredView(Generic[T]):
    items: List[T]
    tab_total: int

    @property
    def shown(self) -> int:
        return len(self.items)


_LOAN_TABS: Dict[LoanTab, Callable[[Loan], bool]] = {
    LoanTab.ALL: lambda loan: True,
    LoanTab.PENDING: lambda loan: loan.status == LoanStatus.PENDING,
    LoanTab.RETURNED: lambda loan: loan.status == LoanStatus.RETURNED,
}

_REQUEST_TABS: Dict[RequestTab, Callable[[PurchaseRequest], bool]] = {
    RequestTab.ALL: lambda req: True,
    RequestTab.PENDING: lambda req: req.status == RequestStatus.PENDING,
    RequestTab.APPROVED: lambda req: req.status == RequestStatus.APPROVED,
    RequestTab.APPROVED_NOT_DELIVERED: lambda req: (
        req.status == RequestStatus.APPROVED and not req.delivered
    ),
    RequestTab.DELIVERED: lambda req: req.status == RequestStatus.APPROVED and req.delivered,
    RequestTab.REJECTED: lambda req: req.status == RequestStatus.REJECTED,
}


def _matches_text(term: Optional[str], fields: Iterable[Optional[str]]) -> bool:
    if not term:
        return True
    needle = term.lower()
    return any(field and needle in field.lower() for field in fields)


def filter_loans(loans: Sequence[Loan], query: LoanQuery) -> List[Loan]:
    in_tab = _LOAN_TABS[query.tab]
    result = [loan for loan in loans if in_tab(loan)]
    if query.search:
        result = [
            loan
            for loan in result
            if _matches_text(query.search, (loan.borrower_badge, loan.item, loan.borrower_name))
        ]
    if query.loan_date:
        result = [loan for loan in result if loan.loan_date == query.loan_date]
    if query.category:
        result = [loan for loan in result if loan.category == query.category]
    return result


def scope_requests(
    requests: Sequence[PurchaseRequest],
    requester_id: Optional[str],
) -> List[PurchaseRequest]:
    if not requester_id:
        return list(requests)
    return [req for req in requests if req.requester_id == requester_id]


def filter_requests(
    requests: Sequence[PurchaseRequest],
    query: RequestQuery,
) -> List[PurchaseRequest]:
    in_tab = _REQUEST_TABS[query.tab]
    result = [req for req in scope_requests(requests, query.requester_id) if in_tab(req)]
    if query.search:
        result = [
            req for req in result if _matches_text(query.search, (req.item, req.requester_name))
        ]
    if query.requested_at:
        result = [req for req in result if req.requested_at == query.requested_at]
    if query.category:
        result = [req for req in result if req.category == query.category]
    return result


def count_loan_tabs(loans: Sequence[Loan]) -> Dict[str, int]:
    return {tab.value: sum(1 for loan in loans if in_tab(loan)) for tab, in_tab in _LOAN_TABS.items()}


def count_request_tabs(requests: Sequence[PurchaseRequest]) -> Dict[str, int]:
    return {
        tab.value: sum(1 for req in requests if in_tab(req))
        for tab, in_tab in _REQUEST_TABS.items()
    }


def loan_view(loans: Sequence[Loan], query: LoanQuery) -> FilteredView[Loan]:
    return FilteredView(
        items=filter_loans(loans, query),
        tab_total=count_loan_tabs(loans)[query.tab.value],
    )


def request_view(
    requests: Sequence[PurchaseRequest],
    query: RequestQuery,
) -> FilteredView[PurchaseRequest]:
    scoped = scope_requests(requests, query.requester_id)
    return FilteredView(
        items=filter_requests(scoped, query),
        tab_total=count_request_tabs(scoped)[query.tab.value],
    )
