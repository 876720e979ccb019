from datetime import date, datetime, timezone

import pytest

from app.loans.domain.models import Loan, LoanStatus
from app.requests.domain.models import PurchaseRequest, RequestStatus
from app.shared.domain.errors import InvalidArgument
from app.shared.domain.models import Category
from app.views.filters import (
    LoanQuery,
    LoanTab,
    RequestQuery,
    RequestTab,
    count_loan_tabs,
    count_request_tabs,
    filter_loans,
    filter_requests,
    loan_view,
    parse_tab,
    request_view,
)


def make_request(item, status, category, delivered=False, requester_id="1", requester_name="João"):
    return PurchaseRequest(
        id=f"req-{item.lower()}",
        item=item,
        quantity=1,
        category=category,
        requester_name=requester_name,
        requester_id=requester_id,
        requested_at=date(2026, 5, 4),
        status=status,
        delivered=delivered,
    )


def make_loan(item, borrower, badge, category, loan_date, status=LoanStatus.PENDING):
    return Loan(
        id=f"loan-{item.lower()}",
        item=item,
        category=category,
        loan_date=loan_date,
        borrower_name=borrower,
        borrower_badge=badge,
        issued_by="João Silva",
        issued_by_id="1",
        status=status,
        created_at=datetime(2026, 5, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def requests():
    return [
        make_request("Drill", RequestStatus.PENDING, Category.ELECTRICAL),
        make_request("Hammer", RequestStatus.APPROVED, Category.MECHANICAL),
        make_request("Multimeter", RequestStatus.APPROVED, Category.ELECTRICAL, delivered=True),
    ]


@pytest.fixture
def loans():
    return [
        make_loan("Drill", "Ana Costa", "M-1001", Category.ELECTRICAL, date(2026, 5, 1)),
        make_loan("Wrench", "Pedro", "M-2002", Category.MECHANICAL, date(2026, 5, 2)),
        make_loan(
            "Soldering iron",
            "Ana Costa",
            "M-1001",
            Category.ELECTRICAL,
            date(2026, 5, 2),
            status=LoanStatus.RETURNED,
        ),
    ]


def test_approved_not_delivered_with_category(requests):
    query = RequestQuery(tab=RequestTab.APPROVED_NOT_DELIVERED, category=Category.ELECTRICAL)

    assert filter_requests(requests, query) == []


def test_approved_not_delivered_alone(requests):
    result = filter_requests(requests, RequestQuery(tab=RequestTab.APPROVED_NOT_DELIVERED))

    assert [req.item for req in result] == ["Hammer"]


def test_request_tab_counts_ignore_other_filters(requests):
    counts = count_request_tabs(requests)

    assert counts == {
        "all": 3,
        "pending": 1,
        "approved": 2,
        "approved-not-delivered": 1,
        "delivered": 1,
        "rejected": 0,
    }


def test_request_view_scopes_to_requester():
    mine = make_request("Tape", RequestStatus.PENDING, Category.ELECTRICAL, requester_id="1")
    theirs = make_request("Bolt", RequestStatus.PENDING, Category.MECHANICAL, requester_id="2")

    view = request_view([mine, theirs], RequestQuery(requester_id="1"))

    assert view.items == [mine]
    assert view.shown == 1
    assert view.tab_total == 1


def test_request_search_matches_requester_name(requests):
    other = make_request("Bolt", RequestStatus.PENDING, Category.MECHANICAL, requester_name="Maria")

    result = filter_requests(requests + [other], RequestQuery(search="MARIA"))

    assert result == [other]


def test_loan_search_is_case_insensitive_over_any_field(loans):
    by_badge = filter_loans(loans, LoanQuery(search="m-2002"))
    by_item = filter_loans(loans, LoanQuery(search="SOLDER"))
    by_name = filter_loans(loans, LoanQuery(search="ana"))

    assert [loan.item for loan in by_badge] == ["Wrench"]
    assert [loan.item for loan in by_item] == ["Soldering iron"]
    assert [loan.item for loan in by_name] == ["Drill", "Soldering iron"]


def test_loan_filters_compose(loans):
    query = LoanQuery(
        tab=LoanTab.PENDING,
        search="m-",
        loan_date=date(2026, 5, 2),
        category=Category.MECHANICAL,
    )

    assert [loan.item for loan in filter_loans(loans, query)] == ["Wrench"]


def test_loan_empty_filters_keep_everything_in_order(loans):
    assert filter_loans(loans, LoanQuery(search="")) == loans


def test_loan_view_reports_tab_total(loans):
    view = loan_view(loans, LoanQuery(tab=LoanTab.PENDING, category=Category.ELECTRICAL))

    assert [loan.item for loan in view.items] == ["Drill"]
    assert view.shown == 1
    assert view.tab_total == 2
    assert count_loan_tabs(loans) == {"all": 3, "pending": 2, "returned": 1}


def test_parse_tab():
    assert parse_tab(LoanTab, None) == LoanTab.ALL
    assert parse_tab(RequestTab, "approved-not-delivered") == RequestTab.APPROVED_NOT_DELIVERED
    with pytest.raises(InvalidArgument):
        parse_tab(LoanTab, "lost")
