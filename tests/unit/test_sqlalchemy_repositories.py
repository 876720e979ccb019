import asyncio
from datetime import date, datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from app.loans.application.ledger import LoanLedger
from app.loans.domain.models import Loan, LoanStatus
from app.loans.infrastructure.sqlalchemy_repository import SqlAlchemyLoanRepository
from app.requests.application.ledger import RequestLedger
from app.requests.domain.models import PurchaseRequest, RequestStatus
from app.requests.infrastructure.sqlalchemy_repository import SqlAlchemyPurchaseRequestRepository
from app.shared.domain.errors import PersistenceFailure
from app.shared.domain.models import Category
from database import LoanRecord, PurchaseRequestRecord


class FakeResult:
    def __init__(self, rows, rowcount) -> None:
        self._rows = rows
        self.rowcount = rowcount

    def scalars(self):
        return self

    def all(self):
        return list(self._rows)


class FakeSession:
    def __init__(self, maker) -> None:
        self._maker = maker

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    def _check(self):
        if self._maker.error is not None:
            raise self._maker.error

    async def execute(self, statement):
        self._check()
        self._maker.statements.append(statement)
        return FakeResult(self._maker.rows, self._maker.rowcount)

    async def get(self, model, key):
        self._check()
        for row in self._maker.rows:
            if row.id == key:
                return row
        return None

    def add(self, row):
        self._maker.added.append(row)

    async def commit(self):
        self._check()
        self._maker.commits += 1


class FakeSessionMaker:
    def __init__(self, rows=None, error=None, rowcount=1) -> None:
        self.rows = list(rows or [])
        self.error = error
        self.rowcount = rowcount
        self.statements = []
        self.added = []
        self.commits = 0

    def __call__(self):
        return FakeSession(self)


def run(coro):
    return asyncio.run(coro)


CREATED = datetime(2026, 7, 1, 9, 0, 0, tzinfo=timezone.utc)

DATABASE_OUTAGES = [
    ConnectionRefusedError(111, "Connect call failed"),
    asyncio.TimeoutError(),
    OperationalError("SELECT 1", {}, Exception("server closed the connection")),
]


def loan_row(**overrides):
    fields = dict(
        id="loan-1",
        item="Drill",
        category="electrical",
        loan_date=date(2026, 7, 1),
        borrower_name="Ana",
        borrower_badge="M-1001",
        issued_by="João Silva",
        issued_by_id="1",
        status="pending",
        created_at=CREATED,
        returned_at=None,
        returned_by=None,
        returned_by_id=None,
    )
    fields.update(overrides)
    return LoanRecord(**fields)


def request_row(**overrides):
    fields = dict(
        id="req-1",
        item="Cable",
        quantity=3,
        description=None,
        category="electrical",
        requester_name="João Silva",
        requester_id="1",
        requested_at=date(2026, 7, 1),
        status="approved",
        delivered=True,
    )
    fields.update(overrides)
    return PurchaseRequestRecord(**fields)


def test_loan_rows_map_to_domain():
    maker = FakeSessionMaker(rows=[loan_row()])

    [loan] = run(SqlAlchemyLoanRepository(maker).load_all())

    assert loan.category == Category.ELECTRICAL
    assert loan.status == LoanStatus.PENDING
    assert loan.created_at == CREATED
    assert loan.returned_at is None


def test_loan_add_and_update_write_rows():
    maker = FakeSessionMaker()
    repository = SqlAlchemyLoanRepository(maker)
    loan = Loan(
        id="loan-2",
        item="Saw",
        category=Category.MECHANICAL,
        loan_date=date(2026, 7, 2),
        borrower_name="Pedro",
        borrower_badge="M-2",
        issued_by="João Silva",
        issued_by_id="1",
        status=LoanStatus.PENDING,
        created_at=CREATED,
    )

    run(repository.add(loan))
    [row] = maker.added
    assert row.category == "mechanical"
    assert row.status == "pending"

    maker.rows = [row]
    returned = loan.mark_returned("Bob", "2", CREATED)
    run(repository.update(returned))
    assert row.status == "returned"
    assert row.returned_by == "Bob"
    assert maker.commits == 2


def test_loan_update_of_missing_row():
    repository = SqlAlchemyLoanRepository(FakeSessionMaker())
    loan = run(SqlAlchemyLoanRepository(FakeSessionMaker(rows=[loan_row()])).load_all())[0]

    with pytest.raises(PersistenceFailure):
        run(repository.update(loan))


@pytest.mark.parametrize("error", DATABASE_OUTAGES)
def test_loan_repository_wraps_database_outages(error):
    repository = SqlAlchemyLoanRepository(FakeSessionMaker(rows=[loan_row()], error=error))
    loan = run(SqlAlchemyLoanRepository(FakeSessionMaker(rows=[loan_row()])).load_all())[0]

    with pytest.raises(PersistenceFailure):
        run(repository.load_all())
    with pytest.raises(PersistenceFailure):
        run(repository.add(loan))
    with pytest.raises(PersistenceFailure):
        run(repository.update(loan))


@pytest.mark.parametrize("error", DATABASE_OUTAGES)
def test_ledgers_start_empty_when_database_is_down(error):
    loans = LoanLedger(SqlAlchemyLoanRepository(FakeSessionMaker(error=error)))
    requests = RequestLedger(SqlAlchemyPurchaseRequestRepository(FakeSessionMaker(error=error)))

    assert run(loans.load()) == 0
    assert run(requests.load()) == 0
    assert loans.list() == []
    assert requests.list() == []


def test_request_rows_map_to_domain():
    maker = FakeSessionMaker(rows=[request_row(description="for panel 3")])

    [request] = run(SqlAlchemyPurchaseRequestRepository(maker).load_all())

    assert request.status == RequestStatus.APPROVED
    assert request.delivered is True
    assert request.quantity == 3
    assert request.description == "for panel 3"


def test_request_update_and_delete():
    row = request_row(status="pending", delivered=False)
    maker = FakeSessionMaker(rows=[row])
    repository = SqlAlchemyPurchaseRequestRepository(maker)
    [request] = run(repository.load_all())

    run(repository.update(request.approved()))
    assert row.status == "approved"

    run(repository.delete(request.id))
    assert maker.commits == 2

    maker.rowcount = 0
    with pytest.raises(PersistenceFailure):
        run(repository.delete(request.id))


@pytest.mark.parametrize("error", DATABASE_OUTAGES)
def test_request_repository_wraps_database_outages(error):
    request = PurchaseRequest(
        id="req-9",
        item="Tape",
        quantity=1,
        category=Category.ELECTRICAL,
        requester_name="João Silva",
        requester_id="1",
        requested_at=date(2026, 7, 1),
        status=RequestStatus.PENDING,
    )
    repository = SqlAlchemyPurchaseRequestRepository(FakeSessionMaker(error=error))

    for call in (
        repository.load_all(),
        repository.add(request),
        repository.update(request),
        repository.delete(request.id),
    ):
        with pytest.raises(PersistenceFailure):
            run(call)
