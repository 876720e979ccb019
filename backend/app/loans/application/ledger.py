import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Union

from app.identity.domain.models import User
from app.loans.application.ports import LoanRepository
from app.loans.domain.models import Loan, LoanStatus
from app.shared.application.clock import Clock, IdGenerator, default_id_generator, utc_now
from app.shared.domain.errors import InvalidArgument, NotFound, PersistenceFailure
from app.shared.domain.models import Category, parse_category, require_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateLoanCommand:
    item: str
    category: Union[Category, str]
    loan_date: date
    borrower_name: str
    borrower_badge: str


class LoanLedger:
    """Owns the loan collection and writes every change through its repository."""

    def __init__(
        self,
        repository: LoanRepository,
        id_generator: IdGenerator = default_id_generator,
        clock: Clock = utc_now,
    ) -> None:
        self._repository = repository
        self._id_generator = id_generator
        self._clock = clock
        self._loans: Dict[str, Loan] = {}

    async def load(self) -> int:
        try:
            loans = await self._repository.load_all()
        except PersistenceFailure as exc:
            logger.warning(f"Could not load loans, starting empty: {exc.message}")
            self._loans = {}
            return 0

        self._loans = {loan.id: loan for loan in loans}
        logger.info(f"Loaded {len(self._loans)} loans")
        return len(self._loans)

    def list(self) -> List[Loan]:
        return list(self._loans.values())

    def get(self, loan_id: str) -> Loan:
        loan = self._loans.get(loan_id)
        if loan is None:
            raise NotFound(f"loan {loan_id} not found")
        return loan

    async def create(self, command: CreateLoanCommand, issuer: User) -> Loan:
        item = require_text(command.item, "item")
        borrower_name = require_text(command.borrower_name, "borrower_name")
        borrower_badge = require_text(command.borrower_badge, "borrower_badge")
        category = parse_category(command.category)
        if not isinstance(command.loan_date, date):
            raise InvalidArgument("loan_date is required")

        loan = Loan(
            id=self._id_generator(),
            item=item,
            category=category,
            loan_date=command.loan_date,
            borrower_name=borrower_name,
            borrower_badge=borrower_badge,
            issued_by=issuer.display_name,
            issued_by_id=issuer.id,
            status=LoanStatus.PENDING,
            created_at=self._clock(),
        )

        try:
            await self._repository.add(loan)
        except PersistenceFailure as exc:
            logger.error(f"Failed to persist new loan for {borrower_name}: {exc.message}")
            raise

        self._loans[loan.id] = loan
        logger.info(f"Loan {loan.id} issued by {issuer.display_name}: {item} -> {borrower_name}")
        return loan

    async def mark_returned(self, loan_id: str, returner: User) -> Loan:
        loan = self.get(loan_id)
        returned = loan.mark_returned(
            returned_by=returner.display_name,
            returned_by_id=returner.id,
            at=self._clock(),
        )

        try:
            await self._repository.update(returned)
        except PersistenceFailure as exc:
            logger.error(f"Failed to persist return of loan {loan_id}: {exc.message}")
            raise

        self._loans[loan_id] = returned
        logger.info(f"Loan {loan_id} returned, recorded by {returner.display_name}")
        return returned
