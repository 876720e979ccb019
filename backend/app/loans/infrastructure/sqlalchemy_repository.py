from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.loans.domain.models import Loan, LoanStatus
from app.shared.domain.errors import PersistenceFailure
from app.shared.domain.models import Category
from database import DATABASE_ERRORS, LoanRecord


def _to_domain(row: LoanRecord) -> Loan:
    return Loan(
        id=row.id,
        item=row.item,
        category=Category(row.category),
        loan_date=row.loan_date,
        borrower_name=row.borrower_name,
        borrower_badge=row.borrower_badge,
        issued_by=row.issued_by,
        issued_by_id=row.issued_by_id,
        status=LoanStatus(row.status),
        created_at=row.created_at,
        returned_at=row.returned_at,
        returned_by=row.returned_by,
        returned_by_id=row.returned_by_id,
    )


class SqlAlchemyLoanRepository:
    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def load_all(self) -> Sequence[Loan]:
        try:
            async with self._session_maker() as session:
                result = await session.execute(
                    select(LoanRecord).order_by(LoanRecord.created_at)
                )
                rows = result.scalars().all()
        except DATABASE_ERRORS as e:
            raise PersistenceFailure(f"could not read loans: {e}") from e
        return [_to_domain(row) for row in rows]

    async def add(self, loan: Loan) -> None:
        try:
            async with self._session_maker() as session:
                session.add(
                    LoanRecord(
                        id=loan.id,
                        item=loan.item,
                        category=loan.category.value,
                        loan_date=loan.loan_date,
                        borrower_name=loan.borrower_name,
                        borrower_badge=loan.borrower_badge,
                        issued_by=loan.issued_by,
                        issued_by_id=loan.issued_by_id,
                        status=loan.status.value,
                        created_at=loan.created_at,
                    )
                )
                await session.commit()
        except DATABASE_ERRORS as e:
            raise PersistenceFailure(f"could not insert loan {loan.id}: {e}") from e

    async def update(self, loan: Loan) -> None:
        try:
            async with self._session_maker() as session:
                row = await session.get(LoanRecord, loan.id)
                if row is None:
                    raise PersistenceFailure(f"loan {loan.id} is not in the table")
                row.status = loan.status.value
                row.returned_at = loan.returned_at
                row.returned_by = loan.returned_by
                row.returned_by_id = loan.returned_by_id
                await session.commit()
        except DATABASE_ERRORS as e:
            raise PersistenceFailure(f"could not update loan {loan.id}: {e}") from e
