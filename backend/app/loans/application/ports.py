from typing import Protocol, Sequence

from app.loans.domain.models import Loan


class LoanRepository(Protocol):
    async def load_all(self) -> Sequence[Loan]:
        ...

    async def add(self, loan: Loan) -> None:
        ...

    async def update(self, loan: Loan) -> None:
        ...
