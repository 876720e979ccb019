from typing import List, Sequence

from app.loans.domain.models import Loan
from app.loans.infrastructure.serialization import loan_from_record, loan_to_record
from app.shared.domain.errors import PersistenceFailure
from app.shared.infrastructure.json_store import JsonFileStore

LOANS_KEY = "loans"


class JsonFileLoanRepository:
    def __init__(self, store: JsonFileStore, key: str = LOANS_KEY) -> None:
        self._store = store
        self._key = key

    def _records(self) -> List[dict]:
        records = self._store.get(self._key)
        if records is None:
            return []
        if not isinstance(records, list):
            raise PersistenceFailure(f"'{self._key}' is not a list of loans")
        return records

    async def load_all(self) -> Sequence[Loan]:
        try:
            return [loan_from_record(record) for record in self._records()]
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceFailure(f"malformed loan record: {e}") from e

    async def add(self, loan: Loan) -> None:
        records = self._records()
        records.append(loan_to_record(loan))
        self._store.set(self._key, records)

    async def update(self, loan: Loan) -> None:
        records = self._records()
        for index, record in enumerate(records):
            if record.get("id") == loan.id:
                records[index] = loan_to_record(loan)
                break
        else:
            raise PersistenceFailure(f"loan {loan.id} is not in the store")
        self._store.set(self._key, records)
