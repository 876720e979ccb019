from typing import List, Sequence

from app.requests.domain.models import PurchaseRequest
from app.requests.infrastructure.serialization import request_from_record, request_to_record
from app.shared.domain.errors import PersistenceFailure
from app.shared.infrastructure.json_store import JsonFileStore

REQUESTS_KEY = "requests"


class JsonFilePurchaseRequestRepository:
    def __init__(self, store: JsonFileStore, key: str = REQUESTS_KEY) -> None:
        self._store = store
        self._key = key

    def _records(self) -> List[dict]:
        records = self._store.get(self._key)
        if records is None:
            return []
        if not isinstance(records, list):
            raise PersistenceFailure(f"'{self._key}' is not a list of purchase requests")
        return records

    async def load_all(self) -> Sequence[PurchaseRequest]:
        try:
            return [request_from_record(record) for record in self._records()]
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceFailure(f"malformed purchase request record: {e}") from e

    async def add(self, request: PurchaseRequest) -> None:
        records = self._records()
        records.append(request_to_record(request))
        self._store.set(self._key, records)

    async def update(self, request: PurchaseRequest) -> None:
        records = self._records()
        for index, record in enumerate(records):
            if record.get("id") == request.id:
                records[index] = request_to_record(request)
                break
        else:
            raise PersistenceFailure(f"purchase request {request.id} is not in the store")
        self._store.set(self._key, records)

    async def delete(self, request_id: str) -> None:
        records = self._records()
        remaining = [record for record in records if record.get("id") != request_id]
        if len(remaining) == len(records):
            raise PersistenceFailure(f"purchase request {request_id} is not in the store")
        self._store.set(self._key, remaining)
