from typing import Protocol, Sequence

from app.requests.domain.models import PurchaseRequest


class PurchaseRequestRepository(Protocol):
    async def load_all(self) -> Sequence[PurchaseRequest]:
        ...

    async def add(self, request: PurchaseRequest) -> None:
        ...

    async def update(self, request: PurchaseRequest) -> None:
        ...

    async def delete(self, request_id: str) -> None:
        ...
