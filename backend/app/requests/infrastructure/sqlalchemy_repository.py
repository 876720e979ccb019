from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.requests.domain.models import PurchaseRequest, RequestStatus
from app.shared.domain.errors import PersistenceFailure
from app.shared.domain.models import Category
from database import DATABASE_ERRORS, PurchaseRequestRecord


def _to_domain(row: PurchaseRequestRecord) -> PurchaseRequest:
    return PurchaseRequest(
        id=row.id,
        item=row.item,
        quantity=row.quantity,
        description=row.description,
        category=Category(row.category),
        requester_name=row.requester_name,
        requester_id=row.requester_id,
        requested_at=row.requested_at,
        status=RequestStatus(row.status),
        delivered=row.delivered,
    )


class SqlAlchemyPurchaseRequestRepository:
    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def load_all(self) -> Sequence[PurchaseRequest]:
        try:
            async with self._session_maker() as session:
                result = await session.execute(
                    select(PurchaseRequestRecord).order_by(
                        PurchaseRequestRecord.requested_at,
                        PurchaseRequestRecord.id,
                    )
                )
                rows = result.scalars().all()
        except DATABASE_ERRORS as e:
            raise PersistenceFailure(f"could not read purchase requests: {e}") from e
        return [_to_domain(row) for row in rows]

    async def add(self, request: PurchaseRequest) -> None:
        try:
            async with self._session_maker() as session:
                session.add(
                    PurchaseRequestRecord(
                        id=request.id,
                        item=request.item,
                        quantity=request.quantity,
                        description=request.description,
                        category=request.category.value,
                        requester_name=request.requester_name,
                        requester_id=request.requester_id,
                        requested_at=request.requested_at,
                        status=request.status.value,
                        delivered=request.delivered,
                    )
                )
                await session.commit()
        except DATABASE_ERRORS as e:
            raise PersistenceFailure(f"could not insert purchase request {request.id}: {e}") from e

    async def update(self, request: PurchaseRequest) -> None:
        try:
            async with self._session_maker() as session:
                row = await session.get(PurchaseRequestRecord, request.id)
                if row is None:
                    raise PersistenceFailure(f"purchase request {request.id} is not in the table")
                row.item = request.item
                row.quantity = request.quantity
                row.description = request.description
                row.category = request.category.value
                row.status = request.status.value
                row.delivered = request.delivered
                await session.commit()
        except DATABASE_ERRORS as e:
            raise PersistenceFailure(f"could not update purchase request {request.id}: {e}") from e

    async def delete(self, request_id: str) -> None:
        try:
            async with self._session_maker() as session:
                result = await session.execute(
                    delete(PurchaseRequestRecord).where(PurchaseRequestRecord.id == request_id)
                )
                if result.rowcount == 0:
                    raise PersistenceFailure(f"purchase request {request_id} is not in the table")
                await session.commit()
        except DATABASE_ERRORS as e:
            raise PersistenceFailure(f"could not delete purchase request {request_id}: {e}") from e
