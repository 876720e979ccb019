import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from app.identity.domain.models import User
from app.requests.application.ports import PurchaseRequestRepository
from app.requests.domain.models import PurchaseRequest, RequestStatus
from app.shared.application.clock import Clock, IdGenerator, default_id_generator, utc_now
from app.shared.domain.errors import InvalidArgument, NotFound, PersistenceFailure
from app.shared.domain.models import Category, parse_category, require_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreatePurchaseRequestCommand:
    item: str
    quantity: int
    category: Union[Category, str]
    description: Optional[str] = None


@dataclass(frozen=True)
class UpdatePurchaseRequestCommand:
    """Fields left as None keep their current value; an empty description clears it."""

    item: Optional[str] = None
    quantity: Optional[int] = None
    description: Optional[str] = None
    category: Optional[Union[Category, str]] = None


def validate_quantity(quantity: Any) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidArgument("quantity must be a whole number")
    if quantity < 1:
        raise InvalidArgument("quantity must be at least 1")
    return quantity


def clean_description(description: Optional[str]) -> Optional[str]:
    if description is None or not description.strip():
        return None
    return description


class RequestLedger:
    """Owns the purchase request collection; writes through its repository."""

    def __init__(
        self,
        repository: PurchaseRequestRepository,
        id_generator: IdGenerator = default_id_generator,
        clock: Clock = utc_now,
    ) -> None:
        self._repository = repository
        self._id_generator = id_generator
        self._clock = clock
        self._requests: Dict[str, PurchaseRequest] = {}

    async def load(self) -> int:
        try:
            requests = await self._repository.load_all()
        except PersistenceFailure as exc:
            logger.warning(f"Could not load purchase requests, starting empty: {exc.message}")
            self._requests = {}
            return 0

        self._requests = {request.id: request for request in requests}
        logger.info(f"Loaded {len(self._requests)} purchase requests")
        return len(self._requests)

    def list(self) -> List[PurchaseRequest]:
        return list(self._requests.values())

    def get(self, request_id: str) -> PurchaseRequest:
        request = self._requests.get(request_id)
        if request is None:
            raise NotFound(f"purchase request {request_id} not found")
        return request

    async def create(
        self,
        command: CreatePurchaseRequestCommand,
        requester: User,
    ) -> PurchaseRequest:
        request = PurchaseRequest(
            id=self._id_generator(),
            item=require_text(command.item, "item"),
            quantity=validate_quantity(command.quantity),
            category=parse_category(command.category),
            description=clean_description(command.description),
            requester_name=requester.display_name,
            requester_id=requester.id,
            requested_at=self._clock().date(),
            status=RequestStatus.PENDING,
            delivered=False,
        )

        try:
            await self._repository.add(request)
        except PersistenceFailure as exc:
            logger.error(f"Failed to persist purchase request from {requester.display_name}: {exc.message}")
            raise

        self._requests[request.id] = request
        logger.info(
            f"Purchase request {request.id} created by {requester.display_name}: "
            f"{request.quantity} x {request.item}"
        )
        return request

    async def update(
        self,
        request_id: str,
        command: UpdatePurchaseRequestCommand,
    ) -> PurchaseRequest:
        current = self.get(request_id)
        current.ensure_pending("edit")

        item = current.item if command.item is None else require_text(command.item, "item")
        quantity = (
            current.quantity if command.quantity is None else validate_quantity(command.quantity)
        )
        category = (
            current.category if command.category is None else parse_category(command.category)
        )
        description = (
            current.description
            if command.description is None
            else clean_description(command.description)
        )

        updated = current.edited(
            item=item,
            quantity=quantity,
            description=description,
            category=category,
        )
        return await self._write(updated, "edit")

    async def delete(self, request_id: str) -> None:
        current = self.get(request_id)
        current.ensure_pending("delete")

        try:
            await self._repository.delete(request_id)
        except PersistenceFailure as exc:
            logger.error(f"Failed to delete purchase request {request_id}: {exc.message}")
            raise

        del self._requests[request_id]
        logger.info(f"Purchase request {request_id} deleted")

    async def approve(self, request_id: str) -> PurchaseRequest:
        return await self._write(self.get(request_id).approved(), "approve")

    async def reject(self, request_id: str) -> PurchaseRequest:
        return await self._write(self.get(request_id).rejected(), "reject")

    async def mark_delivered(self, request_id: str) -> PurchaseRequest:
        return await self._write(self.get(request_id).marked_delivered(), "deliver")

    async def _write(self, updated: PurchaseRequest, action: str) -> PurchaseRequest:
        try:
            await self._repository.update(updated)
        except PersistenceFailure as exc:
            logger.error(f"Failed to persist {action} of purchase request {updated.id}: {exc.message}")
            raise

        self._requests[updated.id] = updated
        logger.info(f"Purchase request {updated.id}: {action} -> {updated.display_status}")
        return updated
