from datetime import date
from typing import Any, Dict

from app.requests.domain.models import PurchaseRequest, RequestStatus
from app.shared.domain.models import Category


def request_to_record(request: PurchaseRequest) -> Dict[str, Any]:
    return {
        "id": request.id,
        "item": request.item,
        "quantity": request.quantity,
        "description": request.description,
        "category": request.category.value,
        "requester_name": request.requester_name,
        "requester_id": request.requester_id,
        "requested_at": request.requested_at.isoformat(),
        "status": request.status.value,
        "delivered": request.delivered,
    }


def request_from_record(record: Dict[str, Any]) -> PurchaseRequest:
    return PurchaseRequest(
        id=str(record["id"]),
        item=record["item"],
        quantity=int(record["quantity"]),
        description=record.get("description"),
        category=Category(record["category"]),
        requester_name=record["requester_name"],
        requester_id=str(record["requester_id"]),
        requested_at=date.fromisoformat(record["requested_at"]),
        status=RequestStatus(record["status"]),
        delivered=bool(record.get("delivered", False)),
    )
