from typing import Any, Dict

from app.requests.domain.models import PurchaseRequest


def purchase_request_to_response(request: PurchaseRequest) -> Dict[str, Any]:
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
        "display_status": request.display_status,
    }
