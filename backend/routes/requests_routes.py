"""
Purchase Request Routes
Staff submit and edit their own requests; the purchaser decides and tracks delivery
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.bootstrap import TrackerServices
from app.identity.domain.models import User, UserRole
from app.requests.application.ledger import (
    CreatePurchaseRequestCommand,
    UpdatePurchaseRequestCommand,
)
from app.requests.domain.models import PurchaseRequest
from app.requests.presentation.response_mapper import purchase_request_to_response
from app.shared.domain.errors import DomainError, PermissionDenied
from app.shared.domain.models import Category
from app.views.filters import (
    RequestQuery,
    RequestTab,
    count_request_tabs,
    parse_tab,
    request_view,
    scope_requests,
)
from routes.auth_routes import get_current_user, require_role
from routes.dependencies import get_services, to_http_exception

# Create router
requests_router = APIRouter(prefix="/api", tags=["Purchase Requests"])

staff_only = require_role(UserRole.STAFF)
purchaser_only = require_role(UserRole.PURCHASER)


# ==================== PYDANTIC MODELS ====================

class PurchaseRequestCreate(BaseModel):
    item: str
    quantity: int
    category: Category
    description: Optional[str] = None


class PurchaseRequestUpdate(BaseModel):
    item: Optional[str] = None
    quantity: Optional[int] = None
    category: Optional[Category] = None
    description: Optional[str] = None


# ==================== HELPER FUNCTIONS ====================

def ensure_owner(request: PurchaseRequest, current_user: User) -> None:
    if request.requester_id != current_user.id:
        raise PermissionDenied("only the requester can change this request")


# ==================== PURCHASE REQUEST ROUTES ====================

@requests_router.get("/requests")
async def get_purchase_requests(
    tab: str = "all",
    search: Optional[str] = None,
    requested_at: Optional[date] = None,
    category: Optional[Category] = None,
    current_user: User = Depends(get_current_user),
    services: TrackerServices = Depends(get_services),
):
    """Purchaser sees every request; staff see only their own"""
    requester_id = current_user.id if current_user.role == UserRole.STAFF else None
    try:
        query = RequestQuery(
            tab=parse_tab(RequestTab, tab),
            search=search,
            requested_at=requested_at,
            category=category,
            requester_id=requester_id,
        )
    except DomainError as exc:
        raise to_http_exception(exc)

    requests = services.requests.list()
    view = request_view(requests, query)
    return {
        "items": [purchase_request_to_response(req) for req in view.items],
        "counts": count_request_tabs(scope_requests(requests, requester_id)),
        "shown": view.shown,
        "tab_total": view.tab_total,
    }


@requests_router.post("/requests", status_code=201)
async def create_purchase_request(
    request_data: PurchaseRequestCreate,
    current_user: User = Depends(staff_only),
    services: TrackerServices = Depends(get_services),
):
    command = CreatePurchaseRequestCommand(
        item=request_data.item,
        quantity=request_data.quantity,
        category=request_data.category,
        description=request_data.description,
    )
    try:
        request = await services.requests.create(command, current_user)
    except DomainError as exc:
        raise to_http_exception(exc)
    return purchase_request_to_response(request)


@requests_router.patch("/requests/{request_id}")
async def update_purchase_request(
    request_id: str,
    request_data: PurchaseRequestUpdate,
    current_user: User = Depends(staff_only),
    services: TrackerServices = Depends(get_services),
):
    """Edit a pending request"""
    command = UpdatePurchaseRequestCommand(
        item=request_data.item,
        quantity=request_data.quantity,
        category=request_data.category,
        description=request_data.description,
    )
    try:
        ensure_owner(services.requests.get(request_id), current_user)
        request = await services.requests.update(request_id, command)
    except DomainError as exc:
        raise to_http_exception(exc)
    return purchase_request_to_response(request)


@requests_router.delete("/requests/{request_id}")
async def delete_purchase_request(
    request_id: str,
    current_user: User = Depends(staff_only),
    services: TrackerServices = Depends(get_services),
):
    """Delete a pending request"""
    try:
        ensure_owner(services.requests.get(request_id), current_user)
        await services.requests.delete(request_id)
    except DomainError as exc:
        raise to_http_exception(exc)
    return {"message": "request deleted", "id": request_id}


@requests_router.post("/requests/{request_id}/approve")
async def approve_purchase_request(
    request_id: str,
    current_user: User = Depends(purchaser_only),
    services: TrackerServices = Depends(get_services),
):
    try:
        request = await services.requests.approve(request_id)
    except DomainError as exc:
        raise to_http_exception(exc)
    return purchase_request_to_response(request)


@requests_router.post("/requests/{request_id}/reject")
async def reject_purchase_request(
    request_id: str,
    current_user: User = Depends(purchaser_only),
    services: TrackerServices = Depends(get_services),
):
    try:
        request = await services.requests.reject(request_id)
    except DomainError as exc:
        raise to_http_exception(exc)
    return purchase_request_to_response(request)


@requests_router.post("/requests/{request_id}/deliver")
async def deliver_purchase_request(
    request_id: str,
    current_user: User = Depends(purchaser_only),
    services: TrackerServices = Depends(get_services),
):
    """Mark an approved request as delivered"""
    try:
        request = await services.requests.mark_delivered(request_id)
    except DomainError as exc:
        raise to_http_exception(exc)
    return purchase_request_to_response(request)
