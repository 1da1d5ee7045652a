"""FastAPI routes for the Ordering domain: cart pricing, orders, vendors and settlements."""

import json
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from protean.utils.globals import current_domain

from ordering.addresses import get_address_book
from ordering.access import Caller, Role
from ordering.api.auth import current_caller, require_role
from ordering.api.schemas import (
    AddressResponse,
    AssignTrackingRequest,
    CartPricingRequest,
    CartPricingResponse,
    ChangeCommissionRequest,
    CheckoutRequest,
    OrderItemResponse,
    OrderListResponse,
    OrderResponse,
    ProgressResponse,
    RegisterVendorRequest,
    ScanRequest,
    ScanResponse,
    SetStatusRequest,
    StatementLineResponse,
    StatementResponse,
    StatusResponse,
    TrackedItemResponse,
    TrackingResponse,
    VendorIdResponse,
    VendorOrderListResponse,
    VendorOrderResponse,
    VendorOverviewResponse,
)
from ordering.cart.pricing import CartLine, compute_cart_pricing, shipping_cost_for_desi
from ordering.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ordering.order.fulfillment import AssignTracking, ScanOrderBarcode, SetOrderStatus
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from ordering.order.queries import find_by_barcode, find_by_code, get_order, list_orders
from ordering.order.tracking import tracking_view
from ordering.settlement.rendering import render_statement
from ordering.settlement.seller import (
    VendorOrder,
    authorize_vendor_access,
    vendor_for_owner,
    vendor_order,
    vendor_orders,
    vendor_overview,
)
from ordering.settlement.statement import (
    SettlementStatement,
    SettlementWindow,
    compute_all_statements,
    compute_statement,
)
from ordering.vendor.management import BlockVendor, ChangeCommissionRate, RegisterVendor, UnblockVendor

admin_only = require_role(Role.ADMIN)


# ---------------------------------------------------------------------------
# Serializers
# ---------------------------------------------------------------------------
def _address_response(address_id) -> AddressResponse | None:
    address = get_address_book().get_address(str(address_id)) if address_id else None
    return AddressResponse(**address.__dict__) if address else None


def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        barcode=order.barcode,
        buyer_id=str(order.buyer_id),
        address_id=str(order.address_id),
        address=_address_response(order.address_id),
        status=order.status,
        payment_status=order.payment_status,
        total_amount=order.total_amount,
        shipping_company=order.shipping_company,
        tracking_number=order.tracking_number,
        created_at=order.created_at,
        updated_at=order.updated_at,
        items=[OrderItemResponse(**item.to_dict()) for item in order.items],
    )


def _vendor_order_response(order: VendorOrder, with_address: bool = False) -> VendorOrderResponse:
    return VendorOrderResponse(
        order_id=order.order_id,
        barcode=order.barcode,
        status=order.status,
        created_at=order.created_at,
        items=[OrderItemResponse(**item) for item in order.items],
        vendor_total=order.vendor_total,
        address=_address_response(order.address_id) if with_address else None,
    )


def _statement_response(statement: SettlementStatement) -> StatementResponse:
    return StatementResponse(
        vendor_id=statement.vendor_id,
        vendor_name=statement.vendor_name,
        commission_rate=statement.commission_rate,
        total_revenue=statement.total_revenue,
        commission_amount=statement.commission_amount,
        net_payable=statement.net_payable,
        start=statement.window.start,
        end=statement.window.end,
        lines=[StatementLineResponse(**line.__dict__) for line in statement.lines],
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.post("/pricing", response_model=CartPricingResponse)
async def price_cart(body: CartPricingRequest) -> CartPricingResponse:
    """Advisory totals for the client-held cart. Nothing is stored."""
    pricing = compute_cart_pricing([CartLine(**line.model_dump()) for line in body.items])
    quote = shipping_cost_for_desi(body.total_desi) if body.total_desi is not None else None
    return CartPricingResponse(**pricing.__dict__, parcel_shipping_quote=quote)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: CheckoutRequest, caller: Caller = Depends(require_role(Role.USER))) -> OrderResponse:
    command = PlaceOrder(
        buyer_id=caller.user_id,
        address_id=body.address_id or None,
        items=json.dumps([item.model_dump() for item in body.items]),
    )
    order_id = current_domain.process(command, asynchronous=False)
    return _order_response(current_domain.repository_for(Order).get(order_id))


@order_router.get("", response_model=OrderListResponse)
async def get_orders(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    caller: Caller = Depends(current_caller),
) -> OrderListResponse:
    result = list_orders(caller, page=page, page_size=page_size)
    return OrderListResponse(
        orders=[_order_response(order) for order in result.orders],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
    )


@order_router.get("/track", response_model=TrackingResponse)
async def track_order(code: str = Query(default="")) -> TrackingResponse:
    """Public lookup by barcode or order id. Returns no buyer data."""
    view = tracking_view(find_by_code(code))
    return TrackingResponse(
        barcode=view.barcode,
        status=view.status,
        progress=ProgressResponse(
            step_index=view.progress.step_index,
            total_steps=view.progress.total_steps,
            percent=view.progress.percent,
            badge=view.progress.badge,
        ),
        created_at=view.created_at,
        updated_at=view.updated_at,
        shipping_company=view.shipping_company,
        tracking_number=view.tracking_number,
        items=[TrackedItemResponse(**item.__dict__) for item in view.items],
    )


@order_router.post("/scan", response_model=ScanResponse)
async def scan_order(body: ScanRequest, caller: Caller = Depends(admin_only)) -> ScanResponse:
    message = current_domain.process(ScanOrderBarcode(barcode=body.barcode), asynchronous=False)
    return ScanResponse(message=message, order=_order_response(find_by_barcode(body.barcode)))


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order_detail(order_id: str, caller: Caller = Depends(current_caller)) -> OrderResponse:
    return _order_response(get_order(caller, order_id))


@order_router.patch("/{order_id}/status", response_model=OrderResponse)
async def set_order_status(
    order_id: str, body: SetStatusRequest, caller: Caller = Depends(admin_only)
) -> OrderResponse:
    command = SetOrderStatus(order_id=order_id, status=body.status.value)
    current_domain.process(command, asynchronous=False)
    return _order_response(current_domain.repository_for(Order).get(order_id))


@order_router.put("/{order_id}/tracking", response_model=StatusResponse)
async def assign_tracking(
    order_id: str, body: AssignTrackingRequest, caller: Caller = Depends(admin_only)
) -> StatusResponse:
    command = AssignTracking(
        order_id=order_id,
        shipping_company=body.shipping_company,
        tracking_number=body.tracking_number,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Vendor Router
# ---------------------------------------------------------------------------
vendor_router = APIRouter(prefix="/vendors", tags=["vendors"])


@vendor_router.get("/me/orders/{order_id}", response_model=VendorOrderResponse)
async def get_my_vendor_order(
    order_id: str, caller: Caller = Depends(require_role(Role.SELLER))
) -> VendorOrderResponse:
    """The signed-in seller's view of one order, resolved from the vendor they own."""
    vendor = vendor_for_owner(caller.user_id)
    return _vendor_order_response(vendor_order(str(vendor.id), order_id), with_address=True)


@vendor_router.post("", status_code=201, response_model=VendorIdResponse)
async def register_vendor(body: RegisterVendorRequest, caller: Caller = Depends(admin_only)) -> VendorIdResponse:
    command = RegisterVendor(name=body.name, commission_rate=body.commission_rate, owner_id=body.owner_id)
    vendor_id = current_domain.process(command, asynchronous=False)
    return VendorIdResponse(vendor_id=vendor_id)


@vendor_router.patch("/{vendor_id}/commission", response_model=StatusResponse)
async def change_commission(
    vendor_id: str, body: ChangeCommissionRequest, caller: Caller = Depends(admin_only)
) -> StatusResponse:
    command = ChangeCommissionRate(vendor_id=vendor_id, commission_rate=body.commission_rate)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@vendor_router.put("/{vendor_id}/block", response_model=StatusResponse)
async def block_vendor(vendor_id: str, caller: Caller = Depends(admin_only)) -> StatusResponse:
    current_domain.process(BlockVendor(vendor_id=vendor_id), asynchronous=False)
    return StatusResponse(status="blocked")


@vendor_router.put("/{vendor_id}/unblock", response_model=StatusResponse)
async def unblock_vendor(vendor_id: str, caller: Caller = Depends(admin_only)) -> StatusResponse:
    current_domain.process(UnblockVendor(vendor_id=vendor_id), asynchronous=False)
    return StatusResponse(status="active")


@vendor_router.get("/{vendor_id}/statement", response_model=StatementResponse)
async def vendor_statement(
    vendor_id: str,
    start: datetime | None = None,
    end: datetime | None = None,
    caller: Caller = Depends(current_caller),
) -> StatementResponse:
    authorize_vendor_access(caller, vendor_id)
    return _statement_response(compute_statement(vendor_id, SettlementWindow(start=start, end=end)))


@vendor_router.get("/{vendor_id}/statement/document", response_class=PlainTextResponse)
async def vendor_statement_document(
    vendor_id: str,
    start: datetime | None = None,
    end: datetime | None = None,
    caller: Caller = Depends(current_caller),
) -> PlainTextResponse:
    authorize_vendor_access(caller, vendor_id)
    statement = compute_statement(vendor_id, SettlementWindow(start=start, end=end))
    return PlainTextResponse(render_statement(statement))


@vendor_router.get("/{vendor_id}/orders", response_model=VendorOrderListResponse)
async def get_vendor_orders(
    vendor_id: str,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    caller: Caller = Depends(current_caller),
) -> VendorOrderListResponse:
    authorize_vendor_access(caller, vendor_id)
    result = vendor_orders(vendor_id, page=page, page_size=page_size)
    return VendorOrderListResponse(
        orders=[_vendor_order_response(order) for order in result.orders],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
    )


@vendor_router.get("/{vendor_id}/orders/{order_id}", response_model=VendorOrderResponse)
async def get_vendor_order(
    vendor_id: str, order_id: str, caller: Caller = Depends(current_caller)
) -> VendorOrderResponse:
    authorize_vendor_access(caller, vendor_id)
    return _vendor_order_response(vendor_order(vendor_id, order_id), with_address=True)


@vendor_router.get("/{vendor_id}/overview", response_model=VendorOverviewResponse)
async def get_vendor_overview(vendor_id: str, caller: Caller = Depends(current_caller)) -> VendorOverviewResponse:
    authorize_vendor_access(caller, vendor_id)
    return VendorOverviewResponse(**vendor_overview(vendor_id).__dict__)


# ---------------------------------------------------------------------------
# Settlement Router
# ---------------------------------------------------------------------------
settlement_router = APIRouter(prefix="/settlements", tags=["settlements"])


@settlement_router.get("", response_model=list[StatementResponse])
async def all_statements(
    start: datetime | None = None,
    end: datetime | None = None,
    caller: Caller = Depends(admin_only),
) -> list[StatementResponse]:
    return [_statement_response(s) for s in compute_all_statements(SettlementWindow(start=start, end=end))]
