"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), kept separate from
internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from ordering.order.order import OrderStatus


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class CartLineSchema(BaseModel):
    product_id: str
    quantity: int = Field(ge=1)
    unit_price: float = Field(ge=0)
    total_price: float = Field(ge=0)
    options: dict = Field(default_factory=dict)


class CartPricingRequest(BaseModel):
    items: list[CartLineSchema]
    total_desi: float | None = Field(default=None, ge=0)


class CartPricingResponse(BaseModel):
    total_amount: float
    total_count: int
    has_free_shipping: bool
    shipping_cost: float
    remaining_for_free_shipping: float
    grand_total: float
    parcel_shipping_quote: float | None = None


# ---------------------------------------------------------------------------
# Order requests
# ---------------------------------------------------------------------------
class CheckoutItemSchema(BaseModel):
    """Loosely typed on purpose: amounts are sanitized by the ordering domain."""

    product_id: str
    product_name: str | None = None
    quantity: int | float | str | None = 1
    unit_price: float | str | None = 0
    total_price: float | str | None = 0
    options: dict | None = None
    image_url: str | None = None
    uploaded_file_url: str | None = None


class CheckoutRequest(BaseModel):
    address_id: str | None = None
    items: list[CheckoutItemSchema] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "address_id": "addr-001",
                    "items": [
                        {
                            "product_id": "prod-001",
                            "product_name": "Business Cards (500)",
                            "quantity": 2,
                            "unit_price": 50.0,
                            "total_price": 100.0,
                            "options": {"paper": "350gsm matte"},
                        }
                    ],
                }
            ]
        }
    }


class SetStatusRequest(BaseModel):
    status: OrderStatus


class AssignTrackingRequest(BaseModel):
    shipping_company: str = Field(min_length=1, max_length=100)
    tracking_number: str = Field(min_length=1, max_length=255)


class ScanRequest(BaseModel):
    barcode: str


# ---------------------------------------------------------------------------
# Order responses
# ---------------------------------------------------------------------------
class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    total_price: float
    vendor_id: str | None = None
    options: dict = Field(default_factory=dict)
    image_url: str | None = None
    uploaded_file_url: str | None = None


class AddressResponse(BaseModel):
    address_id: str
    title: str | None = None
    city: str
    district: str | None = None
    line1: str
    line2: str | None = None
    postal_code: str | None = None


class OrderResponse(BaseModel):
    id: str
    barcode: str
    buyer_id: str
    address_id: str
    address: AddressResponse | None = None
    status: str
    payment_status: str
    total_amount: float
    shipping_company: str | None = None
    tracking_number: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    items: list[OrderItemResponse]


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    total: int
    page: int
    page_size: int


class ScanResponse(BaseModel):
    message: str
    order: OrderResponse


class ProgressResponse(BaseModel):
    step_index: int | None = None
    total_steps: int
    percent: float | None = None
    badge: str | None = None


class TrackedItemResponse(BaseModel):
    product_name: str
    quantity: int
    image_url: str | None = None


class TrackingResponse(BaseModel):
    barcode: str
    status: str
    progress: ProgressResponse
    created_at: datetime | None = None
    updated_at: datetime | None = None
    shipping_company: str | None = None
    tracking_number: str | None = None
    items: list[TrackedItemResponse]


class StatusResponse(BaseModel):
    status: str = "ok"


# ---------------------------------------------------------------------------
# Vendors & settlement
# ---------------------------------------------------------------------------
class RegisterVendorRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    commission_rate: float = Field(default=0.0, ge=0, le=100)
    owner_id: str | None = None


class ChangeCommissionRequest(BaseModel):
    commission_rate: float


class VendorIdResponse(BaseModel):
    vendor_id: str


class StatementLineResponse(BaseModel):
    order_id: str
    barcode: str
    ordered_at: datetime | None = None
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    total_price: float


class StatementResponse(BaseModel):
    vendor_id: str
    vendor_name: str
    commission_rate: float
    total_revenue: float
    commission_amount: float
    net_payable: float
    start: datetime | None = None
    end: datetime | None = None
    lines: list[StatementLineResponse]


class VendorOrderResponse(BaseModel):
    order_id: str
    barcode: str
    status: str
    created_at: datetime | None = None
    items: list[OrderItemResponse]
    vendor_total: float
    address: AddressResponse | None = None


class VendorOrderListResponse(BaseModel):
    orders: list[VendorOrderResponse]
    total: int
    page: int
    page_size: int


class VendorOverviewResponse(BaseModel):
    vendor_id: str
    total_sales: float
    pending_items: int
    earnings: float
    commission_rate: float
