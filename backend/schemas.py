from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

ZoneClass = Literal["abidjan", "outlying", "outside"]

EventType = Literal[
    "increment_product",
    "decrement_product",
    "set_product_quantity",
    "increment_accessory",
    "decrement_accessory",
    "set_accessory_quantity",
    "select_zone",
    "update_customer",
    "reset",
]


class DeliveryZone(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Municipality name, unique in the catalog")
    zone: ZoneClass
    delivery_fee: int = Field(..., ge=0, description="Flat fee in CFA")


class LineItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    volume: str = Field(..., description="Volume label such as '100ml'")
    price: int = Field(..., ge=0, description="Unit price in CFA")
    quantity: int = Field(default=0, ge=0)


class CustomerInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    full_name: str = ""
    phone: str = ""


class CheckoutState(BaseModel):
    """Snapshot of one visitor's selections; replaced, never mutated."""

    model_config = ConfigDict(frozen=True)

    items: Tuple[LineItem, ...]
    accessory_quantity: int = Field(default=0, ge=0)
    zone: Optional[DeliveryZone] = None
    customer: CustomerInfo = Field(default_factory=CustomerInfo)


class OrderTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: int
    accessory: int
    delivery: int
    total: int
    total_volume_ml: int
    is_free_delivery: bool


class CheckoutEvent(BaseModel):
    type: EventType
    product_id: Optional[str] = None
    quantity: Optional[int] = None
    municipality: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None


class CheckoutView(BaseModel):
    session_id: Optional[str] = None
    state: CheckoutState
    totals: OrderTotals
    is_valid: bool
    can_submit: bool
    submitting: bool = False
    show_confirmation: bool = False


class QuoteRequest(BaseModel):
    quantities: Dict[str, int] = Field(
        default_factory=dict, description="Selected quantity per product id"
    )
    accessory_quantity: int = 0
    municipality: Optional[str] = None
    full_name: str = ""
    phone: str = ""


class QuoteResponse(BaseModel):
    totals: OrderTotals
    is_valid: bool


class OrderRecord(BaseModel):
    full_name: str
    phone: str
    municipality: str
    total: int


class OrderLineRecord(BaseModel):
    product_name: str
    quantity: int
    price: int


class SubmitResponse(BaseModel):
    order_id: str
    summary: str
    handoff_url: str
    session: CheckoutView


class AccessoryInfo(BaseModel):
    name: str
    description: str
    price: int


class ZoneGroup(BaseModel):
    zone: ZoneClass
    label: str
    delivery_fee: int
    municipalities: List[str]


class AssetUrls(BaseModel):
    product_image_url: str
    logo_url: Optional[str] = None


class CatalogResponse(BaseModel):
    products: List[LineItem]
    accessory: AccessoryInfo
    zones: List[ZoneGroup]
    free_delivery_threshold_ml: int
    assets: AssetUrls
