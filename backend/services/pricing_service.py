import re
from typing import Any, Iterable, Optional

from catalog import ACCESSORY_PRICE, FREE_DELIVERY_THRESHOLD_ML
from schemas import CheckoutState, DeliveryZone, LineItem, OrderTotals

_LEADING_DIGITS = re.compile(r"^\s*(\d+)")


def _parse_int(value: Any) -> int:
    try:
        if value is None or value == "":
            return 0
        return int(value)
    except (TypeError, ValueError):
        return 0


def parse_volume_ml(volume: Any) -> int:
    """Leading integer of a volume label: '250ml' -> 250, garbage -> 0."""
    if isinstance(volume, int):
        return volume
    match = _LEADING_DIGITS.match(str(volume or ""))
    return int(match.group(1)) if match else 0


def compute_subtotal(items: Iterable[LineItem]) -> int:
    return sum(_parse_int(item.price) * _parse_int(item.quantity) for item in items)


def compute_total_volume_ml(items: Iterable[LineItem]) -> int:
    return sum(parse_volume_ml(item.volume) * _parse_int(item.quantity) for item in items)


def compute_delivery_fee(zone: Optional[DeliveryZone], is_free_delivery: bool) -> int:
    if zone is None or is_free_delivery:
        return 0
    return _parse_int(zone.delivery_fee)


def compute_totals(
    items: Iterable[LineItem],
    accessory_quantity: int,
    zone: Optional[DeliveryZone],
    accessory_price: int = ACCESSORY_PRICE,
) -> OrderTotals:
    items = tuple(items)
    subtotal = compute_subtotal(items)
    accessory = _parse_int(accessory_quantity) * _parse_int(accessory_price)
    total_volume_ml = compute_total_volume_ml(items)
    is_free_delivery = total_volume_ml >= FREE_DELIVERY_THRESHOLD_ML
    delivery = compute_delivery_fee(zone, is_free_delivery)
    return OrderTotals(
        subtotal=subtotal,
        accessory=accessory,
        delivery=delivery,
        total=subtotal + accessory + delivery,
        total_volume_ml=total_volume_ml,
        is_free_delivery=is_free_delivery,
    )


def project_totals(state: CheckoutState) -> OrderTotals:
    return compute_totals(state.items, state.accessory_quantity, state.zone)


def is_order_valid(state: CheckoutState) -> bool:
    has_products = any(item.quantity > 0 for item in state.items)
    has_customer_info = bool(
        state.customer.full_name.strip() and state.customer.phone.strip()
    )
    has_zone = state.zone is not None
    return has_products and has_customer_info and has_zone
