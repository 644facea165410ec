from typing import List
from urllib.parse import quote

from catalog import ACCESSORY_NAME, ACCESSORY_PRICE
from config import settings
from schemas import CheckoutState, OrderLineRecord, OrderRecord, OrderTotals

WHATSAPP_BASE_URL = "https://wa.me"


def format_cfa(amount: int) -> str:
    """
    Format an integer amount with ',' as thousands separator.
    Example: 12500 -> "12,500"
    """
    return f"{amount:,}"


def build_order_record(state: CheckoutState, totals: OrderTotals) -> OrderRecord:
    return OrderRecord(
        full_name=state.customer.full_name.strip(),
        phone=state.customer.phone.strip(),
        municipality=state.zone.name if state.zone else "",
        total=totals.total,
    )


def build_line_records(state: CheckoutState) -> List[OrderLineRecord]:
    lines = [
        OrderLineRecord(product_name=item.name, quantity=item.quantity, price=item.price)
        for item in state.items
        if item.quantity > 0
    ]
    if state.accessory_quantity > 0:
        lines.append(
            OrderLineRecord(
                product_name=ACCESSORY_NAME,
                quantity=state.accessory_quantity,
                price=ACCESSORY_PRICE,
            )
        )
    return lines


def _delivery_line(state: CheckoutState, totals: OrderTotals) -> str:
    if totals.is_free_delivery:
        return "Livraison: GRATUITE (500ml ou plus)"
    zone_name = state.zone.name if state.zone else ""
    return f"Livraison ({zone_name}): {format_cfa(totals.delivery)} CFA"


def build_order_summary(state: CheckoutState, totals: OrderTotals) -> str:
    zone_name = state.zone.name if state.zone else ""
    product_lines = [
        f"{item.name} x{item.quantity} = {format_cfa(item.price * item.quantity)} CFA"
        for item in state.items
        if item.quantity > 0
    ]

    lines = [
        "🛒 COMMANDE SNIPER DDVP",
        "",
        f"👤 Client: {state.customer.full_name.strip()}",
        f"📱 Téléphone: {state.customer.phone.strip()}",
        f"📍 Commune: {zone_name}",
        "",
        "📦 Produits:",
        *product_lines,
        "",
    ]
    if state.accessory_quantity > 0:
        lines.append(
            f"{ACCESSORY_NAME} x{state.accessory_quantity}: "
            f"{format_cfa(totals.accessory)} CFA"
        )
    lines.extend(
        [
            _delivery_line(state, totals),
            "",
            f"💰 TOTAL: {format_cfa(totals.total)} CFA FRANCS",
            "",
            "Merci pour votre commande !",
        ]
    )
    return "\n".join(lines)


def build_handoff_url(summary: str, number: str | None = None) -> str:
    message = quote(summary, safe="")
    return f"{WHATSAPP_BASE_URL}/{number or settings.whatsapp_number}?text={message}"
