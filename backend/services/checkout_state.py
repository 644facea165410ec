"""
Pure transitions over CheckoutState.

Each handler takes the current snapshot and returns a new one; nothing here
mutates its input or touches I/O.
"""

from typing import Callable, Dict, Optional

from catalog import BASE_PRODUCTS, find_zone
from schemas import CheckoutEvent, CheckoutState, CustomerInfo


class UnknownProductError(KeyError):
    def __init__(self, product_id: Optional[str]):
        super().__init__(product_id)
        self.product_id = product_id

    def __str__(self) -> str:
        return f"Unknown product: {self.product_id}"


def initial_state() -> CheckoutState:
    return CheckoutState(items=BASE_PRODUCTS)


def set_product_quantity(
    state: CheckoutState, product_id: Optional[str], quantity: int
) -> CheckoutState:
    if not any(item.id == product_id for item in state.items):
        raise UnknownProductError(product_id)
    items = tuple(
        item.model_copy(update={"quantity": max(0, quantity)})
        if item.id == product_id
        else item
        for item in state.items
    )
    return state.model_copy(update={"items": items})


def _current_quantity(state: CheckoutState, product_id: Optional[str]) -> int:
    for item in state.items:
        if item.id == product_id:
            return item.quantity
    raise UnknownProductError(product_id)


def increment_product(state: CheckoutState, product_id: Optional[str]) -> CheckoutState:
    return set_product_quantity(
        state, product_id, _current_quantity(state, product_id) + 1
    )


def decrement_product(state: CheckoutState, product_id: Optional[str]) -> CheckoutState:
    return set_product_quantity(
        state, product_id, _current_quantity(state, product_id) - 1
    )


def set_accessory_quantity(state: CheckoutState, quantity: int) -> CheckoutState:
    return state.model_copy(update={"accessory_quantity": max(0, quantity)})


def select_zone(state: CheckoutState, municipality: Optional[str]) -> CheckoutState:
    # Unknown names behave like the empty option of the selector.
    return state.model_copy(update={"zone": find_zone(municipality)})


def update_customer(
    state: CheckoutState,
    full_name: Optional[str] = None,
    phone: Optional[str] = None,
) -> CheckoutState:
    customer = CustomerInfo(
        full_name=state.customer.full_name if full_name is None else full_name,
        phone=state.customer.phone if phone is None else phone,
    )
    return state.model_copy(update={"customer": customer})


def reset(state: CheckoutState) -> CheckoutState:
    return initial_state()


def build_state(
    quantities: Optional[Dict[str, int]] = None,
    accessory_quantity: int = 0,
    municipality: Optional[str] = None,
    full_name: str = "",
    phone: str = "",
) -> CheckoutState:
    """Selections applied over the catalog; prices and fees come only from it."""
    state = initial_state()
    for product_id, quantity in (quantities or {}).items():
        state = set_product_quantity(state, product_id, quantity)
    state = set_accessory_quantity(state, accessory_quantity)
    state = select_zone(state, municipality)
    return update_customer(state, full_name, phone)


_HANDLERS: Dict[str, Callable[[CheckoutState, CheckoutEvent], CheckoutState]] = {
    "increment_product": lambda s, e: increment_product(s, e.product_id),
    "decrement_product": lambda s, e: decrement_product(s, e.product_id),
    "set_product_quantity": lambda s, e: set_product_quantity(
        s, e.product_id, e.quantity or 0
    ),
    "increment_accessory": lambda s, e: set_accessory_quantity(
        s, s.accessory_quantity + 1
    ),
    "decrement_accessory": lambda s, e: set_accessory_quantity(
        s, s.accessory_quantity - 1
    ),
    "set_accessory_quantity": lambda s, e: set_accessory_quantity(s, e.quantity or 0),
    "select_zone": lambda s, e: select_zone(s, e.municipality),
    "update_customer": lambda s, e: update_customer(s, e.full_name, e.phone),
    "reset": lambda s, e: reset(s),
}


def apply_event(state: CheckoutState, event: CheckoutEvent) -> CheckoutState:
    return _HANDLERS[event.type](state, event)
