from typing import Any, Dict, List

from supabase_client import get_supabase

ORDERS_TABLE = "orders"
ORDER_ITEMS_TABLE = "order_items"


def insert_order(record: Dict[str, Any]) -> Dict[str, Any]:
    response = get_supabase().table(ORDERS_TABLE).insert(record).execute()
    if not response.data or response.data[0].get("id") is None:
        raise RuntimeError("Failed to store order")
    return response.data[0]


def insert_order_items(order_id: Any, items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    rows = [{**item, "order_id": order_id} for item in items]
    response = get_supabase().table(ORDER_ITEMS_TABLE).insert(rows).execute()
    if not response.data:
        raise RuntimeError("Failed to store order items")
    return response.data


def delete_order(order_id: Any) -> bool:
    response = get_supabase().table(ORDERS_TABLE).delete().eq("id", order_id).execute()
    return bool(response.data)
