import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from repositories.orders_repository import (
    delete_order as repo_delete_order,
    insert_order as repo_insert_order,
    insert_order_items as repo_insert_order_items,
)
from schemas import CheckoutState
from services.pricing_service import is_order_valid, project_totals
from services.summary_service import (
    build_handoff_url,
    build_line_records,
    build_order_record,
    build_order_summary,
)

logger = logging.getLogger("storefront")

SUBMISSION_ERROR_MESSAGE = (
    "Erreur lors de l'enregistrement de la commande. Veuillez réessayer."
)


class OrderValidationError(ValueError):
    pass


class OrderSubmissionError(RuntimeError):
    def __init__(self, stage: str, message: str = SUBMISSION_ERROR_MESSAGE):
        super().__init__(message)
        self.stage = stage


@dataclass(frozen=True)
class SubmissionOutcome:
    order_id: str
    summary: str
    handoff_url: str


async def _compensate(order_id: Any) -> None:
    logger.info("Order %s: deleting order without items", order_id)
    try:
        deleted = await asyncio.to_thread(repo_delete_order, order_id)
    except Exception as exc:
        logger.critical(
            "Order %s: compensation failed, manual cleanup needed: %s", order_id, exc
        )
        return
    if not deleted:
        logger.critical("Order %s: compensation deleted nothing", order_id)


async def submit_order(state: CheckoutState) -> SubmissionOutcome:
    """
    Persists the order and its lines, then builds the messaging handoff.

    The line insert only runs once the order row exists. If it fails the
    order row is deleted again so the store never keeps an order without
    items. Raises OrderValidationError before any I/O when the state is not
    submittable and OrderSubmissionError when the store rejects a write.
    """
    if not is_order_valid(state):
        raise OrderValidationError(
            "Select at least one product, fill in name and phone and choose a municipality."
        )

    totals = project_totals(state)
    record = build_order_record(state, totals)
    lines = build_line_records(state)

    try:
        row = await asyncio.to_thread(repo_insert_order, record.model_dump())
    except Exception as exc:
        logger.error("Order creation failed: %s", exc)
        raise OrderSubmissionError("order") from exc

    raw_id = (row or {}).get("id")
    if raw_id is None:
        logger.error("Order creation returned no id: %s", row)
        raise OrderSubmissionError("order")

    order_id = str(raw_id)
    logger.info("Order %s created (total=%s)", order_id, totals.total)

    try:
        await asyncio.to_thread(
            repo_insert_order_items,
            raw_id,
            [line.model_dump() for line in lines],
        )
    except Exception as exc:
        logger.error("Order %s: adding items failed: %s", order_id, exc)
        await _compensate(raw_id)
        raise OrderSubmissionError("items") from exc

    logger.info("Order %s: %d line(s) stored", order_id, len(lines))

    summary = build_order_summary(state, totals)
    return SubmissionOutcome(
        order_id=order_id,
        summary=summary,
        handoff_url=build_handoff_url(summary),
    )
