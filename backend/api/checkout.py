from fastapi import APIRouter, HTTPException, status

from schemas import (
    CheckoutEvent,
    CheckoutView,
    QuoteRequest,
    QuoteResponse,
    SubmitResponse,
)
from services.checkout_session import (
    CheckoutSession,
    SubmissionInProgressError,
    session_registry,
)
from services.checkout_state import UnknownProductError, build_state
from services.order_service import OrderSubmissionError, OrderValidationError
from services.pricing_service import is_order_valid, project_totals

router = APIRouter(prefix="/api/checkout", tags=["checkout"])


def _get_session(session_id: str) -> CheckoutSession:
    session = session_registry.get(session_id)
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return session


@router.post("/quote", response_model=QuoteResponse)
async def quote(payload: QuoteRequest) -> QuoteResponse:
    try:
        state = build_state(
            payload.quantities,
            payload.accessory_quantity,
            payload.municipality,
            payload.full_name,
            payload.phone,
        )
    except UnknownProductError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return QuoteResponse(totals=project_totals(state), is_valid=is_order_valid(state))


@router.post(
    "/sessions", response_model=CheckoutView, status_code=status.HTTP_201_CREATED
)
async def create_session() -> CheckoutView:
    return session_registry.create().view()


@router.get("/sessions/{session_id}", response_model=CheckoutView)
async def read_session(session_id: str) -> CheckoutView:
    return _get_session(session_id).view()


@router.post("/sessions/{session_id}/events", response_model=CheckoutView)
async def post_event(session_id: str, event: CheckoutEvent) -> CheckoutView:
    session = _get_session(session_id)
    try:
        return session.dispatch(event)
    except UnknownProductError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc


@router.post("/sessions/{session_id}/submit", response_model=SubmitResponse)
async def submit(session_id: str) -> SubmitResponse:
    session = _get_session(session_id)
    try:
        outcome = await session.submit()
    except SubmissionInProgressError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except OrderValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except OrderSubmissionError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    return SubmitResponse(
        order_id=outcome.order_id,
        summary=outcome.summary,
        handoff_url=outcome.handoff_url,
        session=session.view(),
    )


@router.post("/sessions/{session_id}/confirmation/dismiss", response_model=CheckoutView)
async def dismiss_confirmation(session_id: str) -> CheckoutView:
    return _get_session(session_id).dismiss_confirmation()
