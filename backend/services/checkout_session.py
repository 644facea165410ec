import logging
import time
import uuid
from collections import OrderedDict
from typing import Callable, Dict, Optional

from config import settings
from schemas import CheckoutEvent, CheckoutState, CheckoutView
from services import order_service
from services.checkout_state import apply_event, initial_state
from services.order_service import OrderValidationError, SubmissionOutcome
from services.pricing_service import is_order_valid, project_totals

logger = logging.getLogger("storefront")


class SubmissionInProgressError(RuntimeError):
    pass


class CheckoutSession:
    """Owns one visitor's checkout state and the submission flags."""

    def __init__(self, session_id: str, state: Optional[CheckoutState] = None) -> None:
        self.session_id = session_id
        self._state = state or initial_state()
        self._submitting = False
        self._show_confirmation = False

    @property
    def state(self) -> CheckoutState:
        return self._state

    @property
    def submitting(self) -> bool:
        return self._submitting

    @property
    def show_confirmation(self) -> bool:
        return self._show_confirmation

    @property
    def can_submit(self) -> bool:
        return is_order_valid(self._state) and not self._submitting

    def view(self) -> CheckoutView:
        return CheckoutView(
            session_id=self.session_id,
            state=self._state,
            totals=project_totals(self._state),
            is_valid=is_order_valid(self._state),
            can_submit=self.can_submit,
            submitting=self._submitting,
            show_confirmation=self._show_confirmation,
        )

    def dispatch(self, event: CheckoutEvent) -> CheckoutView:
        self._state = apply_event(self._state, event)
        return self.view()

    def dismiss_confirmation(self) -> CheckoutView:
        self._show_confirmation = False
        return self.view()

    async def submit(self) -> SubmissionOutcome:
        # Check and set happen before the first await, so a second call on the
        # same loop always sees the flag.
        if self._submitting:
            raise SubmissionInProgressError("A submission is already in progress.")
        if not is_order_valid(self._state):
            raise OrderValidationError(
                "Select at least one product, fill in name and phone and choose a municipality."
            )

        self._submitting = True
        try:
            outcome = await order_service.submit_order(self._state)
        finally:
            self._submitting = False

        self._state = initial_state()
        self._show_confirmation = True
        logger.info("Session %s: order %s handed off", self.session_id, outcome.order_id)
        return outcome


class SessionRegistry:
    """
    In-memory sessions keyed by id, bounded by idle age and by count.

    Every ``get`` refreshes the session's last-seen time. Sessions idle for
    longer than ``ttl_seconds`` are dropped; when ``max_sessions`` is reached
    the least recently seen session is evicted. A session with a submission
    in flight is never evicted.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        max_sessions: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds or settings.session_ttl_seconds
        self.max_sessions = max_sessions or settings.max_sessions
        self._clock = clock
        self._sessions: "OrderedDict[str, CheckoutSession]" = OrderedDict()
        self._last_seen: Dict[str, float] = {}

    def create(self) -> CheckoutSession:
        self.purge_expired()
        while len(self._sessions) >= self.max_sessions:
            if not self._evict_oldest():
                break
        session = CheckoutSession(uuid.uuid4().hex)
        self._sessions[session.session_id] = session
        self._last_seen[session.session_id] = self._clock()
        return session

    def get(self, session_id: str) -> Optional[CheckoutSession]:
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if self._is_expired(session_id) and not session.submitting:
            self._remove(session_id)
            return None
        self._last_seen[session_id] = self._clock()
        self._sessions.move_to_end(session_id)
        return session

    def purge_expired(self) -> int:
        expired = [
            session_id
            for session_id, session in self._sessions.items()
            if self._is_expired(session_id) and not session.submitting
        ]
        for session_id in expired:
            self._remove(session_id)
        if expired:
            logger.info("Dropped %d idle checkout session(s)", len(expired))
        return len(expired)

    def _is_expired(self, session_id: str) -> bool:
        return self._clock() - self._last_seen[session_id] > self.ttl_seconds

    def _evict_oldest(self) -> bool:
        for session_id, session in self._sessions.items():
            if not session.submitting:
                self._remove(session_id)
                return True
        return False

    def _remove(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)
        self._last_seen.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)


session_registry = SessionRegistry()
