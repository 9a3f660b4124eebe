"""Sequential eligibility checks in front of the booking handoff."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol

from .const import (
    BOOKING_PATH,
    IDENTITY_UNVERIFIED_MESSAGE,
    LOGIN_PATH,
    LOGIN_REQUIRED_MESSAGE,
    PHONE_UNVERIFIED_MESSAGE,
)
from .models import (
    BookingHandoff,
    BookingRequest,
    EligibilityState,
    GateOutcome,
    PhoneVerificationFlow,
    UserRecord,
)

_LOGGER = logging.getLogger(__name__)


class BookingActions(Protocol):
    """Side effects the gate triggers in the surrounding application."""

    def notify(self, message: str) -> None: ...

    def navigate(self, path: str, state: dict[str, Any] | None = None) -> None: ...

    def open_phone_verification(self, flow: PhoneVerificationFlow) -> None: ...

    def close(self) -> None: ...


def evaluate_eligibility(user: UserRecord | None) -> EligibilityState:
    if user is None:
        return EligibilityState.UNAUTHENTICATED
    if not user.is_verified:
        return EligibilityState.UNVERIFIED_IDENTITY
    # None means phone verification is not required yet.
    if user.phone_verified is False:
        return EligibilityState.PHONE_UNVERIFIED
    return EligibilityState.ELIGIBLE


class BookingEligibilityGate:
    """Decide on every booking attempt whether the handoff may happen.

    The user is read from ``user_source`` each time, never cached, because
    verification status can change between attempts.
    """

    def __init__(
        self,
        user_source: Callable[[], UserRecord | None],
        actions: BookingActions,
        *,
        login_path: str = LOGIN_PATH,
        booking_path: str = BOOKING_PATH,
    ) -> None:
        self._user_source = user_source
        self._actions = actions
        self._login_path = login_path
        self._booking_path = booking_path

    def attempt(self, request: BookingRequest) -> GateOutcome:
        user = self._user_source()
        state = evaluate_eligibility(user)
        _LOGGER.debug("Booking attempt for %s evaluated as %s", request.space_id, state)
        if user is None or state is EligibilityState.UNAUTHENTICATED:
            self._actions.notify(LOGIN_REQUIRED_MESSAGE)
            self._actions.navigate(self._login_path)
            return GateOutcome(state=state, message=LOGIN_REQUIRED_MESSAGE)
        if state is EligibilityState.UNVERIFIED_IDENTITY:
            self._actions.notify(IDENTITY_UNVERIFIED_MESSAGE)
            return GateOutcome(state=state, message=IDENTITY_UNVERIFIED_MESSAGE)
        if state is EligibilityState.PHONE_UNVERIFIED:
            self._actions.open_phone_verification(self._phone_flow(request))
            return GateOutcome(state=state, message=PHONE_UNVERIFIED_MESSAGE)
        handoff = self._handoff(request, user)
        self._actions.navigate(self._booking_path, handoff.as_state())
        self._actions.close()
        return GateOutcome(state=state, handoff=handoff)

    def _phone_flow(self, request: BookingRequest) -> PhoneVerificationFlow:
        def on_close() -> None:
            _LOGGER.debug("Phone verification for %s closed", request.space_id)

        def on_success() -> GateOutcome:
            # Re-run from the top: the session may have changed meanwhile.
            return self.attempt(request)

        return PhoneVerificationFlow(on_close=on_close, on_success=on_success)

    def _handoff(self, request: BookingRequest, user: UserRecord) -> BookingHandoff:
        duration = request.duration
        return BookingHandoff(
            space_id=request.space_id,
            user_id=user.id,
            start_time=duration.start_time if duration is not None else None,
            end_time=duration.end_time if duration is not None else None,
            total_amount=request.quote.total,
            per_hour=request.quote.per_unit,
            duration_hours=request.quote.duration_hours,
        )
