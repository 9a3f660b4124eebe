from __future__ import annotations

from typing import Any

import pytest

from pyparkingcard.const import (
    IDENTITY_UNVERIFIED_MESSAGE,
    LOGIN_REQUIRED_MESSAGE,
    PHONE_UNVERIFIED_MESSAGE,
)
from pyparkingcard.eligibility import BookingEligibilityGate, evaluate_eligibility
from pyparkingcard.models import (
    BookingRequest,
    DurationSelection,
    EligibilityState,
    PhoneVerificationFlow,
    PriceQuote,
    UserRecord,
)


class _RecordingActions:
    def __init__(self) -> None:
        self.notifications: list[str] = []
        self.navigations: list[tuple[str, dict[str, Any] | None]] = []
        self.flows: list[PhoneVerificationFlow] = []
        self.closed = 0

    def notify(self, message: str) -> None:
        self.notifications.append(message)

    def navigate(self, path: str, state: dict[str, Any] | None = None) -> None:
        self.navigations.append((path, state))

    def open_phone_verification(self, flow: PhoneVerificationFlow) -> None:
        self.flows.append(flow)

    def close(self) -> None:
        self.closed += 1


class _UserHolder:
    def __init__(self, user: UserRecord | None) -> None:
        self.user = user
        self.reads = 0

    def __call__(self) -> UserRecord | None:
        self.reads += 1
        return self.user


def _request(duration: DurationSelection | None = None) -> BookingRequest:
    if duration is None:
        price_quote = PriceQuote(per_unit=80.0, duration_hours=None, total=None)
    else:
        price_quote = PriceQuote(per_unit=80.0, duration_hours=2.5, total=200.0)
    return BookingRequest(space_id="space-1", quote=price_quote, duration=duration)


@pytest.mark.parametrize(
    ("user", "expected"),
    [
        (None, EligibilityState.UNAUTHENTICATED),
        (UserRecord(id="u1", is_verified=False), EligibilityState.UNVERIFIED_IDENTITY),
        (
            UserRecord(id="u1", is_verified=False, phone_verified=False),
            EligibilityState.UNVERIFIED_IDENTITY,
        ),
        (
            UserRecord(id="u1", is_verified=True, phone_verified=False),
            EligibilityState.PHONE_UNVERIFIED,
        ),
        (UserRecord(id="u1", is_verified=True, phone_verified=True), EligibilityState.ELIGIBLE),
        (UserRecord(id="u1", is_verified=True, phone_verified=None), EligibilityState.ELIGIBLE),
    ],
)
def test_evaluate_eligibility(user: UserRecord | None, expected: EligibilityState) -> None:
    assert evaluate_eligibility(user) is expected


def test_unauthenticated_redirects_to_login() -> None:
    actions = _RecordingActions()
    gate = BookingEligibilityGate(_UserHolder(None), actions)

    outcome = gate.attempt(_request())

    assert outcome.state is EligibilityState.UNAUTHENTICATED
    assert outcome.allowed is False
    assert outcome.handoff is None
    assert outcome.message == LOGIN_REQUIRED_MESSAGE
    assert actions.notifications == [LOGIN_REQUIRED_MESSAGE]
    assert actions.navigations == [("/login", None)]
    assert actions.closed == 0


def test_unverified_identity_is_blocked_without_handoff() -> None:
    actions = _RecordingActions()
    gate = BookingEligibilityGate(_UserHolder(UserRecord(id="u1", is_verified=False)), actions)

    outcome = gate.attempt(_request())

    assert outcome.state is EligibilityState.UNVERIFIED_IDENTITY
    assert outcome.message == IDENTITY_UNVERIFIED_MESSAGE
    assert actions.notifications == [IDENTITY_UNVERIFIED_MESSAGE]
    assert actions.navigations == []
    assert actions.flows == []


def test_phone_verification_success_reruns_gate() -> None:
    actions = _RecordingActions()
    holder = _UserHolder(UserRecord(id="u1", is_verified=True, phone_verified=False))
    gate = BookingEligibilityGate(holder, actions)

    outcome = gate.attempt(_request())

    assert outcome.state is EligibilityState.PHONE_UNVERIFIED
    assert outcome.message == PHONE_UNVERIFIED_MESSAGE
    assert len(actions.flows) == 1
    assert actions.navigations == []

    holder.user = UserRecord(id="u1", is_verified=True, phone_verified=True)
    retried = actions.flows[0].on_success()

    assert retried.state is EligibilityState.ELIGIBLE
    assert holder.reads == 2
    assert len(actions.navigations) == 1
    assert actions.navigations[0][0] == "/vehicle-details"
    assert actions.closed == 1


def test_phone_verification_rerun_sees_session_loss() -> None:
    actions = _RecordingActions()
    holder = _UserHolder(UserRecord(id="u1", is_verified=True, phone_verified=False))
    gate = BookingEligibilityGate(holder, actions)

    gate.attempt(_request())
    holder.user = None
    retried = actions.flows[0].on_success()

    assert retried.state is EligibilityState.UNAUTHENTICATED
    assert actions.navigations == [("/login", None)]


def test_phone_verification_close_has_no_side_effects() -> None:
    actions = _RecordingActions()
    holder = _UserHolder(UserRecord(id="u1", is_verified=True, phone_verified=False))
    gate = BookingEligibilityGate(holder, actions)

    gate.attempt(_request())
    actions.flows[0].on_close()

    assert actions.navigations == []
    assert actions.closed == 0


def test_eligible_hands_off_booking_context() -> None:
    actions = _RecordingActions()
    user = UserRecord(id="u1", is_verified=True)
    gate = BookingEligibilityGate(_UserHolder(user), actions, booking_path="/book")
    duration = DurationSelection("2024-01-01T10:00:00Z", "2024-01-01T12:30:00Z")

    outcome = gate.attempt(_request(duration))

    assert outcome.allowed is True
    assert outcome.handoff is not None
    assert actions.navigations == [
        (
            "/book",
            {
                "spaceId": "space-1",
                "userId": "u1",
                "startTime": "2024-01-01T10:00:00Z",
                "endTime": "2024-01-01T12:30:00Z",
                "totalAmount": 200.0,
                "perHour": 80.0,
                "durationHours": 2.5,
            },
        )
    ]
    assert actions.closed == 1


def test_handoff_without_duration_is_null_safe() -> None:
    actions = _RecordingActions()
    gate = BookingEligibilityGate(_UserHolder(UserRecord(id="u1", is_verified=True)), actions)

    outcome = gate.attempt(_request())

    assert outcome.handoff is not None
    state = outcome.handoff.as_state()
    assert state["totalAmount"] is None
    assert state["durationHours"] is None
    assert state["startTime"] is None
    assert state["perHour"] == 80.0


def test_user_is_read_on_every_attempt() -> None:
    actions = _RecordingActions()
    holder = _UserHolder(UserRecord(id="u1", is_verified=False))
    gate = BookingEligibilityGate(holder, actions)

    assert gate.attempt(_request()).state is EligibilityState.UNVERIFIED_IDENTITY
    holder.user = UserRecord(id="u1", is_verified=True)
    assert gate.attempt(_request()).state is EligibilityState.ELIGIBLE
    assert holder.reads == 2
