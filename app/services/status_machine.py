# app/services/status_machine.py
"""
Complaint status workflow.

    RECEIVED ──► IN_PROGRESS ──► RESOLVED ──► CLOSED
        │             │                         ▲
        └─────────────┴──────► REJECTED ────────┘

The whole graph is the STATUS_TRANSITIONS table below. The state machine
is a pure decision function: callers read the current status, ask for a
transition and persist the returned status themselves.
"""

import logging
from typing import Dict, FrozenSet, Union

from app.core.exceptions import FormatError, InvalidStatusTransitionError
from app.models.enums import ComplaintStatus

logger = logging.getLogger(__name__)

StatusLike = Union[ComplaintStatus, str]

STATUS_TRANSITIONS: Dict[ComplaintStatus, FrozenSet[ComplaintStatus]] = {
    ComplaintStatus.RECEIVED: frozenset({ComplaintStatus.IN_PROGRESS, ComplaintStatus.REJECTED}),
    ComplaintStatus.IN_PROGRESS: frozenset({ComplaintStatus.RESOLVED, ComplaintStatus.REJECTED}),
    ComplaintStatus.RESOLVED: frozenset({ComplaintStatus.CLOSED}),
    ComplaintStatus.REJECTED: frozenset({ComplaintStatus.CLOSED}),
    ComplaintStatus.CLOSED: frozenset(),
}

INITIAL_STATUS = ComplaintStatus.RECEIVED


def _coerce(value: StatusLike) -> ComplaintStatus:
    if isinstance(value, ComplaintStatus):
        return value
    try:
        return ComplaintStatus(value)
    except ValueError:
        raise FormatError(f"Unknown complaint status: {value!r}", {"status": repr(value)}) from None


class ComplaintStateMachine:

    @staticmethod
    def initialize() -> ComplaintStatus:
        return INITIAL_STATUS

    @staticmethod
    def allowed_transitions(status: StatusLike) -> FrozenSet[ComplaintStatus]:
        return STATUS_TRANSITIONS[_coerce(status)]

    @staticmethod
    def can_transition(current: StatusLike, requested: StatusLike) -> bool:
        try:
            current_status, requested_status = _coerce(current), _coerce(requested)
        except FormatError:
            return False
        return requested_status in STATUS_TRANSITIONS[current_status]

    @staticmethod
    def transition(current: StatusLike, requested: StatusLike) -> ComplaintStatus:
        """
        Return the status to persist, or raise InvalidStatusTransitionError.

        Self-transitions and anything out of CLOSED are always rejected.
        """
        try:
            current_status, requested_status = _coerce(current), _coerce(requested)
        except FormatError:
            logger.warning("⚠️ Unknown status in transition %r -> %r", current, requested)
            raise InvalidStatusTransitionError(current, requested)

        if requested_status not in STATUS_TRANSITIONS[current_status]:
            logger.warning(
                "⚠️ Rejected status transition %s -> %s",
                current_status.value, requested_status.value,
            )
            raise InvalidStatusTransitionError(current_status, requested_status)

        return requested_status

    @staticmethod
    def is_terminal(status: StatusLike) -> bool:
        """True only for CLOSED; unknown spellings raise FormatError."""
        return not STATUS_TRANSITIONS[_coerce(status)]
