"""
Payment gates for payment-dependent actions (shipping, completion).

Every decision is a GateResult carrying a GateReason when blocked, so the
caller can tell the customer what is missing instead of just "no".
"""
import logging
from typing import Optional

from app.models.enums.gate_reason import GateReason
from app.models.enums.status_action import StatusAction
from app.models.enums.payment_rules import PaymentType, PaymentRequiredBefore
from app.schemas.status.status_config_schemas import StatusConfig
from app.schemas.status.workflow_schemas import (
    GateResult,
    MilestoneEvaluation,
    PaymentState,
)

logger = logging.getLogger(__name__)

FULL_PAYMENT = 100.0
DEFAULT_MIN_PAYMENT_PERCENTAGE = 50.0

# Editor defaults for statuses saved without payment settings
DEFAULT_PAYMENT_TYPE = PaymentType.prepaid
DEFAULT_PAYMENT_REQUIRED_BEFORE = PaymentRequiredBefore.shipping

ALLOWED = GateResult(allowed=True)


def _blocked(reason: GateReason, message: str) -> GateResult:
    return GateResult(allowed=False, reason=reason, message=message)


def _insufficient(paid: float, required: float) -> GateResult:
    return _blocked(
        GateReason.insufficient_payment,
        f"{required:g}% payment required, {paid:g}% received",
    )


def min_payment_percentage(status: StatusConfig) -> float:
    if status.min_payment_percentage is None:
        return DEFAULT_MIN_PAYMENT_PERCENTAGE
    return status.min_payment_percentage


def can_proceed_to_ship(status: StatusConfig, payment_state: PaymentState) -> GateResult:
    required_before = status.payment_required_before or DEFAULT_PAYMENT_REQUIRED_BEFORE
    payment_type = status.payment_type or DEFAULT_PAYMENT_TYPE
    paid = payment_state.percentage_paid

    if required_before == PaymentRequiredBefore.never:
        return ALLOWED

    if payment_type in (PaymentType.partial, PaymentType.mixed):
        required = min_payment_percentage(status)
        if paid >= required:
            return ALLOWED
        return _insufficient(paid, required)

    if payment_type == PaymentType.cod and status.allow_cod is True:
        if status.cod_verification_required is True and not payment_state.phone_verified:
            return _blocked(
                GateReason.verification_required,
                "Phone verification is required for cash on delivery",
            )
        return ALLOWED

    # prepaid, or COD configured without allowCOD: full payment up front
    if paid >= FULL_PAYMENT:
        return ALLOWED
    return _insufficient(paid, FULL_PAYMENT)


def evaluate_milestones(status: StatusConfig, payment_state: PaymentState) -> MilestoneEvaluation:
    satisfied = []
    unsatisfied_required = []

    for milestone in status.payment_milestones:
        if payment_state.percentage_paid >= milestone.percentage:
            satisfied.append(milestone)
        elif milestone.required:
            unsatisfied_required.append(milestone)

    return MilestoneEvaluation(
        satisfied=satisfied,
        unsatisfied_required=unsatisfied_required,
    )


def can_proceed_to_complete(status: StatusConfig, payment_state: PaymentState) -> GateResult:
    """Shipping gate, then required milestones, then COD collection."""
    result = can_proceed_to_ship(status, payment_state)
    if not result.allowed:
        return result

    milestones = evaluate_milestones(status, payment_state)
    if not milestones.all_required_met:
        labels = ", ".join(
            m.label or f"{m.percentage:g}%" for m in milestones.unsatisfied_required
        )
        return _blocked(
            GateReason.milestone_unmet,
            f"Required payment milestones not met: {labels}",
        )

    if (
        status.payment_type == PaymentType.cod
        and status.cod_collection_required is True
        and not payment_state.cod_collected
    ):
        return _blocked(
            GateReason.cod_collection_required,
            "Cash on delivery has not been collected",
        )

    return ALLOWED


# =====================================================
# MOVES
# =====================================================

GATED_ACTIONS = (StatusAction.ship, StatusAction.complete)


def implied_action(
    current: StatusConfig | None,
    target: StatusConfig | None,
) -> Optional[StatusAction]:
    """
    Payment-dependent action performed by moving from `current` to `target`.

    Reaching a successful terminal status completes the entity. Leaving a
    status that allows shipping for a live status that does not is a
    shipment. Cancellations and other moves carry no gate.
    """
    if current is None or target is None:
        return None
    if target.is_terminal and target.is_successful is True:
        return StatusAction.complete
    if current.allow_shipping is True and not target.is_terminal and target.allow_shipping is not True:
        return StatusAction.ship
    return None


def evaluate_move(
    current: StatusConfig | None,
    target: StatusConfig | None,
    payment_state: PaymentState,
    action: StatusAction | None = None,
) -> Optional[GateResult]:
    """
    Gate for a status change, or None when the move is not payment-dependent.
    An explicit ship/complete action is always gated; otherwise the action
    is read from the move itself.
    """
    if action not in GATED_ACTIONS:
        action = implied_action(current, target)
    if current is None or action is None:
        return None

    if action == StatusAction.ship:
        result = can_proceed_to_ship(current, payment_state)
    else:
        result = can_proceed_to_complete(current, payment_state)

    if not result.allowed:
        logger.info(
            "Payment gate blocked %s from %s: %s",
            action.value,
            current.name,
            result.reason.value,
        )
    return result
