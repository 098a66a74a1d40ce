import logging
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.status.workflow_schemas import PaymentState
from app.schemas.workflow.quote_schemas import TransitionResultOut
from app.services.workflow.transition_service import (
    fetch_quote,
    load_workflow_statuses,
    move_quote,
)

from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.utils.activity_helpers import SYSTEM_ACTOR

logger = logging.getLogger(__name__)

# trigger -> (from status, to status)
AUTOMATIC_TRANSITIONS = {
    "payment_received": ("approved", "paid"),
    "quote_sent": ("pending", "sent"),
    "order_shipped": ("ordered", "shipped"),
    "quote_expired": ("sent", "expired"),
    "auto_calculation": ("pending", "calculated"),
}


async def apply_automatic_transition(
    db: AsyncSession,
    quote_id: int,
    trigger: str,
    metadata: Optional[Dict[str, Any]] = None,
    payment_state: Optional[PaymentState] = None,
) -> Optional[TransitionResultOut]:
    """
    Fire the transition registered for `trigger`.
    Returns None when the quote is not in the trigger's source status.
    Shipments and completions still go through the payment gate, judged on
    `payment_state` (nothing paid when omitted).
    """
    rule = AUTOMATIC_TRANSITIONS.get(trigger)
    if rule is None:
        raise AppException(
            400,
            f"Unknown automatic trigger '{trigger}'",
            ErrorCode.UNKNOWN_TRIGGER,
            details={"trigger": trigger, "known": sorted(AUTOMATIC_TRANSITIONS)},
        )

    from_status, to_status = rule
    q = await fetch_quote(db, quote_id, for_update=True)

    if q.status != from_status:
        logger.debug(
            "Trigger %s skipped for quote %s: status is %s, expected %s",
            trigger,
            q.display_id,
            q.status,
            from_status,
        )
        return None

    statuses = await load_workflow_statuses(db)

    return await move_quote(
        db,
        q,
        to_status,
        statuses,
        trigger=trigger,
        actor=SYSTEM_ACTOR,
        metadata=metadata,
        payment_state=payment_state,
        activity_code=ActivityCode.AUTO_CHANGE_QUOTE_STATUS,
    )
