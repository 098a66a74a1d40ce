"""
Quote lifecycle: creation in the default quote status and status changes
checked against the configured workflow.

A status change is committed first; the history row is written in its own
transaction afterwards so a history failure never undoes a transition that
already happened.
"""
from datetime import datetime, timezone
import logging
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.workflow.quote_models import Quote
from app.models.workflow.status_transition_models import StatusTransition
from app.models.workflow.notification_models import NotificationOutbox
from app.models.enums.status_action import StatusAction
from app.models.enums.status_category import StatusCategory

from app.schemas.status.status_config_schemas import StatusConfig
from app.schemas.status.workflow_schemas import PaymentState
from app.schemas.workflow.quote_schemas import (
    QuoteCreate,
    QuoteOut,
    QuoteTransitionRequest,
    NotificationOut,
    TransitionResultOut,
    StatusTransitionOut,
    QuoteHistoryData,
)

from app.services.status import status_store
from app.services.status import payment_gate
from app.services.status.permission_resolver import is_action_permitted
from app.services.status.transition_validator import find_status, is_transition_allowed
from app.services.status.status_queries import get_default_quote_status, should_trigger_email

from app.core.exceptions import (
    AppException,
    InvalidTransitionError,
    ActionNotPermittedError,
    PaymentGateBlockedError,
)
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.utils.activity_helpers import emit_activity

logger = logging.getLogger(__name__)


def _map_quote(q: Quote) -> QuoteOut:
    return QuoteOut(
        id=q.id,
        display_id=q.display_id,
        customer_email=q.customer_email,
        status=q.status,
        status_changed_at=q.status_changed_at,
        version=q.version,
        created_at=q.created_at,
        updated_at=q.updated_at,
    )


async def fetch_quote(
    db: AsyncSession,
    quote_id: int,
    *,
    for_update: bool = False,
) -> Quote:
    stmt = select(Quote).where(
        Quote.id == quote_id,
        Quote.is_deleted.is_(False),
    )
    if for_update:
        stmt = stmt.with_for_update()

    q = (await db.execute(stmt)).scalar_one_or_none()
    if not q:
        raise AppException(404, "Quote not found", ErrorCode.QUOTE_NOT_FOUND)
    return q


async def load_workflow_statuses(db: AsyncSession) -> List[StatusConfig]:
    """Quote statuses followed by order statuses, as the validator expects."""
    quote_statuses, order_statuses, _ = await status_store.get_all_statuses(db)
    return quote_statuses + order_statuses


async def _record_history(
    db: AsyncSession,
    quote_id: int,
    from_status: str | None,
    to_status: str,
    *,
    trigger: str,
    actor: str | None,
    metadata: Dict[str, Any] | None,
) -> None:
    try:
        db.add(
            StatusTransition(
                quote_id=quote_id,
                from_status=from_status,
                to_status=to_status,
                trigger=trigger,
                changed_by=actor,
                transition_metadata=metadata,
            )
        )
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.warning(
            "Status history not recorded for quote %s (%s -> %s)",
            quote_id,
            from_status,
            to_status,
            exc_info=True,
        )


async def move_quote(
    db: AsyncSession,
    q: Quote,
    to_status: str,
    statuses: List[StatusConfig],
    *,
    trigger: str,
    actor: str | None,
    metadata: Dict[str, Any] | None = None,
    payment_state: PaymentState | None = None,
    action: StatusAction | None = None,
    activity_code: ActivityCode = ActivityCode.CHANGE_QUOTE_STATUS,
    **activity_context,
) -> TransitionResultOut:
    """
    Move an already loaded quote to `to_status` and commit.
    Checks the graph, then the payment gate of any shipment or completion
    the move performs. Action permissions belong to the caller.
    """
    from_status = q.status

    if not is_transition_allowed(from_status, to_status, statuses):
        raise InvalidTransitionError(from_status, to_status)

    gate = payment_gate.evaluate_move(
        find_status(from_status, statuses),
        find_status(to_status, statuses),
        payment_state or PaymentState(),
        action=action,
    )
    if gate is not None and not gate.allowed:
        raise PaymentGateBlockedError(gate.reason.value, gate.message)

    now = datetime.now(timezone.utc)
    q.status = to_status
    q.status_changed_at = now
    q.updated_at = now
    q.version += 1

    await emit_activity(
        db,
        actor=actor,
        code=activity_code,
        target_name=q.display_id,
        old_status=from_status,
        new_status=to_status,
        trigger=trigger,
        **activity_context,
    )

    notification = None
    if should_trigger_email(to_status, statuses):
        target = find_status(to_status, statuses)
        db.add(
            NotificationOutbox(
                entity_id=q.id,
                status_name=to_status,
                email_template=target.email_template,
            )
        )
        notification = NotificationOut(
            entity_id=q.id,
            status_name=to_status,
            email_template=target.email_template,
        )

    await db.flush()
    quote_out = _map_quote(q)

    await db.commit()

    logger.info(
        "Quote %s moved %s -> %s (%s)",
        q.display_id,
        from_status,
        to_status,
        trigger,
    )

    await _record_history(
        db,
        q.id,
        from_status,
        to_status,
        trigger=trigger,
        actor=actor,
        metadata=metadata,
    )

    return TransitionResultOut(
        quote=quote_out,
        from_status=from_status,
        to_status=to_status,
        notification=notification,
    )


# =====================================================
# PUBLIC OPERATIONS
# =====================================================

async def create_quote(
    db: AsyncSession,
    payload: QuoteCreate,
) -> QuoteOut:
    exists = await db.scalar(
        select(Quote.id).where(Quote.display_id == payload.display_id)
    )
    if exists:
        raise AppException(
            409,
            f"Quote '{payload.display_id}' already exists",
            ErrorCode.QUOTE_DISPLAY_ID_EXISTS,
        )

    quote_statuses, _ = await status_store.get_statuses(db, StatusCategory.quote)
    initial = get_default_quote_status(quote_statuses)
    if initial is None:
        raise AppException(
            409,
            "No active quote status is configured",
            ErrorCode.STATUS_NOT_FOUND,
        )

    now = datetime.now(timezone.utc)
    q = Quote(
        display_id=payload.display_id,
        customer_email=payload.customer_email,
        status=initial,
        status_changed_at=now,
        created_at=now,
        updated_at=None,
        version=1,
    )
    db.add(q)

    await db.flush()

    await emit_activity(
        db,
        actor=payload.actor,
        code=ActivityCode.CREATE_QUOTE,
        target_name=q.display_id,
        new_status=initial,
    )

    result = _map_quote(q)
    await db.commit()

    await _record_history(
        db,
        q.id,
        None,
        initial,
        trigger="created",
        actor=payload.actor,
        metadata=None,
    )

    return result


async def get_quote(db: AsyncSession, quote_id: int) -> QuoteOut:
    return _map_quote(await fetch_quote(db, quote_id))


async def apply_transition(
    db: AsyncSession,
    quote_id: int,
    payload: QuoteTransitionRequest,
) -> TransitionResultOut:
    q = await fetch_quote(db, quote_id, for_update=True)

    if q.version != payload.version:
        raise AppException(
            409,
            "Quote was changed by another session",
            ErrorCode.QUOTE_VERSION_CONFLICT,
            details={"expected_version": payload.version, "current_version": q.version},
        )

    statuses = await load_workflow_statuses(db)
    current = find_status(q.status, statuses)

    if payload.action is not None and not is_action_permitted(current, payload.action):
        raise ActionNotPermittedError(q.status, payload.action.value)

    return await move_quote(
        db,
        q,
        payload.to_status,
        statuses,
        trigger=payload.trigger,
        actor=payload.actor,
        metadata=payload.metadata,
        payment_state=payload.payment_state,
        action=payload.action,
    )


async def list_history(db: AsyncSession, quote_id: int) -> QuoteHistoryData:
    await fetch_quote(db, quote_id)

    result = await db.execute(
        select(StatusTransition)
        .where(StatusTransition.quote_id == quote_id)
        .order_by(StatusTransition.id)
    )

    return QuoteHistoryData(
        quote_id=quote_id,
        items=[
            StatusTransitionOut(
                id=t.id,
                from_status=t.from_status,
                to_status=t.to_status,
                trigger=t.trigger,
                changed_by=t.changed_by,
                metadata=t.transition_metadata,
                created_at=t.created_at,
            )
            for t in result.scalars()
        ],
    )
