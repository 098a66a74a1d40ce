from datetime import datetime, timedelta, timezone
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import QUOTE_EXPIRED_STATUS
from app.models.workflow.quote_models import Quote
from app.services.status.transition_validator import is_transition_allowed
from app.services.workflow.transition_service import load_workflow_statuses, move_quote
from app.constants.activity_codes import ActivityCode
from app.models.enums.status_category import StatusCategory
from app.utils.activity_helpers import SYSTEM_ACTOR

logger = logging.getLogger(__name__)


async def auto_expire_quotes(db: AsyncSession, now: datetime | None = None) -> int:
    """
    Expire quotes that sat in a status longer than its `auto_expire_hours`.
    Statuses without an edge to the expired status are left alone.
    """
    now = now or datetime.now(timezone.utc)
    statuses = await load_workflow_statuses(db)

    expiring = [
        s for s in statuses
        if s.category == StatusCategory.quote
        and s.is_active
        and s.auto_expire_hours
        and is_transition_allowed(s.name, QUOTE_EXPIRED_STATUS, statuses)
    ]

    expired = 0
    for status in expiring:
        cutoff = now - timedelta(hours=status.auto_expire_hours)

        result = await db.execute(
            select(Quote)
            .where(
                Quote.status == status.name,
                Quote.is_deleted.is_(False),
                Quote.status_changed_at < cutoff,
            )
            .order_by(Quote.id)
        )
        quotes = result.scalars().all()

        for q in quotes:
            await move_quote(
                db,
                q,
                QUOTE_EXPIRED_STATUS,
                statuses,
                trigger="auto_expire",
                actor=SYSTEM_ACTOR,
                activity_code=ActivityCode.EXPIRE_QUOTE,
                hours=status.auto_expire_hours,
            )
            expired += 1

    if expired:
        logger.info("Expired %s quote(s)", expired)
    return expired
