import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.constants.default_statuses import DEFAULT_QUOTE_STATUSES, DEFAULT_ORDER_STATUSES
from app.constants.activity_codes import ActivityCode
from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
from app.models.enums.status_category import SETTING_KEYS
from app.schemas.status.status_config_schemas import StatusConfig, StatusInitializeData
from app.services.status import status_store
from app.utils.activity_helpers import emit_activity

logger = logging.getLogger(__name__)


def default_statuses() -> tuple[list[StatusConfig], list[StatusConfig]]:
    return (
        [StatusConfig.model_validate(s) for s in DEFAULT_QUOTE_STATUSES],
        [StatusConfig.model_validate(s) for s in DEFAULT_ORDER_STATUSES],
    )


async def initialize_status_settings(
    db: AsyncSession,
    *,
    force: bool = False,
    actor: str | None = None,
) -> StatusInitializeData:
    """Write the default configurations; refuses to overwrite saved ones unless forced."""
    # forced runs skip the read so a corrupt store can be repaired
    if not force:
        _, _, versions = await status_store.get_all_statuses(db)
        if any(versions.values()):
            raise AppException(
                409,
                "Status settings are already initialized",
                ErrorCode.STATUS_CONFIG_ALREADY_INITIALIZED,
                details={"versions": versions},
            )

    quote_statuses, order_statuses = default_statuses()

    # the activity row is added before put_all commits, so both land together
    await emit_activity(
        db,
        actor=actor,
        code=ActivityCode.INITIALIZE_STATUS_SETTINGS,
        quote_count=len(quote_statuses),
        order_count=len(order_statuses),
    )

    await status_store.put_all(
        db,
        quote_statuses,
        order_statuses,
        expected_versions=None if force else {k: 0 for k in SETTING_KEYS.values()},
        actor=actor,
        changes="defaults restored" if force else "defaults initialized",
    )

    logger.info(
        "Default status settings written (%s quote, %s order)",
        len(quote_statuses),
        len(order_statuses),
    )

    return StatusInitializeData(
        initialized=True,
        quote_count=len(quote_statuses),
        order_count=len(order_statuses),
    )
