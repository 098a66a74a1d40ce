"""
Configuration store for status settings, backed by the `system_settings`
table: one JSON row per category. Both categories are always written in a
single transaction, so a save either lands completely or not at all.
"""
import json
import logging
from typing import Dict, List, Sequence, Tuple

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.settings.system_setting_models import SystemSetting
from app.models.enums.status_category import StatusCategory, SETTING_KEYS
from app.schemas.status.status_config_schemas import StatusConfig

from app.core.exceptions import (
    AppException,
    PersistenceFailureError,
    StatusVersionConflictError,
)
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.utils.activity_helpers import emit_activity

logger = logging.getLogger(__name__)

SETTING_DESCRIPTIONS = {
    StatusCategory.quote: "Quote status configurations",
    StatusCategory.order: "Order status configurations",
}


def _parse_setting(key: str, value) -> List[StatusConfig]:
    # rows written by older clients hold a JSON string instead of a JSON array
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            raise AppException(
                500,
                f"Stored setting '{key}' is not valid JSON",
                ErrorCode.STATUS_CONFIG_CORRUPT,
                details={"setting_key": key, "error": str(e)},
            )

    if not isinstance(value, list):
        raise AppException(
            500,
            f"Stored setting '{key}' is not a list",
            ErrorCode.STATUS_CONFIG_CORRUPT,
            details={"setting_key": key},
        )

    try:
        statuses = [StatusConfig.model_validate(item) for item in value]
    except ValidationError as e:
        raise AppException(
            500,
            f"Stored setting '{key}' contains malformed statuses",
            ErrorCode.STATUS_CONFIG_CORRUPT,
            details={"setting_key": key, "errors": e.errors(include_url=False)},
        )

    return sorted(statuses, key=lambda s: s.order)


async def get_statuses(
    db: AsyncSession,
    category: StatusCategory,
) -> Tuple[List[StatusConfig], int]:
    """Statuses of one category sorted by order, plus the row version (0 if never saved)."""
    key = SETTING_KEYS[category]
    row = await db.scalar(
        select(SystemSetting).where(SystemSetting.setting_key == key)
    )
    if row is None:
        return [], 0
    return _parse_setting(key, row.setting_value), row.version


async def get_all_statuses(
    db: AsyncSession,
) -> Tuple[List[StatusConfig], List[StatusConfig], Dict[str, int]]:
    quote_statuses, quote_version = await get_statuses(db, StatusCategory.quote)
    order_statuses, order_version = await get_statuses(db, StatusCategory.order)
    versions = {
        SETTING_KEYS[StatusCategory.quote]: quote_version,
        SETTING_KEYS[StatusCategory.order]: order_version,
    }
    return quote_statuses, order_statuses, versions


async def put_all(
    db: AsyncSession,
    quote_statuses: Sequence[StatusConfig],
    order_statuses: Sequence[StatusConfig],
    *,
    expected_versions: Dict[str, int] | None,
    actor: str | None = None,
    changes: str = "",
) -> Dict[str, int]:
    """
    Write both categories in one transaction and return the new versions.

    `expected_versions` maps setting_key to the version the caller loaded;
    a mismatch means another session saved in between and nothing is
    written. Pass None to overwrite unconditionally.
    """
    payloads = {
        StatusCategory.quote: [s.to_store() for s in quote_statuses],
        StatusCategory.order: [s.to_store() for s in order_statuses],
    }

    try:
        result = await db.execute(
            select(SystemSetting)
            .where(SystemSetting.setting_key.in_(list(SETTING_KEYS.values())))
            .with_for_update()
        )
        rows = {r.setting_key: r for r in result.scalars()}

        new_versions: Dict[str, int] = {}
        for category, payload in payloads.items():
            key = SETTING_KEYS[category]
            row = rows.get(key)
            current_version = row.version if row else 0

            if expected_versions is not None and expected_versions.get(key, 0) != current_version:
                raise StatusVersionConflictError(key, expected_versions.get(key, 0), current_version)

            if row is None:
                row = SystemSetting(
                    setting_key=key,
                    setting_value=payload,
                    description=SETTING_DESCRIPTIONS[category],
                    version=1,
                    updated_by=actor,
                )
                db.add(row)
            else:
                row.setting_value = payload
                row.version = current_version + 1
                row.updated_by = actor

            new_versions[key] = current_version + 1

        await emit_activity(
            db,
            actor=actor,
            code=ActivityCode.SAVE_STATUS_SETTINGS,
            changes=changes or "no changes",
        )

        await db.commit()

    except AppException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception("Status settings write failed")
        raise PersistenceFailureError(
            "Could not save status settings. Your changes were kept; please retry.",
            details={"error": e.__class__.__name__},
        )

    logger.info(
        "Status settings saved",
        extra={"versions": new_versions, "actor": actor},
    )
    return new_versions
