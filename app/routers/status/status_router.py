from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.utils.response import success_response, APIResponse, error_responses

from app.models.enums.status_category import StatusCategory
from app.schemas.status.status_config_schemas import (
    StatusSettingsSave,
    StatusSettingsData,
    StatusListData,
    StatusDefaultsData,
    StatusInitializeData,
)
from app.schemas.status.workflow_schemas import (
    PermissionSet,
    PaymentState,
    PaymentGateData,
    TransitionCheck,
    TransitionCheckData,
    ReachableStatusesData,
)

from app.services.status import status_store, payment_gate, permission_resolver
from app.services.status.status_registry import StatusRegistry
from app.services.status.status_initializer import initialize_status_settings
from app.services.status.status_queries import (
    get_default_quote_status,
    find_default_order_status,
    get_statuses_for_quotes_list,
    get_statuses_for_orders_list,
)
from app.services.status.transition_validator import (
    find_status,
    is_transition_allowed,
    list_reachable_statuses,
)
from app.services.workflow.transition_service import load_workflow_statuses

router = APIRouter(
    prefix="/statuses",
    tags=["Status Settings"],
)


# =====================================================
# TRANSITIONS
# =====================================================

@router.get(
    "/transitions/{name}",
    response_model=APIResponse[ReachableStatusesData],
)
async def list_reachable_statuses_api(
    name: str,
    db: AsyncSession = Depends(get_db),
):
    statuses = await load_workflow_statuses(db)
    return success_response(
        "Reachable statuses retrieved successfully",
        ReachableStatusesData(
            current_status=name,
            reachable=list_reachable_statuses(name, statuses),
        ),
    )


@router.post(
    "/transitions/check",
    response_model=APIResponse[TransitionCheckData],
)
async def check_transition_api(
    payload: TransitionCheck,
    db: AsyncSession = Depends(get_db),
):
    statuses = await load_workflow_statuses(db)
    return success_response(
        "Transition checked",
        TransitionCheckData(
            from_status=payload.from_status,
            to_status=payload.to_status,
            allowed=is_transition_allowed(payload.from_status, payload.to_status, statuses),
        ),
    )


# =====================================================
# SETTINGS
# =====================================================

@router.post(
    "/initialize",
    response_model=APIResponse[StatusInitializeData],
    responses=error_responses(409, 503),
)
async def initialize_status_settings_api(
    force: bool = Query(False, description="Overwrite existing settings"),
    actor: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    data = await initialize_status_settings(db, force=force, actor=actor)
    return success_response("Default status settings initialized", data)


@router.put(
    "",
    response_model=APIResponse[StatusSettingsData],
    responses=error_responses(409, 422, 503),
)
async def save_status_settings_api(
    payload: StatusSettingsSave,
    actor: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    quote_statuses, order_statuses, loaded_versions = await status_store.get_all_statuses(db)

    # the versions the client loaded guard the write, not the ones just read
    registry = StatusRegistry(
        quote_statuses,
        order_statuses,
        {**loaded_versions, **payload.versions},
    )
    registry.replace_draft(payload.quote_statuses, payload.order_statuses)

    diff = await registry.persist(db, actor=actor)

    return success_response(
        f"Status settings saved ({diff.summary()})",
        StatusSettingsData(
            quote_statuses=registry.committed(StatusCategory.quote),
            order_statuses=registry.committed(StatusCategory.order),
            versions=registry.versions,
        ),
    )


@router.get(
    "/{category}",
    response_model=APIResponse[StatusListData],
    responses=error_responses(500),
)
async def list_statuses_api(
    category: StatusCategory,
    db: AsyncSession = Depends(get_db),
):
    items, version = await status_store.get_statuses(db, category)
    return success_response(
        "Statuses retrieved successfully",
        StatusListData(category=category, version=version, items=items),
    )


@router.get(
    "/{category}/defaults",
    response_model=APIResponse[StatusDefaultsData],
)
async def get_status_defaults_api(
    category: StatusCategory,
    db: AsyncSession = Depends(get_db),
):
    quote_statuses, order_statuses, _ = await status_store.get_all_statuses(db)
    scoped = quote_statuses if category == StatusCategory.quote else order_statuses

    return success_response(
        "Status defaults retrieved successfully",
        StatusDefaultsData(
            default_quote_status=get_default_quote_status(quote_statuses),
            default_order_status=find_default_order_status(order_statuses),
            quotes_list_statuses=get_statuses_for_quotes_list(scoped),
            orders_list_statuses=get_statuses_for_orders_list(scoped),
        ),
    )


# =====================================================
# PER-STATUS EVALUATION
# =====================================================

@router.get(
    "/{category}/{name}/permissions",
    response_model=APIResponse[PermissionSet],
)
async def get_status_permissions_api(
    category: StatusCategory,
    name: str,
    db: AsyncSession = Depends(get_db),
):
    statuses, _ = await status_store.get_statuses(db, category)
    # unknown status resolves to no permissions
    return success_response(
        "Permissions resolved",
        permission_resolver.resolve(find_status(name, statuses)),
    )


@router.post(
    "/{category}/{name}/payment-gate",
    response_model=APIResponse[PaymentGateData],
    responses=error_responses(404),
)
async def evaluate_payment_gate_api(
    category: StatusCategory,
    name: str,
    payload: PaymentState,
    db: AsyncSession = Depends(get_db),
):
    statuses, _ = await status_store.get_statuses(db, category)
    status = find_status(name, statuses)
    if status is None:
        raise AppException(
            404,
            f'Status "{name}" not found in {category.value} statuses',
            ErrorCode.STATUS_NOT_FOUND,
        )

    return success_response(
        "Payment gate evaluated",
        PaymentGateData(
            status_name=status.name,
            shipping=payment_gate.can_proceed_to_ship(status, payload),
            completion=payment_gate.can_proceed_to_complete(status, payload),
            milestones=payment_gate.evaluate_milestones(status, payload),
        ),
    )
