from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.utils.response import success_response, APIResponse, error_responses

from app.schemas.workflow.quote_schemas import (
    QuoteCreate,
    QuoteOut,
    QuoteTransitionRequest,
    QuoteEventRequest,
    TransitionResultOut,
    AutomaticTransitionOut,
    QuoteHistoryData,
)

from app.services.workflow.transition_service import (
    create_quote,
    get_quote,
    apply_transition,
    list_history,
)
from app.services.workflow.automatic_transition_service import apply_automatic_transition

router = APIRouter(
    prefix="/quotes",
    tags=["Quotes"],
)


@router.post(
    "",
    response_model=APIResponse[QuoteOut],
    responses=error_responses(409),
)
async def create_quote_api(
    payload: QuoteCreate,
    db: AsyncSession = Depends(get_db),
):
    quote = await create_quote(db, payload)
    return success_response(
        "Quote created successfully",
        quote,
    )


@router.get(
    "/{quote_id}",
    response_model=APIResponse[QuoteOut],
    responses=error_responses(404),
)
async def get_quote_api(
    quote_id: int,
    db: AsyncSession = Depends(get_db),
):
    quote = await get_quote(db, quote_id)
    return success_response(
        "Quote retrieved successfully",
        quote,
    )


@router.post(
    "/{quote_id}/transition",
    response_model=APIResponse[TransitionResultOut],
    responses=error_responses(403, 404, 409),
)
async def transition_quote_api(
    quote_id: int,
    payload: QuoteTransitionRequest,
    db: AsyncSession = Depends(get_db),
):
    result = await apply_transition(db, quote_id, payload)
    return success_response(
        f"Quote moved to {result.to_status}",
        result,
    )


@router.post(
    "/{quote_id}/events/{trigger}",
    response_model=APIResponse[AutomaticTransitionOut],
    responses=error_responses(400, 404, 409),
)
async def fire_quote_event_api(
    quote_id: int,
    trigger: str,
    payload: QuoteEventRequest | None = None,
    db: AsyncSession = Depends(get_db),
):
    result = await apply_automatic_transition(
        db,
        quote_id,
        trigger,
        metadata=payload.metadata if payload else None,
        payment_state=payload.payment_state if payload else None,
    )
    return success_response(
        "Event applied" if result else "Event ignored for current status",
        AutomaticTransitionOut(applied=result is not None, trigger=trigger, result=result),
    )


@router.get(
    "/{quote_id}/history",
    response_model=APIResponse[QuoteHistoryData],
    responses=error_responses(404),
)
async def get_quote_history_api(
    quote_id: int,
    db: AsyncSession = Depends(get_db),
):
    data = await list_history(db, quote_id)
    return success_response(
        "Status history retrieved successfully",
        data,
    )
