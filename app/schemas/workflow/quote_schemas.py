from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional
from datetime import datetime

from app.models.enums.status_action import StatusAction
from app.schemas.status.workflow_schemas import PaymentState

# =====================================================
# QUOTE CREATE / OUT
# =====================================================

class QuoteCreate(BaseModel):
    display_id: str = Field(..., min_length=1, max_length=50)
    customer_email: Optional[str] = None
    actor: Optional[str] = None


class QuoteOut(BaseModel):
    id: int
    display_id: str
    customer_email: Optional[str]
    status: str
    status_changed_at: Optional[datetime]
    version: int
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# TRANSITIONS
# =====================================================

class QuoteTransitionRequest(BaseModel):
    to_status: str = Field(..., min_length=1)
    version: int
    # ship / complete are also gated when the move itself ships or completes
    action: Optional[StatusAction] = None
    trigger: str = "manual"
    payment_state: PaymentState = Field(default_factory=PaymentState)
    metadata: Optional[Dict[str, Any]] = None
    actor: Optional[str] = None


class QuoteEventRequest(BaseModel):
    metadata: Optional[Dict[str, Any]] = None
    payment_state: PaymentState = Field(default_factory=PaymentState)


class NotificationOut(BaseModel):
    entity_id: int
    status_name: str
    email_template: str


class TransitionResultOut(BaseModel):
    quote: QuoteOut
    from_status: str
    to_status: str
    notification: Optional[NotificationOut] = None


class AutomaticTransitionOut(BaseModel):
    applied: bool
    trigger: str
    result: Optional[TransitionResultOut] = None


# =====================================================
# HISTORY
# =====================================================

class StatusTransitionOut(BaseModel):
    id: int
    from_status: Optional[str]
    to_status: str
    trigger: str
    changed_by: Optional[str]
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime]


class QuoteHistoryData(BaseModel):
    quote_id: int
    items: List[StatusTransitionOut]
