from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from app.models.enums.gate_reason import GateReason
from app.schemas.status.status_config_schemas import PaymentMilestone


# =====================================================
# PERMISSIONS
# =====================================================

class PermissionSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    can_edit: bool = False
    can_edit_address: bool = False
    can_approve: bool = False
    can_reject: bool = False
    can_add_to_cart: bool = False
    can_ship: bool = False
    can_cancel: bool = False
    can_renew: bool = False
    can_be_paid: bool = False


# =====================================================
# PAYMENT GATE
# =====================================================

class PaymentState(BaseModel):
    """Caller-supplied payment snapshot of one quote/order."""

    model_config = ConfigDict(frozen=True)

    percentage_paid: float = Field(0, ge=0)
    phone_verified: bool = False
    cod_collected: bool = False


class GateResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: Optional[GateReason] = None
    message: Optional[str] = None


class MilestoneEvaluation(BaseModel):
    satisfied: List[PaymentMilestone]
    unsatisfied_required: List[PaymentMilestone]

    @property
    def all_required_met(self) -> bool:
        return not self.unsatisfied_required


class PaymentGateData(BaseModel):
    status_name: str
    shipping: GateResult
    completion: GateResult
    milestones: MilestoneEvaluation


# =====================================================
# TRANSITIONS
# =====================================================

class TransitionCheck(BaseModel):
    from_status: str
    to_status: str


class TransitionCheckData(BaseModel):
    from_status: str
    to_status: str
    allowed: bool


class ReachableStatusesData(BaseModel):
    current_status: str
    reachable: List[str]
