# app/models/enums/gate_reason.py
import enum

class GateReason(str, enum.Enum):
    insufficient_payment = "InsufficientPayment"
    verification_required = "VerificationRequired"
    milestone_unmet = "MilestoneUnmet"
    cod_collection_required = "CODCollectionRequired"
