from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, List, Optional

from app.models.enums.status_category import StatusCategory
from app.models.enums.payment_rules import (
    PaymentType,
    PaymentRequiredBefore,
    PaymentValidationRule,
)

# Stored JSON keeps the camelCase keys of the hosted settings table;
# Python code uses snake_case. Both are accepted on input.
CAMEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
)


# =====================================================
# PAYMENT MILESTONE
# =====================================================

class PaymentMilestone(BaseModel):
    model_config = ConfigDict(**CAMEL_CONFIG, frozen=True)

    percentage: float
    label: str = ""
    required: bool = False


# =====================================================
# STATUS CONFIG
# =====================================================

class StatusConfig(BaseModel):
    """One configured lifecycle state of a quote or an order."""

    model_config = ConfigDict(**CAMEL_CONFIG, frozen=True)

    # ---- identity ----
    id: str
    name: str
    label: str = ""
    description: str = ""
    category: StatusCategory

    # ---- ordering / display ----
    order: int
    color: str = "default"
    icon: str = "Clock"
    is_active: bool = True
    css_class: Optional[str] = None
    badge_variant: Optional[str] = None
    progress_percentage: Optional[float] = None

    # ---- flow ----
    is_terminal: bool = False
    allowed_transitions: List[str] = Field(default_factory=list)
    auto_expire_hours: Optional[int] = None

    # ---- notifications ----
    triggers_email: Optional[bool] = None
    email_template: Optional[str] = None

    # ---- defaults ----
    is_default_quote_status: Optional[bool] = None

    # ---- visibility ----
    shows_in_quotes_list: Optional[bool] = None
    shows_in_orders_list: Optional[bool] = None
    show_in_customer_view: Optional[bool] = None
    show_in_admin_view: Optional[bool] = None
    show_expiration: Optional[bool] = None
    is_successful: Optional[bool] = None
    counts_as_order: Optional[bool] = None

    # ---- action permissions (unset means not allowed) ----
    allow_edit: Optional[bool] = None
    allow_address_edit: Optional[bool] = None
    allow_approval: Optional[bool] = None
    allow_rejection: Optional[bool] = None
    allow_cart_actions: Optional[bool] = None
    allow_shipping: Optional[bool] = None
    allow_cancellation: Optional[bool] = None
    allow_renewal: Optional[bool] = None
    requires_action: Optional[bool] = None

    # ---- payment ----
    can_be_paid: Optional[bool] = None
    payment_type: Optional[PaymentType] = None
    payment_required_before: Optional[PaymentRequiredBefore] = None
    min_payment_percentage: Optional[float] = None
    payment_validation_rule: Optional[PaymentValidationRule] = None
    allow_cod: Optional[bool] = Field(default=None, alias="allowCOD")
    cod_fee_required: Optional[bool] = None
    cod_verification_required: Optional[bool] = None
    is_cod_status: Optional[bool] = Field(default=None, alias="isCODStatus")
    cod_collection_required: Optional[bool] = None
    cod_remittance_tracking: Optional[bool] = None
    payment_milestones: List[PaymentMilestone] = Field(default_factory=list)

    # ---- customer messaging ----
    customer_message: Optional[str] = None
    customer_action_text: Optional[str] = None

    def to_store(self) -> dict:
        """JSON-compatible dict in the stored (camelCase) shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class StatusConfigUpdate(BaseModel):
    """
    Partial update for one status. Only fields explicitly sent are merged
    (see StatusRegistry.update); identity fields `id` and `category` are
    never editable.
    """

    model_config = CAMEL_CONFIG

    name: Optional[str] = None
    label: Optional[str] = None
    description: Optional[str] = None
    order: Optional[int] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    is_active: Optional[bool] = None
    css_class: Optional[str] = None
    badge_variant: Optional[str] = None
    progress_percentage: Optional[float] = None
    is_terminal: Optional[bool] = None
    allowed_transitions: Optional[List[str]] = None
    auto_expire_hours: Optional[int] = None
    triggers_email: Optional[bool] = None
    email_template: Optional[str] = None
    is_default_quote_status: Optional[bool] = None
    shows_in_quotes_list: Optional[bool] = None
    shows_in_orders_list: Optional[bool] = None
    show_in_customer_view: Optional[bool] = None
    show_in_admin_view: Optional[bool] = None
    show_expiration: Optional[bool] = None
    is_successful: Optional[bool] = None
    counts_as_order: Optional[bool] = None
    allow_edit: Optional[bool] = None
    allow_address_edit: Optional[bool] = None
    allow_approval: Optional[bool] = None
    allow_rejection: Optional[bool] = None
    allow_cart_actions: Optional[bool] = None
    allow_shipping: Optional[bool] = None
    allow_cancellation: Optional[bool] = None
    allow_renewal: Optional[bool] = None
    requires_action: Optional[bool] = None
    can_be_paid: Optional[bool] = None
    payment_type: Optional[PaymentType] = None
    payment_required_before: Optional[PaymentRequiredBefore] = None
    min_payment_percentage: Optional[float] = None
    payment_validation_rule: Optional[PaymentValidationRule] = None
    allow_cod: Optional[bool] = Field(default=None, alias="allowCOD")
    cod_fee_required: Optional[bool] = None
    cod_verification_required: Optional[bool] = None
    is_cod_status: Optional[bool] = Field(default=None, alias="isCODStatus")
    cod_collection_required: Optional[bool] = None
    cod_remittance_tracking: Optional[bool] = None
    payment_milestones: Optional[List[PaymentMilestone]] = None
    customer_message: Optional[str] = None
    customer_action_text: Optional[str] = None


# =====================================================
# VALIDATION
# =====================================================

class StatusFieldError(BaseModel):
    category: StatusCategory
    status_id: str
    field: str
    message: str


# =====================================================
# BULK SAVE / LIST
# =====================================================

class StatusSettingsSave(BaseModel):
    quote_statuses: List[StatusConfig]
    order_statuses: List[StatusConfig]
    # setting_key -> version the client loaded; missing means "not loaded yet"
    versions: Dict[str, int] = Field(default_factory=dict)


class StatusListData(BaseModel):
    category: StatusCategory
    version: int
    items: List[StatusConfig]


class StatusSettingsData(BaseModel):
    quote_statuses: List[StatusConfig]
    order_statuses: List[StatusConfig]
    versions: Dict[str, int]


class StatusDefaultsData(BaseModel):
    default_quote_status: Optional[str]
    default_order_status: Optional[str]
    quotes_list_statuses: List[str]
    orders_list_statuses: List[str]


class StatusInitializeData(BaseModel):
    initialized: bool
    quote_count: int
    order_count: int
