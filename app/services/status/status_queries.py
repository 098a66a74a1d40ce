from typing import Iterable, List, Optional, Sequence

from app.schemas.status.status_config_schemas import StatusConfig
from app.services.status.transition_validator import find_status

BANK_TRANSFER_TEMPLATE = "bank_transfer_pending"
BANK_TRANSFER_FALLBACK = "payment_pending"
COD_FALLBACK = "processing"
ONLINE_PAID_FALLBACK = "paid"


def _active_sorted(statuses: Iterable[StatusConfig]) -> List[StatusConfig]:
    return sorted((s for s in statuses if s.is_active), key=lambda s: s.order)


def get_default_quote_status(quote_statuses: Sequence[StatusConfig]) -> Optional[str]:
    """Status a new quote starts in: the flagged default, else the first active one."""
    active = _active_sorted(quote_statuses)
    for s in active:
        if s.is_default_quote_status is True:
            return s.name
    return active[0].name if active else None


def find_default_order_status(order_statuses: Sequence[StatusConfig]) -> Optional[str]:
    active = _active_sorted(order_statuses)
    return active[0].name if active else None


def get_statuses_for_quotes_list(statuses: Iterable[StatusConfig]) -> List[str]:
    return [s.name for s in _active_sorted(statuses) if s.shows_in_quotes_list is True]


def get_statuses_for_orders_list(statuses: Iterable[StatusConfig]) -> List[str]:
    return [s.name for s in _active_sorted(statuses) if s.shows_in_orders_list is True]


def can_quote_be_paid(name: str, statuses: Iterable[StatusConfig]) -> bool:
    s = find_status(name, statuses)
    return s is not None and s.can_be_paid is True


def should_trigger_email(name: str, statuses: Iterable[StatusConfig]) -> bool:
    s = find_status(name, statuses)
    return s is not None and s.triggers_email is True and bool(s.email_template)


def get_email_template(name: str, statuses: Iterable[StatusConfig]) -> Optional[str]:
    s = find_status(name, statuses)
    return s.email_template if s is not None else None


def requires_admin_action(name: str, statuses: Iterable[StatusConfig]) -> bool:
    s = find_status(name, statuses)
    return s is not None and s.requires_action is True


def find_cod_processing_status(order_statuses: Sequence[StatusConfig]) -> Optional[str]:
    active = _active_sorted(order_statuses)
    for s in active:
        if s.is_cod_status is True:
            return s.name
    return COD_FALLBACK if any(s.name == COD_FALLBACK for s in active) else None


def find_bank_transfer_pending_status(order_statuses: Sequence[StatusConfig]) -> Optional[str]:
    active = _active_sorted(order_statuses)
    for s in active:
        if s.email_template == BANK_TRANSFER_TEMPLATE:
            return s.name
    return BANK_TRANSFER_FALLBACK if any(s.name == BANK_TRANSFER_FALLBACK for s in active) else None


def find_status_for_payment_method(
    payment_method: str,
    order_statuses: Sequence[StatusConfig],
) -> Optional[str]:
    """Order status a checkout lands in for the chosen payment method."""
    method = (payment_method or "").lower()

    if method == "cod":
        found = find_cod_processing_status(order_statuses)
    elif method == "bank_transfer":
        found = find_bank_transfer_pending_status(order_statuses)
    else:
        # card / wallet gateways confirm payment before the order exists
        active = _active_sorted(order_statuses)
        found = ONLINE_PAID_FALLBACK if any(s.name == ONLINE_PAID_FALLBACK for s in active) else None

    return found or find_default_order_status(order_statuses)
