from collections import Counter
from typing import List, Sequence

from app.models.enums.status_category import StatusCategory
from app.schemas.status.status_config_schemas import StatusConfig, StatusFieldError


def _percentage_in_range(value) -> bool:
    return value is None or 0 <= value <= 100


def _validate_category(
    category: StatusCategory,
    statuses: Sequence[StatusConfig],
    known_names: set[str],
) -> List[StatusFieldError]:
    errors: List[StatusFieldError] = []

    def err(status: StatusConfig, field: str, message: str) -> None:
        errors.append(
            StatusFieldError(
                category=category,
                status_id=status.id,
                field=field,
                message=message,
            )
        )

    name_counts = Counter(s.name.strip() for s in statuses if s.name and s.name.strip())
    order_counts = Counter(s.order for s in statuses)

    for s in statuses:
        if s.category != category:
            err(s, "category", f"Status listed under '{category.value}' but has category '{s.category.value}'")

        if not s.name or not s.name.strip():
            err(s, "name", "Name is required")
        elif name_counts[s.name.strip()] > 1:
            err(s, "name", f"Duplicate status name '{s.name}'")

        if s.order <= 0:
            err(s, "order", "Order must be a positive number")
        elif order_counts[s.order] > 1:
            err(s, "order", f"Duplicate order position {s.order}")

        if not _percentage_in_range(s.progress_percentage):
            err(s, "progressPercentage", "Must be between 0 and 100")

        if not _percentage_in_range(s.min_payment_percentage):
            err(s, "minPaymentPercentage", "Must be between 0 and 100")

        for i, milestone in enumerate(s.payment_milestones):
            if not _percentage_in_range(milestone.percentage):
                err(s, f"paymentMilestones[{i}].percentage", "Must be between 0 and 100")

        if s.auto_expire_hours is not None and s.auto_expire_hours <= 0:
            err(s, "autoExpireHours", "Must be a positive number of hours")

        for target in s.allowed_transitions:
            if target not in known_names:
                err(s, "allowedTransitions", f"Unknown transition target '{target}'")

        if s.triggers_email is True and not s.email_template:
            err(s, "emailTemplate", "Email template is required when the status triggers an email")

    defaults = [s for s in statuses if s.is_default_quote_status is True]
    if len(defaults) > 1:
        for s in defaults:
            err(s, "isDefaultQuoteStatus", "Only one default status is allowed per category")

    # dense ranking 1..n (only meaningful when there are no duplicates)
    orders = sorted(s.order for s in statuses)
    if orders and len(set(orders)) == len(orders) and orders != list(range(1, len(orders) + 1)):
        for s in statuses:
            if s.order > len(orders):
                err(s, "order", f"Order positions must be 1..{len(orders)} without gaps")

    return errors


def validate_status_settings(
    quote_statuses: Sequence[StatusConfig],
    order_statuses: Sequence[StatusConfig],
) -> List[StatusFieldError]:
    """
    Field-level problems that must block a save. Transition targets may
    point into either category.
    """
    known_names = {s.name for s in quote_statuses} | {s.name for s in order_statuses}

    return [
        *_validate_category(StatusCategory.quote, quote_statuses, known_names),
        *_validate_category(StatusCategory.order, order_statuses, known_names),
    ]
