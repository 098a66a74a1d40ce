"""
Status transition rules.

The workflow is a directed graph keyed by status *name*. Edges come from
each status's `allowed_transitions` and may cross categories, so a quote
status can name an order status to promote the quote into an order. Lookups
happen at evaluation time against whatever status list the caller passes in
(normally quote statuses followed by order statuses).
"""
from typing import Iterable, List, Optional

from app.schemas.status.status_config_schemas import StatusConfig


def find_status(name: str | None, statuses: Iterable[StatusConfig]) -> Optional[StatusConfig]:
    """First status called `name`; quote statuses win a cross-category clash."""
    if not name:
        return None
    for s in statuses:
        if s.name == name:
            return s
    return None


def is_transition_allowed(
    current_name: str | None,
    target_name: str,
    all_statuses: Iterable[StatusConfig],
) -> bool:
    """True if an entity in `current_name` may move to `target_name`."""
    statuses = list(all_statuses)

    current = find_status(current_name, statuses)
    if current is None:
        return False

    # terminal statuses have no outgoing moves, whatever they list
    if current.is_terminal:
        return False

    if target_name not in current.allowed_transitions:
        return False

    target = find_status(target_name, statuses)
    return target is not None and target.is_active


def list_reachable_statuses(
    current_name: str | None,
    all_statuses: Iterable[StatusConfig],
) -> List[str]:
    """
    Names the entity can move to next, in the order the current status
    lists them. Retired (inactive) and dangling targets are left out.
    """
    statuses = list(all_statuses)

    current = find_status(current_name, statuses)
    if current is None or current.is_terminal:
        return []

    reachable: List[str] = []
    for name in current.allowed_transitions:
        target = find_status(name, statuses)
        if target is not None and target.is_active and name not in reachable:
            reachable.append(name)
    return reachable
