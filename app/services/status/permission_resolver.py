from app.models.enums.status_action import StatusAction
from app.schemas.status.status_config_schemas import StatusConfig
from app.schemas.status.workflow_schemas import PermissionSet


# PermissionSet field -> StatusConfig flag
PERMISSION_FIELDS = {
    "can_edit": "allow_edit",
    "can_edit_address": "allow_address_edit",
    "can_approve": "allow_approval",
    "can_reject": "allow_rejection",
    "can_add_to_cart": "allow_cart_actions",
    "can_ship": "allow_shipping",
    "can_cancel": "allow_cancellation",
    "can_renew": "allow_renewal",
    "can_be_paid": "can_be_paid",
}

# Action -> PermissionSet field that must be true. Completion is gated by
# payment rules only.
ACTION_PERMISSIONS = {
    StatusAction.edit: "can_edit",
    StatusAction.approve: "can_approve",
    StatusAction.reject: "can_reject",
    StatusAction.cancel: "can_cancel",
    StatusAction.ship: "can_ship",
    StatusAction.renew: "can_renew",
}


def resolve(status: StatusConfig | None) -> PermissionSet:
    """
    Flatten a status's action flags into a PermissionSet.
    Missing flags (legacy records) and a missing status grant nothing.
    """
    if status is None:
        return PermissionSet()

    return PermissionSet(
        **{
            perm: getattr(status, flag) is True
            for perm, flag in PERMISSION_FIELDS.items()
        }
    )


def is_action_permitted(status: StatusConfig | None, action: StatusAction) -> bool:
    perm = ACTION_PERMISSIONS.get(action)
    if perm is None:
        return True
    return getattr(resolve(status), perm)
