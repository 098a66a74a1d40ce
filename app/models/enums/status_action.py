# app/models/enums/status_action.py
import enum

class StatusAction(str, enum.Enum):
    """Business action requested together with a status change."""
    edit = "edit"
    approve = "approve"
    reject = "reject"
    cancel = "cancel"
    ship = "ship"
    complete = "complete"
    renew = "renew"


class ReorderDirection(str, enum.Enum):
    up = "up"
    down = "down"
