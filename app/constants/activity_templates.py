from app.constants.activity_codes import ActivityCode


ACTIVITY_TEMPLATES = {
    # ---------------- STATUS CONFIG ----------------
    ActivityCode.SAVE_STATUS_SETTINGS:
        "{actor} saved status settings: {changes}",

    ActivityCode.INITIALIZE_STATUS_SETTINGS:
        "{actor} initialized default status settings "
        "({quote_count} quote, {order_count} order statuses)",

    # ---------------- QUOTES ----------------
    ActivityCode.CREATE_QUOTE:
        "{actor} created quote {target_name} in status {new_status}",

    ActivityCode.CHANGE_QUOTE_STATUS:
        "{actor} moved quote {target_name} from {old_status} → {new_status}",

    ActivityCode.AUTO_CHANGE_QUOTE_STATUS:
        "Quote {target_name} moved from {old_status} → {new_status} on {trigger}",

    ActivityCode.EXPIRE_QUOTE:
        "Quote {target_name} expired automatically after {hours}h in {old_status}",
}
