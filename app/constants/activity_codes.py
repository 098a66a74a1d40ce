# app/constants/activity_codes.py

from enum import Enum


class ActivityCode(str, Enum):
    # ---------------- STATUS CONFIG ----------------
    SAVE_STATUS_SETTINGS = "SAVE_STATUS_SETTINGS"
    INITIALIZE_STATUS_SETTINGS = "INITIALIZE_STATUS_SETTINGS"

    # ---------------- QUOTES ----------------
    CREATE_QUOTE = "CREATE_QUOTE"
    CHANGE_QUOTE_STATUS = "CHANGE_QUOTE_STATUS"
    AUTO_CHANGE_QUOTE_STATUS = "AUTO_CHANGE_QUOTE_STATUS"
    EXPIRE_QUOTE = "EXPIRE_QUOTE"
