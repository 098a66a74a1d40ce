# app/constants/error_codes.py

from enum import Enum


class ErrorCode(str, Enum):
    # ---------------- GENERIC ----------------
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # ---------------- STATUS CONFIG ----------------
    STATUS_NOT_FOUND = "STATUS_NOT_FOUND"
    STATUS_CONFIG_INVALID = "STATUS_CONFIG_INVALID"
    STATUS_CONFIG_CORRUPT = "STATUS_CONFIG_CORRUPT"
    STATUS_CONFIG_VERSION_CONFLICT = "STATUS_CONFIG_VERSION_CONFLICT"
    STATUS_CONFIG_ALREADY_INITIALIZED = "STATUS_CONFIG_ALREADY_INITIALIZED"
    STATUS_PERSIST_FAILED = "STATUS_PERSIST_FAILED"

    # ---------------- WORKFLOW ----------------
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    STATUS_ACTION_NOT_PERMITTED = "STATUS_ACTION_NOT_PERMITTED"
    PAYMENT_GATE_BLOCKED = "PAYMENT_GATE_BLOCKED"
    UNKNOWN_TRIGGER = "UNKNOWN_TRIGGER"

    # ---------------- QUOTES ----------------
    QUOTE_NOT_FOUND = "QUOTE_NOT_FOUND"
    QUOTE_VERSION_CONFLICT = "QUOTE_VERSION_CONFLICT"
    QUOTE_DISPLAY_ID_EXISTS = "QUOTE_DISPLAY_ID_EXISTS"
