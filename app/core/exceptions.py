from fastapi import HTTPException
from app.constants.error_codes import ErrorCode


class AppException(HTTPException):
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.error_code = error_code
        self.details = details

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.detail}"


# =====================================================
# WORKFLOW
# =====================================================

class InvalidTransitionError(AppException):
    def __init__(self, from_status: str | None, to_status: str):
        super().__init__(
            409,
            f'Invalid status transition from "{from_status}" to "{to_status}"',
            ErrorCode.INVALID_STATUS_TRANSITION,
            details={"from_status": from_status, "to_status": to_status},
        )


class ActionNotPermittedError(AppException):
    def __init__(self, status_name: str | None, action: str):
        super().__init__(
            403,
            f'Action "{action}" is not permitted in status "{status_name}"',
            ErrorCode.STATUS_ACTION_NOT_PERMITTED,
            details={"status": status_name, "action": action},
        )


class PaymentGateBlockedError(AppException):
    """`reason` is one of the GateReason values."""

    def __init__(self, reason: str, message: str | None):
        super().__init__(
            409,
            message or "Payment requirements not met",
            ErrorCode.PAYMENT_GATE_BLOCKED,
            details={"reason": reason, "message": message},
        )
        self.reason = reason


# =====================================================
# STATUS CONFIGURATION
# =====================================================

class StatusConfigInvalidError(AppException):
    def __init__(self, errors: list[dict]):
        super().__init__(
            422,
            "Status configuration is invalid",
            ErrorCode.STATUS_CONFIG_INVALID,
            details={"errors": errors},
        )
        self.errors = errors


class StatusVersionConflictError(AppException):
    def __init__(self, setting_key: str, expected_version: int, current_version: int):
        super().__init__(
            409,
            "Status settings were changed by another session. Reload and try again.",
            ErrorCode.STATUS_CONFIG_VERSION_CONFLICT,
            details={
                "setting_key": setting_key,
                "expected_version": expected_version,
                "current_version": current_version,
            },
        )


class PersistenceFailureError(AppException):
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(503, message, ErrorCode.STATUS_PERSIST_FAILED, details=details)
