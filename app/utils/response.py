# app/utils/response.py

from typing import TypeVar, Generic, Optional, Dict, Any
from pydantic import BaseModel

from app.constants.error_codes import ErrorCode

T = TypeVar("T")


def success_response(message: str, data: Optional[T] = None) -> Dict[str, Any]:
    return {
        "success": True,
        "message": message,
        "data": data,
    }


class APIResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: Optional[T] = None


class ErrorResponse(BaseModel):
    """Body written by the exception handlers in app.core.error_handlers."""
    success: bool = False
    message: str
    error_code: ErrorCode
    details: Optional[Any] = None


def error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """OpenAPI `responses=` entries documenting the error envelope."""
    return {code: {"model": ErrorResponse} for code in status_codes}
