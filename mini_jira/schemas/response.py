from typing import Any, Generic, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every response body"""
    data: Optional[T] = None
    success: bool
    message: str


def success_response(data: Any = None, message: str = "Success") -> dict:
    return {"data": data, "success": True, "message": message}


def error_response(message: str) -> dict:
    return {"data": None, "success": False, "message": message}
