from typing import Generic, Optional, TypeVar, Literal

from fastapi import status as http_status
from pydantic import BaseModel

T = TypeVar("T")

DEFAULT_OK_MESSAGE = "operation succeeded"
DEFAULT_FAIL_MESSAGE = "operation failed"


class BaseResult(BaseModel, Generic[T]):
    """Uniform API response: status, code, message and an optional payload."""

    status: Literal["ok", "error"]
    code: int
    message: Optional[str] = None
    data: Optional[T] = None

    @classmethod
    def ok(cls, data: Optional[T] = None, message: str = DEFAULT_OK_MESSAGE) -> "BaseResult[T]":
        return cls(status="ok", code=http_status.HTTP_200_OK, message=message, data=data)

    @classmethod
    def fail(
            cls,
            code: int = http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            message: str = DEFAULT_FAIL_MESSAGE,
    ) -> "BaseResult[T]":
        return cls(status="error", code=code, message=message)

    def is_success(self) -> bool:
        return self.status == "ok"
