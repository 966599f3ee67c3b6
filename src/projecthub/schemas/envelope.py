"""Success envelope shared by every endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: T | None = None


def ok(message: str, data: T | None = None) -> ApiResponse[T]:
    """Wrap ``data`` in the success envelope.

    The HTTP status is declared on the route, not here.
    """
    return ApiResponse(success=True, message=message, data=data)
