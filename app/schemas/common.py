"""
schemas/common.py
-----------------
Uniform response envelope shared by every endpoint:

    {success, data?, error?, count?, timestamp}

``error`` and ``count`` are left out of the JSON when they do not apply.
Nested ``null`` values inside ``data`` are kept.
"""

from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, model_serializer

T = TypeVar("T")

_OPTIONAL_KEYS = ("data", "error", "count")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    error: Optional[str] = None
    count: Optional[int] = None
    timestamp: datetime = Field(default_factory=utcnow)

    @model_serializer(mode="wrap")
    def _omit_absent(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        dumped = handler(self)
        for key in _OPTIONAL_KEYS:
            if dumped.get(key) is None:
                dumped.pop(key, None)
        return dumped


def ok(data: Any = None, *, with_count: bool = False) -> Envelope:
    """Successful envelope; ``with_count`` adds ``count = len(data)``."""
    return Envelope(data=data, count=len(data) if with_count else None)


def failure(message: str) -> dict[str, Any]:
    """JSON-ready error envelope for exception handlers."""
    return Envelope(success=False, error=message).model_dump(mode="json")
