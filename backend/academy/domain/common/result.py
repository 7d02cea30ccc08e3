"""Result<T> pattern — domain functions return this instead of raising exceptions for normal flow."""
from __future__ import annotations
from typing import TypeVar, Generic, List, Optional

T = TypeVar("T")

# Failure codes understood by the API layer
VALIDATION = "validation"
FORBIDDEN = "forbidden"
NOT_FOUND = "not_found"
CONFLICT = "conflict"
INVALID_STATE = "invalid_state"


class Result(Generic[T]):
    def __init__(
        self,
        is_success: bool,
        value: Optional[T] = None,
        error: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[List[str]] = None,
    ):
        self.is_success = is_success
        self.value = value
        self.error = error
        self.code = code
        self.details = details or []

    @classmethod
    def ok(cls, value: T = None) -> "Result[T]":
        return cls(is_success=True, value=value)

    @classmethod
    def fail(cls, error: str, code: str = VALIDATION, details: Optional[List[str]] = None) -> "Result[T]":
        return cls(is_success=False, error=error, code=code, details=details)

    @classmethod
    def from_failure(cls, other: "Result") -> "Result[T]":
        """Re-wrap a failed result so its code and details survive the layer hop."""
        return cls(is_success=False, error=other.error, code=other.code, details=other.details)

    def __repr__(self) -> str:
        if self.is_success:
            return f"Result.ok({self.value!r})"
        return f"Result.fail({self.error!r}, code={self.code!r})"
