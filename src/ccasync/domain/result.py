"""Result and Error: the outcome contract of every validating operation.

INVARIANT: Expected validation failures are returned, never raised.
Exceptions are reserved for contract violations: a missing required
argument, an inconsistent Result, or reading the value of a failure.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, Self, TypeVar

from pydantic import BaseModel, Field, model_validator

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class ResultAccessError(RuntimeError):
    """Raised when the success value of a failed Result is read."""


class Error(BaseModel):
    """Structured failure payload within a Result.

    Codes are dotted ``"<Entity>.<Reason>"`` strings so callers can
    dispatch on them programmatically.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class Result(BaseModel, Generic[T]):
    """Success value (possibly empty) or failure carrying an :class:`Error`.

    Attributes:
        ok: Whether the operation succeeded.
        payload: The success value; always None on failure.
        error: The failure reason; reading it on a success raises.
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    ok: bool
    payload: Any = None
    reason: Error | None = Field(default=None, alias="error")

    @model_validator(mode="after")
    def _check_consistency(self) -> Self:
        if self.ok and self.reason is not None:
            raise ValueError("a successful Result cannot carry an error")
        if not self.ok and self.reason is None:
            raise ValueError("a failed Result must carry an error")
        if not self.ok and self.payload is not None:
            raise ValueError("a failed Result cannot carry a value")
        return self

    @classmethod
    def success(cls, value: Any = None) -> Result[Any]:
        """Build a successful result, optionally carrying *value*."""
        return cls(ok=True, payload=value)

    @classmethod
    def failure(cls, error: Error) -> Result[Any]:
        """Build a failed result from *error*."""
        if error is None:
            raise TypeError("error is required for a failed Result")
        return cls(ok=False, error=error)

    @classmethod
    def fail(cls, code: str, message: str, **detail: Any) -> Result[Any]:
        """Shorthand for ``Result.failure(Error(code=..., message=...))``."""
        return cls.failure(Error(code=code, message=message, detail=detail))

    @property
    def is_failure(self) -> bool:
        return not self.ok

    @property
    def value(self) -> T:
        """The success value.

        Raises:
            ResultAccessError: If this result is a failure.
        """
        if not self.ok:
            raise ResultAccessError(f"cannot access value of a failed result ({self.error})")
        return self.payload

    @property
    def error(self) -> Error:
        """The failure reason.

        Raises:
            ResultAccessError: If this result is a success.
        """
        if self.ok:
            raise ResultAccessError("cannot access error of a successful result")
        return self.reason  # type: ignore[return-value]

    def map(self, fn: Callable[[T], U]) -> Result[U]:
        """Project the success value through *fn*; failures pass through."""
        if not self.ok:
            return Result.failure(self.error)
        return Result.success(fn(self.payload))

    def bind(self, fn: Callable[[T], Result[U]]) -> Result[U]:
        """Chain another Result-returning step; failures short-circuit."""
        if not self.ok:
            return Result.failure(self.error)
        return fn(self.payload)

    def match(self, on_success: Callable[[T], R], on_failure: Callable[[Error], R]) -> R:
        if self.ok:
            return on_success(self.payload)
        return on_failure(self.error)

    def __str__(self) -> str:
        if self.ok:
            return f"Success({self.payload})"
        return f"Failure({self.error})"
