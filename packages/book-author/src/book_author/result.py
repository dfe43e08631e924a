"""Success/failure wrapper returned by services instead of raising."""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class ResultError(Exception):
    """Raised when unwrapping a failed result."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an operation: a value on success, an error message on failure.

    Build instances with ``Result.ok`` and ``Result.fail``.
    """

    is_success: bool
    value: Optional[T] = None
    error: Optional[str] = None
    exception: Optional[BaseException] = None

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(is_success=True, value=value)

    @classmethod
    def fail(cls, error: str, exception: Optional[BaseException] = None) -> "Result[T]":
        if not error:
            raise ValueError("A failed result needs an error message")
        return cls(is_success=False, error=error, exception=exception)

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    def map(self, fn: Callable[[T], U]) -> "Result[U]":
        """Transform the value of a successful result."""
        if self.is_failure:
            return Result(is_success=False, error=self.error, exception=self.exception)
        return Result.ok(fn(self.value))  # type: ignore[arg-type]

    def bind(self, fn: Callable[[T], "Result[U]"]) -> "Result[U]":
        """Chain another result-returning operation."""
        if self.is_failure:
            return Result(is_success=False, error=self.error, exception=self.exception)
        return fn(self.value)  # type: ignore[arg-type]

    def match(self, on_success: Callable[[T], U], on_failure: Callable[[str], U]) -> U:
        if self.is_success:
            return on_success(self.value)  # type: ignore[arg-type]
        return on_failure(self.error or "")

    def unwrap(self) -> T:
        """Return the value or raise ``ResultError`` with the failure message."""
        if self.is_failure:
            raise ResultError(self.error or "Result is a failure", self.exception)
        return self.value  # type: ignore[return-value]

    def value_or(self, default: Any) -> Any:
        return self.value if self.is_success else default

    def __bool__(self) -> bool:
        return self.is_success
