"""
Result Monad for Domain Operations
Represents success or failure without exceptions crossing the service boundary
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    """
    Represents a successful operation result.

    Attributes:
        value: The successful result value
    """

    value: T

    def is_success(self) -> bool:
        """Always returns True for Success."""
        return True

    def is_failure(self) -> bool:
        """Always returns False for Success."""
        return False

    def or_else(self, default: T) -> T:
        """Return the value (ignores default)."""
        return self.value

    def unwrap(self) -> T:
        """Return the value."""
        return self.value


@dataclass(frozen=True)
class Failure(Generic[E]):
    """
    Represents a failed operation result.

    Attributes:
        error: The error describing why the operation was rejected
    """

    error: E

    def is_success(self) -> bool:
        """Always returns False for Failure."""
        return False

    def is_failure(self) -> bool:
        """Always returns True for Failure."""
        return True

    def or_else(self, default: Any) -> Any:
        """Return the default value instead of error."""
        return default

    def unwrap(self) -> Any:
        """
        Raise the carried error.

        Raises:
            The error itself when it is an exception, ValueError otherwise
        """
        if isinstance(self.error, BaseException):
            raise self.error
        raise ValueError(f"Attempted to unwrap a Failure: {self.error}")


# Type alias for Result
Result = Success[T] | Failure[E]
