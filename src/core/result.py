"""Result types for railway-oriented programming.

Every fallible operation in the authentication core returns a Result instead
of raising. Handlers chain them and the presentation layer maps the final
Failure to an HTTP problem response.

Usage:
    def check_code(code: str) -> Result[str, InvalidCode]:
        if not code.isdigit():
            return Failure(error=InvalidCode(code=ErrorCode.INVALID_CODE, message="Invalid code"))
        return Success(value=code)

    match check_code("123456"):
        case Success(value=code):
            ...
        case Failure(error=error):
            logger.warning("Code rejected", reason=error.message)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]
