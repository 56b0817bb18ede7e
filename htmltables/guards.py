"""Guard clauses for validating function parameters.

Every check returns the value unchanged when the precondition holds and
raises InvalidArgument otherwise. The error names the offending parameter
and describes the violated constraint in one line.

Timeouts may be given as ``timedelta`` or as plain seconds (int/float).
``INFINITE_TIMEOUT`` (or ``-1`` seconds) means "wait forever".
"""

from datetime import timedelta
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")

INFINITE_TIMEOUT = timedelta(milliseconds=-1)
INFINITE_TIMEOUT_SECONDS = -1


class InvalidArgument(ValueError):
    """Raised when a parameter fails a precondition check.

    Attributes:
        param_name: Name of the offending parameter (may be None).
        reason: Short machine-readable reason, e.g. "out_of_range".
        message: Human-readable description of the violated constraint.
    """

    def __init__(self, message: str, param_name: Optional[str] = None, reason: str = "assertion"):
        self.message = message
        self.param_name = param_name
        self.reason = reason
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.param_name:
            return f"{self.message} (Parameter '{self.param_name}')"
        return self.message


def format_timedelta(value) -> str:
    """Render a timeout for error messages: "infinite", "250ms", "1.5s"."""
    if _is_infinite(value):
        return "infinite"
    if not isinstance(value, timedelta):
        return f"{value}s"
    ms = value / timedelta(milliseconds=1)
    if abs(ms) < 1000:
        return f"{ms:g}ms"
    return f"{value.total_seconds():g}s"


def _zero_for(value):
    if isinstance(value, timedelta):
        return timedelta(0)
    return 0


def _is_infinite(value) -> bool:
    if isinstance(value, timedelta):
        return value == INFINITE_TIMEOUT
    return value == INFINITE_TIMEOUT_SECONDS


def _describe(value) -> str:
    if isinstance(value, timedelta):
        return format_timedelta(value)
    return str(value)


# ---- Comparisons ----

def is_between(value: T, min_value: T, max_value: T, param_name: str) -> T:
    """Ensure min_value <= value <= max_value."""
    if min_value <= value <= max_value:
        return value
    raise InvalidArgument(
        f"Value is not between {min_value} and {max_value}: {value}.",
        param_name, "out_of_range",
    )


def is_equal_to(value: T, comparand: T, param_name: str) -> T:
    """Ensure value == comparand."""
    if value == comparand:
        return value
    raise InvalidArgument(
        f"Value is not equal to {comparand}: {value}.", param_name, "not_equal"
    )


def is_greater_than_or_equal_to(value: T, comparand: T, param_name: str) -> T:
    """Ensure value >= comparand."""
    if value >= comparand:
        return value
    raise InvalidArgument(
        f"Value is not greater than or equal to {comparand}: {value}.",
        param_name, "out_of_range",
    )


def is_greater_than_or_equal_to_zero(value: T, param_name: str) -> T:
    """Ensure a number or timedelta is >= 0."""
    if value >= _zero_for(value):
        return value
    raise InvalidArgument(
        f"Value is not greater than or equal to zero: {_describe(value)}.",
        param_name, "out_of_range",
    )


def is_greater_than_zero(value: T, param_name: str) -> T:
    """Ensure a number or timedelta is > 0."""
    if value > _zero_for(value):
        return value
    raise InvalidArgument(
        f"Value is not greater than zero: {_describe(value)}.",
        param_name, "out_of_range",
    )


def is_infinite_or_greater_than_or_equal_to_zero(value: T, param_name: str) -> T:
    if _is_infinite(value) or value >= _zero_for(value):
        return value
    raise InvalidArgument(
        f"Value is not infinite or greater than or equal to zero: {format_timedelta(value)}.",
        param_name, "out_of_range",
    )


def is_infinite_or_greater_than_zero(value: T, param_name: str) -> T:
    if _is_infinite(value) or value > _zero_for(value):
        return value
    raise InvalidArgument(
        f"Value is not infinite or greater than zero: {format_timedelta(value)}.",
        param_name, "out_of_range",
    )


# ---- None / empty ----

def is_not_none(value: Optional[T], param_name: str) -> T:
    """Ensure value is not None."""
    if value is None:
        raise InvalidArgument("Value cannot be None.", param_name, "null")
    return value


def is_not_none_or_empty(value: Optional[str], param_name: str) -> str:
    """Ensure a string is neither None nor empty."""
    if value is None:
        raise InvalidArgument("Value cannot be None.", param_name, "null")
    if value == "":
        raise InvalidArgument("Value cannot be empty.", param_name, "empty")
    return value


def is_none(value: Any, param_name: str) -> None:
    """Ensure value is None."""
    if value is not None:
        raise InvalidArgument("Value must be None.", param_name, "not_null")
    return None


def is_none_or_not_empty(value: Optional[str], param_name: str) -> Optional[str]:
    if value == "":
        raise InvalidArgument("Value cannot be empty.", param_name, "empty")
    return value


def is_none_or_greater_than_or_equal_to_zero(value: Optional[T], param_name: str) -> Optional[T]:
    if value is not None:
        is_greater_than_or_equal_to_zero(value, param_name)
    return value


def is_none_or_greater_than_zero(value: Optional[T], param_name: str) -> Optional[T]:
    if value is not None:
        is_greater_than_zero(value, param_name)
    return value


def is_none_or_infinite_or_greater_than_or_equal_to_zero(value: Optional[T], param_name: str) -> Optional[T]:
    if value is None or _is_infinite(value) or value >= _zero_for(value):
        return value
    raise InvalidArgument(
        f"Value is not None or infinite or greater than or equal to zero: {format_timedelta(value)}.",
        param_name, "out_of_range",
    )


# ---- Timeouts ----

def is_valid_timeout(value: T, param_name: str) -> T:
    """Ensure a timeout is >= 0 or the infinite sentinel."""
    if value < _zero_for(value) and not _is_infinite(value):
        raise InvalidArgument(
            f"Invalid timeout: {format_timedelta(value)}.", param_name, "invalid_timeout"
        )
    return value


def is_none_or_valid_timeout(value: Optional[T], param_name: str) -> Optional[T]:
    if value is not None:
        is_valid_timeout(value, param_name)
    return value


# ---- Assertions ----

def that(assertion: bool, message: str, param_name: Optional[str] = None) -> None:
    """Ensure an arbitrary assertion holds."""
    if not assertion:
        raise InvalidArgument(message, param_name, "assertion")


def satisfies(value: T, predicate: Callable[[T], bool], param_name: str, message: str) -> T:
    """Ensure value satisfies a custom predicate."""
    if not predicate(value):
        raise InvalidArgument(message, param_name, "assertion")
    return value
