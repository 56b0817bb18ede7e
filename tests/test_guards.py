"""Tests for guard clauses."""

from datetime import timedelta

import pytest

from htmltables.guards import (
    INFINITE_TIMEOUT,
    InvalidArgument,
    format_timedelta,
    is_between,
    is_equal_to,
    is_greater_than_or_equal_to,
    is_greater_than_or_equal_to_zero,
    is_greater_than_zero,
    is_infinite_or_greater_than_or_equal_to_zero,
    is_infinite_or_greater_than_zero,
    is_none,
    is_none_or_greater_than_or_equal_to_zero,
    is_none_or_greater_than_zero,
    is_none_or_infinite_or_greater_than_or_equal_to_zero,
    is_none_or_not_empty,
    is_none_or_valid_timeout,
    is_not_none,
    is_not_none_or_empty,
    is_valid_timeout,
    satisfies,
    that,
)


class TestInvalidArgument:

    def test_message_names_parameter(self):
        err = InvalidArgument("Value cannot be empty.", "name", "empty")
        assert str(err) == "Value cannot be empty. (Parameter 'name')"
        assert err.param_name == "name"
        assert err.reason == "empty"
        assert err.message == "Value cannot be empty."

    def test_without_parameter(self):
        assert str(InvalidArgument("Broken.")) == "Broken."

    def test_is_value_error(self):
        assert issubclass(InvalidArgument, ValueError)


class TestComparisons:

    def test_is_between_returns_value(self):
        assert is_between(5, 1, 10, "n") == 5
        assert is_between(1, 1, 10, "n") == 1
        assert is_between(10, 1, 10, "n") == 10

    def test_is_between_out_of_range(self):
        with pytest.raises(InvalidArgument) as exc:
            is_between(11, 1, 10, "count")
        assert exc.value.param_name == "count"
        assert exc.value.reason == "out_of_range"
        assert "between 1 and 10: 11" in str(exc.value)

    def test_is_equal_to(self):
        assert is_equal_to("a", "a", "x") == "a"
        with pytest.raises(InvalidArgument) as exc:
            is_equal_to(1, 2, "x")
        assert exc.value.reason == "not_equal"

    def test_is_greater_than_or_equal_to(self):
        assert is_greater_than_or_equal_to(3, 3, "x") == 3
        with pytest.raises(InvalidArgument):
            is_greater_than_or_equal_to(2, 3, "x")

    @pytest.mark.parametrize("value", [0, 5, 0.0, timedelta(0), timedelta(seconds=2)])
    def test_greater_than_or_equal_to_zero_accepts(self, value):
        assert is_greater_than_or_equal_to_zero(value, "v") == value

    @pytest.mark.parametrize("value", [-1, -0.5, timedelta(seconds=-1)])
    def test_greater_than_or_equal_to_zero_rejects(self, value):
        with pytest.raises(InvalidArgument):
            is_greater_than_or_equal_to_zero(value, "v")

    @pytest.mark.parametrize("value", [0, 0.0, timedelta(0)])
    def test_greater_than_zero_rejects_zero(self, value):
        with pytest.raises(InvalidArgument) as exc:
            is_greater_than_zero(value, "v")
        assert "greater than zero" in str(exc.value)

    def test_greater_than_zero_accepts_positive(self):
        assert is_greater_than_zero(1, "v") == 1
        assert is_greater_than_zero(timedelta(milliseconds=1), "v") == timedelta(milliseconds=1)

    def test_infinite_or_greater_than_or_equal_to_zero(self):
        assert is_infinite_or_greater_than_or_equal_to_zero(INFINITE_TIMEOUT, "t") == INFINITE_TIMEOUT
        assert is_infinite_or_greater_than_or_equal_to_zero(timedelta(0), "t") == timedelta(0)
        with pytest.raises(InvalidArgument) as exc:
            is_infinite_or_greater_than_or_equal_to_zero(timedelta(seconds=-5), "t")
        assert "-5s" in str(exc.value)

    def test_infinite_or_greater_than_zero(self):
        assert is_infinite_or_greater_than_zero(INFINITE_TIMEOUT, "t") == INFINITE_TIMEOUT
        with pytest.raises(InvalidArgument):
            is_infinite_or_greater_than_zero(timedelta(0), "t")


class TestNoneAndEmpty:

    def test_is_not_none(self):
        assert is_not_none(0, "x") == 0
        with pytest.raises(InvalidArgument) as exc:
            is_not_none(None, "x")
        assert exc.value.reason == "null"

    def test_is_not_none_or_empty(self):
        assert is_not_none_or_empty("abc", "s") == "abc"
        with pytest.raises(InvalidArgument) as exc:
            is_not_none_or_empty(None, "s")
        assert exc.value.reason == "null"
        with pytest.raises(InvalidArgument) as exc:
            is_not_none_or_empty("", "s")
        assert exc.value.reason == "empty"

    def test_is_none(self):
        assert is_none(None, "x") is None
        with pytest.raises(InvalidArgument) as exc:
            is_none("set", "x")
        assert exc.value.reason == "not_null"

    def test_is_none_or_not_empty(self):
        assert is_none_or_not_empty(None, "s") is None
        assert is_none_or_not_empty("a", "s") == "a"
        with pytest.raises(InvalidArgument):
            is_none_or_not_empty("", "s")

    def test_none_or_numeric_checks(self):
        assert is_none_or_greater_than_or_equal_to_zero(None, "n") is None
        assert is_none_or_greater_than_or_equal_to_zero(0, "n") == 0
        assert is_none_or_greater_than_zero(None, "n") is None
        with pytest.raises(InvalidArgument):
            is_none_or_greater_than_zero(0, "n")
        with pytest.raises(InvalidArgument):
            is_none_or_greater_than_or_equal_to_zero(-3, "n")

    def test_none_or_infinite_or_greater_than_or_equal_to_zero(self):
        assert is_none_or_infinite_or_greater_than_or_equal_to_zero(None, "t") is None
        assert is_none_or_infinite_or_greater_than_or_equal_to_zero(INFINITE_TIMEOUT, "t") == INFINITE_TIMEOUT
        with pytest.raises(InvalidArgument):
            is_none_or_infinite_or_greater_than_or_equal_to_zero(timedelta(seconds=-2), "t")


class TestTimeouts:

    @pytest.mark.parametrize("value", [
        timedelta(0), timedelta(seconds=30), INFINITE_TIMEOUT, 0, 30, 2.5, -1,
    ])
    def test_valid_timeouts(self, value):
        assert is_valid_timeout(value, "timeout") == value

    @pytest.mark.parametrize("value", [timedelta(seconds=-2), -5, -0.5])
    def test_invalid_timeouts(self, value):
        with pytest.raises(InvalidArgument) as exc:
            is_valid_timeout(value, "timeout")
        assert exc.value.reason == "invalid_timeout"
        assert "Invalid timeout" in str(exc.value)
        assert "'timeout'" in str(exc.value)

    def test_none_or_valid_timeout(self):
        assert is_none_or_valid_timeout(None, "timeout") is None
        with pytest.raises(InvalidArgument):
            is_none_or_valid_timeout(timedelta(seconds=-3), "timeout")

    def test_format_timedelta(self):
        assert format_timedelta(INFINITE_TIMEOUT) == "infinite"
        assert format_timedelta(timedelta(milliseconds=250)) == "250ms"
        assert format_timedelta(timedelta(seconds=1.5)) == "1.5s"
        assert format_timedelta(-1) == "infinite"
        assert format_timedelta(10) == "10s"


class TestAssertions:

    def test_that(self):
        that(True, "never raised")
        with pytest.raises(InvalidArgument) as exc:
            that(False, "Columns must be unique.", "columns")
        assert exc.value.param_name == "columns"
        assert exc.value.reason == "assertion"
        assert str(exc.value) == "Columns must be unique. (Parameter 'columns')"

    def test_that_without_param_name(self):
        with pytest.raises(InvalidArgument) as exc:
            that(False, "Broken invariant.")
        assert exc.value.param_name is None

    def test_satisfies(self):
        assert satisfies(4, lambda v: v % 2 == 0, "n", "Must be even.") == 4
        with pytest.raises(InvalidArgument) as exc:
            satisfies(3, lambda v: v % 2 == 0, "n", "Must be even.")
        assert exc.value.message == "Must be even."
