"""
Unit tests for answer value coercion helpers.
"""

import math

import pytest

from uibuilder.core.values import is_empty, stringify, strict_equals, to_number


class TestIsEmpty:
    """Tests for is_empty"""

    @pytest.mark.parametrize("value", [None, "", [], ()])
    def test_missing_values_are_empty(self, value):
        """None, empty string and empty list count as no answer"""
        assert is_empty(value) is True

    @pytest.mark.parametrize("value", [0, False, " ", ["a"], 0.0])
    def test_falsy_answers_are_not_empty(self, value):
        """Zero and False are real answers"""
        assert is_empty(value) is False


class TestStringify:
    """Tests for stringify"""

    def test_booleans_print_lowercase(self):
        assert stringify(True) == "true"
        assert stringify(False) == "false"

    def test_integral_float_drops_fraction(self):
        assert stringify(5.0) == "5"
        assert stringify(2.5) == "2.5"

    def test_list_joins_with_commas(self):
        assert stringify(["a", "b", 3]) == "a,b,3"

    def test_none_is_empty_string(self):
        assert stringify(None) == ""

    def test_non_finite_numbers(self):
        assert stringify(math.nan) == "NaN"
        assert stringify(-math.inf) == "-Infinity"


class TestToNumber:
    """Tests for to_number"""

    def test_numeric_strings(self):
        assert to_number("42") == 42.0
        assert to_number(" 3.5 ") == 3.5
        assert to_number("1e3") == 1000.0

    def test_blank_string_is_zero(self):
        assert to_number("") == 0.0

    def test_booleans(self):
        assert to_number(True) == 1.0
        assert to_number(False) == 0.0

    @pytest.mark.parametrize("value", [None, "abc", "12px", ["1", "2"], {"a": 1}])
    def test_non_numeric_is_nan(self, value):
        assert math.isnan(to_number(value))


class TestStrictEquals:
    """Tests for strict_equals"""

    def test_no_cross_type_coercion(self):
        """'1' != 1 and True != 1"""
        assert strict_equals("1", 1) is False
        assert strict_equals(True, 1) is False
        assert strict_equals(None, "") is False

    def test_int_and_float_compare_numerically(self):
        assert strict_equals(100, 100.0) is True

    def test_lists_compare_by_value(self):
        assert strict_equals(["a", "b"], ["a", "b"]) is True
        assert strict_equals(["a", "b"], ["b", "a"]) is False

    def test_none_equals_none(self):
        assert strict_equals(None, None) is True
