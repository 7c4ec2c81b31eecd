"""
Tests for unknown-tolerant arithmetic helpers.

Addition and subtraction ignore unknown operands; division refuses unknown
and zero denominators instead of raising.

CHANGELOG:
- 2026-10-20: Non-finite operands and overflowing results are unknown
- 2026-10-12: Initial creation (STORY-002)

TODO:
- None
"""

from __future__ import annotations

import pytest

from energymonitor.src.safe_math import (
    add_safely,
    divide_safely,
    finite_or_none,
    subtract_safely,
)


class TestAddSafely:
    """Unknown operands act as the additive identity."""

    @pytest.mark.parametrize("x", [0, 1.5, -42, 1e9])
    def test_unknown_left_returns_right(self, x: float) -> None:
        assert add_safely(None, x) == x

    @pytest.mark.parametrize("x", [0, 1.5, -42, 1e9])
    def test_unknown_right_returns_left(self, x: float) -> None:
        assert add_safely(x, None) == x

    def test_both_unknown_is_unknown(self) -> None:
        assert add_safely(None, None) is None

    def test_known_values_are_added(self) -> None:
        assert add_safely(200, -50.5) == pytest.approx(149.5)

    def test_zero_is_not_unknown(self) -> None:
        """0 is a real value and must not be mistaken for None."""
        assert add_safely(0, 0) == 0
        assert add_safely(0, None) == 0


class TestSubtractSafely:
    """Unknown minuend stays unknown; unknown subtrahend is ignored."""

    def test_unknown_minuend_is_unknown(self) -> None:
        assert subtract_safely(None, 10) is None

    def test_unknown_subtrahend_returns_minuend(self) -> None:
        assert subtract_safely(10, None) == 10

    def test_both_unknown_is_unknown(self) -> None:
        assert subtract_safely(None, None) is None

    def test_known_values_are_subtracted(self) -> None:
        assert subtract_safely(1800, 300) == 1500


class TestDivideSafely:
    """Division by zero or unknown is an explicit unknown, never an error."""

    @pytest.mark.parametrize("x", [0, 7, -3.5, None])
    def test_zero_denominator_is_unknown(self, x: float | None) -> None:
        assert divide_safely(x, 0) is None

    def test_float_zero_denominator_is_unknown(self) -> None:
        assert divide_safely(5, 0.0) is None

    @pytest.mark.parametrize("d", [1, -2, 0.5, 0, None])
    def test_unknown_numerator_is_unknown(self, d: float | None) -> None:
        assert divide_safely(None, d) is None

    def test_unknown_denominator_is_unknown(self) -> None:
        assert divide_safely(10, None) is None

    def test_known_values_are_divided(self) -> None:
        assert divide_safely(200, 500) == pytest.approx(0.4)

    def test_integer_division_is_true_division(self) -> None:
        assert divide_safely(1, 2) == 0.5


class TestNonFiniteResults:
    """NaN and infinities never leave the helpers."""

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), None])
    def test_finite_or_none_rejects(self, value: float | None) -> None:
        assert finite_or_none(value) is None

    @pytest.mark.parametrize("value", [0, -1.5, 1e308])
    def test_finite_or_none_keeps_finite(self, value: float) -> None:
        assert finite_or_none(value) == value

    def test_overflowing_sum_is_unknown(self) -> None:
        assert add_safely(1e308, 1e308) is None

    def test_infinite_single_operand_is_unknown(self) -> None:
        assert add_safely(None, float("inf")) is None

    def test_overflowing_difference_is_unknown(self) -> None:
        assert subtract_safely(1e308, -1e308) is None

    def test_overflowing_quotient_is_unknown(self) -> None:
        assert divide_safely(1e308, 1e-10) is None

    @pytest.mark.parametrize(
        ("numerator", "denominator"),
        [(1, float("inf")), (float("inf"), 2), (float("nan"), 1), (1, float("nan"))],
    )
    def test_non_finite_operand_is_unknown(
        self, numerator: float, denominator: float
    ) -> None:
        assert divide_safely(numerator, denominator) is None
