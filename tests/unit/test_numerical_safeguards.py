"""
Тесты для Numerical Safeguards — Checked Integer Arithmetic

Проверяемые инварианты:
1. Никакого wrap-around: выход за границу → ArithmeticOverflow
2. Отрицательный результат беззнаковой операции → ArithmeticOverflow
3. Деление усекает к нулю
4. Float/bool не принимаются как uint
"""

import pytest

from src.core.errors import ArithmeticOverflow
from src.core.math.numerical_safeguards import (
    MAX_UINT208,
    MAX_UINT256,
    PERCENT_DENOMINATOR,
    checked_add,
    checked_mul,
    checked_sub,
    sum_checked,
    truncating_div,
    validate_uint,
)


# =============================================================================
# ТЕСТЫ: Bounds
# =============================================================================


class TestBounds:
    """Границы fixed-width целых."""

    def test_uint256_bound(self):
        assert MAX_UINT256 == 2**256 - 1

    def test_uint208_bound(self):
        assert MAX_UINT208 == 2**208 - 1
        assert MAX_UINT208 < MAX_UINT256

    def test_percent_denominator_is_whole_percent(self):
        """Проценты в целых единицах, не basis points."""
        assert PERCENT_DENOMINATOR == 100


# =============================================================================
# ТЕСТЫ: validate_uint
# =============================================================================


class TestValidateUint:

    def test_valid_values_pass(self):
        assert validate_uint(0) == 0
        assert validate_uint(200) == 200
        assert validate_uint(MAX_UINT256) == MAX_UINT256

    def test_negative_rejected(self):
        with pytest.raises(ArithmeticOverflow, match="negative"):
            validate_uint(-1)

    def test_above_bound_rejected(self):
        with pytest.raises(ArithmeticOverflow, match="exceeds bound"):
            validate_uint(MAX_UINT256 + 1)

        with pytest.raises(ArithmeticOverflow):
            validate_uint(MAX_UINT208 + 1, bound=MAX_UINT208)

    def test_float_rejected(self):
        with pytest.raises(TypeError, match="must be int"):
            validate_uint(1.0)

    def test_bool_rejected(self):
        """bool — подкласс int, но как вес не допускается."""
        with pytest.raises(TypeError):
            validate_uint(True)


# =============================================================================
# ТЕСТЫ: Checked operations
# =============================================================================


class TestCheckedOperations:

    def test_add(self):
        assert checked_add(2, 3) == 5
        assert checked_add(MAX_UINT256 - 1, 1) == MAX_UINT256

    def test_add_overflow(self):
        with pytest.raises(ArithmeticOverflow, match="Addition overflow"):
            checked_add(MAX_UINT256, 1)

    def test_add_custom_bound(self):
        with pytest.raises(ArithmeticOverflow):
            checked_add(MAX_UINT208, 1, bound=MAX_UINT208)

    def test_sub(self):
        assert checked_sub(5, 3) == 2
        assert checked_sub(5, 5) == 0

    def test_sub_underflow(self):
        """Вычитание ниже нуля — ошибка, а не wrap-around."""
        with pytest.raises(ArithmeticOverflow, match="underflow"):
            checked_sub(3, 5)

    def test_mul(self):
        assert checked_mul(200, 20) == 4000
        assert checked_mul(0, MAX_UINT256) == 0

    def test_mul_overflow(self):
        with pytest.raises(ArithmeticOverflow, match="Multiplication overflow"):
            checked_mul(2**200, 2**60)

    def test_sum_checked(self):
        assert sum_checked([]) == 0
        assert sum_checked([1, 2, 3]) == 6
        assert sum_checked(iter([264, 200])) == 464

    def test_sum_checked_overflow(self):
        with pytest.raises(ArithmeticOverflow):
            sum_checked([MAX_UINT256, 1])


# =============================================================================
# ТЕСТЫ: truncating_div
# =============================================================================


class TestTruncatingDiv:

    def test_exact(self):
        assert truncating_div(4000, 100) == 40

    def test_truncates_positive(self):
        assert truncating_div(7, 2) == 3
        assert truncating_div(99, 100) == 0

    def test_truncates_toward_zero_for_negative(self):
        """Усечение к нулю, а не floor."""
        assert truncating_div(-7, 2) == -3
        assert truncating_div(7, -2) == -3

    def test_division_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            truncating_div(1, 0)
