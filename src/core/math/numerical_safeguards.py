"""
Numerical Safeguards — Checked Integer Arithmetic

Модуль обеспечивает детерминированную целочисленную арифметику для весов
голосования:
- Checked add/sub/mul/div для беззнаковых fixed-width целых
- Границы uint256 (веса) и uint208 (чекпоинты)
- Валидация входов (только int, без bool и float)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Никакого wrap-around: выход за границу → ArithmeticOverflow
2. Отрицательный результат беззнаковой операции → ArithmeticOverflow
3. Деление усекает к нулю (для неотрицательных операндов == floor)
4. Float никогда не участвует в расчёте весов
"""

from typing import Final

from src.core.errors import ArithmeticOverflow

# =============================================================================
# ГРАНИЦЫ FIXED-WIDTH ЦЕЛЫХ
# =============================================================================

# Максимум для весов токенов и сумм voting units
MAX_UINT256: Final[int] = 2**256 - 1

# Максимум для значений в чекпоинтах Vote Ledger
MAX_UINT208: Final[int] = 2**208 - 1

# Знаменатель процентов (целые проценты, НЕ basis points)
PERCENT_DENOMINATOR: Final[int] = 100


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_uint(value: int, name: str = "value", bound: int = MAX_UINT256) -> int:
    """
    Проверка, что value — целое в диапазоне [0, bound].

    Args:
        value: Проверяемое значение
        name: Имя параметра для сообщения об ошибке
        bound: Верхняя граница (включительно)

    Returns:
        value без изменений

    Raises:
        TypeError: если value не int (bool тоже отвергается)
        ArithmeticOverflow: если value < 0 или value > bound

    Examples:
        >>> validate_uint(5)
        5
        >>> validate_uint(-1)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        ArithmeticOverflow: ...
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")

    if value < 0:
        raise ArithmeticOverflow(f"{name}={value} is negative (unsigned underflow)")

    if value > bound:
        raise ArithmeticOverflow(f"{name}={value} exceeds bound {bound}")

    return value


# =============================================================================
# CHECKED ОПЕРАЦИИ
# =============================================================================


def checked_add(a: int, b: int, bound: int = MAX_UINT256) -> int:
    """
    Сложение с проверкой переполнения.

    Examples:
        >>> checked_add(2, 3)
        5
    """
    result = a + b
    if result > bound:
        raise ArithmeticOverflow(f"Addition overflow: {a} + {b} > {bound}")
    if result < 0:
        raise ArithmeticOverflow(f"Addition underflow: {a} + {b} < 0")
    return result


def checked_sub(a: int, b: int, bound: int = MAX_UINT256) -> int:
    """
    Вычитание с проверкой underflow.

    Examples:
        >>> checked_sub(5, 3)
        2
    """
    result = a - b
    if result < 0:
        raise ArithmeticOverflow(f"Subtraction underflow: {a} - {b} < 0")
    if result > bound:
        raise ArithmeticOverflow(f"Subtraction overflow: {a} - {b} > {bound}")
    return result


def checked_mul(a: int, b: int, bound: int = MAX_UINT256) -> int:
    """
    Умножение с проверкой переполнения.

    Examples:
        >>> checked_mul(200, 20)
        4000
    """
    result = a * b
    if result > bound:
        raise ArithmeticOverflow(f"Multiplication overflow: {a} * {b} > {bound}")
    if result < 0:
        raise ArithmeticOverflow(f"Multiplication underflow: {a} * {b} < 0")
    return result


def truncating_div(numerator: int, denominator: int) -> int:
    """
    Целочисленное деление с усечением к нулю.

    Для неотрицательных операндов совпадает с `//`.

    Raises:
        ZeroDivisionError: если denominator == 0

    Examples:
        >>> truncating_div(4000, 100)
        40
        >>> truncating_div(7, 2)
        3
        >>> truncating_div(-7, 2)
        -3
    """
    if denominator == 0:
        raise ZeroDivisionError("truncating_div by zero")

    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def sum_checked(values, bound: int = MAX_UINT256) -> int:
    """
    Сумма последовательности с проверкой границы на каждом шаге.

    Examples:
        >>> sum_checked([1, 2, 3])
        6
        >>> sum_checked([])
        0
    """
    total = 0
    for value in values:
        total = checked_add(total, value, bound=bound)
    return total
