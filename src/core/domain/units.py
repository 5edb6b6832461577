"""
VotingUnits — Централизованный модуль конверсии единиц голосования

Единственный допустимый способ преобразований между:
- voting units (человекочитаемые, Decimal, например 0.2)
- scaled units (fixed-point int, 18 знаков, как хранятся в Vote Ledger)

ЗАПРЕЩЕНО смешивать единицы без явного конвертера из этого модуля.
Float в расчётах весов не используется.
"""

from decimal import ROUND_DOWN, Decimal, localcontext
from typing import Final, Union

from src.core.math.numerical_safeguards import MAX_UINT256, validate_uint


# =============================================================================
# FIXED-POINT ПАРАМЕТРЫ
# =============================================================================

# Количество десятичных знаков fixed-point представления
VOTING_UNIT_DECIMALS: Final[int] = 18

# 1 voting unit в scaled-представлении
VOTING_UNIT_SCALE: Final[int] = 10**VOTING_UNIT_DECIMALS

# Базовый вес уникального токена: 0.2 voting unit
BASE_VOTING_POWER_DEFAULT: Final[int] = 2 * 10**17

# Вклад одной единицы fungible баланса (1 unit на 1 quantity, без масштабирования)
FUNGIBLE_UNIT_WEIGHT: Final[int] = 1


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def units_to_scaled(units: Union[Decimal, int, str]) -> int:
    """
    Конверсия: voting units → scaled int.

    Дробная часть сверх VOTING_UNIT_DECIMALS усекается к нулю.

    Args:
        units: Значение в voting units (Decimal/int/str, НЕ float)

    Returns:
        Scaled int

    Raises:
        TypeError: если передан float
        ArithmeticOverflow: если результат отрицательный или > uint256

    Examples:
        >>> units_to_scaled("0.2")
        200000000000000000
        >>> units_to_scaled(1)
        1000000000000000000
    """
    if isinstance(units, float):
        raise TypeError("float is not accepted for voting units, use Decimal or str")

    with localcontext() as ctx:
        ctx.prec = 100
        scaled = (Decimal(units) * VOTING_UNIT_SCALE).to_integral_value(rounding=ROUND_DOWN)
    return validate_uint(int(scaled), "scaled_units", MAX_UINT256)


def scaled_to_units(scaled: int) -> Decimal:
    """
    Конверсия: scaled int → voting units (Decimal, точное значение).

    Examples:
        >>> scaled_to_units(264 * 10**15)
        Decimal('0.264')
    """
    validate_uint(scaled, "scaled_units", MAX_UINT256)
    # uint256 до 78 цифр, точность контекста по умолчанию (28) недостаточна
    with localcontext() as ctx:
        ctx.prec = 100
        return Decimal(scaled) / Decimal(VOTING_UNIT_SCALE)


def format_units(scaled: int, places: int = 4) -> str:
    """
    Человекочитаемое представление для логов/диагностики.

    Examples:
        >>> format_units(264 * 10**15)
        '0.2640'
    """
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        ctx.prec = 100
        return str(scaled_to_units(scaled).quantize(quantum, rounding=ROUND_DOWN))
