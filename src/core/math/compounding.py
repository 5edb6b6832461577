"""
Compounding — Compounding Percentage Multipliers for Token Weight

Модуль вычисляет вес токена из базового веса и упорядоченной
последовательности процентных multipliers:

    weight_0 = base
    weight_k = weight_{k-1} + weight_{k-1} * pct_k // 100

Multiplier k применяется к результату multiplier k-1, а НЕ к исходному base.
Пример: base=200, [20, 10] → 200 → 240 → 264 (а не 200 + 20% + 10% = 260).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Порядок multipliers значим (insertion order)
2. Деление усекает к нулю на каждом шаге (политика округления, не ошибка)
3. weight_k >= weight_{k-1} (проценты неотрицательны)
4. Переполнение uint256 → ArithmeticOverflow, без wrap-around
5. Все операции детерминированы и воспроизводимы (только int)
"""

from typing import Iterable, NamedTuple

from src.core.math.numerical_safeguards import (
    MAX_UINT256,
    PERCENT_DENOMINATOR,
    checked_add,
    checked_mul,
    truncating_div,
    validate_uint,
)


# =============================================================================
# COMPOUND STEP
# =============================================================================


def apply_percentage(weight: int, percentage: int, bound: int = MAX_UINT256) -> int:
    """
    Один шаг compounding: weight + weight * percentage / 100.

    Args:
        weight: Текущий вес (scaled integer)
        percentage: Процент в целых единицах (20 == +20%)
        bound: Верхняя граница промежуточных значений

    Returns:
        Новый вес

    Raises:
        ArithmeticOverflow: при переполнении или отрицательном входе

    Examples:
        >>> apply_percentage(200, 20)
        240
        >>> apply_percentage(240, 10)
        264
        >>> apply_percentage(3, 50)  # 3 * 50 / 100 = 1.5 → 1
        4
    """
    validate_uint(weight, "weight", bound)
    validate_uint(percentage, "percentage", bound)

    increment = truncating_div(checked_mul(weight, percentage, bound), PERCENT_DENOMINATOR)
    return checked_add(weight, increment, bound)


# =============================================================================
# COMPOUND WEIGHT
# =============================================================================


def compound_weight(
    base: int,
    percentages: Iterable[int],
    bound: int = MAX_UINT256,
) -> int:
    """
    Итоговый вес после применения всех multipliers по порядку.

    Args:
        base: Базовый вес (scaled integer)
        percentages: Проценты в порядке добавления multipliers
        bound: Верхняя граница промежуточных значений

    Returns:
        Итоговый вес (>= base)

    Examples:
        >>> compound_weight(200, [20, 10])
        264
        >>> compound_weight(200, [])
        200
        >>> compound_weight(200, [10, 20])  # порядок влияет только через усечение
        264
    """
    weight = validate_uint(base, "base", bound)
    for percentage in percentages:
        weight = apply_percentage(weight, percentage, bound)
    return weight


def compound_weight_trajectory(
    base: int,
    percentages: Iterable[int],
    bound: int = MAX_UINT256,
) -> list[int]:
    """
    Полная траектория веса: [w_0, w_1, ..., w_K], длина len(percentages) + 1.

    Examples:
        >>> compound_weight_trajectory(200, [20, 10])
        [200, 240, 264]
        >>> compound_weight_trajectory(200, [])
        [200]
    """
    trajectory = [validate_uint(base, "base", bound)]
    for percentage in percentages:
        trajectory.append(apply_percentage(trajectory[-1], percentage, bound))
    return trajectory


# =============================================================================
# DIAGNOSTICS
# =============================================================================


class CompoundingMetrics(NamedTuple):
    """Метрики compounding для одного токена (диагностика/аудит)."""

    base: int  # Исходный вес
    final_weight: int  # Вес после всех multipliers
    total_increment: int  # final_weight - base
    truncation_loss: int  # Потери от усечения относительно точного произведения (округлённо вниз)
    num_multipliers: int


def compute_compounding_metrics(
    base: int,
    percentages: Iterable[int],
    bound: int = MAX_UINT256,
) -> CompoundingMetrics:
    """
    Метрики compounding, включая потери от пошагового усечения.

    Точное значение: base * Π (100 + pct_k) / 100^K.

    Examples:
        >>> m = compute_compounding_metrics(200, [20, 10])
        >>> (m.final_weight, m.total_increment, m.truncation_loss)
        (264, 64, 0)
        >>> compute_compounding_metrics(3, [50]).truncation_loss
        0
        >>> compute_compounding_metrics(3, [33, 33]).truncation_loss  # 3 → 3 → 3, точно 5.3
        2
    """
    pcts = list(percentages)
    final_weight = compound_weight(base, pcts, bound)

    # Точное значение без промежуточного усечения (Python int без ограничения ширины)
    numerator = base
    denominator = 1
    for percentage in pcts:
        numerator *= PERCENT_DENOMINATOR + percentage
        denominator *= PERCENT_DENOMINATOR
    exact_floor = numerator // denominator

    return CompoundingMetrics(
        base=base,
        final_weight=final_weight,
        total_increment=final_weight - base,
        truncation_loss=exact_floor - final_weight,
        num_multipliers=len(pcts),
    )
