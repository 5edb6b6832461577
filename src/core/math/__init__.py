"""
Core math modules для voting power engine

Целочисленные примитивы и compounding весов с гарантией детерминизма.
"""

# Numerical Safeguards (checked uint arithmetic)
from src.core.math.numerical_safeguards import (
    # Bounds
    MAX_UINT208,
    MAX_UINT256,
    PERCENT_DENOMINATOR,
    # Checked operations
    checked_add,
    checked_mul,
    checked_sub,
    sum_checked,
    truncating_div,
    # Validation
    validate_uint,
)

# Compounding (multipliers)
from src.core.math.compounding import (
    CompoundingMetrics,
    apply_percentage,
    compound_weight,
    compound_weight_trajectory,
    compute_compounding_metrics,
)

__all__ = [
    # Numerical Safeguards: Bounds
    "MAX_UINT208",
    "MAX_UINT256",
    "PERCENT_DENOMINATOR",
    # Numerical Safeguards: Checked operations
    "checked_add",
    "checked_mul",
    "checked_sub",
    "sum_checked",
    "truncating_div",
    # Numerical Safeguards: Validation
    "validate_uint",
    # Compounding: Types
    "CompoundingMetrics",
    # Compounding: Functions
    "apply_percentage",
    "compound_weight",
    "compound_weight_trajectory",
    "compute_compounding_metrics",
]
