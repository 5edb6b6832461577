"""
Domain models and value objects.

Contains fundamental domain entities like Multiplier, TokenVotingRecord,
VotingUnitTransfer and the voting-unit conversions.
"""

from src.core.domain.multiplier import Multiplier, TokenVotingRecord, WeightBreakdown
from src.core.domain.units import (
    BASE_VOTING_POWER_DEFAULT,
    FUNGIBLE_UNIT_WEIGHT,
    VOTING_UNIT_DECIMALS,
    VOTING_UNIT_SCALE,
    format_units,
    scaled_to_units,
    units_to_scaled,
)
from src.core.domain.voting_transfer import DeltaPolicy, TransferKind, VotingUnitTransfer

__all__ = [
    # Units module
    "BASE_VOTING_POWER_DEFAULT",
    "FUNGIBLE_UNIT_WEIGHT",
    "VOTING_UNIT_DECIMALS",
    "VOTING_UNIT_SCALE",
    "format_units",
    "scaled_to_units",
    "units_to_scaled",
    # Multiplier models
    "Multiplier",
    "TokenVotingRecord",
    "WeightBreakdown",
    # Transfer result
    "DeltaPolicy",
    "TransferKind",
    "VotingUnitTransfer",
]
