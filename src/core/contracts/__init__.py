"""
Contract Validation Module

Модуль для валидации JSON контрактов движка voting power.
"""

from .validators import (
    ContractValidator,
    MultiplierValidator,
    SchemaLoader,
    TokenVotingRecordValidator,
    VotingConfigValidator,
    VotingUnitTransferValidator,
    validate_multiplier,
    validate_token_voting_record,
    validate_voting_config,
    validate_voting_unit_transfer,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "MultiplierValidator",
    "TokenVotingRecordValidator",
    "VotingUnitTransferValidator",
    "VotingConfigValidator",
    # Functions
    "validate_multiplier",
    "validate_token_voting_record",
    "validate_voting_unit_transfer",
    "validate_voting_config",
]
