"""Voting — ядро движка voting power.

- MultiplierStore: per-token append-only multipliers
- WeightCalculator / FungibleWeightCalculator: voting units из holdings
- UniqueTokenTransferHook / FungibleTransferHook: delta → Vote Ledger
- UniqueVotingToken / FungibleVotingToken: атомарные state transitions
"""

from .attestation import AttestationSource, NullAttestationSource
from .config import VotingConfig
from .engine import FungibleVotingToken, UniqueVotingToken
from .multiplier_store import MultiplierStore
from .transactions import TransitionGuard
from .transfer_hook import FungibleTransferHook, UniqueTokenTransferHook, VotingUnitsLedger
from .weight_calculator import FungibleWeightCalculator, WeightCalculator

__all__ = [
    "AttestationSource",
    "NullAttestationSource",
    "VotingConfig",
    "MultiplierStore",
    "WeightCalculator",
    "FungibleWeightCalculator",
    "UniqueTokenTransferHook",
    "FungibleTransferHook",
    "VotingUnitsLedger",
    "TransitionGuard",
    "UniqueVotingToken",
    "FungibleVotingToken",
]
