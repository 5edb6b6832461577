"""Votes — checkpointed delegated voting power (Vote Ledger коллаборатор).

- Delegation: голоса аккаунта учитываются у его delegatee
- Checkpoints: история голосов по timepoints для исторических запросов
- transfer_voting_units: единственный примитив, который вызывает движок
"""

from .checkpoints import Checkpoint, CheckpointHistory
from .clock import BlockClock
from .vote_ledger import VoteLedger

__all__ = [
    "BlockClock",
    "Checkpoint",
    "CheckpointHistory",
    "VoteLedger",
]
