"""Host ledger — ownership и балансы токенов (внешний коллаборатор движка).

Движок читает ledger через протоколы из interfaces.py; in-memory реализации
используются orchestrator-ом и тестами.
"""

from .fungible_token_ledger import FungibleTokenLedger
from .interfaces import Account, BalanceSource, MaybeAccount, OwnershipAuthority, OwnershipIndex
from .unique_token_ledger import UniqueTokenLedger

__all__ = [
    "Account",
    "MaybeAccount",
    "OwnershipIndex",
    "OwnershipAuthority",
    "BalanceSource",
    "UniqueTokenLedger",
    "FungibleTokenLedger",
]
