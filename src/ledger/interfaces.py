"""
Interfaces (protocols) consumed from the host token ledger.

Движок не хранит ownership/balances сам — только читает их через эти
протоколы (structural subtyping) и никогда не пишет.
"""

from typing import Optional, Protocol, Tuple, runtime_checkable

# Account: адрес/идентификатор аккаунта. None означает null account (mint/burn).
Account = str
MaybeAccount = Optional[Account]


@runtime_checkable
class OwnershipIndex(Protocol):
    """Enumeration by owner для уникальных токенов."""

    def count_owned(self, account: Account) -> int:
        """Количество токенов во владении account."""
        ...

    def owned_at(self, account: Account, index: int) -> int:
        """token_id по индексу в [0, count_owned(account))."""
        ...


@runtime_checkable
class OwnershipAuthority(Protocol):
    """Authorization predicate host ledger (owner или approved operator)."""

    def is_approved_or_owner(self, spender: Account, token_id: int) -> bool:
        ...


@runtime_checkable
class BalanceSource(Protocol):
    """Балансы fungible токенов по классам."""

    def balance_of(self, account: Account, token_class_id: int) -> int:
        ...

    def token_class_ids(self) -> Tuple[int, ...]:
        """Все известные ledger-у классы токенов."""
        ...
