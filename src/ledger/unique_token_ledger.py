"""
UniqueTokenLedger — in-memory host ledger уникальных токенов

Reference-реализация host ledger для уникальных (NFT-style) токенов:
- ownership + enumeration by owner (swap-and-pop индекс)
- approvals: per-token approved + operator for all
- apply_transfer: ownership change без каких-либо voting side effects

Voting adjustments сюда НЕ встроены: orchestrator сначала вызывает
apply_transfer, затем отдельно transfer hook.
"""

import copy
import logging
from typing import Dict, List, Optional, Set

from src.core.errors import (
    InvalidOwner,
    InvalidReceiver,
    TokenAlreadyMinted,
    TokenNotFound,
    Unauthorized,
)
from src.ledger.interfaces import Account, MaybeAccount

logger = logging.getLogger(__name__)


class UniqueTokenLedger:
    """Ownership, enumeration и authorization уникальных токенов."""

    def __init__(self) -> None:
        self._owners: Dict[int, Account] = {}
        self._owned_tokens: Dict[Account, List[int]] = {}
        # Позиция токена в _owned_tokens[owner] для O(1) удаления
        self._owned_index: Dict[int, int] = {}
        self._token_approvals: Dict[int, Account] = {}
        self._operator_approvals: Dict[Account, Set[Account]] = {}

    # =========================================================================
    # QUERIES
    # =========================================================================

    def exists(self, token_id: int) -> bool:
        return token_id in self._owners

    def owner_of(self, token_id: int) -> Account:
        owner = self._owners.get(token_id)
        if owner is None:
            raise TokenNotFound(token_id)
        return owner

    def balance_of(self, account: Account) -> int:
        if account is None:
            raise InvalidOwner("null account is not a valid owner")
        return len(self._owned_tokens.get(account, ()))

    def count_owned(self, account: Account) -> int:
        return self.balance_of(account)

    def owned_at(self, account: Account, index: int) -> int:
        owned = self._owned_tokens.get(account, [])
        if not 0 <= index < len(owned):
            raise IndexError(f"Index {index} out of bounds for {account!r} ({len(owned)} tokens)")
        return owned[index]

    def tokens_of(self, account: Account) -> List[int]:
        return list(self._owned_tokens.get(account, []))

    def total_supply(self) -> int:
        return len(self._owners)

    # =========================================================================
    # APPROVALS
    # =========================================================================

    def get_approved(self, token_id: int) -> Optional[Account]:
        self.owner_of(token_id)
        return self._token_approvals.get(token_id)

    def is_approved_for_all(self, owner: Account, operator: Account) -> bool:
        return operator in self._operator_approvals.get(owner, set())

    def approve(self, caller: Account, spender: MaybeAccount, token_id: int) -> None:
        """
        Per-token approval. spender=None снимает approval.

        Raises:
            Unauthorized: если caller не owner и не operator owner-а
        """
        owner = self.owner_of(token_id)
        if caller != owner and not self.is_approved_for_all(owner, caller):
            raise Unauthorized(caller, token_id)

        if spender is None:
            self._token_approvals.pop(token_id, None)
        else:
            self._token_approvals[token_id] = spender
        logger.debug("approve token=%s spender=%s by=%s", token_id, spender, caller)

    def set_approval_for_all(self, owner: Account, operator: Account, approved: bool) -> None:
        if operator is None or operator == owner:
            raise InvalidReceiver(f"invalid operator {operator!r}")
        operators = self._operator_approvals.setdefault(owner, set())
        if approved:
            operators.add(operator)
        else:
            operators.discard(operator)

    def is_approved_or_owner(self, spender: Account, token_id: int) -> bool:
        """Unknown token → False (не ошибка): authorization просто не проходит."""
        owner = self._owners.get(token_id)
        if owner is None or spender is None:
            return False
        return (
            spender == owner
            or self._token_approvals.get(token_id) == spender
            or self.is_approved_for_all(owner, spender)
        )

    # =========================================================================
    # OWNERSHIP CHANGE
    # =========================================================================

    def apply_transfer(self, from_account: MaybeAccount, to_account: MaybeAccount, token_id: int) -> MaybeAccount:
        """
        Применение ownership change (mint / burn / transfer).

        Args:
            from_account: текущий owner (None — mint)
            to_account: новый owner (None — burn)
            token_id: токен

        Returns:
            Предыдущий owner (None для mint)

        Raises:
            TokenAlreadyMinted: mint существующего токена
            TokenNotFound: burn/transfer несуществующего токена
            InvalidOwner: from_account не совпадает с текущим owner
            InvalidReceiver: mint в null account
        """
        if from_account is None:
            if to_account is None:
                raise InvalidReceiver("mint to null account")
            if token_id in self._owners:
                raise TokenAlreadyMinted(token_id)
            self._add_token(to_account, token_id)
            return None

        owner = self.owner_of(token_id)
        if owner != from_account:
            raise InvalidOwner(f"token {token_id} is owned by {owner!r}, not {from_account!r}")

        self._token_approvals.pop(token_id, None)
        self._remove_token(owner, token_id)
        if to_account is not None:
            self._add_token(to_account, token_id)
        return owner

    def _add_token(self, account: Account, token_id: int) -> None:
        owned = self._owned_tokens.setdefault(account, [])
        self._owned_index[token_id] = len(owned)
        owned.append(token_id)
        self._owners[token_id] = account

    def _remove_token(self, account: Account, token_id: int) -> None:
        owned = self._owned_tokens[account]
        index = self._owned_index.pop(token_id)
        last = owned.pop()
        if last != token_id:
            # swap-and-pop: последний токен занимает освободившуюся позицию
            owned[index] = last
            self._owned_index[last] = index
        if not owned:
            del self._owned_tokens[account]
        del self._owners[token_id]

    # =========================================================================
    # STATE SNAPSHOT (atomic transitions)
    # =========================================================================

    def snapshot(self) -> dict:
        return copy.deepcopy(
            {
                "owners": self._owners,
                "owned_tokens": self._owned_tokens,
                "owned_index": self._owned_index,
                "token_approvals": self._token_approvals,
                "operator_approvals": self._operator_approvals,
            }
        )

    def restore(self, state: dict) -> None:
        state = copy.deepcopy(state)
        self._owners = state["owners"]
        self._owned_tokens = state["owned_tokens"]
        self._owned_index = state["owned_index"]
        self._token_approvals = state["token_approvals"]
        self._operator_approvals = state["operator_approvals"]
