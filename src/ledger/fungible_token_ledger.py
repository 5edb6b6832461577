"""
FungibleTokenLedger — in-memory host ledger fungible классов токенов

Reference-реализация multi-class (ERC-1155-style) балансов:
balance_of(account, id), batch ownership change, operator approvals.
"""

import copy
import logging
from typing import Dict, List, Sequence, Set, Tuple

from src.core.errors import BatchLengthMismatch, InsufficientBalance, InvalidReceiver
from src.core.math.numerical_safeguards import checked_add, checked_sub, validate_uint
from src.ledger.interfaces import Account, MaybeAccount

logger = logging.getLogger(__name__)


class FungibleTokenLedger:
    """Балансы по классам токенов; 1 quantity == 1 unit баланса."""

    def __init__(self) -> None:
        # token_class_id -> account -> balance
        self._balances: Dict[int, Dict[Account, int]] = {}
        self._supply: Dict[int, int] = {}
        self._operator_approvals: Dict[Account, Set[Account]] = {}

    def balance_of(self, account: Account, token_class_id: int) -> int:
        return self._balances.get(token_class_id, {}).get(account, 0)

    def balance_of_batch(self, accounts: Sequence[Account], token_class_ids: Sequence[int]) -> List[int]:
        if len(accounts) != len(token_class_ids):
            raise BatchLengthMismatch(len(token_class_ids), len(accounts))
        return [self.balance_of(a, i) for a, i in zip(accounts, token_class_ids)]

    def total_supply(self, token_class_id: int) -> int:
        return self._supply.get(token_class_id, 0)

    def token_class_ids(self) -> Tuple[int, ...]:
        return tuple(sorted(self._balances))

    def set_approval_for_all(self, owner: Account, operator: Account, approved: bool) -> None:
        if operator is None or operator == owner:
            raise InvalidReceiver(f"invalid operator {operator!r}")
        operators = self._operator_approvals.setdefault(owner, set())
        if approved:
            operators.add(operator)
        else:
            operators.discard(operator)

    def is_approved_for_all(self, owner: Account, operator: Account) -> bool:
        return operator in self._operator_approvals.get(owner, set())

    def apply_batch(
        self,
        from_account: MaybeAccount,
        to_account: MaybeAccount,
        token_class_ids: Sequence[int],
        values: Sequence[int],
    ) -> None:
        """
        Применение batch изменения балансов (mint / burn / transfer).

        Raises:
            BatchLengthMismatch: len(ids) != len(values)
            InsufficientBalance: у from_account недостаточно баланса
            InvalidReceiver: from и to одновременно null
        """
        if len(token_class_ids) != len(values):
            raise BatchLengthMismatch(len(token_class_ids), len(values))
        if from_account is None and to_account is None:
            raise InvalidReceiver("both from and to are the null account")

        for token_class_id, value in zip(token_class_ids, values):
            validate_uint(value, "value")
            balances = self._balances.setdefault(token_class_id, {})

            if from_account is None:
                self._supply[token_class_id] = checked_add(self.total_supply(token_class_id), value)
            else:
                balance = balances.get(from_account, 0)
                if balance < value:
                    raise InsufficientBalance(from_account, token_class_id, balance, value)
                balances[from_account] = balance - value

            if to_account is None:
                self._supply[token_class_id] = checked_sub(self.total_supply(token_class_id), value)
            else:
                balances[to_account] = checked_add(balances.get(to_account, 0), value)

        logger.debug(
            "apply_batch from=%s to=%s ids=%s values=%s",
            from_account, to_account, list(token_class_ids), list(values),
        )

    def snapshot(self) -> dict:
        return copy.deepcopy(
            {
                "balances": self._balances,
                "supply": self._supply,
                "operator_approvals": self._operator_approvals,
            }
        )

    def restore(self, state: dict) -> None:
        state = copy.deepcopy(state)
        self._balances = state["balances"]
        self._supply = state["supply"]
        self._operator_approvals = state["operator_approvals"]
