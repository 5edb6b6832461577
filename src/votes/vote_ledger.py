"""Vote Ledger — checkpointed delegated voting power.

Хранит для каждого аккаунта delegatee и историю чекпоинтов делегированных
голосов, плюс историю total supply voting units.

Контракт transfer_voting_units(from, to, amount):
- from=None (mint): total supply += amount, null account не уменьшается
- to=None (burn): total supply -= amount, null account не увеличивается
- amount перемещается между delegatee(from) и delegatee(to)

Аккаунт без delegatee голосов никому не даёт (его units учитываются только
в total supply) — как и в референсной модели делегирования.
"""

import copy
import logging
from typing import Callable, Dict, Optional, Tuple

from src.core.errors import FutureLookup
from src.core.math.numerical_safeguards import MAX_UINT208, checked_add, checked_sub, validate_uint
from src.ledger.interfaces import Account, MaybeAccount
from src.votes.checkpoints import Checkpoint, CheckpointHistory
from src.votes.clock import BlockClock

logger = logging.getLogger(__name__)


class VoteLedger:
    """Delegation + checkpoints. Единственная точка записи — transfer_voting_units/delegate."""

    def __init__(
        self,
        units_of: Callable[[Account], int],
        clock: Optional[BlockClock] = None,
    ):
        """
        Args:
            units_of: текущие voting units аккаунта (из weight calculator host-а),
                      используются при смене delegatee
            clock: источник timepoints (default: новый BlockClock)
        """
        self._units_of = units_of
        self.clock = clock or BlockClock()

        self._delegatee: Dict[Account, Account] = {}
        self._delegate_checkpoints: Dict[Account, CheckpointHistory] = {}
        self._total_checkpoints = CheckpointHistory()

    # =========================================================================
    # DELEGATION
    # =========================================================================

    def delegates(self, account: MaybeAccount) -> MaybeAccount:
        if account is None:
            return None
        return self._delegatee.get(account)

    def delegate(self, account: Account, delegatee: MaybeAccount) -> None:
        """Перенаправление всех текущих units аккаунта новому delegatee."""
        old_delegatee = self.delegates(account)
        if delegatee is None:
            self._delegatee.pop(account, None)
        else:
            self._delegatee[account] = delegatee

        units = self._units_of(account)
        logger.info(
            "delegate account=%s from=%s to=%s units=%s",
            account, old_delegatee, delegatee, units,
        )
        self._move_delegate_votes(old_delegatee, delegatee, units)

    # =========================================================================
    # TRANSFER PRIMITIVE
    # =========================================================================

    def transfer_voting_units(self, from_account: MaybeAccount, to_account: MaybeAccount, amount: int) -> None:
        """
        Перемещение amount voting units от from_account к to_account.

        Raises:
            ArithmeticOverflow: выход за uint208 либо underflow у источника
        """
        validate_uint(amount, "amount", MAX_UINT208)
        now = self.clock.now()

        if from_account is None:
            self._total_checkpoints.push(
                now, checked_add(self._total_checkpoints.latest(), amount, MAX_UINT208)
            )
        if to_account is None:
            self._total_checkpoints.push(
                now, checked_sub(self._total_checkpoints.latest(), amount, MAX_UINT208)
            )

        self._move_delegate_votes(self.delegates(from_account), self.delegates(to_account), amount)

    def _move_delegate_votes(self, source: MaybeAccount, destination: MaybeAccount, amount: int) -> None:
        if source == destination or amount == 0:
            return

        now = self.clock.now()
        if source is not None:
            history = self._history(source)
            old_votes, new_votes = history.push(now, checked_sub(history.latest(), amount, MAX_UINT208))
            logger.debug("votes %s: %s -> %s @%s", source, old_votes, new_votes, now)
        if destination is not None:
            history = self._history(destination)
            old_votes, new_votes = history.push(now, checked_add(history.latest(), amount, MAX_UINT208))
            logger.debug("votes %s: %s -> %s @%s", destination, old_votes, new_votes, now)

    def _history(self, account: Account) -> CheckpointHistory:
        history = self._delegate_checkpoints.get(account)
        if history is None:
            history = CheckpointHistory()
            self._delegate_checkpoints[account] = history
        return history

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_votes(self, account: Account) -> int:
        history = self._delegate_checkpoints.get(account)
        return history.latest() if history else 0

    def get_past_votes(self, account: Account, timepoint: int) -> int:
        self._require_past(timepoint)
        history = self._delegate_checkpoints.get(account)
        return history.upper_lookup(timepoint) if history else 0

    def get_total_supply(self) -> int:
        return self._total_checkpoints.latest()

    def get_past_total_supply(self, timepoint: int) -> int:
        self._require_past(timepoint)
        return self._total_checkpoints.upper_lookup(timepoint)

    def num_checkpoints(self, account: Account) -> int:
        history = self._delegate_checkpoints.get(account)
        return len(history) if history else 0

    def checkpoints(self, account: Account) -> Tuple[Checkpoint, ...]:
        history = self._delegate_checkpoints.get(account)
        return history.as_tuple() if history else ()

    def _require_past(self, timepoint: int) -> None:
        current = self.clock.now()
        if timepoint >= current:
            raise FutureLookup(timepoint, current)

    # =========================================================================
    # STATE SNAPSHOT (atomic transitions)
    # =========================================================================

    def snapshot(self) -> dict:
        return copy.deepcopy(
            {
                "delegatee": self._delegatee,
                "delegate_checkpoints": self._delegate_checkpoints,
                "total_checkpoints": self._total_checkpoints,
            }
        )

    def restore(self, state: dict) -> None:
        state = copy.deepcopy(state)
        self._delegatee = state["delegatee"]
        self._delegate_checkpoints = state["delegate_checkpoints"]
        self._total_checkpoints = state["total_checkpoints"]
