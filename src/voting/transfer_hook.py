"""Transfer Hook — voting adjustment после ownership change.

Вызывается orchestrator-ом ПОСЛЕ того, как host ledger применил ownership
change (mint: from=None, burn: to=None). Вычисляет delta и передаёт её в
Vote Ledger одним вызовом transfer_voting_units(from, to, delta).

Уникальные токены — две политики delta (DeltaPolicy):
- LITERAL: пересчитанные post-transfer units предыдущего owner целиком.
  Паритет с исходным поведением; даёт неверную величину, если у owner
  остаются токены. Для mint (null account ничего не держит) используется
  пересчёт units получателя.
- TOKEN_WEIGHT: вес перемещённого токена,
  == old_units(from) - new_units(from) == new_units(to) - old_units(to).

Fungible: каждая пара (id, value) перемещает ровно value units.
"""

import logging
from typing import AbstractSet, List, Optional, Protocol, Sequence

from src.core.errors import BatchLengthMismatch
from src.core.domain.voting_transfer import DeltaPolicy, VotingUnitTransfer
from src.core.math.numerical_safeguards import checked_sub
from src.ledger.interfaces import MaybeAccount
from src.voting.weight_calculator import WeightCalculator

logger = logging.getLogger(__name__)


class VotingUnitsLedger(Protocol):
    """Минимальный контракт Vote Ledger, который использует hook."""

    def transfer_voting_units(self, from_account: MaybeAccount, to_account: MaybeAccount, amount: int) -> None:
        ...


class UniqueTokenTransferHook:
    """Hook для уникальных токенов."""

    def __init__(
        self,
        calculator: WeightCalculator,
        vote_ledger: VotingUnitsLedger,
        policy: DeltaPolicy = DeltaPolicy.TOKEN_WEIGHT,
    ):
        self._calculator = calculator
        self._vote_ledger = vote_ledger
        self.policy = policy

    def compute_delta(self, from_account: MaybeAccount, to_account: MaybeAccount, token_id: int) -> int:
        """Delta для уже применённого ownership change (без записи в Vote Ledger)."""
        if self.policy is DeltaPolicy.LITERAL:
            subject = from_account if from_account is not None else to_account
            return self._calculator.get_voting_units(subject)
        return self._calculator.token_weight(token_id)

    def after_transfer(self, from_account: MaybeAccount, to_account: MaybeAccount, token_id: int) -> VotingUnitTransfer:
        """
        Перемещение voting units, соответствующее ownership change.

        Returns:
            VotingUnitTransfer с фактически переданной delta

        Raises:
            ArithmeticOverflow: при пересчёте весов или записи чекпоинтов
        """
        amount = self.compute_delta(from_account, to_account, token_id)
        self._vote_ledger.transfer_voting_units(from_account, to_account, amount)

        logger.debug(
            "voting units moved: token=%s from=%s to=%s amount=%s policy=%s",
            token_id, from_account, to_account, amount, self.policy.value,
        )
        return VotingUnitTransfer(
            from_account=from_account,
            to_account=to_account,
            amount=amount,
            token_id=token_id,
            policy=self.policy,
        )

    def after_reweight(self, owner: MaybeAccount, token_id: int, previous_weight: int) -> Optional[VotingUnitTransfer]:
        """
        Синхронизация Vote Ledger после attach multiplier к уже выпущенному токену.

        TOKEN_WEIGHT: прирост веса выпускается owner-у как issuance (from=None),
        иначе последующий transfer снимет с delegatee больше, чем было выдано.
        LITERAL: паритет с исходным поведением — attach голоса не меняет.
        """
        if self.policy is DeltaPolicy.LITERAL or owner is None:
            return None

        increment = checked_sub(self._calculator.token_weight(token_id), previous_weight)
        if increment == 0:
            return None

        self._vote_ledger.transfer_voting_units(None, owner, increment)
        logger.debug("reweight issued: token=%s owner=%s increment=%s", token_id, owner, increment)
        return VotingUnitTransfer(
            from_account=None,
            to_account=owner,
            amount=increment,
            token_id=token_id,
            policy=self.policy,
        )


class FungibleTransferHook:
    """Hook для fungible классов: 1 unit на 1 quantity, без multipliers.

    voting_class_ids=None — голосуют все классы; иначе пары с прочими
    классами пропускаются (их балансы не входят в voting units).
    """

    def __init__(self, vote_ledger: VotingUnitsLedger, voting_class_ids: Optional[AbstractSet[int]] = None):
        self._vote_ledger = vote_ledger
        self._voting_class_ids = frozenset(voting_class_ids) if voting_class_ids is not None else None

    def after_batch_transfer(
        self,
        from_account: MaybeAccount,
        to_account: MaybeAccount,
        token_class_ids: Sequence[int],
        values: Sequence[int],
    ) -> List[VotingUnitTransfer]:
        """
        Перемещение value units для каждой пары (id, value).

        Raises:
            BatchLengthMismatch: len(ids) != len(values)
        """
        if len(token_class_ids) != len(values):
            raise BatchLengthMismatch(len(token_class_ids), len(values))

        transfers = []
        for token_class_id, value in zip(token_class_ids, values):
            if self._voting_class_ids is not None and token_class_id not in self._voting_class_ids:
                continue
            self._vote_ledger.transfer_voting_units(from_account, to_account, value)
            transfers.append(
                VotingUnitTransfer(
                    from_account=from_account,
                    to_account=to_account,
                    amount=value,
                    token_class_id=token_class_id,
                )
            )

        logger.debug(
            "batch voting units moved: from=%s to=%s pairs=%s total=%s",
            from_account, to_account, len(transfers), sum(t.amount for t in transfers),
        )
        return transfers
