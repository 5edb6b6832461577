"""Weight Calculator — voting units аккаунта из текущих holdings.

Уникальные токены:
    token_weight = compound(base, multipliers) + attestation(token)
    units(account) = Σ token_weight по всем owned токенам

Compounding: каждый multiplier применяется к накопленному весу
(base=200, [20, 10] → 264, а не 260). Усечение к нулю на каждом шаге.

Fungible токены:
    units(account) = Σ balance_of(account, id) по сконфигурированным классам
    (1 unit на 1 quantity, multipliers не применяются)

Calculator только читает: host ledger, Multiplier Store, attestation source.
"""

import logging
from typing import Iterable, Optional, Tuple

from src.core.domain.multiplier import WeightBreakdown
from src.core.domain.units import BASE_VOTING_POWER_DEFAULT, FUNGIBLE_UNIT_WEIGHT, format_units
from src.core.math.compounding import compound_weight
from src.core.math.numerical_safeguards import MAX_UINT256, checked_add, checked_mul, sum_checked, validate_uint
from src.ledger.interfaces import BalanceSource, MaybeAccount, OwnershipIndex
from src.voting.attestation import AttestationSource, NullAttestationSource
from src.voting.multiplier_store import MultiplierStore

logger = logging.getLogger(__name__)


class WeightCalculator:
    """Voting units для уникальных (NFT-style) токенов."""

    def __init__(
        self,
        ownership: OwnershipIndex,
        store: MultiplierStore,
        base_voting_power: int = BASE_VOTING_POWER_DEFAULT,
        attestation: Optional[AttestationSource] = None,
    ):
        self._ownership = ownership
        self._store = store
        self.base_voting_power = validate_uint(base_voting_power, "base_voting_power", MAX_UINT256)
        self._attestation = attestation or NullAttestationSource()

    def token_weight(self, token_id: int) -> int:
        """
        Вес одного токена. Unknown token → base (пустая последовательность).

        Raises:
            ArithmeticOverflow: переполнение uint256 при compounding
        """
        percentages = [m.percentage for m in self._store.read(token_id)]
        weight = compound_weight(self.base_voting_power, percentages)
        return checked_add(weight, self._attestation.contribution(token_id))

    def weight_breakdown(self, token_id: int) -> WeightBreakdown:
        return WeightBreakdown.build(
            token_id=token_id,
            base=self.base_voting_power,
            multipliers=self._store.read(token_id),
            attestation_bonus=self._attestation.contribution(token_id),
        )

    def owned_tokens(self, account: MaybeAccount) -> Tuple[int, ...]:
        if account is None:
            return ()
        count = self._ownership.count_owned(account)
        return tuple(self._ownership.owned_at(account, i) for i in range(count))

    def get_voting_units(self, account: MaybeAccount) -> int:
        """
        Сумма весов всех owned токенов. None / нет токенов → 0.

        Raises:
            ArithmeticOverflow: сумма превышает uint256
        """
        tokens = self.owned_tokens(account)
        units = sum_checked(self.token_weight(token_id) for token_id in tokens)
        logger.debug(
            "voting units recomputed: account=%s tokens=%s units=%s (%s)",
            account, len(tokens), units, format_units(units),
        )
        return units


class FungibleWeightCalculator:
    """Voting units для fungible классов: сумма балансов, без multipliers.

    token_class_ids=None — учитываются все классы, известные host ledger-у.
    """

    def __init__(self, balances: BalanceSource, token_class_ids: Optional[Iterable[int]] = None):
        self._balances = balances
        self._token_class_ids: Optional[Tuple[int, ...]] = (
            tuple(token_class_ids) if token_class_ids is not None else None
        )

    @property
    def token_class_ids(self) -> Tuple[int, ...]:
        if self._token_class_ids is not None:
            return self._token_class_ids
        return self._balances.token_class_ids()

    def get_voting_units(self, account: MaybeAccount) -> int:
        return self.get_voting_units_for(account, self.token_class_ids)

    def get_voting_units_for(self, account: MaybeAccount, token_class_ids: Iterable[int]) -> int:
        """Сумма балансов по произвольному набору классов; None → 0."""
        if account is None:
            return 0
        return sum_checked(
            checked_mul(self._balances.balance_of(account, token_class_id), FUNGIBLE_UNIT_WEIGHT)
            for token_class_id in token_class_ids
        )
