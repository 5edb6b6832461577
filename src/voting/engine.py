"""Engine — orchestrating voting tokens.

Явная двухшаговая композиция вместо цепочки override-ов:
    1. host ledger применяет ownership change
    2. transfer hook пересчитывает веса и двигает voting units в Vote Ledger

Каждый state-changing вызов — атомарный transition (TransitionGuard):
полный commit либо полный rollback всех компонентов; вложенные
state-changing вызовы запрещены (ReentrantCall).
"""

import logging
from typing import AbstractSet, List, Optional, Sequence

from src.core.domain.multiplier import Multiplier, WeightBreakdown
from src.core.domain.voting_transfer import VotingUnitTransfer
from src.core.errors import InvalidReceiver, Unauthorized
from src.ledger.fungible_token_ledger import FungibleTokenLedger
from src.ledger.interfaces import Account, MaybeAccount
from src.ledger.unique_token_ledger import UniqueTokenLedger
from src.votes.clock import BlockClock
from src.votes.vote_ledger import VoteLedger
from src.voting.attestation import NullAttestationSource
from src.voting.config import VotingConfig
from src.voting.multiplier_store import MultiplierStore
from src.voting.transactions import TransitionGuard
from src.voting.transfer_hook import FungibleTransferHook, UniqueTokenTransferHook
from src.voting.weight_calculator import FungibleWeightCalculator, WeightCalculator

logger = logging.getLogger(__name__)


# =============================================================================
# UNIQUE (NFT-STYLE) TOKEN
# =============================================================================


class UniqueVotingToken:
    """Уникальные токены с compounding multipliers и checkpointed голосами."""

    def __init__(self, config: Optional[VotingConfig] = None, clock: Optional[BlockClock] = None):
        self.config = config or VotingConfig()

        self.ledger = UniqueTokenLedger()
        self.store = MultiplierStore(self.ledger, self.config.max_multipliers_per_token)
        self.calculator = WeightCalculator(
            self.ledger,
            self.store,
            base_voting_power=self.config.base_voting_power,
            attestation=NullAttestationSource(self.config.attestation_endpoint),
        )
        self.votes = VoteLedger(units_of=self.calculator.get_voting_units, clock=clock)
        self.hook = UniqueTokenTransferHook(self.calculator, self.votes, self.config.delta_policy)

        self._guard = TransitionGuard(self.ledger, self.store, self.votes)
        self.transfer_log: List[VotingUnitTransfer] = []

    # =========================================================================
    # STATE TRANSITIONS
    # =========================================================================

    def mint(self, to_account: Account, token_id: int) -> VotingUnitTransfer:
        if to_account is None:
            raise InvalidReceiver("mint to null account")
        with self._guard.atomic("mint"):
            result = self._update(None, to_account, token_id)
        logger.info("minted token=%s to=%s units=%s", token_id, to_account, result.amount)
        return result

    def burn(self, caller: Account, token_id: int) -> VotingUnitTransfer:
        with self._guard.atomic("burn"):
            owner = self.ledger.owner_of(token_id)
            self._require_authorized(caller, token_id)
            result = self._update(owner, None, token_id)
            if self.config.purge_multipliers_on_burn:
                self.store.purge(token_id)
        logger.info("burned token=%s from=%s units=%s", token_id, owner, result.amount)
        return result

    def transfer(
        self,
        caller: Account,
        from_account: Account,
        to_account: Account,
        token_id: int,
    ) -> VotingUnitTransfer:
        if from_account is None or to_account is None:
            raise InvalidReceiver("use mint/burn for null-account transfers")
        with self._guard.atomic("transfer"):
            self._require_authorized(caller, token_id)
            result = self._update(from_account, to_account, token_id)
        return result

    def attach_multiplier(self, caller: Account, token_id: int, name: str, percentage: int) -> Multiplier:
        """
        Attach multiplier + синхронизация голосов owner-а (см. after_reweight).

        Raises:
            Unauthorized: caller не owner и не approved
            ReentrantCall: вызов во время другого transition
        """
        with self._guard.atomic("attach"):
            previous_weight = self.calculator.token_weight(token_id)
            multiplier = self.store.attach(caller, token_id, name, percentage)
            reweight = self.hook.after_reweight(self.ledger.owner_of(token_id), token_id, previous_weight)
            if reweight is not None:
                self.transfer_log.append(reweight)
        return multiplier

    def delegate(self, account: Account, delegatee: MaybeAccount) -> None:
        with self._guard.atomic("delegate"):
            self.votes.delegate(account, delegatee)

    def approve(self, caller: Account, spender: MaybeAccount, token_id: int) -> None:
        with self._guard.atomic("approve"):
            self.ledger.approve(caller, spender, token_id)

    def set_approval_for_all(self, owner: Account, operator: Account, approved: bool) -> None:
        with self._guard.atomic("set_approval_for_all"):
            self.ledger.set_approval_for_all(owner, operator, approved)

    def _update(self, from_account: MaybeAccount, to_account: MaybeAccount, token_id: int) -> VotingUnitTransfer:
        # 1. ownership change, 2. voting adjustment по уже обновлённому snapshot
        self.ledger.apply_transfer(from_account, to_account, token_id)
        result = self.hook.after_transfer(from_account, to_account, token_id)
        self.transfer_log.append(result)
        return result

    def _require_authorized(self, caller: Account, token_id: int) -> None:
        if not self.ledger.is_approved_or_owner(caller, token_id):
            logger.warning("transition rejected: caller=%s token=%s", caller, token_id)
            raise Unauthorized(caller, token_id)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def read_multipliers(self, token_id: int):
        return self.store.read(token_id)

    def token_weight(self, token_id: int) -> int:
        return self.calculator.token_weight(token_id)

    def weight_breakdown(self, token_id: int) -> WeightBreakdown:
        return self.calculator.weight_breakdown(token_id)

    def get_voting_units(self, account: MaybeAccount) -> int:
        return self.calculator.get_voting_units(account)

    def get_votes(self, account: Account) -> int:
        return self.votes.get_votes(account)

    def get_past_votes(self, account: Account, timepoint: int) -> int:
        return self.votes.get_past_votes(account, timepoint)


# =============================================================================
# FUNGIBLE (MULTI-CLASS) TOKEN
# =============================================================================


class FungibleVotingToken:
    """Fungible классы токенов: 1 voting unit на 1 quantity."""

    def __init__(
        self,
        voting_class_ids: Optional[AbstractSet[int]] = None,
        clock: Optional[BlockClock] = None,
    ):
        self.ledger = FungibleTokenLedger()
        self.calculator = FungibleWeightCalculator(self.ledger, voting_class_ids)
        self.votes = VoteLedger(units_of=self.calculator.get_voting_units, clock=clock)
        self.hook = FungibleTransferHook(self.votes, voting_class_ids)

        self._guard = TransitionGuard(self.ledger, self.votes)
        self.transfer_log: List[VotingUnitTransfer] = []

    def mint_batch(self, to_account: Account, token_class_ids: Sequence[int], values: Sequence[int]) -> List[VotingUnitTransfer]:
        if to_account is None:
            raise InvalidReceiver("mint to null account")
        with self._guard.atomic("mint_batch"):
            return self._update(None, to_account, token_class_ids, values)

    def burn_batch(
        self,
        caller: Account,
        from_account: Account,
        token_class_ids: Sequence[int],
        values: Sequence[int],
    ) -> List[VotingUnitTransfer]:
        with self._guard.atomic("burn_batch"):
            self._require_operator(caller, from_account)
            return self._update(from_account, None, token_class_ids, values)

    def transfer_batch(
        self,
        caller: Account,
        from_account: Account,
        to_account: Account,
        token_class_ids: Sequence[int],
        values: Sequence[int],
    ) -> List[VotingUnitTransfer]:
        if from_account is None or to_account is None:
            raise InvalidReceiver("use mint_batch/burn_batch for null-account transfers")
        with self._guard.atomic("transfer_batch"):
            self._require_operator(caller, from_account)
            return self._update(from_account, to_account, token_class_ids, values)

    def mint(self, to_account: Account, token_class_id: int, value: int) -> List[VotingUnitTransfer]:
        return self.mint_batch(to_account, [token_class_id], [value])

    def burn(self, caller: Account, from_account: Account, token_class_id: int, value: int) -> List[VotingUnitTransfer]:
        return self.burn_batch(caller, from_account, [token_class_id], [value])

    def transfer(
        self,
        caller: Account,
        from_account: Account,
        to_account: Account,
        token_class_id: int,
        value: int,
    ) -> List[VotingUnitTransfer]:
        return self.transfer_batch(caller, from_account, to_account, [token_class_id], [value])

    def delegate(self, account: Account, delegatee: MaybeAccount) -> None:
        with self._guard.atomic("delegate"):
            self.votes.delegate(account, delegatee)

    def set_approval_for_all(self, owner: Account, operator: Account, approved: bool) -> None:
        with self._guard.atomic("set_approval_for_all"):
            self.ledger.set_approval_for_all(owner, operator, approved)

    def _update(
        self,
        from_account: MaybeAccount,
        to_account: MaybeAccount,
        token_class_ids: Sequence[int],
        values: Sequence[int],
    ) -> List[VotingUnitTransfer]:
        self.ledger.apply_batch(from_account, to_account, token_class_ids, values)
        results = self.hook.after_batch_transfer(from_account, to_account, token_class_ids, values)
        self.transfer_log.extend(results)
        return results

    def _require_operator(self, caller: Account, from_account: Account) -> None:
        if caller != from_account and not self.ledger.is_approved_for_all(from_account, caller):
            logger.warning("transition rejected: caller=%s owner=%s", caller, from_account)
            raise Unauthorized(caller, owner=from_account)

    def get_voting_units(self, account: MaybeAccount) -> int:
        return self.calculator.get_voting_units(account)

    def get_votes(self, account: Account) -> int:
        return self.votes.get_votes(account)
