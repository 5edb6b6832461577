"""
Тесты для host ledger: UniqueTokenLedger, FungibleTokenLedger

Проверяет:
1. Ownership + enumeration (swap-and-pop)
2. Approvals и предикат is_approved_or_owner
3. Batch изменения балансов и ошибки
4. snapshot/restore
"""

import pytest

from src.core.errors import (
    BatchLengthMismatch,
    InsufficientBalance,
    InvalidOwner,
    InvalidReceiver,
    TokenAlreadyMinted,
    TokenNotFound,
    Unauthorized,
)
from src.ledger import (
    BalanceSource,
    FungibleTokenLedger,
    OwnershipAuthority,
    OwnershipIndex,
    UniqueTokenLedger,
)


# =============================================================================
# UNIQUE TOKEN LEDGER
# =============================================================================


class TestUniqueTokenLedger:
    """Тесты для UniqueTokenLedger"""

    @pytest.fixture
    def ledger(self) -> UniqueTokenLedger:
        ledger = UniqueTokenLedger()
        for token_id in (1, 2, 3):
            ledger.apply_transfer(None, "alice", token_id)
        return ledger

    def test_satisfies_protocols(self, ledger):
        assert isinstance(ledger, OwnershipIndex)
        assert isinstance(ledger, OwnershipAuthority)

    def test_mint(self, ledger):
        assert ledger.owner_of(1) == "alice"
        assert ledger.balance_of("alice") == 3
        assert ledger.tokens_of("alice") == [1, 2, 3]
        assert ledger.total_supply() == 3

    def test_mint_existing(self, ledger):
        with pytest.raises(TokenAlreadyMinted):
            ledger.apply_transfer(None, "bob", 1)

    def test_mint_to_null(self):
        with pytest.raises(InvalidReceiver):
            UniqueTokenLedger().apply_transfer(None, None, 1)

    def test_unknown_token(self, ledger):
        assert not ledger.exists(99)
        with pytest.raises(TokenNotFound):
            ledger.owner_of(99)

    def test_null_owner_balance(self, ledger):
        with pytest.raises(InvalidOwner):
            ledger.balance_of(None)

    def test_transfer_returns_previous_owner(self, ledger):
        assert ledger.apply_transfer("alice", "bob", 2) == "alice"
        assert ledger.owner_of(2) == "bob"
        assert ledger.balance_of("alice") == 2
        assert ledger.balance_of("bob") == 1

    def test_transfer_from_wrong_owner(self, ledger):
        with pytest.raises(InvalidOwner):
            ledger.apply_transfer("bob", "carol", 1)

    def test_swap_and_pop_enumeration(self, ledger):
        """Удаление из середины: последний токен занимает его позицию."""
        ledger.apply_transfer("alice", "bob", 1)
        assert ledger.tokens_of("alice") == [3, 2]
        assert ledger.owned_at("alice", 0) == 3
        assert ledger.owned_at("alice", 1) == 2

    def test_owned_at_out_of_bounds(self, ledger):
        with pytest.raises(IndexError):
            ledger.owned_at("alice", 3)
        with pytest.raises(IndexError):
            ledger.owned_at("nobody", 0)

    def test_burn(self, ledger):
        ledger.apply_transfer("alice", None, 3)
        assert not ledger.exists(3)
        assert ledger.total_supply() == 2

    def test_burn_last_token_clears_owner(self):
        ledger = UniqueTokenLedger()
        ledger.apply_transfer(None, "alice", 1)
        ledger.apply_transfer("alice", None, 1)
        assert ledger.balance_of("alice") == 0
        assert ledger.tokens_of("alice") == []

    def test_approve(self, ledger):
        ledger.approve("alice", "bob", 1)
        assert ledger.get_approved(1) == "bob"
        assert ledger.is_approved_or_owner("bob", 1)
        assert not ledger.is_approved_or_owner("bob", 2)

    def test_approve_by_stranger(self, ledger):
        with pytest.raises(Unauthorized, match="token 1"):
            ledger.approve("mallory", "mallory", 1)

    def test_approve_cleared_on_transfer(self, ledger):
        ledger.approve("alice", "bob", 1)
        ledger.apply_transfer("alice", "carol", 1)
        assert ledger.get_approved(1) is None
        assert not ledger.is_approved_or_owner("bob", 1)

    def test_revoke_approval(self, ledger):
        ledger.approve("alice", "bob", 1)
        ledger.approve("alice", None, 1)
        assert ledger.get_approved(1) is None

    def test_operator(self, ledger):
        ledger.set_approval_for_all("alice", "op", True)
        assert ledger.is_approved_for_all("alice", "op")
        assert all(ledger.is_approved_or_owner("op", t) for t in (1, 2, 3))

        ledger.set_approval_for_all("alice", "op", False)
        assert not ledger.is_approved_or_owner("op", 1)

    def test_operator_can_approve(self, ledger):
        ledger.set_approval_for_all("alice", "op", True)
        ledger.approve("op", "bob", 2)
        assert ledger.get_approved(2) == "bob"

    def test_self_operator_rejected(self, ledger):
        with pytest.raises(InvalidReceiver):
            ledger.set_approval_for_all("alice", "alice", True)

    def test_is_approved_or_owner_unknown_token(self, ledger):
        assert ledger.is_approved_or_owner("alice", 99) is False
        assert ledger.is_approved_or_owner(None, 1) is False

    def test_snapshot_restore(self, ledger):
        state = ledger.snapshot()
        ledger.apply_transfer("alice", "bob", 1)
        ledger.approve("alice", "carol", 2)

        ledger.restore(state)
        assert ledger.owner_of(1) == "alice"
        assert ledger.get_approved(2) is None
        assert ledger.tokens_of("alice") == [1, 2, 3]

    def test_snapshot_is_independent(self, ledger):
        """restore не связывает состояние со snapshot-ом."""
        state = ledger.snapshot()
        ledger.restore(state)
        ledger.apply_transfer("alice", "bob", 1)
        ledger.restore(state)
        assert ledger.owner_of(1) == "alice"


# =============================================================================
# FUNGIBLE TOKEN LEDGER
# =============================================================================


class TestFungibleTokenLedger:
    """Тесты для FungibleTokenLedger"""

    @pytest.fixture
    def ledger(self) -> FungibleTokenLedger:
        ledger = FungibleTokenLedger()
        ledger.apply_batch(None, "alice", [1, 2, 3], [10, 20, 30])
        return ledger

    def test_satisfies_protocol(self, ledger):
        assert isinstance(ledger, BalanceSource)

    def test_mint(self, ledger):
        assert ledger.balance_of("alice", 1) == 10
        assert ledger.balance_of("alice", 3) == 30
        assert ledger.total_supply(2) == 20
        assert ledger.token_class_ids() == (1, 2, 3)

    def test_unknown_balance_is_zero(self, ledger):
        assert ledger.balance_of("bob", 1) == 0
        assert ledger.balance_of("alice", 99) == 0

    def test_transfer(self, ledger):
        ledger.apply_batch("alice", "bob", [1, 2], [5, 7])
        assert ledger.balance_of_batch(["alice", "alice", "bob", "bob"], [1, 2, 1, 2]) == [5, 13, 5, 7]
        assert ledger.total_supply(1) == 10

    def test_burn(self, ledger):
        ledger.apply_batch("alice", None, [3], [30])
        assert ledger.balance_of("alice", 3) == 0
        assert ledger.total_supply(3) == 0

    def test_insufficient_balance(self, ledger):
        with pytest.raises(InsufficientBalance) as exc_info:
            ledger.apply_batch("alice", "bob", [1], [11])
        assert exc_info.value.balance == 10
        assert exc_info.value.needed == 11

    def test_length_mismatch(self, ledger):
        with pytest.raises(BatchLengthMismatch):
            ledger.apply_batch("alice", "bob", [1, 2], [1])

    def test_balance_of_batch_length_mismatch(self, ledger):
        with pytest.raises(BatchLengthMismatch):
            ledger.balance_of_batch(["alice"], [1, 2])

    def test_null_to_null(self, ledger):
        with pytest.raises(InvalidReceiver):
            ledger.apply_batch(None, None, [1], [1])

    def test_operator(self, ledger):
        ledger.set_approval_for_all("alice", "op", True)
        assert ledger.is_approved_for_all("alice", "op")
        assert not ledger.is_approved_for_all("bob", "op")

    def test_snapshot_restore(self, ledger):
        state = ledger.snapshot()
        ledger.apply_batch("alice", "bob", [1], [10])
        ledger.restore(state)
        assert ledger.balance_of("alice", 1) == 10
        assert ledger.balance_of("bob", 1) == 0
