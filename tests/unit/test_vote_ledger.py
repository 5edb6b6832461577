"""
Тесты для Vote Ledger: Checkpoints, BlockClock, VoteLedger

Проверяемые инварианты:
1. mint не уменьшает null account, burn не увеличивает его
2. Голоса учитываются только у delegatee
3. Исторические запросы — только по прошедшим timepoints
4. Запись в тот же timepoint перезаписывает чекпоинт
5. uint208 границы и underflow → ArithmeticOverflow
"""

from typing import Dict

import pytest

from src.core.errors import ArithmeticOverflow, FutureLookup
from src.core.math.numerical_safeguards import MAX_UINT208
from src.votes import BlockClock, Checkpoint, CheckpointHistory, VoteLedger


# =============================================================================
# CHECKPOINTS
# =============================================================================


class TestCheckpointHistory:

    def test_empty(self):
        history = CheckpointHistory()
        assert len(history) == 0
        assert history.latest() == 0
        assert history.latest_checkpoint() is None
        assert history.upper_lookup(100) == 0

    def test_push_returns_old_and_new(self):
        history = CheckpointHistory()
        assert history.push(1, 200) == (0, 200)
        assert history.push(2, 464) == (200, 464)
        assert history.latest_checkpoint() == Checkpoint(2, 464)

    def test_same_timepoint_overwrites(self):
        history = CheckpointHistory()
        history.push(5, 10)
        history.push(5, 20)
        assert len(history) == 1
        assert history.at(0) == Checkpoint(5, 20)

    def test_past_timepoint_rejected(self):
        history = CheckpointHistory()
        history.push(5, 10)
        with pytest.raises(ValueError, match="before last"):
            history.push(4, 10)

    def test_upper_lookup(self):
        history = CheckpointHistory()
        history.push(2, 100)
        history.push(5, 300)
        history.push(9, 50)

        assert history.upper_lookup(1) == 0
        assert history.upper_lookup(2) == 100
        assert history.upper_lookup(4) == 100
        assert history.upper_lookup(5) == 300
        assert history.upper_lookup(100) == 50

    def test_bound(self):
        history = CheckpointHistory()
        history.push(1, MAX_UINT208)
        with pytest.raises(ArithmeticOverflow):
            history.push(2, MAX_UINT208 + 1)

    def test_as_tuple(self):
        history = CheckpointHistory()
        history.push(1, 1)
        history.push(3, 2)
        assert history.as_tuple() == (Checkpoint(1, 1), Checkpoint(3, 2))


class TestBlockClock:

    def test_advance(self):
        clock = BlockClock()
        assert clock.now() == 1
        assert clock.advance() == 2
        assert clock.advance(10) == 12
        assert clock.now() == 12

    def test_now_is_the_only_reader(self):
        clock = BlockClock(start=5)
        assert clock.now() == 5
        assert not callable(clock)

    def test_invalid(self):
        with pytest.raises(ValueError):
            BlockClock(start=-1)
        with pytest.raises(ValueError):
            BlockClock().advance(0)


# =============================================================================
# VOTE LEDGER
# =============================================================================


class TestVoteLedger:
    """VoteLedger с фиктивным источником units."""

    @pytest.fixture
    def units(self) -> Dict[str, int]:
        return {}

    @pytest.fixture
    def clock(self) -> BlockClock:
        return BlockClock(start=10)

    @pytest.fixture
    def votes(self, units, clock) -> VoteLedger:
        return VoteLedger(units_of=lambda account: units.get(account, 0), clock=clock)

    def test_mint_without_delegation_counts_only_in_supply(self, votes):
        votes.transfer_voting_units(None, "alice", 200)
        assert votes.get_total_supply() == 200
        assert votes.get_votes("alice") == 0

    def test_self_delegation_activates_votes(self, votes, units):
        units["alice"] = 200
        votes.transfer_voting_units(None, "alice", 200)
        votes.delegate("alice", "alice")

        assert votes.delegates("alice") == "alice"
        assert votes.get_votes("alice") == 200

    def test_mint_to_delegated_account(self, votes):
        votes.delegate("alice", "alice")
        votes.transfer_voting_units(None, "alice", 264)
        assert votes.get_votes("alice") == 264
        assert votes.get_total_supply() == 264

    def test_burn_reduces_votes_and_supply(self, votes):
        votes.delegate("alice", "alice")
        votes.transfer_voting_units(None, "alice", 264)
        votes.transfer_voting_units("alice", None, 64)

        assert votes.get_votes("alice") == 200
        assert votes.get_total_supply() == 200

    def test_null_account_never_accumulates(self, votes):
        votes.delegate("alice", "alice")
        votes.transfer_voting_units(None, "alice", 100)
        votes.transfer_voting_units("alice", None, 100)

        assert votes.delegates(None) is None
        assert votes.num_checkpoints(None) == 0

    def test_transfer_between_delegates(self, votes):
        votes.delegate("alice", "alice")
        votes.delegate("bob", "bob")
        votes.transfer_voting_units(None, "alice", 500)
        votes.transfer_voting_units("alice", "bob", 200)

        assert votes.get_votes("alice") == 300
        assert votes.get_votes("bob") == 200
        assert votes.get_total_supply() == 500

    def test_delegate_to_third_party(self, votes, units):
        votes.delegate("alice", "carol")
        votes.transfer_voting_units(None, "alice", 200)
        assert votes.get_votes("alice") == 0
        assert votes.get_votes("carol") == 200

    def test_redelegate_moves_current_units(self, votes, units):
        """Порядок host-а: сначала mint, затем delegate."""
        units["alice"] = 200
        votes.transfer_voting_units(None, "alice", 200)
        votes.delegate("alice", "alice")
        assert votes.get_votes("alice") == 200

        votes.delegate("alice", "carol")
        assert votes.get_votes("alice") == 0
        assert votes.get_votes("carol") == 200

    def test_undelegate(self, votes, units):
        units["alice"] = 200
        votes.transfer_voting_units(None, "alice", 200)
        votes.delegate("alice", "alice")
        assert votes.get_votes("alice") == 200

        votes.delegate("alice", None)
        assert votes.delegates("alice") is None
        assert votes.get_votes("alice") == 0

    def test_underflow_rejected(self, votes):
        votes.delegate("alice", "alice")
        votes.transfer_voting_units(None, "alice", 100)
        with pytest.raises(ArithmeticOverflow):
            votes.transfer_voting_units("alice", "bob", 101)

    def test_amount_above_uint208_rejected(self, votes):
        with pytest.raises(ArithmeticOverflow):
            votes.transfer_voting_units(None, "alice", MAX_UINT208 + 1)

    def test_zero_amount_writes_no_delegate_checkpoint(self, votes):
        votes.delegate("alice", "alice")
        votes.transfer_voting_units(None, "alice", 0)
        assert votes.num_checkpoints("alice") == 0

    def test_past_votes(self, votes, clock):
        votes.delegate("alice", "alice")
        votes.transfer_voting_units(None, "alice", 200)  # @10
        clock.advance()
        votes.transfer_voting_units(None, "alice", 64)  # @11
        clock.advance()

        assert votes.get_past_votes("alice", 9) == 0
        assert votes.get_past_votes("alice", 10) == 200
        assert votes.get_past_votes("alice", 11) == 264
        assert votes.get_past_total_supply(10) == 200
        assert votes.checkpoints("alice") == (Checkpoint(10, 200), Checkpoint(11, 264))

    def test_same_block_updates_collapse(self, votes):
        votes.delegate("alice", "alice")
        votes.transfer_voting_units(None, "alice", 200)
        votes.transfer_voting_units(None, "alice", 200)
        assert votes.num_checkpoints("alice") == 1
        assert votes.get_votes("alice") == 400

    def test_future_lookup_rejected(self, votes, clock):
        with pytest.raises(FutureLookup):
            votes.get_past_votes("alice", clock.now())
        with pytest.raises(FutureLookup):
            votes.get_past_total_supply(clock.now() + 1)

    def test_snapshot_restore(self, votes):
        votes.delegate("alice", "alice")
        votes.transfer_voting_units(None, "alice", 200)
        state = votes.snapshot()

        votes.transfer_voting_units(None, "alice", 64)
        votes.delegate("bob", "bob")
        votes.restore(state)

        assert votes.get_votes("alice") == 200
        assert votes.get_total_supply() == 200
        assert votes.delegates("bob") is None
