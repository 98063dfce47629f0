"""
Tests for the game engine (state transitions).

Tests:
- Selecting and deselecting numbers
- Round wins and target regeneration
- Click gating
- Contract breaches
"""

import pytest

from ..engine_core.state import GameInvariantError, GameStatus, NumberStatus, ALL_NUMBERS
from ..engine_core.action import Action, ErrorCode
from ..engine_core.engine import GameEngine
from ..engine_core.generator import PuzzleGenerator
from ..solver import find_subset

AVAILABLE = NumberStatus.AVAILABLE
CANDIDATE = NumberStatus.CANDIDATE


class TestNewGame:
    """Tests for initial state."""

    def test_fresh_state(self):
        engine = GameEngine(PuzzleGenerator.seeded(0), duration_seconds=10)
        state = engine.state
        assert 1 <= state.target_sum <= 9
        assert state.available_pool == set(ALL_NUMBERS)
        assert state.candidates == []
        assert state.seconds_remaining == 10
        assert engine.status == GameStatus.ACTIVE

    def test_reset_replaces_state(self, make_engine):
        engine = make_engine(target=7, pool={1, 2})
        old_state = engine.state
        engine.reset()
        assert engine.state is not old_state
        assert engine.state.available_pool == set(ALL_NUMBERS)


class TestSelectNumber:
    """Tests for the select/deselect rule."""

    def test_select_below_target(self, make_engine):
        """Clicking 3 with 7 stars makes 3 a candidate."""
        engine = make_engine(target=7)
        won = engine.select_number(3, AVAILABLE)

        assert not won
        assert engine.state.candidates == [3]
        assert 3 not in engine.state.available_pool
        assert engine.status == GameStatus.ACTIVE

    def test_matching_sum_wins_round(self, make_engine):
        """3 then 4 with 7 stars consumes both and draws a new target."""
        engine = make_engine(target=7)
        engine.select_number(3, AVAILABLE)
        won = engine.select_number(4, AVAILABLE)

        state = engine.state
        assert won
        assert state.available_pool == {1, 2, 5, 6, 8, 9}
        assert state.candidates == []
        assert state.rounds_won == 1
        assert 1 <= state.target_sum <= 9
        assert find_subset(state.available_pool, state.target_sum) is not None

    def test_toggle_returns_to_prior_state(self, make_engine):
        """Selecting 5 twice leaves no candidates and 5 back in the pool."""
        engine = make_engine(target=7)
        engine.select_number(5, AVAILABLE)
        engine.select_number(5, CANDIDATE)

        assert engine.state.candidates == []
        assert engine.state.available_pool == set(ALL_NUMBERS)
        assert engine.state.target_sum == 7
        assert engine.status == GameStatus.ACTIVE

    def test_toggle_keeps_other_candidates(self, make_engine):
        engine = make_engine(target=9)
        engine.select_number(2, AVAILABLE)
        engine.select_number(3, AVAILABLE)
        engine.select_number(3, CANDIDATE)

        assert engine.state.candidates == [2]
        assert 3 in engine.state.available_pool
        assert 2 not in engine.state.available_pool

    def test_overshoot_keeps_candidates(self, make_engine):
        engine = make_engine(target=4)
        engine.select_number(3, AVAILABLE)
        engine.select_number(6, AVAILABLE)

        assert engine.state.candidates == [3, 6]
        assert engine.snapshot().status_of(3) == NumberStatus.WRONG_CANDIDATE

    def test_deselect_can_win(self, make_engine):
        """Dropping the overshooting number can leave an exact match."""
        engine = make_engine(target=4)
        engine.select_number(3, AVAILABLE)
        engine.select_number(4, AVAILABLE)
        won = engine.select_number(3, CANDIDATE)

        assert won
        assert engine.state.available_pool == set(ALL_NUMBERS) - {4}
        assert engine.state.candidates == []

    def test_regenerated_target_always_solvable(self):
        """Play whole games with the solver; every new target is reachable."""
        for seed in range(20):
            engine = GameEngine(PuzzleGenerator.seeded(seed))
            while engine.status == GameStatus.ACTIVE:
                subset = find_subset(engine.state.available_pool, engine.state.target_sum)
                assert subset is not None
                for number in subset:
                    engine.select_number(number, AVAILABLE)
                    engine.state.check_invariants()
            assert engine.status == GameStatus.WON

    def test_final_win_empties_pool(self, make_engine):
        engine = make_engine(target=5, pool={5})
        won = engine.select_number(5, AVAILABLE)

        assert won
        assert engine.state.available_pool == set()
        assert engine.status == GameStatus.WON


class TestContractBreaches:
    """Bad calls fail loudly instead of corrupting state."""

    def test_number_out_of_range(self, make_engine):
        with pytest.raises(GameInvariantError):
            make_engine().select_number(10, AVAILABLE)

    def test_selecting_used_number(self, make_engine):
        engine = make_engine(pool={1, 2, 3})
        with pytest.raises(GameInvariantError):
            engine.select_number(9, AVAILABLE)

    def test_deselecting_non_candidate(self, make_engine):
        with pytest.raises(GameInvariantError):
            make_engine().select_number(4, CANDIDATE)

    def test_invariant_check_catches_overlap(self, make_engine):
        engine = make_engine()
        engine.state.candidates.append(2)
        with pytest.raises(GameInvariantError):
            engine.state.check_invariants()


class TestApply:
    """Tests for gated action application."""

    def test_select_action_applies(self, make_engine):
        engine = make_engine(target=7)
        result = engine.apply(Action.select(3, AVAILABLE))

        assert result.success
        assert result.new_state is engine.state
        assert result.state_changes == ["3 selected"]

    def test_winning_click_reports_round(self, make_engine):
        engine = make_engine(target=7)
        engine.apply(Action.select(3, AVAILABLE))
        result = engine.apply(Action.select(4, AVAILABLE))

        assert result.round_won
        assert result.state_changes[0] == "Round won: 7 stars matched"

    def test_clicks_ignored_after_win(self, make_engine):
        """Once the pool is empty nothing changes the state."""
        engine = make_engine(target=5, pool={5})
        engine.apply(Action.select(5, AVAILABLE))
        assert engine.status == GameStatus.WON

        result = engine.apply(Action.select(5, CANDIDATE))
        assert not result.success
        assert result.error_code == ErrorCode.GAME_OVER
        assert engine.state.available_pool == set()
        assert engine.state.candidates == []

    def test_clicks_ignored_after_timeout(self, make_engine):
        engine = make_engine(target=7, seconds=0)
        assert engine.status == GameStatus.LOST

        result = engine.apply(Action.select(3, AVAILABLE))
        assert not result.success
        assert result.error_code == ErrorCode.GAME_OVER
        assert engine.state.candidates == []

    def test_click_on_used_number_ignored(self, make_engine):
        engine = make_engine(target=2, pool={1, 2, 3})
        result = engine.apply(Action.select(9, AVAILABLE))

        assert not result.success
        assert result.error_code == ErrorCode.NUMBER_USED

    def test_stale_status_ignored(self, make_engine):
        engine = make_engine(target=7)
        result = engine.apply(Action.select(3, CANDIDATE))

        assert not result.success
        assert result.error_code == ErrorCode.STALE_STATUS
        assert engine.state.available_pool == set(ALL_NUMBERS)

    def test_successful_actions_logged(self, make_engine):
        engine = make_engine(target=7)
        action = Action.select(3, AVAILABLE)
        engine.apply(action)
        assert engine.state.action_history[-1] == action

    def test_failed_actions_not_logged(self, make_engine):
        engine = make_engine(target=7)
        engine.apply(Action.select(3, CANDIDATE))
        assert engine.state.action_history == []

    def test_reset_action(self, make_engine):
        engine = make_engine(target=5, pool={5})
        engine.apply(Action.select(5, AVAILABLE))
        result = engine.apply(Action.reset())

        assert result.success
        assert engine.status == GameStatus.ACTIVE
        assert engine.state.available_pool == set(ALL_NUMBERS)
        assert engine.state.rounds_won == 0


class TestSmallMaxTarget:
    """Games with a low star ceiling still play out to the end."""

    @pytest.mark.parametrize("max_target", [1, 3, 5])
    def test_full_game_with_small_max_target(self, max_target):
        for seed in range(10):
            engine = GameEngine(PuzzleGenerator.seeded(seed, max_target=max_target))
            while engine.status == GameStatus.ACTIVE:
                state = engine.state
                assert 1 <= state.target_sum <= 9
                subset = find_subset(state.available_pool, state.target_sum)
                assert subset is not None
                for number in subset:
                    engine.select_number(number, AVAILABLE)
                    engine.state.check_invariants()
            assert engine.status == GameStatus.WON
            assert engine.state.available_pool == set()

    def test_failed_regeneration_leaves_state_untouched(self, make_engine, monkeypatch):
        """A win is applied all at once or not at all."""
        engine = make_engine(target=3)
        engine.select_number(1, AVAILABLE)

        def broken(pool):
            raise ValueError("no target")

        monkeypatch.setattr(engine.generator, "next_target", broken)
        with pytest.raises(ValueError):
            engine.select_number(2, AVAILABLE)

        assert engine.state.target_sum == 3
        assert engine.state.candidates == [1, 2]
        assert engine.state.available_pool == set(ALL_NUMBERS) - {1, 2}
        assert engine.state.rounds_won == 0
