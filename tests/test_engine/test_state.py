"""Tests for game state models."""

from dataclasses import replace

import pytest

from hanoi_engine.characters import Character
from hanoi_engine.discs import (
    DIFFICILE,
    DIFFICULTY_LEVELS,
    FACILE,
    SUPER_FACILE,
    Difficulty,
    DifficultyConfigError,
    get_difficulty,
)
from hanoi_engine.state import (
    InsufficientRosterError,
    InvariantViolation,
    Tower,
    check_invariants,
    create_initial_state,
    reset_state,
)


class TestDifficulty:
    def test_builtin_levels_are_consistent(self):
        for level in DIFFICULTY_LEVELS.values():
            level.verify()
            assert level.min_moves == 2**level.character_count - 1

    def test_facile_has_three_discs_and_seven_moves(self):
        assert FACILE.character_count == 3
        assert FACILE.min_moves == 7
        assert FACILE.label == "Facile"

    def test_wrong_min_moves_rejected(self):
        broken = Difficulty(id="broken", name="Broken", character_count=3, min_moves=8)
        with pytest.raises(DifficultyConfigError):
            broken.verify()

    def test_zero_discs_rejected(self):
        empty = Difficulty(id="empty", name="Empty", character_count=0, min_moves=0)
        with pytest.raises(DifficultyConfigError):
            empty.verify()

    def test_get_difficulty(self):
        assert get_difficulty("moyen").character_count == 4
        assert get_difficulty("DIFFICILE") is DIFFICILE

    def test_get_unknown_difficulty(self):
        with pytest.raises(KeyError):
            get_difficulty("impossible")


class TestTower:
    def test_empty_tower(self):
        tower = Tower(1)
        assert tower.is_empty
        assert tower.top_disc is None
        assert tower.disc_count == 0
        assert tower.sizes == ()

    def test_top_disc_is_last(self, make_disc):
        tower = Tower(0, (make_disc(3), make_disc(2), make_disc(1)), is_source=True)
        assert tower.top_disc == make_disc(1)
        assert tower.disc_count == 3
        assert tower.sizes == (3, 2, 1)

    def test_with_discs_keeps_flags(self, make_disc):
        tower = Tower(2, is_target=True)
        updated = tower.with_discs((make_disc(1),))
        assert updated.id == 2
        assert updated.is_target
        assert not updated.is_source
        assert tower.is_empty  # Input tower unchanged


class TestCreateInitialState:
    def test_all_discs_on_source(self, roster):
        state = create_initial_state(roster, FACILE, now=5.0)

        assert state.towers[0].is_source
        assert state.towers[2].is_target
        assert not state.towers[1].is_source and not state.towers[1].is_target
        assert state.towers[0].sizes == (3, 2, 1)
        assert state.towers[1].is_empty
        assert state.towers[2].is_empty

    def test_first_character_is_largest(self, roster):
        state = create_initial_state(roster, FACILE, now=0.0)
        bottom = state.towers[0].discs[0]
        top = state.towers[0].top_disc
        assert bottom.character == roster[0]
        assert bottom.size == 3
        assert top.character == roster[2]
        assert top.size == 1

    def test_initial_fields(self, roster):
        state = create_initial_state(roster, SUPER_FACILE, now=12.5)
        assert state.start_time == 12.5
        assert state.end_time is None
        assert state.move_count == 0
        assert state.history == ()
        assert state.selected_disc is None
        assert state.selected_tower is None
        assert not state.is_complete
        assert not state.show_hint
        assert state.hint_move is None
        assert state.hints_used == 0
        assert state.disc_total == 2

    def test_insufficient_roster_fails(self, roster):
        with pytest.raises(InsufficientRosterError):
            create_initial_state(roster[:2], FACILE, now=0.0)

    def test_insufficient_roster_is_value_error(self):
        with pytest.raises(ValueError):
            create_initial_state([], SUPER_FACILE, now=0.0)

    def test_extra_roster_members_ignored(self, roster):
        state = create_initial_state(roster, SUPER_FACILE, now=0.0)
        assert state.disc_total == 2

    def test_duplicate_characters_rejected(self):
        twins = [Character("x", "X"), Character("x", "X again"), Character("y", "Y")]
        with pytest.raises(ValueError):
            create_initial_state(twins, FACILE, now=0.0)

    def test_inconsistent_difficulty_rejected(self, roster):
        broken = Difficulty(id="broken", name="Broken", character_count=3, min_moves=6)
        with pytest.raises(DifficultyConfigError):
            create_initial_state(roster, broken, now=0.0)

    def test_initial_state_satisfies_invariants(self, roster):
        for level in DIFFICULTY_LEVELS.values():
            check_invariants(create_initial_state(roster, level, now=0.0))


class TestQueries:
    def test_find_disc(self, board, make_disc):
        state = board(source=(3,), middle=(2, 1))
        assert state.find_disc("d1") == (make_disc(1), 1)
        assert state.find_disc("d3") == (make_disc(3), 0)
        assert state.find_disc("nope") is None

    def test_disc_count_of(self, board):
        state = board(source=(3,), middle=(2, 1))
        assert state.disc_count_of(0) == 1
        assert state.disc_count_of(1) == 2
        assert state.disc_count_of(2) == 0
        assert state.disc_total == 3

    def test_source_and_target(self, board):
        state = board(source=(3, 2, 1))
        assert state.source_tower.id == 0
        assert state.target_tower.id == 2

    def test_has_tower(self, board):
        state = board(source=(3, 2, 1))
        assert state.has_tower(0) and state.has_tower(2)
        assert not state.has_tower(3)
        assert not state.has_tower(-1)


class TestResetState:
    def test_reset_restacks_discs(self, board):
        state = board(source=(3,), middle=(2,), target=(1,), move_count=0, hints_used=4)
        fresh = reset_state(state, now=50.0)

        assert fresh.towers[0].sizes == (3, 2, 1)
        assert fresh.towers[1].is_empty
        assert fresh.towers[2].is_empty
        assert fresh.start_time == 50.0
        assert fresh.hints_used == 0
        assert fresh.difficulty is state.difficulty


class TestCheckInvariants:
    def test_wrong_disc_count(self, board):
        with pytest.raises(InvariantViolation):
            check_invariants(board(source=(2, 1)))

    def test_unordered_tower(self, board):
        with pytest.raises(InvariantViolation):
            check_invariants(board(source=(1, 3), middle=(2,)))

    def test_equal_sizes_not_allowed(self, board):
        with pytest.raises(InvariantViolation):
            check_invariants(board(source=(3, 3), middle=(1,)))

    def test_selected_disc_must_be_on_top(self, board, make_disc):
        state = board(source=(3, 2, 1), selected_disc=make_disc(2), selected_tower=0)
        with pytest.raises(InvariantViolation):
            check_invariants(state)

    def test_selection_fields_set_together(self, board, make_disc):
        state = board(source=(3, 2, 1), selected_disc=make_disc(1))
        with pytest.raises(InvariantViolation):
            check_invariants(state)

    def test_move_count_matches_history(self, board):
        with pytest.raises(InvariantViolation):
            check_invariants(board(source=(3, 2, 1), move_count=2))

    def test_complete_flag_matches_target(self, board):
        with pytest.raises(InvariantViolation):
            check_invariants(board(target=(3, 2, 1)))
        with pytest.raises(InvariantViolation):
            check_invariants(board(source=(3, 2, 1), is_complete=True))

    def test_invariant_violation_is_assertion(self, board):
        state = board(source=(3, 2, 1))
        with pytest.raises(AssertionError):
            check_invariants(replace(state, move_count=-1))
