"""Tests for autoplay strategies."""

import pytest

from hanoi_engine.actions import MoveDisc
from hanoi_engine.reducer import reduce
from hanoi_engine.rules import generate_legal_moves
from strategies import (
    GreedyStrategy,
    OptimalStrategy,
    RandomStrategy,
    Strategy,
    StrategyFactory,
)
from strategies.hint_strategies import AdvisorStrategy


class TestRandomStrategy:
    def test_picks_a_legal_move(self, board):
        state = board(source=(3,), middle=(2,), target=(1,))
        legal = generate_legal_moves(state)
        strategy = RandomStrategy(seed=1)
        for _ in range(20):
            assert strategy.select_move(state, legal) in legal

    def test_seed_is_reproducible(self, board):
        state = board(source=(3,), middle=(2,), target=(1,))
        legal = generate_legal_moves(state)
        first = [RandomStrategy(seed=7).select_move(state, legal) for _ in range(5)]
        second = [RandomStrategy(seed=7).select_move(state, legal) for _ in range(5)]
        assert first == second

    def test_does_not_step_straight_back(self, board):
        state = reduce(board(source=(3, 2, 1)), MoveDisc(0, 2), now=1.0)
        legal = generate_legal_moves(state)
        assert MoveDisc(2, 0) in legal

        strategy = RandomStrategy(seed=2)
        picks = {strategy.select_move(state, legal) for _ in range(30)}
        assert MoveDisc(2, 0) not in picks
        assert picks <= {MoveDisc(0, 1), MoveDisc(2, 1)}

    def test_steps_back_when_nothing_else_is_legal(self, board):
        state = reduce(board(source=(3, 2, 1)), MoveDisc(0, 2), now=1.0)
        assert RandomStrategy(seed=2).select_move(state, [MoveDisc(2, 0)]) == MoveDisc(2, 0)

    def test_no_legal_moves(self, board):
        with pytest.raises(ValueError):
            RandomStrategy().select_move(board(source=(3, 2, 1)), [])


class TestAdvisorStrategies:
    def test_optimal_plays_shortest_first_move(self, board):
        state = board(source=(3, 2, 1))
        move = OptimalStrategy().select_move(state, generate_legal_moves(state))
        assert move == MoveDisc(0, 2)

    def test_greedy_plays_the_hint(self, board):
        state = board(source=(3, 2, 1))
        move = GreedyStrategy().select_move(state, generate_legal_moves(state))
        assert move == MoveDisc(0, 1)

    def test_falls_back_without_suggestion(self, board):
        state = board(source=(3, 2, 1))
        legal = generate_legal_moves(state)
        strategy = AdvisorStrategy(lambda towers: None, "Silent")
        assert strategy.select_move(state, legal) == legal[0]
        assert strategy.name == "Silent"

    def test_no_legal_moves(self, board):
        with pytest.raises(ValueError):
            OptimalStrategy().select_move(board(source=(3, 2, 1)), [])


class TestStrategyFactory:
    @pytest.mark.parametrize(
        "name, cls",
        [("random", RandomStrategy), ("greedy", GreedyStrategy), ("Optimal", OptimalStrategy)],
    )
    def test_create(self, name, cls):
        strategy = StrategyFactory().create(name)
        assert isinstance(strategy, cls)
        assert isinstance(strategy, Strategy)

    def test_random_seed_param(self, board):
        state = board(source=(3,), middle=(2,), target=(1,))
        legal = generate_legal_moves(state)
        a = StrategyFactory().create("random", {"seed": 3})
        b = RandomStrategy(seed=3)
        for _ in range(5):
            assert a.select_move(state, legal) == b.select_move(state, legal)

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            StrategyFactory().create("mcts")

    def test_list_strategies(self):
        listed = StrategyFactory().list_strategies()
        assert set(listed) == {"random", "greedy", "optimal"}
