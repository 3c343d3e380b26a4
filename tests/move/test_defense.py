import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from scrabble_trainer.board import Board
from scrabble_trainer.defense import DEFAULT_WEIGHTS, DefenseWeights, defense_score_for


def _cat_board():
    board = Board.empty()
    for i, ch in enumerate("CAT"):
        board.place(7, 6 + i, ch)
    return board


def test_lane_toward_triple_word_is_penalised():
    board = _cat_board()
    # New S at (7, 9): five squares from the TW at (7, 14) -> -12,
    # two from the center -> -3, four letters -> -8.
    assert defense_score_for("CATS", [(7, 6), (7, 7), (7, 8), (7, 9)], board) == -23.0


def test_short_central_play():
    board = _cat_board()
    # New S at (8, 7): no lane penalty (TW at (14, 7) is six away).
    assert defense_score_for("AS", [(7, 7), (8, 7)], board) == -1.5 - 4.0


def test_claiming_a_premium_is_rewarded():
    board = Board.empty()
    board.place(1, 2, "A")
    # New X on the DW at (1, 1): +25, center distance 12 -> -18,
    # no triple-word square shares its row or column. Length 2 -> -4.
    assert defense_score_for("XA", [(1, 1), (1, 2)], board) == 25 - 18 - 4


def test_existing_tiles_are_ignored():
    board = _cat_board()
    only_existing = defense_score_for("CAT", [(7, 6), (7, 7), (7, 8)], board)
    assert only_existing == -6.0


def test_weights_are_configurable():
    board = _cat_board()
    weights = DefenseWeights(lane_penalty=0.0, center_distance_weight=0.0, word_length_weight=1.0)
    assert defense_score_for("CATS", [(7, 6), (7, 7), (7, 8), (7, 9)], board, weights) == -4.0


def test_weights_are_immutable_and_hashable():
    assert hash(DEFAULT_WEIGHTS) == hash(DefenseWeights())
    assert dict(DEFAULT_WEIGHTS.premium_rewards)["TW"] == 60.0
    with pytest.raises(TypeError):
        DEFAULT_WEIGHTS.premium_rewards["TW"] = 0.0


def test_premium_rewards_can_be_overridden():
    board = Board.empty()
    board.place(1, 2, "A")
    weights = DefenseWeights(premium_rewards=(("DW", 5.0),))
    assert defense_score_for("XA", [(1, 1), (1, 2)], board, weights) == 5 - 18 - 4
