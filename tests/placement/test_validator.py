import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from scrabble_trainer.board import Board
from scrabble_trainer.lexicon import Lexicon
from scrabble_trainer.validator import FailureReason, PlacementValidator


WORDS = ["CAT", "CATS", "AN", "NA", "TA", "TO", "TON", "AT", "AA", "TAN"]


@pytest.fixture
def validator():
    return PlacementValidator(Lexicon(WORDS))


@pytest.fixture
def cat_board():
    board = Board.empty()
    for i, ch in enumerate("CAT"):
        board.place(7, 6 + i, ch)
    return board


def test_extending_a_word(validator, cat_board):
    result = validator.validate(cat_board, set(), {(7, 9): "S"})
    assert result.valid
    assert result.word == "CATS"
    assert result.direction == 'H'
    assert result.positions == ((7, 6), (7, 7), (7, 8), (7, 9))
    assert result.score == 6
    assert result.cross_words == ()


def test_lowercase_letters_are_accepted(validator, cat_board):
    result = validator.validate(cat_board, set(), {(7, 9): "s"})
    assert result.valid and result.word == "CATS"


def test_gap_between_tiles(validator, cat_board):
    result = validator.validate(cat_board, set(), {(7, 9): "S", (7, 11): "O"})
    assert result.reason is FailureReason.GAP
    assert result.message == "There is a gap in your word."


def test_word_built_with_board_tiles_is_reported_in_full(validator, cat_board):
    result = validator.validate(cat_board, set(), {(7, 9): "X"})
    assert result.reason is FailureReason.NOT_A_WORD
    assert result.offending_word == "CATX"
    assert result.message == (
        '"CATX" is not a valid word. (Your letters X combined with adjacent board tiles to form "CATX".)'
    )


def test_unknown_word_of_only_placed_letters(validator, cat_board):
    result = validator.validate(cat_board, set(), {(0, 0): "Z", (0, 1): "Z"})
    assert result.reason is FailureReason.NOT_A_WORD
    assert result.message == '"ZZ" is not a valid word.'


def test_word_must_connect(validator, cat_board):
    result = validator.validate(cat_board, set(), {(0, 0): "A", (0, 1): "T"})
    assert result.reason is FailureReason.DISCONNECTED
    assert result.message == "Your word must connect to the existing board."


def test_lone_tile_forms_no_word(validator, cat_board):
    result = validator.validate(cat_board, set(), {(0, 0): "A"})
    assert result.reason is FailureReason.NO_WORD
    assert result.message == "No word formed."


def test_invalid_cross_word(validator, cat_board):
    # AN under CA: the A below C reads CA downward.
    result = validator.validate(cat_board, set(), {(8, 6): "A", (8, 7): "N"})
    assert result.reason is FailureReason.INVALID_CROSS_WORD
    assert result.offending_word == "CA"
    assert result.message == 'Cross-word "CA" is not valid.'


def test_parallel_play_collects_cross_words(validator, cat_board):
    result = validator.validate(cat_board, set(), {(8, 7): "N", (8, 8): "A"})
    assert result.valid
    assert result.word == "NA"
    assert result.cross_words == ("AN", "TA")
    # NA: 1 + 1*2 (DL) = 3, AN: 2, TA: 1 + 1*2 = 3
    assert result.score == 8


def test_single_tile_reads_in_its_only_direction(validator, cat_board):
    result = validator.validate(cat_board, set(), {(8, 8): "O"})
    assert result.valid
    assert (result.word, result.direction, result.score) == ("TO", 'V', 3)


def test_vertical_run_includes_board_tiles(validator, cat_board):
    result = validator.validate(cat_board, set(), {(8, 8): "O", (9, 8): "N"})
    assert result.valid
    assert (result.word, result.direction, result.score) == ("TON", 'V', 4)


def test_single_tile_tie_prefers_horizontal(validator):
    board = Board.empty()
    board.place(7, 6, "T")
    board.place(6, 7, "A")
    result = validator.validate(board, set(), {(7, 7): "A"})
    assert result.valid
    assert (result.word, result.direction) == ("TA", 'H')
    assert result.cross_words == ("AA",)
    assert result.score == 8


def test_single_tile_takes_the_longer_word(validator):
    board = Board.empty()
    board.place(7, 6, "A")
    board.place(5, 7, "T")
    board.place(6, 7, "A")
    result = validator.validate(board, set(), {(7, 7): "N"})
    assert result.valid
    assert (result.word, result.direction) == ("TAN", 'V')
    assert result.score == 10


def test_rejects_bad_input(validator, cat_board):
    assert validator.validate(cat_board, set(), {}).reason is FailureReason.EMPTY
    assert validator.validate(cat_board, set(), {(7, 7): "A"}).reason is FailureReason.SQUARE_OCCUPIED
    assert validator.validate(cat_board, set(), {(15, 0): "A"}).reason is FailureReason.INVALID_TILE
    assert validator.validate(cat_board, set(), {(8, 8): "1"}).reason is FailureReason.INVALID_TILE
    assert validator.validate(cat_board, set(), {(8, 8): "AB"}).reason is FailureReason.INVALID_TILE
    assert validator.validate(cat_board, set(), {(8, 8): "\u00e5"}).reason is FailureReason.INVALID_TILE
    not_in_line = validator.validate(cat_board, set(), {(1, 1): "A", (2, 2): "T"})
    assert not_in_line.reason is FailureReason.NOT_IN_LINE
    assert not_in_line.message == "Tiles must all be in one row or one column."


def test_fails_closed_without_dictionary(cat_board):
    result = PlacementValidator(Lexicon()).validate(cat_board, set(), {(7, 9): "S"})
    assert not result.valid
    assert result.reason is FailureReason.LEXICON_UNAVAILABLE


def test_board_is_not_modified(validator, cat_board):
    before = cat_board.to_string()
    validator.validate(cat_board, set(), {(7, 9): "S"})
    assert cat_board.to_string() == before


def test_result_dict_shapes(validator, cat_board):
    ok = validator.validate(cat_board, set(), {(7, 9): "S"}).to_dict()
    assert ok == {
        "valid": True,
        "word": "CATS",
        "positions": [[7, 6], [7, 7], [7, 8], [7, 9]],
        "dir": "H",
        "score": 6,
        "crossWords": [],
    }
    bad = validator.validate(cat_board, set(), {(7, 9): "X"}).to_dict()
    assert bad["valid"] is False
    assert bad["reason"] == "not_a_word"
    assert bad["word"] == "CATX"


def test_letter_that_uppercases_to_two_is_rejected():
    board = Board.empty()
    board.place(7, 7, "A")
    validator = PlacementValidator(Lexicon(["ASS", "AS"]))
    # German sharp s uppercases to "SS" and would fill one square with two letters.
    result = validator.validate(board, set(), {(7, 8): "ß"})
    assert not result.valid
    assert result.reason is FailureReason.INVALID_TILE


def test_message_lists_letters_in_placement_order(validator, cat_board):
    result = validator.validate(cat_board, set(), {(7, 10): "Y", (7, 9): "X"})
    assert result.reason is FailureReason.NOT_A_WORD
    assert result.message == (
        '"CATXY" is not a valid word. (Your letters YX combined with adjacent board tiles to form "CATXY".)'
    )
