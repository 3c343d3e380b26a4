import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from scrabble_trainer.errors import LexiconUnavailable
from scrabble_trainer.lexicon import Lexicon, load_dictionary


def test_lexicon_filters_and_orders_words():
    lexicon = Lexicon(["cat", "A", "at", "zoo", "don't", "ABCDEFGHIJKLMNOP", " tea "])
    assert lexicon.all_words() == ("AT", "CAT", "TEA", "ZOO")
    assert "cat" in lexicon
    assert lexicon.contains("TEA")
    assert "A" not in lexicon


def test_words_between_lengths():
    lexicon = Lexicon(["AT", "CAT", "CATS", "SCATS"])
    assert lexicon.words_between(3, 4) == ("CAT", "CATS")


def test_empty_lexicon_fails_closed():
    lexicon = Lexicon()
    assert not lexicon.is_ready()
    with pytest.raises(LexiconUnavailable):
        lexicon.require_ready()


def test_load_dictionary_adds_supplementary_words(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("cat\ndog\n\n#comment\n", encoding="utf-8")
    lexicon = load_dictionary(str(path))
    assert "CAT" in lexicon and "DOG" in lexicon
    assert "SELFIE" in lexicon
    assert "#COMMENT" not in lexicon


def test_load_dictionary_missing_file_is_not_ready(tmp_path):
    lexicon = load_dictionary(str(tmp_path / "nope.txt"))
    assert not lexicon.is_ready()


def test_bundled_dictionary_loads():
    lexicon = load_dictionary(os.path.join(ROOT, "dictionaries", "en_small.txt"))
    assert lexicon.is_ready()
    assert "QI" in lexicon and "STONE" in lexicon
