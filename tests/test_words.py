import random

from sketchroom.domain.common.words import WORD_LIST, WordBank, mask_word


def test_mask_shows_even_positions():
    assert mask_word("banana") == "b _ n _ n _"
    assert mask_word("cat") == "c _ t"
    assert mask_word("a") == "a"


def test_mask_keeps_spaces():
    assert mask_word("ice cream") == "i _ e   c _ e _ m"


def test_offer_gives_distinct_words():
    bank = WordBank(rng=random.Random(1))
    choices = bank.offer(3)
    assert len(choices) == 3
    assert len(set(choices)) == 3
    assert all(w in WORD_LIST for w in choices)


def test_offer_small_bank():
    bank = WordBank(["solo", "solo", " "], rng=random.Random(1))
    assert bank.offer(3) == ["solo"]
