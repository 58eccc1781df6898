import random
from collections import Counter

import pytest

from core.cards import (
    Card,
    RANKS,
    SUITS,
    cards_to_labels,
    create_deck,
    deal,
    draw_replacement,
    parse_cards,
    parse_label,
)

from .helpers import ALL_LABELS


def test_create_deck_has_every_card_once():
    deck = create_deck(seed=1)
    assert len(deck) == 52
    assert sorted(cards_to_labels(deck)) == ALL_LABELS
    assert {(card.suit, card.rank) for card in deck} == {(s, r) for s in SUITS for r in RANKS}


def test_create_deck_is_reproducible_per_seed_and_differs_between_shuffles():
    assert cards_to_labels(create_deck(seed=9)) == cards_to_labels(create_deck(seed=9))
    rng = random.Random(3)
    first = cards_to_labels(create_deck(rng=rng))
    second = cards_to_labels(create_deck(rng=rng))
    assert first != second


def test_shuffle_spreads_every_card_over_the_top_position():
    rng = random.Random(2024)
    trials = 5200
    tops = Counter(create_deck(rng=rng)[0].label for _ in range(trials))
    assert set(tops) == set(ALL_LABELS)
    # Expected 100 each; generous bounds keep this stable.
    assert all(55 <= count <= 150 for count in tops.values()), tops


def test_deal_takes_front_and_draw_takes_back():
    deck = create_deck(seed=5)
    front = deck[:5]
    back = deck[-1]
    dealt = deal(deck, 5)
    assert dealt == front
    assert len(deck) == 47
    assert draw_replacement(deck) is back
    assert len(deck) == 46
    assert back not in dealt


def test_deal_and_draw_raise_when_deck_exhausted():
    deck = parse_cards(["Ah", "Kd"])
    deal(deck, 2)
    with pytest.raises(ValueError, match="Not enough cards"):
        deal(deck, 1)
    with pytest.raises(ValueError, match="Not enough cards"):
        draw_replacement(deck)


def test_card_values_and_sprite_coordinates():
    assert parse_label("Ah").value == 14
    assert parse_label("2s").value == 2
    assert parse_label("10c").value == 10
    assert parse_label("Jd").value == 11
    assert parse_label("Kh").value == 13

    king_of_clubs = Card("clubs", "K")
    assert (king_of_clubs.sprite_x, king_of_clubs.sprite_y) == (12, 2)
    assert king_of_clubs.label == "Kc"


def test_cards_are_distinct_objects_even_with_equal_rank():
    a, b = parse_cards(["Qh", "Qh"])
    assert a is not b
    assert a != b
    assert a.value == b.value


def test_card_validation_rejects_invalid_values():
    with pytest.raises(ValueError, match="Invalid rank"):
        Card("hearts", "1")
    with pytest.raises(ValueError, match="Invalid suit"):
        Card("stars", "A")
    with pytest.raises(ValueError, match="Invalid suit"):
        parse_label("Ax")
    with pytest.raises(ValueError, match="Invalid card label"):
        parse_label("A")
