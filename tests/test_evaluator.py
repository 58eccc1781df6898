import itertools

import pytest

from core.cards import create_deck, parse_cards
from core.evaluator import evaluate
from core.models import HandCategory


@pytest.mark.parametrize(
    "labels, expected",
    [
        (["10s", "Js", "Qs", "Ks", "As"], HandCategory.ROYAL_FLUSH),
        (["9h", "10h", "Jh", "Qh", "Kh"], HandCategory.STRAIGHT_FLUSH),
        (["Ah", "2h", "3h", "4h", "5h"], HandCategory.STRAIGHT_FLUSH),
        (["7s", "7h", "7d", "7c", "2c"], HandCategory.FOUR_OF_A_KIND),
        (["Qc", "Qd", "Qs", "9h", "9s"], HandCategory.FULL_HOUSE),
        (["2h", "3h", "4h", "5h", "7h"], HandCategory.FLUSH),
        (["9h", "8d", "7c", "6s", "5h"], HandCategory.STRAIGHT),
        (["2c", "3d", "4h", "5s", "Ac"], HandCategory.STRAIGHT),
        (["10h", "Js", "Qs", "Ks", "As"], HandCategory.STRAIGHT),
        (["8h", "8d", "8s", "Qd", "Js"], HandCategory.THREE_OF_A_KIND),
        (["Jc", "Jd", "5h", "5s", "2c"], HandCategory.TWO_PAIR),
        (["Jc", "Jd", "3h", "5s", "2c"], HandCategory.JACKS_OR_BETTER),
        (["Ac", "Ad", "3h", "5s", "2c"], HandCategory.JACKS_OR_BETTER),
        (["9c", "9d", "3h", "5s", "2c"], None),
        (["10c", "10d", "3h", "5s", "2c"], None),
        (["As", "Kd", "Jh", "9c", "4d"], None),
        (["Kc", "Ad", "2h", "3s", "4c"], None),
    ],
)
def test_evaluate_classifies_hands(labels, expected):
    assert evaluate(parse_cards(labels)) == expected


@pytest.mark.parametrize(
    "labels",
    [
        ["2c", "3d", "4h", "5s", "Ac"],
        ["Jc", "Jd", "5h", "5s", "2c"],
        ["Qc", "Qd", "Qs", "9h", "9s"],
        ["10s", "Js", "Qs", "Ks", "As"],
    ],
)
def test_evaluate_ignores_card_order(labels):
    cards = parse_cards(labels)
    expected = evaluate(cards)
    for ordering in itertools.permutations(cards):
        assert evaluate(list(ordering)) == expected


def test_evaluate_is_deterministic_over_dealt_hands():
    deck = create_deck(seed=777)
    for idx in range(0, 50, 5):
        hand = deck[idx : idx + 5]
        assert evaluate(hand) == evaluate(list(reversed(hand)))


def test_evaluate_requires_five_cards():
    with pytest.raises(ValueError, match="Expected 5 cards"):
        evaluate(parse_cards(["Ah", "Kh", "Qh", "Jh"]))
