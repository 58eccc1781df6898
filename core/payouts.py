from __future__ import annotations

from typing import Dict, List, Optional

from .models import HandCategory

# Paytable order is also display order: first five rows left, rest right.
PAYOUTS: Dict[HandCategory, int] = {
    HandCategory.ROYAL_FLUSH: 250,
    HandCategory.STRAIGHT_FLUSH: 50,
    HandCategory.FOUR_OF_A_KIND: 25,
    HandCategory.FULL_HOUSE: 9,
    HandCategory.FLUSH: 6,
    HandCategory.STRAIGHT: 4,
    HandCategory.THREE_OF_A_KIND: 3,
    HandCategory.TWO_PAIR: 2,
    HandCategory.JACKS_OR_BETTER: 1,
}


def multiplier(category: Optional[HandCategory]) -> int:
    if category is None:
        return 0
    return PAYOUTS[category]


def win_amount(category: Optional[HandCategory], bet: int) -> int:
    return multiplier(category) * bet


def paytable_rows(bet: int, winning: Optional[HandCategory] = None) -> List[Dict[str, object]]:
    return [
        {
            "hand": category.value,
            "multiplier": payout,
            "amount": payout * bet,
            "highlight": category == winning,
        }
        for category, payout in PAYOUTS.items()
    ]
