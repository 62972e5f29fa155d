from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from itertools import combinations
from typing import Dict, Iterable, List, Optional, Tuple

from .cards import RANK_NAMES, VAL_TO_RANK, Card, CardLike, parse_cards


class HandCategory(IntEnum):
    # value doubles as the public 1..10 rank
    HIGH_CARD = 1
    PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10


@dataclass(frozen=True, slots=True)
class HandEvaluation:
    rank: int
    category: HandCategory
    description: str
    tiebreak: Tuple[int, ...] = ()
    best_five: Tuple[Card, ...] = ()

    def strength(self) -> Tuple[int, Tuple[int, ...]]:
        return (self.rank, self.tiebreak)

    def to_dict(self) -> Dict[str, object]:
        return {
            "rank": self.rank,
            "category": self.category.name,
            "description": self.description,
            "cards": [str(c) for c in self.best_five],
        }


def _rank_counts(cards: List[Card]) -> Dict[int, int]:
    d: Dict[int, int] = {}
    for c in cards:
        d[c.val] = d.get(c.val, 0) + 1
    return d


def straight_high(values: List[int]) -> Optional[int]:
    uniq = sorted(set(values), reverse=True)
    if 14 in uniq:
        uniq.append(1)  # ace low
    run = 1
    best = None
    for i in range(len(uniq) - 1):
        if uniq[i] - 1 == uniq[i + 1]:
            run += 1
            if run >= 5:
                high = uniq[i - (run - 2)]
                best = max(best or 0, high)
        else:
            run = 1
    if best == 1:
        return 5
    return best


def evaluate_5(cards5: List[Card]) -> Tuple[HandCategory, Tuple[int, ...]]:
    if len(cards5) != 5:
        raise ValueError("evaluate_5 expects exactly 5 cards")

    vals = sorted([c.val for c in cards5], reverse=True)
    is_flush = len({c.suit for c in cards5}) == 1

    counts = _rank_counts(cards5)
    groups = sorted(counts.items(), key=lambda kv: (kv[1], kv[0]), reverse=True)
    count_pattern = sorted(counts.values(), reverse=True)

    sh = straight_high(vals)
    is_straight = sh is not None

    if is_straight and is_flush:
        if sh == 14:
            return HandCategory.ROYAL_FLUSH, (sh,)
        return HandCategory.STRAIGHT_FLUSH, (sh,)
    if count_pattern == [4, 1]:
        quad = groups[0][0]
        kicker = max(v for v in vals if v != quad)
        return HandCategory.FOUR_OF_A_KIND, (quad, kicker)
    if count_pattern == [3, 2]:
        return HandCategory.FULL_HOUSE, (groups[0][0], groups[1][0])
    if is_flush:
        return HandCategory.FLUSH, tuple(vals)
    if is_straight:
        return HandCategory.STRAIGHT, (sh,)
    if count_pattern == [3, 1, 1]:
        trips = groups[0][0]
        kickers = sorted([v for v in vals if v != trips], reverse=True)
        return HandCategory.THREE_OF_A_KIND, (trips, *kickers)
    if count_pattern == [2, 2, 1]:
        pair_hi = groups[0][0]
        pair_lo = groups[1][0]
        kicker = max(v for v in vals if v != pair_hi and v != pair_lo)
        return HandCategory.TWO_PAIR, (pair_hi, pair_lo, kicker)
    if count_pattern == [2, 1, 1, 1]:
        pair = groups[0][0]
        kickers = sorted([v for v in vals if v != pair], reverse=True)
        return HandCategory.PAIR, (pair, *kickers)
    return HandCategory.HIGH_CARD, tuple(vals)


def _plural(val: int) -> str:
    name = RANK_NAMES[val]
    return name + ("es" if name == "Six" else "s")


def describe(category: HandCategory, tiebreak: Tuple[int, ...]) -> str:
    top = tiebreak[0]
    if category is HandCategory.ROYAL_FLUSH:
        return "Royal Flush"
    if category is HandCategory.STRAIGHT_FLUSH:
        return f"Straight Flush, {VAL_TO_RANK[top]} high"
    if category is HandCategory.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_plural(top)}"
    if category is HandCategory.FULL_HOUSE:
        return f"Full House, {_plural(top)} full of {_plural(tiebreak[1])}"
    if category is HandCategory.FLUSH:
        return f"Flush, {VAL_TO_RANK[top]} high"
    if category is HandCategory.STRAIGHT:
        return f"Straight, {VAL_TO_RANK[top]} high"
    if category is HandCategory.THREE_OF_A_KIND:
        return f"Three of a Kind, {_plural(top)}"
    if category is HandCategory.TWO_PAIR:
        return f"Two Pair, {_plural(top)} and {_plural(tiebreak[1])}"
    if category is HandCategory.PAIR:
        return f"Pair of {_plural(top)}"
    return f"High Card, {RANK_NAMES[top]}"


def _best_of(cards: List[Card]) -> Tuple[HandCategory, Tuple[int, ...], List[Card]]:
    best = None  # (category, tiebreak, best5)
    for combo in combinations(cards, 5):
        cat, tiebreak = evaluate_5(list(combo))
        if best is None or (cat, tiebreak) > (best[0], best[1]):
            best = (cat, tiebreak, list(combo))
    assert best is not None
    return best


def evaluate_hand(cards: Iterable[CardLike]) -> HandEvaluation:
    """
    Rank the best five-card hand out of 5..7 cards.

    rank runs 1 (high card) .. 10 (royal flush); two evaluations compare
    with ``strength()``, which adds the kicker tiebreak.
    """
    cs = parse_cards(cards)
    if not (5 <= len(cs) <= 7):
        raise ValueError("Hand must contain 5-7 cards")
    if len(set(cs)) != len(cs):
        raise ValueError("Duplicate cards detected")

    cat, tiebreak, best5 = _best_of(cs)
    best5 = sorted(best5, key=lambda c: c.val, reverse=True)
    return HandEvaluation(
        rank=int(cat),
        category=cat,
        description=describe(cat, tiebreak),
        tiebreak=tiebreak,
        best_five=tuple(best5),
    )


def _checked_best(
    hand: Iterable[CardLike],
    board: Iterable[CardLike],
) -> Tuple[HandCategory, Tuple[int, ...], List[Card]]:
    h = parse_cards(hand)
    b = parse_cards(board)
    cards = h + b
    if len(h) != 2:
        raise ValueError("Hold'em hand must be exactly 2 cards")
    if not (3 <= len(b) <= 5):
        raise ValueError("Board must be 3, 4, or 5 cards post-flop")
    if len(set(cards)) != len(cards):
        raise ValueError("Duplicate cards detected")
    return _best_of(cards)


def evaluate_best(
    hand: Iterable[CardLike],
    board: Iterable[CardLike],
) -> Tuple[str, Tuple[int, ...], List[Card]]:
    cat, tiebreak, best5 = _checked_best(hand, board)
    best5 = sorted(best5, key=lambda c: c.val, reverse=True)
    return cat.name.lower(), tiebreak, best5


def hand_strength(hand, board) -> Tuple[int, Tuple[int, ...]]:
    cat, tiebreak, _ = _checked_best(hand, board)
    return int(cat), tiebreak


def compare_hands(hand1, hand2, board) -> int:
    k1 = hand_strength(hand1, board)
    k2 = hand_strength(hand2, board)
    return 1 if k1 > k2 else (-1 if k2 > k1 else 0)


def winners(hands, board) -> List[int]:
    keys = [hand_strength(h, board) for h in hands]
    best = max(keys)
    return [i for i, k in enumerate(keys) if k == best]
