# cards
from .cards import Card, parse_cards, make_deck

# evaluation
from .evaluator import (
    HandCategory,
    HandEvaluation,
    evaluate_hand,
    evaluate_best,
    compare_hands,
    winners,
)

# caching
from .cache import LRUCache, CacheStats

# ranges + equity
from .ranges import (
    Position,
    parse_range_string,
    hands_to_range_string,
    hand_combos,
    hand_class,
    positional_range,
    generate_villain_combos,
)
from .equity import (
    EquityCalculation,
    RangeVsRangeResult,
    monte_carlo_equity,
    hand_vs_hand_equity,
    range_vs_range_equity,
)

__all__ = [
    # cards
    "Card", "parse_cards", "make_deck",

    # evaluation
    "HandCategory", "HandEvaluation", "evaluate_hand", "evaluate_best",
    "compare_hands", "winners",

    # cache
    "LRUCache", "CacheStats",

    # ranges / equity
    "Position", "parse_range_string", "hands_to_range_string", "hand_combos",
    "hand_class", "positional_range", "generate_villain_combos",
    "EquityCalculation", "RangeVsRangeResult", "monte_carlo_equity",
    "hand_vs_hand_equity", "range_vs_range_equity",
]
