from .errors import (
    ICMError,
    InvalidInputError,
    IndexOutOfRangeError,
    DegenerateStackError,
)
from .icm import (
    EquityResult,
    calculate_icm,
    calculate_player_equity,
    calculate_all_equities,
    calculate_elimination_probabilities,
    calculate_bubble_factor,
    bubble_factor,
)
from .pushfold import (
    CALL_EQUITY,
    PushFoldResult,
    calculate_push_fold_equity,
    calculate_optimal_pushing_range,
    push_range_tier,
)

__all__ = [
    "ICMError",
    "InvalidInputError",
    "IndexOutOfRangeError",
    "DegenerateStackError",
    "EquityResult",
    "calculate_icm",
    "calculate_player_equity",
    "calculate_all_equities",
    "calculate_elimination_probabilities",
    "calculate_bubble_factor",
    "bubble_factor",
    "CALL_EQUITY",
    "PushFoldResult",
    "calculate_push_fold_equity",
    "calculate_optimal_pushing_range",
    "push_range_tier",
]
