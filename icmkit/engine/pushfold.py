from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .errors import InvalidInputError

# Fixed stand-in for villain-call equity; not derived from the calling range.
CALL_EQUITY = 0.5


@dataclass(frozen=True, slots=True)
class PushFoldResult:
    push_ev: float
    fold_ev: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"pushEV": self.push_ev, "foldEV": self.fold_ev}


def calculate_push_fold_equity(
    hero_stack: float,
    villain_stack: float,
    blinds: float,
    antes: float,
    calling_range: float,
    fold_equity: float,
    call_equity: float = CALL_EQUITY,
) -> PushFoldResult:
    """
    Chip EV of shoving relative to folding.

    Folding is the zero baseline, so fold_ev is always 0. ``calling_range``
    is part of the request shape but does not enter the formula; the showdown
    equity when called is ``call_equity``.
    """
    pot = blinds + antes
    effective = min(hero_stack, villain_stack)

    called = call_equity * (pot + effective) - (1 - call_equity) * effective
    push_ev = fold_equity * pot + (1 - fold_equity) * called
    return PushFoldResult(push_ev=push_ev, fold_ev=0.0)


# ------------------------------------------------------------
# Stack-depth push tiers (hand-coded tables, each a strict superset
# of the one before)
# ------------------------------------------------------------

TIGHT_PUSH: Tuple[str, ...] = (
    "AA", "KK", "QQ", "JJ", "TT", "99", "88", "77",
    "AKs", "AKo", "AQs", "AQo", "AJs", "AJo", "ATs", "ATo",
    "A9s", "A8s", "A7s", "A6s", "A5s", "A4s", "A3s", "A2s",
    "KQs", "KQo", "KJs", "KJo", "KTs", "K9s",
    "QJs", "QJo", "QTs", "Q9s",
    "JTs", "J9s",
    "T9s",
)

MEDIUM_PUSH: Tuple[str, ...] = TIGHT_PUSH + (
    "66", "55", "44", "33", "22",
    "A9o", "A8o", "A7o", "A6o", "A5o",
    "KTo", "K9o", "K8s", "K7s", "K6s", "K5s",
    "Q9o", "Q8s", "Q7s",
    "J9o", "J8s", "J7s",
    "T9o", "T8s", "98s",
)

WIDE_PUSH: Tuple[str, ...] = MEDIUM_PUSH + (
    "A4o", "A3o", "A2o",
    "K8o", "K7o", "K6o", "K5o", "K4s", "K3s", "K2s",
    "Q8o", "Q7o", "Q6s", "Q5s", "Q4s",
    "J8o", "J7o", "J6s", "J5s",
    "T8o", "T7s", "T6s",
    "98o", "97s", "96s",
    "87s", "86s",
    "76s", "75s",
    "65s",
)

VERY_WIDE_PUSH: Tuple[str, ...] = WIDE_PUSH + (
    "K4o", "K3o", "K2o",
    "Q6o", "Q5o", "Q4o", "Q3s", "Q2s",
    "J6o", "J5o", "J4s", "J3s", "J2s",
    "T7o", "T6o", "T5s", "T4s", "T3s", "T2s",
    "97o", "96o", "95s", "94s",
    "87o", "86o", "85s", "84s",
    "76o", "75o", "74s",
    "65o", "64s", "63s",
    "54s", "53s",
    "43s", "42s",
    "32s",
)

# (upper bound in big blinds, tier name, hands); last bound is open-ended
PUSH_TIERS: Tuple[Tuple[Optional[float], str, Tuple[str, ...]], ...] = (
    (8.0, "tight", TIGHT_PUSH),
    (12.0, "medium", MEDIUM_PUSH),
    (18.0, "wide", WIDE_PUSH),
    (None, "very_wide", VERY_WIDE_PUSH),
)


def _tier(stack_in_bb: float) -> Tuple[str, Tuple[str, ...]]:
    for bound, name, hands in PUSH_TIERS:
        if bound is None or stack_in_bb <= bound:
            return name, hands
    raise AssertionError("unreachable: last tier is open-ended")


def push_range_tier(stack_in_bb: float) -> str:
    return _tier(stack_in_bb)[0]


def calculate_optimal_pushing_range(
    hero_stack: float,
    villain_stacks: Sequence[float],
    blinds: float,
    antes: float,
    position: str,
    payouts: Sequence[float],
) -> List[str]:
    # only stack depth picks the tier
    if blinds <= 0:
        raise InvalidInputError("blinds must be positive")
    return list(_tier(hero_stack / blinds)[1])
