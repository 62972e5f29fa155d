from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .cards import Card, CardLike, make_deck, parse_cards
from .evaluator import compare_hands
from .ranges import generate_villain_combos, hand_combos, parse_range_string

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EquityCalculation:
    hand1_equity: float
    hand2_equity: float
    tie_equity: float
    iterations: int

    def to_dict(self) -> Dict[str, float]:
        return {
            "hand1Equity": self.hand1_equity,
            "hand2Equity": self.hand2_equity,
            "tieEquity": self.tie_equity,
            "iterations": self.iterations,
        }


@dataclass(slots=True)
class RangeVsRangeResult:
    range1_equity: float
    range2_equity: float
    tie_equity: float
    iterations: int
    detailed: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {
            "range1Equity": self.range1_equity,
            "range2Equity": self.range2_equity,
            "tieEquity": self.tie_equity,
            "iterations": self.iterations,
            "detailed": dict(self.detailed),
        }


def _check_board(bd: List[Card]) -> None:
    if len(bd) > 5:
        raise ValueError("Board cannot have more than 5 cards")


def _runout(board: List[Card], deck: List[Card], rng: random.Random) -> List[Card]:
    # pops from deck; callers pass a fresh list each trial
    runout = list(board)
    while len(runout) < 5:
        runout.append(deck.pop(rng.randrange(len(deck))))
    return runout


def monte_carlo_equity(
    hero_hand: Iterable[CardLike],
    board: Iterable[CardLike],
    iters: int = 5000,
    villain_hand: Optional[Iterable[CardLike]] = None,
    villain_range: Optional[Union[str, List[str]]] = None,
    villain_explicit_hands: Optional[List[Iterable[CardLike]]] = None,
    dead_cards: Optional[Iterable[CardLike]] = None,
    seed: Optional[int] = None,
) -> Tuple[float, float, float]:
    rng = random.Random(seed)
    hero = parse_cards(hero_hand)
    bd = parse_cards(board)
    dead = parse_cards(dead_cards) if dead_cards else []

    if len(hero) != 2:
        raise ValueError("Hero hand must be 2 cards")
    _check_board(bd)
    if iters <= 0:
        raise ValueError("iters must be positive")

    known = hero + bd + dead
    if len(set(known)) != len(known):
        raise ValueError("Duplicate cards in known cards")

    if villain_hand is not None:
        vh = parse_cards(villain_hand)
        if len(vh) != 2:
            raise ValueError("villain_hand must be 2 cards")
        if any(c in set(known) for c in vh) or vh[0] == vh[1]:
            raise ValueError("villain_hand conflicts with known cards")
        villain_combos = [(vh[0], vh[1])]
    else:
        villain_combos = generate_villain_combos(
            exclude=known,
            range_spec=villain_range,
            explicit_hands=villain_explicit_hands,
        )
        if not villain_combos:
            raise ValueError("No valid villain combos from the given range/constraints.")

    wins = ties = losses = 0

    for _ in range(iters):
        vc1, vc2 = villain_combos[rng.randrange(len(villain_combos))]
        deck = make_deck(exclude=set(known) | {vc1, vc2})
        runout = _runout(bd, deck, rng)

        res = compare_hands(hero, [vc1, vc2], runout)
        if res > 0:
            wins += 1
        elif res == 0:
            ties += 1
        else:
            losses += 1

    total = wins + ties + losses
    return wins / total, ties / total, losses / total


def hand_vs_hand_equity(
    hand1: Iterable[CardLike],
    hand2: Iterable[CardLike],
    board: Iterable[CardLike] = (),
    iterations: int = 10_000,
    seed: Optional[int] = None,
) -> EquityCalculation:
    """Ties count half to each side in hand1_equity / hand2_equity."""
    wr, tr, lr = monte_carlo_equity(hand1, board, iters=iterations, villain_hand=hand2, seed=seed)
    return EquityCalculation(
        hand1_equity=wr + tr / 2,
        hand2_equity=lr + tr / 2,
        tie_equity=tr,
        iterations=iterations,
    )


def _sample_matchup(
    combos1: Sequence[Tuple[Card, Card]],
    combos2: Sequence[Tuple[Card, Card]],
    board: List[Card],
) -> List[Tuple[Tuple[Card, Card], Tuple[Card, Card]]]:
    dead = set(board)
    pairs = []
    for a in combos1:
        if a[0] in dead or a[1] in dead:
            continue
        for b in combos2:
            if len({a[0], a[1], b[0], b[1]} | dead) == 4 + len(dead):
                pairs.append((a, b))
    return pairs


def range_vs_range_equity(
    range1: Union[str, List[str]],
    range2: Union[str, List[str]],
    board: Iterable[CardLike] = (),
    iterations: int = 1000,
    seed: Optional[int] = None,
) -> RangeVsRangeResult:
    """
    Class-by-class Monte Carlo: every (class1, class2) matchup with at least
    one non-conflicting combo pairing gets ``iterations`` trials, each trial
    drawing a random concrete pairing and a random runout.
    """
    rng = random.Random(seed)
    bd = parse_cards(board)
    _check_board(bd)
    if len(set(bd)) != len(bd):
        raise ValueError("Duplicate cards in board")

    classes1 = parse_range_string(range1)
    classes2 = parse_range_string(range2)

    r1_wins = r2_wins = ties = total = 0
    detailed: Dict[str, float] = {}

    for h1 in classes1:
        for h2 in classes2:
            matchups = _sample_matchup(hand_combos(h1), hand_combos(h2), bd)
            if not matchups:
                continue

            wins = local_ties = 0
            for _ in range(iterations):
                a, b = matchups[rng.randrange(len(matchups))]
                deck = make_deck(exclude=set(bd) | {a[0], a[1], b[0], b[1]})
                res = compare_hands(a, b, _runout(bd, deck, rng))
                if res > 0:
                    wins += 1
                elif res == 0:
                    local_ties += 1

            detailed[f"{h1} vs {h2}"] = (wins + local_ties * 0.5) / iterations
            r1_wins += wins
            r2_wins += iterations - wins - local_ties
            ties += local_ties
            total += iterations

    logger.debug("range_vs_range_equity: %d matchups, %d trials", len(detailed), total)

    if total == 0:
        return RangeVsRangeResult(0.0, 0.0, 0.0, 0, detailed)
    return RangeVsRangeResult(
        range1_equity=(r1_wins + ties * 0.5) / total,
        range2_equity=(r2_wins + ties * 0.5) / total,
        tie_equity=ties / total,
        iterations=total,
        detailed=detailed,
    )
