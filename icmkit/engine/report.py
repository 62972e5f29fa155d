"""
JSON-ready analysis built on the ICM and push/fold engines.

Keys use the camelCase wire names callers already consume
(``chipEV``, ``riskPremium`` ...).
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from ..helpers.cards import CardLike, parse_cards
from ..helpers.ranges import Position, hand_class, positional_range
from .errors import InvalidInputError
from .icm import bubble_factor, calculate_icm, new_memo
from .pushfold import CALL_EQUITY, calculate_optimal_pushing_range, calculate_push_fold_equity

logger = logging.getLogger(__name__)

COMMON_SCENARIOS: List[Dict[str, Any]] = [
    {
        "name": "Bubble Play - 4 players, 3 paid",
        "stacks": [100, 80, 60, 40],
        "payouts": [50, 30, 20],
        "description": "Classic bubble situation with clear big stack advantage",
    },
    {
        "name": "Final Table - 3 players",
        "stacks": [150, 100, 50],
        "payouts": [60, 25, 15],
        "description": "Final three with significant ICM implications",
    },
    {
        "name": "Early ITM - 6 players, all paid",
        "stacks": [200, 150, 100, 75, 50, 25],
        "payouts": [40, 25, 15, 10, 6, 4],
        "description": "Just made the money, ladder considerations",
    },
]

TIPS = [
    "Higher bubble factors indicate more ICM pressure",
    "Short stacks should play tighter in bubble situations",
    "Big stacks can apply pressure but should avoid unnecessary risks",
    "Medium stacks are often in the most difficult spots",
]


def _pct(part: float, whole: float) -> float:
    return (part / whole) * 100 if whole else 0.0


def chip_rank(stacks: Sequence[float], player_index: int) -> int:
    """1-based rank by stack size; ties keep seat order."""
    order = sorted(range(len(stacks)), key=lambda i: (-stacks[i], i))
    return order.index(player_index) + 1


def icm_analysis(stacks: Sequence[float], payouts: Sequence[float], player_index: int = 0) -> Dict[str, Any]:
    result = calculate_icm(stacks, payouts, player_index)
    total_chips = float(sum(stacks))
    total_payout = float(sum(payouts))

    data = result.to_dict()
    data.update(
        chipPercentage=stacks[player_index] / total_chips,
        totalPayout=total_payout,
        equityPercentage=_pct(result.equity, total_payout),
        riskPremiumPercentage=_pct(result.risk_premium, total_payout),
        position=chip_rank(stacks, player_index),
    )
    return {
        "data": data,
        "metadata": {
            "players": len(stacks),
            "payoutPositions": len(payouts),
            "inMoney": len(stacks) <= len(payouts),
        },
    }


def bubble_interpretation(bf: float) -> str:
    if bf >= 3.0:
        return "EXTREME ICM pressure - play very tight"
    if bf >= 2.0:
        return "HIGH ICM pressure - significant tightening required"
    if bf >= 1.5:
        return "MODERATE ICM pressure - some adjustments needed"
    if bf >= 1.2:
        return "MILD ICM pressure - minor adjustments"
    return "LOW ICM pressure - close to chip EV"


def bubble_recommendations(bf: float, total_players: int, paid_positions: int) -> List[str]:
    recs: List[str] = []
    if bf >= 2.0:
        recs.append("Avoid marginal spots")
        recs.append("Fold hands you would normally call with")
        recs.append("Do not chase draws without strong pot odds")
    if total_players == paid_positions + 1:
        recs.append("This is the bubble - extreme caution required")
        recs.append("Only play premium hands")
    if bf < 1.3:
        recs.append("Can play closer to chip EV")
        recs.append("Take profitable spots")
    return recs


def bubble_analysis(stacks: Sequence[float], payouts: Sequence[float], player_index: int = 0) -> Dict[str, Any]:
    # one ICM pass gives both numbers the bubble factor is made of
    result = calculate_icm(stacks, payouts, player_index)
    bf = bubble_factor(result.chip_ev, result.equity)
    return {
        "bubbleFactor": bf,
        "icmEquity": result.equity,
        "chipEquity": result.chip_ev,
        "riskPremium": result.risk_premium,
        "interpretation": bubble_interpretation(bf),
        "recommendations": bubble_recommendations(bf, len(stacks), len(payouts)),
    }


def push_fold_confidence(push_ev: float, fold_ev: float, fold_equity: float) -> float:
    base = min(abs(push_ev - fold_ev) * 10, 0.9)
    if fold_equity > 0.8:
        base += 0.1
    elif fold_equity < 0.5:
        base -= 0.1
    return max(0.5, min(0.95, base))


def push_fold_analysis(
    hero_stack: float,
    villain_stack: float,
    blinds: float,
    antes: float = 0.0,
    calling_range: float = 0.3,
    fold_equity: float = 0.7,
    call_equity: float = CALL_EQUITY,
) -> Dict[str, Any]:
    if blinds <= 0:
        raise InvalidInputError("blinds must be positive")
    if not (0.0 <= fold_equity <= 1.0):
        raise InvalidInputError("fold_equity must be within [0, 1]")
    if not (0.0 <= calling_range <= 1.0):
        raise InvalidInputError("calling_range must be within [0, 1]")
    if hero_stack <= 0 or villain_stack <= 0 or antes < 0:
        raise InvalidInputError("stacks must be positive and antes non-negative")

    result = calculate_push_fold_equity(
        hero_stack, villain_stack, blinds, antes, calling_range, fold_equity, call_equity,
    )
    # blinds = SB + BB with SB = BB / 2
    big_blind = blinds / 1.5

    data = result.to_dict()
    data.update(
        recommendation="PUSH" if result.push_ev > result.fold_ev else "FOLD",
        evDifference=result.push_ev - result.fold_ev,
        effectiveStack=min(hero_stack, villain_stack),
        stackInBB=round(hero_stack / big_blind, 1),
        profitability="PROFITABLE" if result.push_ev > 0 else "UNPROFITABLE",
        confidence=push_fold_confidence(result.push_ev, result.fold_ev, fold_equity),
    )
    return data


# at or under this many big blinds the scenario solver only shoves or folds
SHORT_STACK_BB = 15.0


def _position(position: Union[str, Position]) -> str:
    try:
        return Position(position).value
    except ValueError:
        raise InvalidInputError(f"Unknown position: {position!r}") from None


def _hero_hand(hero_cards: Union[str, Iterable[CardLike]]) -> str:
    cards = parse_cards(hero_cards)
    if len(cards) != 2 or cards[0] == cards[1]:
        raise InvalidInputError("hero_cards must be two distinct cards")
    return hand_class(cards[0], cards[1])


def push_fold_decision(
    hero_stack: float,
    villain_stacks: Sequence[float],
    small_blind: float,
    big_blind: float,
    ante: float = 0.0,
    position: Union[str, Position] = "BTN",
    payouts: Sequence[float] = (),
    hero_cards: Optional[Union[str, Iterable[CardLike]]] = None,
    call_equity: float = CALL_EQUITY,
) -> Dict[str, Any]:
    """
    Shove or fold for the hero (seat 0) against everyone left at the table.

    The push range comes from stack depth. With ``hero_cards`` the answer is
    PUSH exactly when their hand class is in that range; without cards there
    is no hand to check and the answer is FOLD. ``ante`` is per player and
    the push EV is taken against the biggest villain stack.
    """
    if hero_stack <= 0 or len(villain_stacks) == 0 or min(villain_stacks) <= 0:
        raise InvalidInputError("hero and villain stacks must be positive")
    if small_blind <= 0 or big_blind <= 0 or ante < 0:
        raise InvalidInputError("blinds must be positive and ante non-negative")
    pos = _position(position)

    stacks = [hero_stack, *villain_stacks]
    icm = calculate_icm(stacks, payouts, 0)
    pf = calculate_push_fold_equity(
        hero_stack, max(villain_stacks), small_blind + big_blind, ante * len(stacks),
        calling_range=0.25, fold_equity=0.75, call_equity=call_equity,
    )
    optimal_range = calculate_optimal_pushing_range(hero_stack, villain_stacks, big_blind, ante, pos, payouts)

    recommendation = "FOLD"
    hand_analysis = None
    if hero_cards is not None:
        hand = _hero_hand(hero_cards)
        in_range = hand in optimal_range
        hand_analysis = {
            "hand": hand,
            "inRange": in_range,
            "equity": 0.55 if pf.push_ev > 0 else 0.45,
        }
        if in_range:
            recommendation = "PUSH"

    logger.debug("push_fold_decision: %s at %.1f BB -> %s", pos, hero_stack / big_blind, recommendation)
    return {
        "recommendation": recommendation,
        **pf.to_dict(),
        "icmEquity": icm.equity,
        "bubbleFactor": bubble_factor(icm.chip_ev, icm.equity),
        "optimalRange": optimal_range,
        "handAnalysis": hand_analysis,
        "stackSizeInBB": hero_stack / big_blind,
    }


def solve_scenario(
    stacks: Sequence[float],
    payouts: Sequence[float],
    player_index: int,
    small_blind: float,
    big_blind: float,
    ante: float = 0.0,
    position: Union[str, Position] = "BTN",
    hero_cards: Optional[Union[str, Iterable[CardLike]]] = None,
    call_equity: float = CALL_EQUITY,
) -> Dict[str, Any]:
    """
    One action for ``stacks[player_index]``.

    Short stacks (``SHORT_STACK_BB`` or less) shove when the push EV beats
    folding. Deeper stacks raise a hand from the position's opening range
    and fold the rest.
    """
    if len(stacks) < 2:
        raise InvalidInputError("a scenario needs at least two players")
    if small_blind < 0 or big_blind <= 0 or ante < 0:
        raise InvalidInputError("big blind must be positive, small blind and ante non-negative")
    pos = _position(position)
    hand = _hero_hand(hero_cards) if hero_cards is not None else None

    icm = calculate_icm(stacks, payouts, player_index)
    hero_stack = float(stacks[player_index])
    stack_in_bb = hero_stack / big_blind

    if stack_in_bb <= SHORT_STACK_BB:
        villain_stack = max(s for i, s in enumerate(stacks) if i != player_index)
        pf = calculate_push_fold_equity(
            hero_stack, villain_stack, small_blind + big_blind, ante * len(stacks),
            calling_range=0.3, fold_equity=0.7, call_equity=call_equity,
        )
        if pf.push_ev > pf.fold_ev:
            action, ev = "PUSH", pf.push_ev
        else:
            action, ev = "FOLD", pf.fold_ev
        confidence = 0.95 if stack_in_bb <= 8 else 0.85
    else:
        if hand is None:
            action, confidence = "FOLD", 0.7
        elif hand in positional_range(pos, "open")["hands"]:
            action, confidence = "RAISE", 0.8
        else:
            action, confidence = "FOLD", 0.9
        ev = icm.dollar_ev

    return {
        "data": {"action": action, "equity": icm.equity, "ev": ev, "confidence": confidence},
        "icmAnalysis": icm.to_dict(),
        "scenario": {"stackInBB": stack_in_bb, "position": pos, "players": len(stacks), "hand": hand},
    }


def field_analysis(
    stacks: Sequence[float],
    payouts: Sequence[float],
    memo_capacity: Optional[int] = None,
) -> Dict[str, Any]:
    """Every seat's ICM numbers from one shared sub-problem memo."""
    if len(stacks) == 0:
        raise InvalidInputError("Invalid input: empty stacks")
    memo = new_memo(memo_capacity) if memo_capacity else new_memo()
    total_chips = float(sum(stacks))

    players = []
    for i, stack in enumerate(stacks):
        r = calculate_icm(stacks, payouts, i, memo=memo)
        players.append({
            "index": i,
            "stack": stack,
            "chipPercentage": stack / total_chips,
            "position": chip_rank(stacks, i),
            **r.to_dict(),
            "bubbleFactor": bubble_factor(r.chip_ev, r.equity),
        })

    logger.info("field_analysis: %d players, memo %s", len(stacks), memo.stats.as_dict())
    return {
        "players": players,
        "totalEquity": sum(p["equity"] for p in players),
        "totalPayout": float(sum(payouts)),
        "inMoney": len(stacks) <= len(payouts),
    }
