from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..helpers.cache import LRUCache
from .errors import DegenerateStackError, IndexOutOfRangeError, InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_MEMO_CAPACITY = 200_000

# (tracked player's stack, other stacks sorted, payouts)
MemoKey = Tuple[float, Tuple[float, ...], Tuple[float, ...]]


@dataclass(frozen=True, slots=True)
class EquityResult:
    equity: float
    chip_ev: float
    dollar_ev: float
    risk_premium: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "equity": self.equity,
            "chipEV": self.chip_ev,
            "dollarEV": self.dollar_ev,
            "riskPremium": self.risk_premium,
        }


def new_memo(capacity: int = DEFAULT_MEMO_CAPACITY) -> "LRUCache[MemoKey, float]":
    return LRUCache(capacity)


# ------------------------------------------------------------
# Input checks (public entry points only; the recursion trusts its inputs)
# ------------------------------------------------------------

def _as_amounts(values: Sequence[float], what: str) -> List[float]:
    out: List[float] = []
    for v in values:
        try:
            x = float(v)
        except (TypeError, ValueError):
            raise InvalidInputError(f"{what} must be numbers, got {v!r}") from None
        if not math.isfinite(x) or x < 0:
            raise InvalidInputError(f"{what} must be finite and non-negative, got {v!r}")
        out.append(x)
    return out


def _validated(
    stacks: Sequence[float],
    payouts: Sequence[float],
    player_index: int,
    require_payouts: bool = True,
) -> Tuple[List[float], List[float]]:
    if len(stacks) == 0:
        raise InvalidInputError("Invalid input: empty stacks")
    if require_payouts and len(payouts) == 0:
        raise InvalidInputError("Invalid input: empty payouts")
    st = _as_amounts(stacks, "stacks")
    po = _as_amounts(payouts, "payouts")
    if isinstance(player_index, bool) or not isinstance(player_index, int):
        raise InvalidInputError(f"player_index must be an int, got {player_index!r}")
    if not (0 <= player_index < len(st)):
        raise IndexOutOfRangeError(player_index, len(st))
    if sum(st) <= 0:
        raise DegenerateStackError("Total chips must be positive")
    return st, po


# ------------------------------------------------------------
# Elimination model
# ------------------------------------------------------------

def calculate_elimination_probabilities(stacks: Sequence[float]) -> List[float]:
    """
    Probability that each player is the next one out.

    Raw weight p_i = H_i / (H_i + s_i), H_i being the harmonic mean of the
    other stacks; weights are normalised to sum to 1.

    Players with a stack <= 0 are already out: when any exist they share the
    whole probability mass equally and everyone else gets 0.
    """
    n = len(stacks)
    if n == 0:
        return []

    busted = [i for i, s in enumerate(stacks) if s <= 0]
    if busted:
        share = 1.0 / len(busted)
        return [share if s <= 0 else 0.0 for s in stacks]
    if n == 1:
        return [1.0]

    raw: List[float] = []
    for i, s in enumerate(stacks):
        inv_sum = sum(1.0 / stacks[j] for j in range(n) if j != i)
        harmonic = (n - 1) / inv_sum
        raw.append(harmonic / (harmonic + s))

    total = sum(raw)
    return [p / total for p in raw]


# ------------------------------------------------------------
# Recursive core
# ------------------------------------------------------------

def _without(seq: List[float], i: int) -> List[float]:
    return seq[:i] + seq[i + 1:]


def _remap(player_index: int, removed: int) -> int:
    return player_index - 1 if player_index > removed else player_index


def _memo_key(stacks: List[float], payouts: List[float], player_index: int) -> MemoKey:
    others = _without(stacks, player_index)
    return (stacks[player_index], tuple(sorted(others)), tuple(payouts))


def _player_equity(
    stacks: List[float],
    payouts: List[float],
    player_index: int,
    memo: "LRUCache[MemoKey, float]",
) -> float:
    n = len(stacks)
    if n == 1:
        return payouts[0] if payouts else 0.0

    key = _memo_key(stacks, payouts, player_index)
    if n <= len(payouts):
        return memo.get_or_compute(key, lambda: _in_money_equity(stacks, payouts, player_index, memo))
    return memo.get_or_compute(key, lambda: _unpaid_equity(stacks, payouts, player_index, memo))


def _unpaid_equity(
    stacks: List[float],
    payouts: List[float],
    player_index: int,
    memo: "LRUCache[MemoKey, float]",
) -> float:
    elim = calculate_elimination_probabilities(stacks)
    equity = 0.0
    # tracked player going out here finishes unpaid: no term for i == player_index
    for i in range(len(stacks)):
        if i == player_index or elim[i] == 0.0:
            continue
        new_stacks = _without(stacks, i)
        new_payouts = payouts[:min(len(payouts), len(new_stacks))]
        if new_payouts:
            sub = _player_equity(new_stacks, new_payouts, _remap(player_index, i), memo)
            equity += elim[i] * sub
    return equity


def _in_money_equity(
    stacks: List[float],
    payouts: List[float],
    player_index: int,
    memo: "LRUCache[MemoKey, float]",
) -> float:
    n = len(stacks)
    if n == 1:
        return payouts[0]

    if n == 2:
        total = stacks[0] + stacks[1]
        win_prob = stacks[player_index] / total if total > 0 else 0.5
        second = payouts[1] if len(payouts) > 1 else 0.0
        return win_prob * payouts[0] + (1 - win_prob) * second

    elim = calculate_elimination_probabilities(stacks)
    # out first among n paid players => lowest remaining slot
    equity = elim[player_index] * payouts[n - 1]
    for i in range(n):
        if i == player_index or elim[i] == 0.0:
            continue
        new_stacks = _without(stacks, i)
        sub = _player_equity(new_stacks, payouts[:n - 1], _remap(player_index, i), memo)
        equity += elim[i] * sub
    return equity


# ------------------------------------------------------------
# Public API
# ------------------------------------------------------------

def calculate_player_equity(
    stacks: Sequence[float],
    payouts: Sequence[float],
    player_index: int = 0,
    memo: Optional["LRUCache[MemoKey, float]"] = None,
) -> float:
    """
    ICM dollar equity of ``stacks[player_index]``.

    Empty payouts are allowed here (equity is then 0); ``calculate_icm`` is
    stricter. Pass ``memo`` to share sub-results across calls on related
    fields; by default each call gets its own.
    """
    st, po = _validated(stacks, payouts, player_index, require_payouts=False)
    memo = memo if memo is not None else new_memo()
    return _player_equity(st, po, player_index, memo)


def calculate_all_equities(
    stacks: Sequence[float],
    payouts: Sequence[float],
    memo: Optional["LRUCache[MemoKey, float]"] = None,
) -> List[float]:
    st, po = _validated(stacks, payouts, 0)
    memo = memo if memo is not None else new_memo()
    out = [_player_equity(st, po, i, memo) for i in range(len(st))]
    logger.debug("calculate_all_equities n=%d memo=%s", len(st), memo.stats.as_dict())
    return out


def calculate_icm(
    stacks: Sequence[float],
    payouts: Sequence[float],
    player_index: int = 0,
    memo: Optional["LRUCache[MemoKey, float]"] = None,
) -> EquityResult:
    st, po = _validated(stacks, payouts, player_index)
    memo = memo if memo is not None else new_memo()
    logger.debug("calculate_icm stacks=%s payouts=%s player=%d", st, po, player_index)

    equity = _player_equity(st, po, player_index, memo)
    chip_ev = (st[player_index] / sum(st)) * sum(po)

    logger.debug("calculate_icm memo=%s", memo.stats.as_dict())
    return EquityResult(
        equity=equity,
        chip_ev=chip_ev,
        dollar_ev=equity,
        risk_premium=chip_ev - equity,
    )


def bubble_factor(chip_ev: float, equity: float) -> float:
    """chip-proportional prize share / ICM equity; 1 when ICM equity is 0."""
    return chip_ev / equity if equity > 0 else 1.0


def calculate_bubble_factor(
    stacks: Sequence[float],
    payouts: Sequence[float],
    player_index: int = 0,
    memo: Optional["LRUCache[MemoKey, float]"] = None,
) -> float:
    st, po = _validated(stacks, payouts, player_index)
    memo = memo if memo is not None else new_memo()

    chip_equity = (st[player_index] / sum(st)) * sum(po)
    icm_equity = _player_equity(st, po, player_index, memo)
    return bubble_factor(chip_equity, icm_equity)
