from __future__ import annotations
from enum import Enum
from itertools import combinations
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .cards import Card, CardLike, RANKS, RANK_TO_VAL, SUITS, VAL_TO_RANK, make_deck, parse_cards


class Position(str, Enum):
    UTG = "UTG"
    UTG1 = "UTG1"
    UTG2 = "UTG2"
    MP = "MP"
    MP1 = "MP1"
    MP2 = "MP2"
    HJ = "HJ"
    CO = "CO"
    BTN = "BTN"
    SB = "SB"
    BB = "BB"


DEFAULT_RANGES: Dict[str, str] = {
    "UTG_open": "AA-77, AKs-ATs, AKo-AQo, KQs",
    "UTG1_open": "AA-66, AKs-A9s, AKo-AJo, KQs-KJs, QJs",
    "MP_open": "AA-55, AKs-A8s, AKo-ATo, KQs-KTs, QJs-QTs, JTs",
    "HJ_open": "AA-44, AKs-A7s, AKo-A9o, KQs-K9s, QJs-Q9s, JTs-J9s, T9s",
    "CO_open": "AA-33, AKs-A5s, AKo-A8o, KQs-K8s, QJs-Q8s, JTs-J8s, T9s-T8s, 98s",
    "BTN_open": "AA-22, AKs-A2s, AKo-A7o, KQs-K7s, QJs-Q7s, JTs-J7s, T9s-T7s, 98s-97s, 87s, 76s, 65s",
    "SB_open": "AA-22, AKs-A2s, AKo-A5o, KQs-K5s, QJs-Q5s, JTs-J6s, T9s-T6s, 98s-96s, 87s-86s, 76s-75s, 65s-64s, 54s",
    "BB_call": "AA-22, AKs-A2s, AKo-A2o, KQs-K2s, QJs-Q2s, JTs-J2s, T9s-T2s, 98s-92s, 87s-82s, 76s-72s, 65s-62s, 54s-52s, 43s-42s, 32s",
}
FALLBACK_RANGE = "AA-TT, AKs-ATs, AKo-AQo"


# ------------------------------------------------------------
# Hand classes: "AA", "AKs", "AKo" (high rank first)
# ------------------------------------------------------------

def _ri(r: str) -> int:
    if r not in RANK_TO_VAL:
        raise ValueError(f"Bad rank: {r!r}")
    return RANKS.index(r)


def normalize_class(tok: str) -> str:
    """Canonical spelling of a hand class; suffix-less non-pairs stay generic."""
    tok = tok.strip()
    if len(tok) not in (2, 3):
        raise ValueError(f"Bad hand class: {tok!r}")
    a, b = tok[0].upper(), tok[1].upper()
    suffix = tok[2].lower() if len(tok) == 3 else ""
    if suffix not in ("", "s", "o"):
        raise ValueError(f"Bad hand class: {tok!r}")
    if _ri(a) < _ri(b):
        a, b = b, a
    if a == b:
        if suffix == "s":
            raise ValueError(f"Pocket pair cannot be suited: {tok!r}")
        return a + b
    return a + b + suffix


def hand_class(c1: Card, c2: Card) -> str:
    hi, lo = (c1, c2) if c1.val >= c2.val else (c2, c1)
    if hi.val == lo.val:
        return hi.rank * 2
    return hi.rank + lo.rank + ("s" if hi.suit == lo.suit else "o")


def _expand_generic(cls: str) -> List[str]:
    if len(cls) == 2 and cls[0] != cls[1]:
        return [cls + "s", cls + "o"]
    return [cls]


def _expand_plus(base: str) -> List[str]:
    cls = normalize_class(base)
    if cls[0] == cls[1]:
        return [r + r for r in reversed(RANKS[_ri(cls[0]):])]
    hi, lo, suffix = cls[0], cls[1], cls[2:]
    out: List[str] = []
    for r in reversed(RANKS[_ri(lo):_ri(hi)]):
        out.extend(_expand_generic(hi + r + suffix))
    return out


def _expand_dash(start: str, end: str) -> List[str]:
    a, b = normalize_class(start), normalize_class(end)
    if a[0] == a[1] and b[0] == b[1]:
        lo, hi = sorted((_ri(a[0]), _ri(b[0])))
        return [r + r for r in reversed(RANKS[lo:hi + 1])]
    if a[0] != b[0] or a[0] == a[1] or b[0] == b[1]:
        raise ValueError(f"Bad range: {start}-{end}")
    suffix = a[2:]
    lo, hi = sorted((_ri(a[1]), _ri(b[1])))
    out: List[str] = []
    for r in reversed(RANKS[lo:hi + 1]):
        out.extend(_expand_generic(a[0] + r + suffix))
    return out


def parse_range_string(range_spec: Union[str, List[str]]) -> List[str]:
    if isinstance(range_spec, list):
        tokens = []
        for x in range_spec:
            tokens.extend([t.strip() for t in x.split(",") if t.strip()])
    else:
        tokens = [t.strip() for t in range_spec.split(",") if t.strip()]

    out: List[str] = []
    for tok in tokens:
        if "-" in tok:
            start, _, end = tok.partition("-")
            out.extend(_expand_dash(start, end))
        elif tok.endswith("+"):
            out.extend(_expand_plus(tok[:-1]))
        else:
            out.extend(_expand_generic(normalize_class(tok)))
    # dedupe, first occurrence wins
    return list(dict.fromkeys(out))


# ------------------------------------------------------------
# Compression back to a range string
# ------------------------------------------------------------

def _runs(idxs: List[int]) -> List[Tuple[int, int]]:
    """Descending rank indices -> list of (top, bottom) consecutive runs."""
    runs: List[Tuple[int, int]] = []
    for i in idxs:
        if runs and runs[-1][1] - 1 == i:
            runs[-1] = (runs[-1][0], i)
        else:
            runs.append((i, i))
    return runs


def hands_to_range_string(hands: Iterable[str]) -> str:
    classes: List[str] = []
    for h in hands:
        classes.extend(_expand_generic(normalize_class(h)))
    classes = list(dict.fromkeys(classes))

    parts: List[str] = []

    pairs = sorted({_ri(c[0]) for c in classes if c[0] == c[1]}, reverse=True)
    for top, bottom in _runs(pairs):
        t, b = RANKS[top] * 2, RANKS[bottom] * 2
        if top == bottom:
            parts.append(t)
        elif top == len(RANKS) - 1:
            parts.append(b + "+")
        else:
            parts.append(f"{t}-{b}")

    for suffix in ("s", "o"):
        by_high: Dict[int, List[int]] = {}
        for c in classes:
            if c[0] != c[1] and c[2] == suffix:
                by_high.setdefault(_ri(c[0]), []).append(_ri(c[1]))
        for hi in sorted(by_high, reverse=True):
            h = RANKS[hi]
            for top, bottom in _runs(sorted(by_high[hi], reverse=True)):
                t, b = h + RANKS[top] + suffix, h + RANKS[bottom] + suffix
                if top == bottom:
                    parts.append(t)
                elif top == hi - 1:
                    parts.append(b + "+")
                else:
                    parts.append(f"{t}-{b}")

    return ", ".join(parts)


# ------------------------------------------------------------
# Concrete combos
# ------------------------------------------------------------

def hand_combos(cls: str, exclude: Iterable[Card] = ()) -> List[Tuple[Card, Card]]:
    dead = set(exclude)
    out: List[Tuple[Card, Card]] = []
    for c in _expand_generic(normalize_class(cls)):
        hi, lo = RANK_TO_VAL[c[0]], RANK_TO_VAL[c[1]]
        if hi == lo:
            pairs = [(Card(hi, a), Card(lo, b)) for a, b in combinations(SUITS, 2)]
        elif c[2] == "s":
            pairs = [(Card(hi, s), Card(lo, s)) for s in SUITS]
        else:
            pairs = [(Card(hi, a), Card(lo, b)) for a in SUITS for b in SUITS if a != b]
        out.extend(p for p in pairs if p[0] not in dead and p[1] not in dead)
    return out


def combo_count(range_spec: Union[str, List[str]]) -> int:
    return sum(len(hand_combos(c)) for c in parse_range_string(range_spec))


def all_remaining_two_card_combos(exclude: Iterable[Card]) -> List[Tuple[Card, Card]]:
    deck = make_deck(exclude=exclude)
    return list(combinations(deck, 2))


def generate_villain_combos(
    exclude: Iterable[Card],
    range_spec: Optional[Union[str, List[str]]] = None,
    explicit_hands: Optional[List[Iterable[CardLike]]] = None,
) -> List[Tuple[Card, Card]]:
    dead = set(exclude)

    if explicit_hands is not None:
        combos = []
        for h in explicit_hands:
            cs = parse_cards(h)
            if len(cs) != 2:
                raise ValueError("Explicit villain hand must be 2 cards")
            if cs[0] in dead or cs[1] in dead or cs[0] == cs[1]:
                continue
            combos.append((cs[0], cs[1]))
        return combos

    if range_spec is None:
        return all_remaining_two_card_combos(dead)

    out: List[Tuple[Card, Card]] = []
    for cls in parse_range_string(range_spec):
        out.extend(hand_combos(cls, exclude=dead))
    return out


# ------------------------------------------------------------
# Positional defaults
# ------------------------------------------------------------

def positional_range(position: Union[str, Position], action: str = "open") -> Dict[str, object]:
    pos = Position(position).value
    spec = DEFAULT_RANGES.get(f"{pos}_{action}")
    if spec is None:
        return {
            "position": pos,
            "rangeString": FALLBACK_RANGE,
            "hands": parse_range_string(FALLBACK_RANGE),
            "description": f"{pos} default range",
        }
    return {
        "position": pos,
        "rangeString": spec,
        "hands": parse_range_string(spec),
        "description": f"{pos} {action} range",
    }
