from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Union

RANKS = "23456789TJQKA"
SUITS = "shdc"
RANK_TO_VAL = {r: i + 2 for i, r in enumerate(RANKS)}  # 2..14
VAL_TO_RANK = {v: r for r, v in RANK_TO_VAL.items()}

RANK_NAMES = {
    2: "Two", 3: "Three", 4: "Four", 5: "Five", 6: "Six", 7: "Seven",
    8: "Eight", 9: "Nine", 10: "Ten", 11: "Jack", 12: "Queen", 13: "King", 14: "Ace",
}

CardLike = Union[str, "Card", Mapping[str, str]]


@dataclass(frozen=True, order=True)
class Card:
    val: int
    suit: str

    def __str__(self) -> str:
        return f"{VAL_TO_RANK[self.val]}{self.suit}"

    @property
    def rank(self) -> str:
        return VAL_TO_RANK[self.val]

    def to_dict(self) -> Dict[str, str]:
        return {"rank": self.rank, "suit": self.suit}

    @staticmethod
    def from_str(s: str) -> "Card":
        s = s.strip()
        if s[:2] == "10":
            s = "T" + s[2:]
        if len(s) != 2:
            raise ValueError(f"Bad card string: {s!r}")
        r, su = s[0].upper(), s[1].lower()
        if r not in RANK_TO_VAL or su not in SUITS:
            raise ValueError(f"Bad card string: {s!r}")
        return Card(RANK_TO_VAL[r], su)

    @staticmethod
    def from_dict(d: Mapping[str, str]) -> "Card":
        """Accepts the JSON shape ``{"rank": "A", "suit": "s"}``."""
        try:
            return Card.from_str(f"{d['rank']}{d['suit']}")
        except KeyError as e:
            raise ValueError(f"Card mapping missing {e.args[0]!r}: {dict(d)!r}") from None


def _to_card(x: CardLike) -> Card:
    if isinstance(x, Card):
        return x
    if isinstance(x, str):
        return Card.from_str(x)
    return Card.from_dict(x)


def split_card_string(s: str) -> List[str]:
    # "AhKd", "Ah Kd" and "Ah,Kd" all mean the same two cards
    compact = s.replace(",", " ").split()
    out: List[str] = []
    for chunk in compact:
        chunk = chunk.replace("10", "T")
        if len(chunk) % 2:
            raise ValueError(f"Bad card string: {chunk!r}")
        out.extend(chunk[i:i + 2] for i in range(0, len(chunk), 2))
    return out


def parse_cards(cards: Union[str, Iterable[CardLike]]) -> List[Card]:
    if isinstance(cards, str):
        cards = split_card_string(cards)
    return [_to_card(x) for x in cards]


def make_deck(exclude: Iterable[Card] = ()) -> List[Card]:
    dead = set(exclude)
    deck = [Card(RANK_TO_VAL[r], s) for r in RANKS for s in SUITS]
    return [c for c in deck if c not in dead]
