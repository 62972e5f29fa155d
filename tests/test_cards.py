import pytest

from icmkit.helpers.cards import Card, make_deck, parse_cards


def test_parse_compact_and_spaced_strings():
    assert [str(c) for c in parse_cards("AhKd")] == ["Ah", "Kd"]
    assert [str(c) for c in parse_cards("Ah, Kd 10c")] == ["Ah", "Kd", "Tc"]


def test_card_mapping_round_trip():
    c = Card.from_dict({"rank": "T", "suit": "s"})
    assert str(c) == "Ts"
    assert c.to_dict() == {"rank": "T", "suit": "s"}


@pytest.mark.parametrize("bad", ["1h", "Ax", "AhK", "Zs"])
def test_bad_cards_raise(bad):
    with pytest.raises(ValueError):
        parse_cards(bad)


def test_mapping_missing_suit():
    with pytest.raises(ValueError):
        Card.from_dict({"rank": "A"})


def test_deck_excludes_dead_cards():
    deck = make_deck(exclude=parse_cards("AsKs"))
    assert len(deck) == 50
    assert Card.from_str("As") not in deck
