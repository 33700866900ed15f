from __future__ import annotations

import pytest

from remi.cards import ACE_LOW_RANK, Card, CardView, Sign, Suit, parse_cards


@pytest.mark.parametrize(
    ("code", "sign", "suit", "rank"),
    [
        ("2-S", Sign.TWO, Suit.SPADES, 2),
        ("10-H", Sign.TEN, Suit.HEARTS, 10),
        ("Kn-D", Sign.KNIGHT, Suit.DIAMONDS, 11),
        ("K-C", Sign.KING, Suit.CLUBS, 13),
        ("A-C", Sign.ACE, Suit.CLUBS, 14),
        ("J-N", Sign.JOKER, Suit.NEUTRAL, 0),
    ],
)
def test_from_code_parses_sign_suit_and_rank(code: str, sign: Sign, suit: Suit, rank: int) -> None:
    card = Card.from_code(code)

    assert card.sign is sign
    assert card.suit is suit
    assert card.rank == rank
    assert card.code == code
    assert card.is_joker == (sign is Sign.JOKER)


@pytest.mark.parametrize("code", ["", "7", "1-S", "7-X", "kn-D", "J-S"])
def test_from_code_rejects_unknown_codes(code: str) -> None:
    with pytest.raises(ValueError):
        Card.from_code(code)


def test_cards_are_distinct_physical_objects() -> None:
    first, second = parse_cards(["7-C", "7-C"])

    assert first.id != second.id
    assert first != second
    assert first == first
    assert len({first, second}) == 2


def test_face_up_flag_is_display_only() -> None:
    card = Card(Sign.SEVEN, Suit.CLUBS, is_face_up=True)

    assert card.is_face_up
    assert card.rank == 7


def test_sort_key_orders_by_suit_then_rank() -> None:
    cards = parse_cards(["J-N", "A-S", "2-H", "2-S"])

    ordered = sorted(cards, key=Card.sort_key)

    assert [card.code for card in ordered] == ["2-S", "A-S", "2-H", "J-N"]


@pytest.mark.parametrize(
    ("rank", "expected"),
    [(1, Sign.ACE), (2, Sign.TWO), (11, Sign.KNIGHT), (13, Sign.KING), (14, Sign.ACE)],
)
def test_sign_for_rank(rank: int, expected: Sign) -> None:
    assert Sign.for_rank(rank) is expected


@pytest.mark.parametrize("rank", [0, 15, -1])
def test_sign_for_rank_rejects_out_of_range(rank: int) -> None:
    with pytest.raises(ValueError):
        Sign.for_rank(rank)


def test_view_resolution_leaves_the_card_untouched() -> None:
    joker = Card.joker()
    view = CardView.of(joker)
    assert view.is_joker

    resolved = view.copy()
    resolved.resolve(Sign.SIX, Suit.HEARTS, 6)

    assert view.is_joker
    assert not resolved.is_joker
    assert resolved.stands_in
    assert (resolved.sign, resolved.suit, resolved.rank) == (Sign.SIX, Suit.HEARTS, 6)
    assert resolved.card is joker
    assert joker.sign is Sign.JOKER and joker.suit is Suit.NEUTRAL


def test_only_jokers_can_be_resolved() -> None:
    view = CardView.of(Card.from_code("5-H"))

    with pytest.raises(ValueError):
        view.resolve(Sign.SIX, Suit.HEARTS, 6)


def test_ace_low_view() -> None:
    ace = Card.from_code("A-H")
    view = CardView.ace_low(ace)

    assert view.rank == ACE_LOW_RANK
    assert ace.rank == 14
    with pytest.raises(ValueError):
        CardView.ace_low(Card.from_code("2-H"))


def test_labels() -> None:
    assert Card.from_code("Q-H").label() == "Q♥"
    assert Card.joker().label() == "🃏"
    view = CardView.of(Card.joker())
    view.resolve(Sign.FOUR, Suit.SPADES, 4)
    assert view.label() == "🃏(4♠)"
