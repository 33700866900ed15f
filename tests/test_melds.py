from __future__ import annotations

import pytest

from remi.cards import Card, CardView, Sign, Suit
from remi.melds import (
    Compatibility,
    Meld,
    MeldKind,
    MeldState,
    Partition,
    classify,
    validate_meld,
)


def _view(code: str) -> CardView:
    return CardView.of(Card.from_code(code))


def _joker_as(sign: Sign, suit: Suit, rank: int) -> CardView:
    view = CardView.of(Card.joker())
    view.resolve(sign, suit, rank)
    return view


@pytest.mark.parametrize(
    ("last", "candidate", "expected"),
    [
        ("5-H", "6-H", Compatibility.RUN_EXTEND),
        ("5-H", "6-S", Compatibility.NONE),
        ("5-H", "7-H", Compatibility.NONE),
        ("5-H", "5-S", Compatibility.SET_EXTEND),
        ("5-H", "5-H", Compatibility.SET_EXTEND),
        ("K-H", "A-H", Compatibility.RUN_EXTEND),
        ("5-H", "J-N", Compatibility.JOKER_AS_CANDIDATE),
        ("J-N", "5-H", Compatibility.JOKER_AS_PRIOR),
        ("J-N", "J-N", Compatibility.NONE),
    ],
)
def test_classify(last: str, candidate: str, expected: Compatibility) -> None:
    assert classify(_view(last), Card.from_code(candidate)) is expected


def test_classify_low_ace_continues_with_two() -> None:
    ace = CardView.ace_low(Card.from_code("A-S"))

    assert classify(ace, Card.from_code("2-S")) is Compatibility.RUN_EXTEND


def test_classify_treats_resolved_joker_as_its_stand_in() -> None:
    joker = _joker_as(Sign.FOUR, Suit.HEARTS, 4)

    assert classify(joker, Card.from_code("5-H")) is Compatibility.RUN_EXTEND
    assert classify(joker, Card.joker()) is Compatibility.JOKER_AS_CANDIDATE


def test_meld_state_extend() -> None:
    state = MeldState()
    assert state.is_empty

    state = state.extend(MeldKind.UNDETERMINED, False).extend(MeldKind.RUN, True).extend(MeldKind.RUN, False)

    assert state.length == 3
    assert state.kind is MeldKind.RUN
    assert state.has_joker
    assert state.can_close


def test_validate_run() -> None:
    views = [_view("3-S"), _view("4-S"), _view("5-S")]
    assert validate_meld(MeldKind.RUN, views).valid

    views = [_view("Q-S"), _view("K-S"), _view("A-S")]
    assert validate_meld(MeldKind.RUN, views).valid

    views = [CardView.ace_low(Card.from_code("A-S")), _view("2-S"), _joker_as(Sign.THREE, Suit.SPADES, 3)]
    assert validate_meld(MeldKind.RUN, views).valid


@pytest.mark.parametrize(
    "codes",
    [
        ["3-S", "4-S"],
        ["3-S", "4-H", "5-S"],
        ["3-S", "5-S", "6-S"],
        ["K-S", "A-S", "2-S"],
    ],
)
def test_validate_run_rejections(codes: list[str]) -> None:
    assert not validate_meld(MeldKind.RUN, [_view(code) for code in codes]).valid


def test_validate_set() -> None:
    views = [_view("7-S"), _view("7-H"), _joker_as(Sign.SEVEN, Suit.NEUTRAL, 7)]
    assert validate_meld(MeldKind.SET, views).valid

    duplicate_suit = [_view("7-S"), _view("7-S"), _view("7-H")]
    assert not validate_meld(MeldKind.SET, duplicate_suit).valid

    mixed = [_view("7-S"), _view("8-H"), _view("7-D")]
    assert not validate_meld(MeldKind.SET, mixed).valid

    too_many = [_view(f"7-{suit}") for suit in "SHDC"] + [_joker_as(Sign.SEVEN, Suit.NEUTRAL, 7)]
    assert not validate_meld(MeldKind.SET, too_many).valid


def test_validate_rejects_unresolved_and_double_jokers() -> None:
    unresolved = [_view("7-S"), _view("7-H"), CardView.of(Card.joker())]
    assert not validate_meld(MeldKind.SET, unresolved).valid

    two_jokers = [
        _joker_as(Sign.SEVEN, Suit.NEUTRAL, 7),
        _view("7-H"),
        _joker_as(Sign.SEVEN, Suit.NEUTRAL, 7),
    ]
    assert not validate_meld(MeldKind.SET, two_jokers).valid


def test_partition_key_ignores_meld_and_member_order() -> None:
    sevens = [_view("7-S"), _view("7-H"), _view("7-D")]
    run = [_view("3-C"), _view("4-C"), _view("5-C")]

    first = Partition(None, (Meld(MeldKind.SET, tuple(sevens)), Meld(MeldKind.RUN, tuple(run))))
    second = Partition(None, (Meld(MeldKind.RUN, tuple(run)), Meld(MeldKind.SET, tuple(reversed(sevens)))))

    assert first.key() == second.key()
    assert len(first.cards()) == 6
