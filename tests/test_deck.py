from __future__ import annotations

import random

import pytest

from remi.cards import Card
from remi.deck import Deck


def test_deck_holds_two_copies_with_jokers() -> None:
    deck = Deck(2)

    assert deck.size() == 108
    assert len(deck) == 108
    assert sum(1 for card in deck if card.is_joker) == 4
    assert len({card.id for card in deck}) == 108


def test_empty_deck() -> None:
    deck = Deck(0)

    assert deck.size() == 0
    with pytest.raises(IndexError):
        deck.draw()


def test_draw_takes_from_the_top() -> None:
    deck = Deck(0)
    cards = [Card.from_code(code) for code in ("2-S", "3-S", "4-S", "5-S")]
    deck.insert_multiple(cards)

    assert deck.draw() is cards[-1]
    assert deck.draw_multiple(2) == cards[1:3]
    assert deck.size() == 1


def test_draw_multiple_from_position() -> None:
    deck = Deck(0)
    cards = [Card.from_code(code) for code in ("2-S", "3-S", "4-S", "5-S")]
    deck.insert_multiple(cards)

    assert deck.draw_multiple_from(1, 2) == cards[1:3]
    assert list(deck) == [cards[0], cards[3]]
    with pytest.raises(IndexError):
        deck.draw_multiple_from(1, 5)


def test_insert_multiple_at() -> None:
    deck = Deck(0)
    bottom, top = Card.from_code("2-S"), Card.from_code("3-S")
    deck.insert_multiple([bottom, top])
    middle = [Card.from_code("9-H"), Card.from_code("10-H")]

    deck.insert_multiple_at(middle, 1)

    assert list(deck) == [bottom, *middle, top]


def test_split_moves_position_to_bottom() -> None:
    deck = Deck(0)
    cards = [Card.from_code(code) for code in ("2-S", "3-S", "4-S", "5-S")]
    deck.insert_multiple(cards)

    deck.split(2)

    assert list(deck) == [cards[2], cards[3], cards[0], cards[1]]


def test_shuffle_is_reproducible_with_a_seed() -> None:
    first = Deck(1).shuffle(random.Random(42))
    second = Deck(1).shuffle(random.Random(42))

    assert first == second
    assert first.count("|") == 53


def test_shuffle_to_rebuilds_the_sequence() -> None:
    source = Deck(1)
    sequence = source.shuffle(random.Random(7))

    target = Deck(0)
    target.shuffle_to(sequence)

    assert target.sequence() == sequence
    assert [card.code for card in target] == [card.code for card in source]


def test_shuffle_to_rejects_bad_codes() -> None:
    with pytest.raises(ValueError):
        Deck(0).shuffle_to("7-C|bogus")
