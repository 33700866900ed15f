"""Fixed hands used by the demo command."""

from __future__ import annotations

from .cards import Card, parse_cards

__all__ = ["DEBUG_HAND_CODES", "DEBUG_TOP_CARD_CODE", "debug_hand", "debug_top_card"]

DEBUG_HAND_CODES: tuple[str, ...] = (
    "7-C",
    "3-S",
    "4-S",
    "5-S",
    "6-S",
    "7-S",
    "7-H",
    "7-D",
    "8-D",
    "9-D",
    "10-D",
    "A-C",
    "2-C",
    "3-C",
)
DEBUG_TOP_CARD_CODE = "K-H"


def debug_hand() -> list[Card]:
    return parse_cards(DEBUG_HAND_CODES)


def debug_top_card() -> Card:
    return Card.from_code(DEBUG_TOP_CARD_CODE)
