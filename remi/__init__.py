"""Top-level package for the Remi combination engine."""

from . import cache, cards, deck, hand, melds, player, search, state

__all__ = [
    "cache",
    "cards",
    "deck",
    "hand",
    "melds",
    "player",
    "search",
    "state",
]
