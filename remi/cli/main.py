"""Typer entry-point wiring for the Remi CLI."""

from __future__ import annotations

import logging
import random
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from ..cards import Card
from ..deck import Deck
from ..fixtures import debug_hand, debug_top_card
from ..hand import Hand
from ..player import Player
from ..search import DEFAULT_MAX_EXPANSIONS, SearchConfig
from .render import format_card, format_hand, render_report

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()

DEFAULT_HAND_SIZE = 14


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _parse_codes(codes: List[str]) -> list[Card]:
    cards: list[Card] = []
    for code in codes:
        try:
            cards.append(Card.from_code(code))
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
    return cards


def _search_config(max_expansions: int) -> SearchConfig:
    return SearchConfig(max_expansions=max_expansions if max_expansions > 0 else None)


@app.command()
def evaluate(
    codes: List[str] = typer.Argument(..., help="Cards as sign-suit codes, e.g. 7-C Kn-D J-N."),
    max_expansions: int = typer.Option(
        DEFAULT_MAX_EXPANSIONS, help="Expansion ceiling per excluded card (0 disables it)."
    ),
    limit: Optional[int] = typer.Option(None, min=1, help="Show at most this many partitions."),
    whole_hand: bool = typer.Option(False, "--whole-hand", help="Also search with no card held out."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log search summaries."),
) -> None:
    """Evaluate a hand and list every way it melds out."""

    _configure_logging(verbose)
    hand = Hand(_parse_codes(codes), config=_search_config(max_expansions))
    report = hand.evaluate_combinations(include_whole_hand=whole_hand)
    console.print(render_report(hand.cards, report, title="Evaluation", limit=limit))


@app.command()
def deal(
    decks: int = typer.Option(2, min=1, help="Number of deck copies to shuffle together."),
    size: int = typer.Option(DEFAULT_HAND_SIZE, min=1, help="Cards dealt to the hand."),
    seed: Optional[int] = typer.Option(None, help="Random seed for reproducible deals (omit for randomness)."),
    max_expansions: int = typer.Option(
        DEFAULT_MAX_EXPANSIONS, help="Expansion ceiling per excluded card (0 disables it)."
    ),
    limit: Optional[int] = typer.Option(20, min=1, help="Show at most this many partitions."),
    show_sequence: bool = typer.Option(False, "--show-sequence", help="Print the shuffled deck sequence."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log search summaries."),
) -> None:
    """Shuffle a deck, deal a hand and evaluate it."""

    _configure_logging(verbose)
    deck = Deck(decks)
    if size > deck.size():
        raise typer.BadParameter(f"cannot deal {size} cards from a {deck.size()}-card deck")
    sequence = deck.shuffle(random.Random(seed))
    if show_sequence:
        console.print(f"[cyan]Sequence[/cyan]: {sequence}", markup=True, highlight=False)

    hand = Hand(deck.draw_multiple(size), config=_search_config(max_expansions))
    report = hand.evaluate_combinations()
    console.print(render_report(hand.cards, report, title="Dealt hand", limit=limit))
    console.print(f"[cyan]{deck.size()} card(s) left in the deck.[/cyan]")


@app.command()
def demo(
    limit: Optional[int] = typer.Option(None, min=1, help="Show at most this many partitions."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log search summaries."),
) -> None:
    """Evaluate the built-in debug hand after picking up the debug top card."""

    _configure_logging(verbose)
    player = Player("Demo")
    player.add_cards_to_hand(debug_hand())
    top_card = debug_top_card()
    console.print(f"[cyan]Hand[/cyan]: {format_hand(player.hand.cards)}")
    console.print(f"[cyan]Top card[/cyan]: {format_card(top_card)}")

    usable = player.can_make_combo_with_card(top_card)
    console.print(f"Top card completes the hand: {'[green]yes[/green]' if usable else '[yellow]no[/yellow]'}")

    player.add_card_to_hand(top_card)
    report = player.update_possible_combos()
    console.print(render_report(player.hand.cards, report, title=player.describe(), limit=limit))


def main() -> None:
    """Entry-point for the ``remi`` console script."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
