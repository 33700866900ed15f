"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Sequence

from rich.console import RenderableType
from rich.panel import Panel

from ..cards import Card, CardView, Suit
from ..hand import EvaluationReport
from .views import ReportView

_SUIT_STYLES = {
    Suit.SPADES: ("♠", "cyan"),
    Suit.HEARTS: ("♥", "red"),
    Suit.DIAMONDS: ("♦", "magenta"),
    Suit.CLUBS: ("♣", "green"),
}


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    if card.is_joker:
        return "[magenta]🃏[/magenta]"
    symbol, color = _SUIT_STYLES[card.suit]
    return f"[{color}]{card.sign.value}{symbol}[/{color}]"


def format_view(view: CardView) -> str:
    """Label a placed card; a joker shows the card it stands in for."""

    if not view.card.is_joker:
        return format_card(view.card)
    if view.is_joker:
        return "[magenta]🃏[/magenta]"
    symbol, color = _SUIT_STYLES.get(view.suit, ("", "white"))
    return f"[magenta]🃏[/magenta][dim]→[/dim][{color}]{view.sign.value}{symbol}[/{color}]"


def format_hand(cards: Sequence[Card]) -> str:
    if not cards:
        return "—"
    return " ".join(format_card(card) for card in cards)


def render_report(
    hand: Sequence[Card],
    report: EvaluationReport,
    *,
    title: str = "Remi",
    limit: int | None = None,
) -> RenderableType:
    """Return a Rich panel listing the partitions found for ``hand``."""

    view = ReportView(
        hand=hand,
        report=report,
        card_formatter=format_card,
        view_formatter=format_view,
        limit=limit,
    )
    return Panel(view.render(), title=title, padding=(0, 1), border_style="cyan")
