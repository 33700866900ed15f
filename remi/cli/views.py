"""Composable view primitives for the Remi CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.table import Table
from rich.text import Text

from ..cards import Card, CardView
from ..hand import EvaluationReport
from ..melds import Partition


@dataclass(slots=True)
class ReportView:
    """Renderable summarising an evaluation report."""

    hand: Sequence[Card]
    report: EvaluationReport
    card_formatter: Callable[[Card], str]
    view_formatter: Callable[[CardView], str]
    limit: int | None = None

    def _partition_markup(self, partition: Partition) -> str:
        melds = []
        for meld in partition.melds:
            cards = " ".join(self.view_formatter(view) for view in meld.views)
            melds.append(f"[bold]{meld.kind.value}[/bold] {cards}")
        return "  [dim]|[/dim]  ".join(melds)

    def _excluded_label(self, excluded: Card | None) -> str:
        return "[dim]none[/dim]" if excluded is None else self.card_formatter(excluded)

    def _stats_line(self) -> str:
        stats = self.report.stats
        return (
            f"[cyan]Expansions[/cyan]: {stats.expansions}  "
            f"[cyan]Pruned[/cyan]: {stats.pruned}  "
            f"[cyan]Partitions[/cyan]: {stats.partitions}  "
            f"[cyan]Elapsed[/cyan]: {self.report.elapsed * 1000:.1f} ms"
        )

    def render(self) -> RenderableType:
        hand_line = " ".join(self.card_formatter(card) for card in self.hand) or "—"
        components: list[RenderableType] = [Text.from_markup(f"[cyan]Hand[/cyan]: {hand_line}")]

        table = Table(box=box.ROUNDED, expand=True)
        table.add_column("Discard", justify="center", style="bold")
        table.add_column("#", justify="right")
        table.add_column("Melds", justify="left")

        groups = [
            (self._excluded_label(excluded), partitions)
            for excluded, partitions in self.report.by_exclusion.items()
        ]
        if self.report.whole_hand:
            groups.insert(0, (self._excluded_label(None), self.report.whole_hand))

        shown = total = 0
        for label, partitions in groups:
            total += len(partitions)
            for idx, partition in enumerate(partitions, start=1):
                if self.limit is not None and shown >= self.limit:
                    break
                table.add_row(label, str(idx), self._partition_markup(partition))
                shown += 1

        if shown:
            components.append(table)
        else:
            components.append(Text("No complete partitions", style="yellow"))

        hidden = total - shown
        if hidden > 0:
            components.append(Text(f"… {hidden} more partition(s) not shown", style="dim"))

        for failure in self.report.failures:
            components.append(
                Text.from_markup(
                    f"[red]Failed[/red] {self._excluded_label(failure.excluded)}: {failure.error}"
                )
            )

        components.append(Text.from_markup(self._stats_line()))
        return Group(*components)
