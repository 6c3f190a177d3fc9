"""Rich-powered console output for CommResolve."""

from __future__ import annotations

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table

from commresolve.resolver.models import ComponentSummary, ResolutionResult


class Console:
    """Terminal output for CommResolve using Rich."""

    def __init__(self) -> None:
        self.console = RichConsole()

    def banner(self) -> None:
        """Show the CommResolve banner."""
        from commresolve import __version__

        self.console.print(
            Panel(
                f"[bold cyan]CommResolve[/bold cyan] [dim]v{__version__}[/dim]\n"
                "[dim]Keep the cluster that can still talk[/dim]",
                border_style="cyan",
                padding=(1, 2),
            )
        )

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {message}")

    def info(self, message: str) -> None:
        self.console.print(f"[blue]i[/blue] {message}")

    def show_stats(self, stats: dict) -> None:
        """Display scenario statistics in a table."""
        table = Table(title="Topology", border_style="cyan")
        table.add_column("Metric", style="bold")
        table.add_column("Count", justify="right", style="cyan")

        table.add_row("Nodes", str(stats.get("nodes", 0)))
        table.add_row("Servers", str(stats.get("servers", 0)))
        table.add_row("Clients", str(stats.get("clients", 0)))
        table.add_row("Directed Links", str(stats.get("links", 0)))

        self.console.print(table)

    def show_components(
        self, components: list[ComponentSummary], selected: ComponentSummary | None = None
    ) -> None:
        """Display discovered components, highlighting the selected one."""
        table = Table(title="Components", border_style="cyan")
        table.add_column("#", justify="right")
        table.add_column("Start", justify="right")
        table.add_column("Servers", justify="right", style="cyan")
        table.add_column("Nodes", justify="right")
        table.add_column("Members")

        for i, comp in enumerate(components):
            is_selected = selected is not None and comp.start_index == selected.start_index
            style = "bold green" if is_selected else ""
            table.add_row(
                str(i),
                str(comp.start_index),
                str(comp.server_count),
                str(comp.node_count),
                ", ".join(comp.node_ids),
                style=style,
            )

        self.console.print(table)

    def show_resolution(self, result: ResolutionResult) -> None:
        """Display the outcome of a resolution pass."""
        self.show_components(result.components, result.selected)

        if result.evictions:
            color = "red"
            verdict = ", ".join(result.eviction_ids)
        elif not result.fully_connected:
            color = "yellow"
            verdict = "none (selected cluster is not fully connected)"
        else:
            color = "green"
            verdict = "none (cluster is whole)"

        kept = result.selected.node_count if result.selected else 0
        self.console.print(
            Panel(
                f"[bold]Policy:[/bold] {result.policy.value}\n"
                f"[bold]Kept:[/bold] {kept}/{result.total_nodes} nodes\n"
                f"[bold]Fully Connected:[/bold] {'yes' if result.fully_connected else 'no'}\n"
                f"[bold]Evict:[/bold] [{color}]{verdict}[/{color}]\n"
                f"[bold]Oracle Queries:[/bold] {result.oracle_queries}",
                title="[bold]Resolution[/bold]",
                border_style=color,
            )
        )
