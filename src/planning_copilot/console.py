"""User-facing progress output for the command-line tools."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_banner(title: str) -> None:
    console.print(Panel(f"[bold]{escape(title)}[/bold]", style="blue", expand=False))


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {escape(message)}")


def print_warning(message: str) -> None:
    console.print(f"[yellow]⚠[/yellow] {escape(message)}")


def print_error(message: str) -> None:
    err_console.print(f"[red]✗[/red] {escape(message)}")


def print_info(message: str) -> None:
    console.print(f"[blue]ℹ[/blue] {escape(message)}")


def print_rule(title: str) -> None:
    console.rule(f"[green]{escape(title)}[/green]", style="green")
