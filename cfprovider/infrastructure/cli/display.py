import logging
from typing import Any, Mapping, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.box import ROUNDED, SIMPLE
from rich.table import Table
from rich.text import Text

from cfprovider.domain.interfaces.user_interface import UserInterface
from cfprovider.domain.models.diagnostics import Diagnostic, Severity

logger = logging.getLogger(__name__)

SEVERITY_STYLES = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "bold yellow",
}


class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Console = None):
        self.console = console or Console()

    def display_diagnostics(self, diagnostics: Sequence[Diagnostic]) -> None:
        """Prints one panel per diagnostic, styled by severity."""
        for diagnostic in diagnostics:
            style = SEVERITY_STYLES.get(diagnostic.severity, "bold")
            body = Text(diagnostic.summary)
            if diagnostic.detail and diagnostic.detail != diagnostic.summary:
                body.append(f"\n{diagnostic.detail}", style="dim")
            fields = ", ".join(diagnostic.fields) or "-"
            self.console.print(Panel(
                body,
                title=f"[{style}]{diagnostic.severity.value.upper()}[/{style}] [dim]{fields}[/dim]",
                title_align="left",
                box=ROUNDED,
                border_style=style,
            ))
        logger.debug(f"Displayed {len(diagnostics)} diagnostics")

    def display_summary(self, title: str, rows: Mapping[str, Any]) -> None:
        table = Table(title=title, box=SIMPLE, show_header=False)
        table.add_column("Setting", style="bold cyan")
        table.add_column("Value")
        for label, value in rows.items():
            table.add_row(label, "-" if value is None else str(value))
        self.console.print(table)

    def display_table(self, title: str, columns: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        table = Table(title=title, box=ROUNDED, show_lines=True)
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*[Text(str(cell)) for cell in row])
        self.console.print(table)

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        self.console.print(f"[bold red]Error:[/bold red] {error_message}")

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        self.console.print(f"[cyan]{info_message}[/cyan]")
