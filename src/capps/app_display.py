"""Rich table display of Container Apps.

Columns: Name, Subscription, Resource Group, Location, Image(s), Status.
An optional leading "#" column carries the zero-based row index used when
the user has to pick one app interactively.
"""

import logging

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from capps.app_enumerator import ContainerAppRecord

logger = logging.getLogger(__name__)

HEADERS = ["Name", "Subscription", "Resource Group", "Location", "Image(s)", "Status"]


def image_basenames(app) -> str:
    """Newline-joined last path segment of every container image."""
    template = getattr(app, "template", None)
    containers = (template.containers if template else None) or []
    return "\n".join((c.image or "").split("/")[-1] for c in containers)


def build_row(record: ContainerAppRecord) -> list[str]:
    """Derive the display columns for one app."""
    app = record.app
    parts = record.parts
    return [
        app.name or "No name",
        parts.short_subscription,
        parts.resource_group_name,
        app.location or "",
        image_basenames(app),
        app.running_status or "Unknown",
    ]


class ContainerAppDisplay:
    """Render Container App listings as Rich tables."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def build_rows(
        self, records: list[ContainerAppRecord], with_index: bool = False
    ) -> list[list[str]]:
        """Build table rows, optionally prefixed with a zero-based index."""
        rows = [build_row(record) for record in records]
        if with_index:
            rows = [[str(idx), *row] for idx, row in enumerate(rows)]
        return rows

    def build_table(self, records: list[ContainerAppRecord], with_index: bool = False) -> Table:
        """Build the Rich table for a set of apps."""
        table = Table(show_header=True, header_style="bold", border_style="dim", show_lines=True)

        if with_index:
            table.add_column("#", justify="right")
        table.add_column("Name", style="cyan")
        table.add_column("Subscription")
        table.add_column("Resource Group")
        table.add_column("Location")
        table.add_column("Image(s)", style="yellow")
        table.add_column("Status")

        for row in self.build_rows(records, with_index=with_index):
            *cells, status = [escape(cell) for cell in row]
            if status == "Running":
                status = f"[green]{status}[/green]"
            elif status == "Stopped":
                status = f"[red]{status}[/red]"
            else:
                status = f"[yellow]{status}[/yellow]"
            table.add_row(*cells, status)

        return table

    def display(self, records: list[ContainerAppRecord], with_index: bool = False) -> None:
        """Print the table for a set of apps."""
        self.console.print(self.build_table(records, with_index=with_index))


__all__ = ["HEADERS", "ContainerAppDisplay", "build_row", "image_basenames"]
