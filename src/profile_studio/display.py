"""Rich display utilities for the Profile Studio CLI."""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from profile_studio.core.template import Template
from profile_studio.engine.renderer import RenderResult

console = Console()


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]✓[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]✗[/] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]⚠[/] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[bold blue]ℹ[/] {message}")


def print_template_list(templates: list[Template]) -> None:
    """Print a table of catalog templates."""
    if not templates:
        print_info("No templates found")
        return

    table = Table(title="Templates")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Sections", justify="right")
    table.add_column("Featured")

    for template in templates:
        table.add_row(
            template.metadata.id,
            template.metadata.name,
            template.metadata.category,
            str(len(template.sections)),
            "★" if template.metadata.featured else "-",
        )

    console.print(table)


def print_render_result(result: RenderResult, output_path: Path | None = None) -> None:
    """Print a summary panel for a render, followed by any errors."""
    if result.success and result.output is not None:
        metadata = result.output.metadata
        lines = [
            "[bold green]README rendered successfully![/]\n",
            f"[bold]Template:[/] {metadata.template_name} ({metadata.template_version})",
            f"[bold]Sections rendered:[/] {metadata.sections_rendered}",
            f"[bold]Sections skipped:[/] {metadata.sections_skipped}",
        ]
        if output_path is not None:
            lines.append(f"[bold]Output:[/] {output_path}")
        if result.errors:
            title, border = "[bold yellow]⚠ Partial[/]", "yellow"
        else:
            title, border = "[bold green]✓ Success[/]", "green"
        console.print(Panel("\n".join(lines), title=title, border_style=border))
    else:
        console.print(
            Panel(
                "[bold red]Render failed![/]",
                title="[bold red]✗ Failed[/]",
                border_style="red",
            )
        )

    if result.errors:
        console.print("\n[bold red]Errors:[/]")
        for error in result.errors:
            where = f" [dim]({error.section_id})[/]" if error.section_id else ""
            console.print(f"  • {error.code}: {error.message}{where}")
