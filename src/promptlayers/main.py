"""
promptlayers - CLI Entry Point.

Usage:
    promptlayers templates         List registered templates
    promptlayers render ...        Compose a context from layers
    promptlayers version           Show version
    promptlayers --help            Show help
"""

import json

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="promptlayers",
    help="promptlayers - compose layered chat-model context from templates.",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    from promptlayers.config import get_settings
    from promptlayers.logging_config import setup_logging

    setup_logging(get_settings().log_level, verbose=verbose)


@app.command()
def templates(
    scenario: str | None = typer.Option(None, "--scenario", "-s", help="Only templates tagged with this scenario"),
) -> None:
    """List registered templates."""
    from promptlayers.formatter import get_available_templates, recommend_templates

    infos = recommend_templates(scenario) if scenario else get_available_templates()

    if not infos:
        console.print("[dim]No templates registered.[/dim]")
        return

    table = Table(title="Templates")
    table.add_column("ID", style="bold blue")
    table.add_column("Name")
    table.add_column("Scenarios", style="dim")
    for info in infos:
        table.add_row(info.id, info.name, ", ".join(info.scenarios))
    console.print(table)

    console.print(f"\n[dim]Total: {len(infos)} templates[/dim]")


@app.command()
def render(
    role: str | None = typer.Option(None, "--role", "-r", help="Role / persona layer"),
    tool: list[str] | None = typer.Option(None, "--tool", "-t", help="Tool description (repeatable)"),
    turn: list[str] | None = typer.Option(None, "--turn", help="Conversation turn, user first (repeatable)"),
    current: str | None = typer.Option(None, "--current", "-c", help="Current user message"),
    template: str = typer.Option("standard", "--template", help="Template id"),
    as_messages: bool = typer.Option(False, "--messages", "-m", help="Print the message list as JSON"),
    optimize: bool = typer.Option(False, "--optimize", help="Collapse whitespace in the output"),
    max_length: int | None = typer.Option(None, "--max-length", min=1, help="Truncate each message to this length"),
) -> None:
    """Compose a context and print markup (or messages with --messages)."""
    from promptlayers.core.errors import ContextError
    from promptlayers.formatter import ContextFormatter, FormatterOptions

    data = {
        "role": role,
        "tools": tool or None,
        "conversation": turn or None,
        "current": current,
    }

    options = FormatterOptions(optimize_tokens=optimize, max_length=max_length)
    formatter = ContextFormatter()
    try:
        if as_messages:
            messages = formatter.from_template_as_messages(template, data, options)
            typer.echo(json.dumps([m.to_dict() for m in messages], ensure_ascii=False, indent=2))
        else:
            typer.echo(formatter.from_template(template, data, options))
    except ContextError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    from promptlayers import __version__

    console.print(f"promptlayers version {__version__}")


if __name__ == "__main__":
    app()
