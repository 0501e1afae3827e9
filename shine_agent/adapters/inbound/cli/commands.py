"""CLI interface for the Shine agent."""

import json
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from ....config.logging import setup_logging
from ....config.settings import settings
from ...common.exception_handler import format_exception_json

app = typer.Typer(
    name="shine-agent",
    help="Shine agent - persona-driven knowledge assistant",
    add_completion=False,
)

console = Console(legacy_windows=False)

# Full JSON error details instead of the short message
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true"


def handle_cli_error(exc: Exception) -> None:
    """Display an error in the terminal.

    In debug mode, shows full JSON error details. Otherwise a short message
    with the error code and location.
    """
    error_data = format_exception_json(exc, include_trace=DEBUG_MODE)

    if DEBUG_MODE:
        console.print(
            Panel(
                json.dumps(error_data, indent=2, default=str),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
        return

    error_type = error_data["error"]["type"]
    error_msg = error_data["error"]["message"]
    error_code = error_data["error"].get("code", "UNKNOWN")
    location = error_data.get("location", {})

    console.print(f"\n[red]Error [{error_code}]:[/] {error_msg}")
    console.print(f"[dim]Type: {error_type}[/]")

    if location:
        loc_str = f"{location.get('file', '?')}:{location.get('line', '?')} in {location.get('method', '?')}"
        console.print(f"[dim]Location: {loc_str}[/]")

    console.print("[dim]Set DEBUG=true for full details[/]")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level")) -> None:
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_file=settings.log_file,
        json_format=settings.log_json,
    )


def _print_reply(text: str, guide: str) -> None:
    console.print(Panel(Markdown(text), title="[bold magenta]Tee Shine[/]", border_style="magenta"))
    if guide:
        console.print(Panel(Markdown(guide), title="[bold]Guide[/]", border_style="cyan"))


@app.command()
def process(
    directory: Optional[Path] = typer.Argument(None, help="Knowledge directory (defaults to KNOWLEDGE_DIR)"),
) -> None:
    """Chunk, embed and store every document in the knowledge directory."""
    from ....composition.container import get_knowledge_service

    target = directory or settings.knowledge_dir
    console.print(f"[bold]Processing knowledge base in[/] {target}\n")

    try:
        with console.status("[bold green]Chunking and embedding...[/]"):
            report = get_knowledge_service().process_knowledge_base(target)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    console.print(f"[green]OK[/] Stored {report.chunks_processed} chunks")
    for source in report.sources:
        console.print(f"  [dim]{source}[/]")

    if report.failed_embeddings:
        console.print(
            f"[yellow]{report.failed_embeddings} chunks were stored without an embedding[/]"
        )
    for skipped in report.skipped_files:
        console.print(f"[yellow]Skipped {skipped}[/]")


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to search for"),
    limit: int = typer.Option(settings.search_top_k, "--limit", "-n", min=1, help="Maximum results"),
) -> None:
    """Search the knowledge base."""
    from ....composition.container import get_knowledge_service

    try:
        results = get_knowledge_service().search_knowledge(query, limit=limit)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    if not results:
        console.print("[yellow]No matching knowledge found.[/]")
        return

    table = Table(title=f"Results for: {query}")
    table.add_column("Score", justify="right", style="cyan")
    table.add_column("Source", style="magenta")
    table.add_column("Content")
    for result in results:
        preview = result.content if len(result.content) <= 200 else result.content[:200] + "..."
        table.add_row(f"{result.similarity:.3f}", result.source, preview)
    console.print(table)


@app.command()
def ask(
    message: str = typer.Argument(..., help="Message to send"),
) -> None:
    """Ask a single question and get an answer."""
    from ....composition.container import get_chat_service

    try:
        with console.status("[bold green]Thinking...[/]"):
            response = get_chat_service().answer(message)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    _print_reply(response.text, response.guide)


@app.command()
def chat() -> None:
    """Start an interactive chat session."""
    from ....composition.container import get_chat_service

    console.print(
        Panel.fit(
            f"[bold magenta]{settings.persona_name}[/]\n"
            "[dim]Ask about business, technology or strategy[/]\n\n"
            "[dim]Type 'quit' or 'exit' to leave[/]",
            title="Shine Agent",
            border_style="magenta",
        )
    )

    try:
        service = get_chat_service()
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    while True:
        try:
            message = Prompt.ask("\n[bold cyan]You[/]")

            if message.lower() in ("quit", "exit", "q"):
                console.print("[dim]Goodbye![/]")
                break

            if not message.strip():
                continue

            with console.status("[bold green]Thinking...[/]"):
                response = service.answer(message)

            console.print()
            _print_reply(response.text, response.guide)

        except KeyboardInterrupt:
            console.print("\n[dim]Goodbye![/]")
            break
        except Exception as exc:
            handle_cli_error(exc)


@app.command()
def status() -> None:
    """Show configuration and knowledge base status."""
    from ....composition.container import get_knowledge_service, get_knowledge_store

    console.print("[bold]Shine Agent Status[/]\n")

    if settings.google_api_key:
        console.print("[green]OK[/] Google API key configured")
    else:
        console.print("[red]MISSING[/] Google API key (set GOOGLE_API_KEY in .env)")

    if settings.vector_backend == "memory":
        console.print("[yellow]In-memory knowledge store (nothing persists)[/]")
    elif settings.qdrant_url:
        console.print("[green]OK[/] Qdrant configured")
    else:
        console.print("[red]MISSING[/] Qdrant URL (set QDRANT_URL and QDRANT_API_KEY in .env)")

    console.print(f"\n[bold]Knowledge directory:[/] {settings.knowledge_dir}")
    try:
        knowledge = get_knowledge_service().describe_knowledge_base(settings.knowledge_dir)
        console.print(
            f"  {len(knowledge.available_files)} files, {knowledge.total_chunks} chunks on disk"
        )
        for name in knowledge.available_files:
            console.print(f"  [dim]{name}[/]")
    except Exception as exc:
        handle_cli_error(exc)

    console.print("\n[bold]Knowledge store:[/]")
    try:
        total = get_knowledge_store().count()
    except Exception as exc:
        handle_cli_error(exc)
        return

    if total == 0:
        console.print("[yellow]Knowledge store is empty. Run 'shine-agent process' to index it.[/]")
    else:
        console.print(f"[green]{total} chunks indexed[/]")


if __name__ == "__main__":
    app()
